"""Color Blender — one display color per node from its raw embedding.

Invariants:
    - Zero total weight -> NEUTRAL_COLOR
    - Dominant channel contributes at min(0.8, share); every other positive channel
      adds color * share * 0.5
    - Each component clamped to [0, 255] and rounded half-up

Design Decisions:
    - Saturation-biased blend, not a weighted average: a single dominant channel reads
      as a recognizable hue instead of washing out toward gray
"""

from collective_embedding.core.channels import CHANNELS, hex_to_rgb
from collective_embedding.core.embedding import Embedding, dominant_channel, round_half_up


NEUTRAL_COLOR: str = "#888888"
MAX_DOMINANT_STRENGTH: float = 0.8
SECONDARY_FACTOR: float = 0.5


def _clamp(component: float) -> int:
    return min(255, max(0, round_half_up(component)))


def blend_rgb(embedding: Embedding) -> tuple[int, int, int] | None:
    """Blended (r, g, b), or None when the embedding carries no weight."""
    total = sum(embedding.values())
    dominant = dominant_channel(embedding)
    if total == 0 or dominant is None:
        return None

    strength = min(MAX_DOMINANT_STRENGTH, embedding[dominant] / total)
    base = hex_to_rgb(CHANNELS[dominant].color)
    rgb = [component * strength for component in base]

    for channel, weight in embedding.items():
        if channel == dominant or weight <= 0:
            continue
        factor = weight / total * SECONDARY_FACTOR
        for i, component in enumerate(hex_to_rgb(CHANNELS[channel].color)):
            rgb[i] += component * factor

    r, g, b = (_clamp(component) for component in rgb)
    return r, g, b


def blend_color(embedding: Embedding) -> str:
    """CSS color string: "rgb(r, g, b)" or NEUTRAL_COLOR."""
    rgb = blend_rgb(embedding)
    if rgb is None:
        return NEUTRAL_COLOR
    return "rgb({}, {}, {})".format(*rgb)
