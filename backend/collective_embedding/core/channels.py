"""Channel Registry — static colors and labels for the four influence channels.

Invariants:
    - CHANNELS has exactly one entry per Channel member, in Channel declaration order
    - Colors are 6-digit hex strings ("#RRGGBB")
    - Registry is read-only: no function here mutates CHANNELS

Design Decisions:
    - Frozen dataclass per channel: legend rows and color lookups share one record
    - Declaration order is the canonical iteration order (dominant-channel ties resolve to it)
"""

from dataclasses import dataclass

from collective_embedding.core.domain_types import Channel
from collective_embedding.core.errors import UnknownChannelError


@dataclass(frozen=True)
class ChannelSpec:
    """Display metadata for one channel."""
    id: Channel
    color: str
    name: str


CHANNELS: dict[Channel, ChannelSpec] = {
    Channel.COGNITIVE: ChannelSpec(
        Channel.COGNITIVE, "#3A7BFF", "Thinking / Cognitive influence",
    ),
    Channel.CREATIVE: ChannelSpec(
        Channel.CREATIVE, "#8B5CF6", "Creative / Generative influence",
    ),
    Channel.TECHNICAL: ChannelSpec(
        Channel.TECHNICAL, "#22C55E", "Technical / Execution influence",
    ),
    Channel.SOCIAL: ChannelSpec(
        Channel.SOCIAL, "#F59E0B", "Social / Stabilization influence",
    ),
}


def resolve_channel(value: str | Channel) -> Channel:
    """Coerce a raw identifier to a Channel or raise UnknownChannelError."""
    if isinstance(value, Channel):
        return value
    try:
        return Channel(value)
    except ValueError:
        raise UnknownChannelError(str(value)) from None


def channel_color(channel: str | Channel) -> str:
    return CHANNELS[resolve_channel(channel)].color


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse "#RRGGBB" (leading # optional). Malformed input maps to black."""
    value = color.lstrip("#")
    if len(value) != 6:
        return 0, 0, 0
    try:
        return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
    except ValueError:
        return 0, 0, 0


def channel_legend() -> list[dict]:
    """Legend rows for renderers: [{id, color, name}] in registry order."""
    return [
        {"id": spec.id.value, "color": spec.color, "name": spec.name}
        for spec in CHANNELS.values()
    ]
