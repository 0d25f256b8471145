"""Color Blender — tests for the saturation-biased channel blend.

Tests cover:
    - Neutral gray for an empty embedding
    - Single channel is scaled by exactly 0.8
    - Secondary channels add at half their share
    - Every component is an integer in [0, 255]
"""

import itertools

from collective_embedding.core.channels import CHANNELS, hex_to_rgb
from collective_embedding.core.color_blend import NEUTRAL_COLOR, blend_color, blend_rgb
from collective_embedding.core.domain_types import Channel


def _embedding(**weights) -> dict:
    return {channel: weights.get(channel.value, 0) for channel in Channel}


def test_zero_embedding_is_neutral_gray():
    assert blend_rgb(_embedding()) is None
    assert blend_color(_embedding()) == NEUTRAL_COLOR == "#888888"


def test_single_channel_scaled_by_point_eight():
    # #22C55E * 0.8 = (27.2, 157.6, 75.2)
    assert blend_rgb(_embedding(technical=1)) == (27, 158, 75)
    assert blend_color(_embedding(technical=5)) == "rgb(27, 158, 75)"


def test_single_channel_never_reaches_full_base_color():
    for channel, spec in CHANNELS.items():
        rgb = blend_rgb({c: (3 if c == channel else 0) for c in Channel})
        assert rgb != hex_to_rgb(spec.color)


def test_secondary_channel_adds_half_its_share():
    # cognitive 3/4 at 0.75 + social 1/4 at 0.125
    assert blend_rgb(_embedding(cognitive=3, social=1)) == (74, 112, 193)


def test_components_always_clamped_integers():
    for weights in itertools.product(range(0, 4), repeat=4):
        rgb = blend_rgb(dict(zip(Channel, weights)))
        if rgb is None:
            assert sum(weights) == 0
            continue
        assert all(isinstance(v, int) and 0 <= v <= 255 for v in rgb)
