import pytest

from airtraffic.render.decoration import Decoration, decoration_for

NOW = 5_000_000


@pytest.mark.parametrize("delta,expected", [
    (0, Decoration.INNER_RING),
    (249, Decoration.INNER_RING),
    (250, Decoration.OUTER_RING),
    (499, Decoration.OUTER_RING),
    (500, Decoration.NONE),
    (60_000, Decoration.NONE),
    (-10, Decoration.NONE),
])
def test_decoration_boundaries(delta, expected):
    assert decoration_for(NOW - delta, NOW) is expected
