import numpy as np
import pytest

from colornet.colors import Color
from colornet.pixels import InvalidPixel, Pixel, clamp_channel


def test_palette_order_and_labels():
    palette = Color.palette()
    assert list(palette) == ["Red", "Green", "Blue", "Yellow", "Cyan", "Purple", "Black", "White"]
    assert Color.UNDEFINED not in palette.values()
    assert palette["Purple"].rgb == (255, 0, 255)


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((255, 0, 0), Color.RED),
        ((10, 230, 40), Color.GREEN),
        ((0, 0, 255), Color.BLUE),
        ((240, 220, 10), Color.YELLOW),
        ((0, 255, 255), Color.CYAN),
        ((255, 0, 255), Color.PURPLE),
        ((20, 30, 40), Color.BLACK),
        ((255, 255, 255), Color.WHITE),
        ((128, 128, 128), Color.UNDEFINED),
        ((180, 180, 180), Color.UNDEFINED),
    ],
)
def test_from_rgb_thresholds(rgb, expected):
    assert Color.from_rgb(*rgb) is expected


def test_every_reference_color_maps_to_itself():
    for color in Color.palette().values():
        assert Color.from_rgb(*color.rgb) is color


def test_from_label():
    assert Color.from_label("cyan") is Color.CYAN
    assert Color.from_label(" White ") is Color.WHITE
    with pytest.raises(KeyError):
        Color.from_label("Magenta")


@pytest.mark.parametrize("channels", [(-1, 0, 0), (0, 256, 0), (0, 0, 1.5), (True, 0, 0), ("1", 2, 3)])
def test_pixel_rejects_bad_channels(channels):
    with pytest.raises(InvalidPixel):
        Pixel(*channels)


def test_pixel_basics():
    pixel = Pixel(255, 0, 0)
    assert pixel.rgb == (255, 0, 0)
    assert pixel.color is Color.RED
    assert str(pixel) == "(255, 0, 0) = Red"
    assert Pixel(255, 255, 255).normalized().tolist() == [1.0, 1.0, 1.0]
    assert Pixel.from_color(Color.CYAN) == Pixel(0, 255, 255)


def test_pixel_is_immutable():
    pixel = Pixel(1, 2, 3)
    with pytest.raises(AttributeError):
        pixel.red = 5


def test_random_pixels_are_valid():
    rng = np.random.default_rng(0)
    for _ in range(20):
        pixel = Pixel.random(rng)
        assert all(0 <= c <= 255 for c in pixel.rgb)


def test_clamp_channel():
    assert clamp_channel(-12) == 0
    assert clamp_channel(300) == 255
    assert clamp_channel(17) == 17
