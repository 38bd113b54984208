"""베이스 이미지 필터 테스트."""

from PIL import Image

from conftest import same_pixels
from content.options import FilterSettings
from renderer.filters import apply_filters


def test_identity_settings_keep_pixels(gradient_base):
    out = apply_filters(gradient_base, FilterSettings())
    assert same_pixels(out, gradient_base.convert("RGBA"))


def test_brightness_zero_is_black(gradient_base):
    out = apply_filters(gradient_base, FilterSettings(brightness=0))
    assert out.convert("RGB").getextrema() == ((0, 0), (0, 0), (0, 0))


def test_brightness_scales_channels():
    img = Image.new("RGB", (1, 1), (100, 50, 200))
    out = apply_filters(img, FilterSettings(brightness=150))
    assert out.getpixel((0, 0)) == (150, 75, 255, 255)


def test_contrast_zero_is_mid_gray(gradient_base):
    out = apply_filters(gradient_base, FilterSettings(contrast=0))
    assert set(out.convert("RGB").getdata()) == {(128, 128, 128)}


def test_full_grayscale_equalizes_channels(gradient_base):
    out = apply_filters(gradient_base, FilterSettings(grayscale=100))
    for r, g, b, _ in out.getdata():
        assert abs(r - g) <= 1 and abs(g - b) <= 1


def test_full_sepia_warms_white():
    img = Image.new("RGB", (1, 1), (255, 255, 255))
    r, g, b, _ = apply_filters(img, FilterSettings(sepia=100)).getpixel((0, 0))
    assert r >= g > b


def test_alpha_is_preserved():
    img = Image.new("RGBA", (2, 1))
    img.putdata([(10, 20, 30, 40), (200, 100, 0, 255)])
    out = apply_filters(img, FilterSettings(brightness=50, sepia=30))
    assert [p[3] for p in out.getdata()] == [40, 255]
