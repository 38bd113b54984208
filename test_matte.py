"""로고 배경 제거 테스트."""

from PIL import Image

from renderer.matte import matte


def _pixel_image(*pixels):
    img = Image.new("RGBA", (len(pixels), 1))
    img.putdata(list(pixels))
    return img


def _alphas(img):
    return [p[3] for p in img.getdata()]


def test_white_pixel_removed():
    out = matte(_pixel_image((255, 255, 255, 255)), True, False)
    assert out.getpixel((0, 0)) == (255, 255, 255, 0)


def test_white_threshold_is_strict():
    out = matte(_pixel_image((221, 221, 221, 255), (220, 255, 255, 255)), True, False)
    assert _alphas(out) == [0, 255]


def test_gray_pixel_untouched_with_any_flags():
    src = _pixel_image((100, 100, 100, 255))
    for flags in [(True, False), (False, True), (True, True)]:
        assert matte(src, *flags).getpixel((0, 0)) == (100, 100, 100, 255)


def test_green_pixel_removed():
    out = matte(_pixel_image((0, 255, 0, 255)), False, True)
    assert out.getpixel((0, 0)) == (0, 255, 0, 0)


def test_green_rules():
    src = _pixel_image(
        (50, 101, 50, 255),    # 제거
        (50, 100, 50, 255),    # g > 100 아님
        (101, 101, 0, 255),    # g > r 아님
        (0, 150, 150, 255),    # g > b 아님
    )
    assert _alphas(matte(src, False, True)) == [0, 255, 255, 255]


def test_white_not_removed_by_green_flag_only():
    out = matte(_pixel_image((255, 255, 255, 255)), False, True)
    assert out.getpixel((0, 0))[3] == 255


def test_both_rules_apply():
    src = _pixel_image((255, 255, 255, 255), (10, 200, 10, 255), (200, 0, 0, 255))
    assert _alphas(matte(src, True, True)) == [0, 0, 255]


def test_no_flags_returns_original_object():
    src = _pixel_image((255, 255, 255, 255), (0, 255, 0, 128))
    out = matte(src, False, False)
    assert out is src
    assert out.tobytes() == src.tobytes()


def test_only_alpha_changes_and_input_untouched():
    src = _pixel_image((240, 230, 250, 77), (1, 2, 3, 4))
    before = src.tobytes()
    out = matte(src, True, True)
    assert src.tobytes() == before
    assert out.size == src.size
    assert [p[:3] for p in out.getdata()] == [p[:3] for p in src.getdata()]
    assert _alphas(out) == [0, 4]


def test_isolated_pixel_inside_foreground_is_cleared():
    img = Image.new("RGBA", (5, 5), (200, 30, 30, 255))
    img.putpixel((2, 2), (250, 250, 250, 255))
    out = matte(img, True, False)
    assert out.getpixel((2, 2))[3] == 0
    assert out.getpixel((1, 2))[3] == 255


def test_rgb_input_is_keyed():
    img = Image.new("RGB", (3, 2), (255, 255, 255))
    out = matte(img, True, False)
    assert out.mode == "RGBA"
    assert out.size == (3, 2)
    assert set(_alphas(out)) == {0}
