"""로고 배경 제거 모듈 — 흰 배경/그린스크린 픽셀의 알파를 0으로 만든다.

연결성 분석 없이 픽셀마다 독립적으로 판정한다. 전경 안에 있는
조건 일치 픽셀도 함께 투명해진다.
"""

from PIL import Image, ImageChops

# 판정 임계값 (고정)
WHITE_THRESHOLD = 220
GREEN_THRESHOLD = 100


def _above(channel: Image.Image, threshold: int) -> Image.Image:
    """channel > threshold인 픽셀을 255, 나머지를 0으로 하는 마스크."""
    return channel.point([255 if v > threshold else 0 for v in range(256)])


def white_mask(r: Image.Image, g: Image.Image, b: Image.Image) -> Image.Image:
    """r, g, b 모두 220 초과인 픽셀."""
    return ImageChops.multiply(
        ImageChops.multiply(_above(r, WHITE_THRESHOLD), _above(g, WHITE_THRESHOLD)),
        _above(b, WHITE_THRESHOLD),
    )


def green_mask(r: Image.Image, g: Image.Image, b: Image.Image) -> Image.Image:
    """g > r, g > b, g > 100인 픽셀."""
    # subtract는 0에서 잘리므로 결과 > 0 이면 g가 더 크다
    g_over_r = _above(ImageChops.subtract(g, r), 0)
    g_over_b = _above(ImageChops.subtract(g, b), 0)
    return ImageChops.multiply(
        ImageChops.multiply(g_over_r, g_over_b),
        _above(g, GREEN_THRESHOLD),
    )


def matte(image: Image.Image, remove_white_bg: bool, remove_green_screen: bool) -> Image.Image:
    """배경 픽셀을 투명하게 만든 새 이미지를 반환한다.

    두 옵션이 모두 꺼져 있으면 복사 없이 원본을 그대로 반환한다.
    크기는 유지되고 알파 채널만 바뀐다.
    """
    if not remove_white_bg and not remove_green_screen:
        return image

    rgba = image.convert("RGBA") if image.mode != "RGBA" else image.copy()
    r, g, b, a = rgba.split()

    remove = Image.new("L", rgba.size, 0)
    if remove_white_bg:
        remove = ImageChops.lighter(remove, white_mask(r, g, b))
    if remove_green_screen:
        remove = ImageChops.lighter(remove, green_mask(r, g, b))

    rgba.putalpha(ImageChops.subtract(a, remove))
    return rgba
