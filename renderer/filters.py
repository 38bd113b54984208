"""베이스 이미지 필터 — 밝기·대비·흑백·세피아 (퍼센트 단위).

적용 순서는 밝기 → 대비 → 흑백 → 세피아. 흑백/세피아는 CSS 필터와
같은 색 변환 행렬을 쓴다. 값은 잘라내지 않는다.
"""

from PIL import Image

from content.options import FilterSettings


def _clip8(v: float) -> int:
    return max(0, min(255, int(v + 0.5)))


def _brightness_lut(amount: float) -> list[int]:
    return [_clip8(v * amount) for v in range(256)]


def _contrast_lut(amount: float) -> list[int]:
    # 중간 회색(127.5)을 기준으로 늘리거나 줄인다
    return [_clip8((v - 127.5) * amount + 127.5) for v in range(256)]


def _grayscale_matrix(amount: float) -> tuple:
    k = 1 - amount
    return (
        0.2126 + 0.7874 * k, 0.7152 - 0.7152 * k, 0.0722 - 0.0722 * k, 0,
        0.2126 - 0.2126 * k, 0.7152 + 0.2848 * k, 0.0722 - 0.0722 * k, 0,
        0.2126 - 0.2126 * k, 0.7152 - 0.7152 * k, 0.0722 + 0.9278 * k, 0,
    )


def _sepia_matrix(amount: float) -> tuple:
    k = 1 - amount
    return (
        0.393 + 0.607 * k, 0.769 - 0.769 * k, 0.189 - 0.189 * k, 0,
        0.349 - 0.349 * k, 0.686 + 0.314 * k, 0.168 - 0.168 * k, 0,
        0.272 - 0.272 * k, 0.534 - 0.534 * k, 0.131 + 0.869 * k, 0,
    )


def apply_filters(image: Image.Image, settings: FilterSettings) -> Image.Image:
    """필터를 적용한 RGBA 이미지를 반환한다. 알파 채널은 그대로 둔다."""
    rgba = image.convert("RGBA") if image.mode != "RGBA" else image
    if settings.is_identity:
        return rgba

    alpha = rgba.getchannel("A")
    rgb = rgba.convert("RGB")

    if settings.brightness != 100:
        rgb = rgb.point(_brightness_lut(settings.brightness / 100) * 3)
    if settings.contrast != 100:
        rgb = rgb.point(_contrast_lut(settings.contrast / 100) * 3)
    if settings.grayscale != 0:
        rgb = rgb.convert("RGB", _grayscale_matrix(settings.grayscale / 100))
    if settings.sepia != 0:
        rgb = rgb.convert("RGB", _sepia_matrix(settings.sepia / 100))

    rgb.putalpha(alpha)
    return rgb
