"""색상 문자열 → RGBA 튜플 변환."""

import re

from PIL import ImageColor

# rgba(r, g, b, a), a는 0~1 실수
_RGBA_RE = re.compile(
    r"^rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([0-9]*\.?[0-9]+)\s*\)$"
)


def parse_color(value: str | tuple) -> tuple[int, int, int, int]:
    """"#RRGGBB", 색상 이름, "rgba(0, 0, 0, 0.5)", "transparent" 등을 RGBA로 변환한다."""
    if isinstance(value, tuple):
        return value if len(value) == 4 else (*value, 255)

    text = value.strip().lower()
    if text == "transparent":
        return 0, 0, 0, 0

    m = _RGBA_RE.match(text)
    if m:
        r, g, b = (int(m.group(i)) for i in (1, 2, 3))
        return r, g, b, round(float(m.group(4)) * 255)

    color = ImageColor.getrgb(text)
    if len(color) == 3:
        return (*color, 255)
    return color
