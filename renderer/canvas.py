"""Pillow 캔버스 관리 모듈 — 합성용 RGBA 드로잉 표면."""

import logging
import math
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFilter, features

from content.options import FilterSettings
from .colors import parse_color
from .filters import apply_filters
from .text import MIN_FONT_SIZE, load_font, measure_text

logger = logging.getLogger(__name__)

# 그림자: rgba(0, 0, 0, 0.7), 블러 5, 오프셋 (2, 2)
SHADOW_COLOR = (0, 0, 0, 0.7)
SHADOW_BLUR = 5
SHADOW_OFFSET = (2, 2)
# 가우시안 표준편차 = 블러 / 2, 3시그마까지 여백
_SHADOW_SIGMA = SHADOW_BLUR / 2
_SHADOW_PAD = math.ceil(_SHADOW_SIGMA * 3) + max(SHADOW_OFFSET)


class NoDrawingSurfaceError(RuntimeError):
    """드로잉 표면을 만들 수 없는 환경."""


def _paint(color) -> tuple[int, int, int, int] | None:
    """색상을 해석한다. 해석할 수 없는 색은 경고 후 None (그리지 않음)."""
    try:
        return parse_color(color)
    except ValueError:
        logger.warning("알 수 없는 색상, 그리기 생략: %r", color)
        return None


@dataclass(frozen=True)
class TextStyle:
    """텍스트 그리기 상태 (폰트, 채움/외곽선 색, 그림자)."""
    font_family: str
    font_size: float
    color: str = "#FFFFFF"
    shadow: bool = False
    stroke_color: str = "#000000"
    stroke_width: float = 2


class Canvas:
    """RGBA 캔버스. 모든 그리기는 알파 블렌딩으로 합성된다."""

    def __init__(self, width: int = 1, height: int = 1):
        self._image = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def reset(self, width: int, height: int) -> None:
        """크기를 바꾸고 내용을 투명하게 비운다."""
        self._image = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    def paste(self, layer: Image.Image, position: tuple[int, int] = (0, 0)) -> None:
        """레이어를 캔버스 위에 합성한다 (알파 블렌딩). 캔버스 밖은 잘린다."""
        if layer.mode != "RGBA":
            layer = layer.convert("RGBA")
        x, y = position
        left, top = max(0, -x), max(0, -y)
        right = min(layer.width, self._image.width - x)
        bottom = min(layer.height, self._image.height - y)
        if right <= left or bottom <= top:
            return
        self._image.alpha_composite(layer, dest=(x + left, y + top),
                                    source=(left, top, right, bottom))

    def draw_image(self, image: Image.Image, x: float = 0, y: float = 0,
                   width: float | None = None, height: float | None = None,
                   filters: FilterSettings | None = None) -> None:
        """이미지를 (x, y)에 그린다. 크기를 주면 그 크기로 스케일한다."""
        if filters is not None:
            image = apply_filters(image, filters)
        if width is not None and height is not None:
            size = (round(width), round(height))
            if size[0] <= 0 or size[1] <= 0:
                return
            if size != image.size:
                image = image.convert("RGBA").resize(size, Image.Resampling.LANCZOS)
        self.paste(image, (round(x), round(y)))

    def fill_rect(self, x: float, y: float, width: float, height: float, color) -> None:
        """사각형 [x, x+width) x [y, y+height)를 채운다."""
        x0, y0 = round(x), round(y)
        x1, y1 = round(x + width), round(y + height)
        fill = _paint(color)
        if fill is None or x1 <= x0 or y1 <= y0:
            return
        layer = Image.new("RGBA", (x1 - x0, y1 - y0), fill)
        self.paste(layer, (x0, y0))

    def measure_text(self, text: str, font_family: str, font_size: float) -> float:
        """현재 폰트 상태로 한 줄 폭을 측정한다."""
        return measure_text(text, font_family, font_size)

    def draw_text(self, text: str, x: float, y: float, style: TextStyle,
                  stroke: bool = False) -> None:
        """(x, y)를 em 박스 상단으로 하여 한 줄을 그린다.

        stroke=True면 외곽선 색/두께로 외곽선만 그리는 패스다.
        그림자는 그리는 패스마다 적용된다.
        """
        # 1px 미만 글자는 그리지 않는다
        if not text or style.font_size < MIN_FONT_SIZE:
            return
        color = _paint(style.stroke_color if stroke else style.color)
        if color is None:
            return
        font = load_font(style.font_family, style.font_size)
        # 외곽선은 경로 중심 기준이므로 바깥쪽 두께는 절반
        stroke_width = round(style.stroke_width / 2) if stroke else 0

        bbox = font.getbbox(text, anchor="la", stroke_width=stroke_width)
        left, top = math.floor(bbox[0]), math.floor(bbox[1])
        right, bottom = math.ceil(bbox[2]) + 1, math.ceil(bbox[3]) + 1
        if right <= left or bottom <= top:
            return
        pad = _SHADOW_PAD if style.shadow else 0
        ox = math.floor(x) + left - pad
        oy = math.floor(y) + top - pad
        glyphs = Image.new("RGBA", (right - left + pad * 2, bottom - top + pad * 2), (0, 0, 0, 0))
        draw = ImageDraw.Draw(glyphs)
        draw.text((x - ox, y - oy), text, font=font, fill=color, anchor="la",
                  stroke_width=stroke_width, stroke_fill=color)

        if style.shadow:
            dx, dy = SHADOW_OFFSET
            self.paste(_shadow_of(glyphs), (ox + dx, oy + dy))
        self.paste(glyphs, (ox, oy))

    def stroke_dashed_rect(self, x: float, y: float, width: float, height: float,
                           color, line_width: int = 2,
                           dash: tuple[int, int] = (6, 3)) -> None:
        """점선 사각형 테두리를 그린다. 선은 가장자리 중심에 걸친다."""
        pad = line_width
        ox, oy = math.floor(x) - pad, math.floor(y) - pad
        layer = Image.new(
            "RGBA",
            (max(1, math.ceil(width) + pad * 2 + 1), max(1, math.ceil(height) + pad * 2 + 1)),
            (0, 0, 0, 0),
        )
        draw = ImageDraw.Draw(layer)
        x0, y0 = x - ox, y - oy
        corners = [(x0, y0), (x0 + width, y0), (x0 + width, y0 + height),
                   (x0, y0 + height), (x0, y0)]
        fill = _paint(color)
        if fill is None:
            return
        for start, end in _dash_segments(corners, dash):
            draw.line([start, end], fill=fill, width=line_width)
        self.paste(layer, (ox, oy))

    def to_rgb(self) -> Image.Image:
        """RGB 모드로 변환하여 반환한다 (JPEG 인코딩용)."""
        return self._image.convert("RGB")


def _shadow_of(glyphs: Image.Image) -> Image.Image:
    """글자 알파로 흐린 그림자 레이어를 만든다."""
    r, g, b, opacity = SHADOW_COLOR
    alpha = glyphs.getchannel("A").point([round(v * opacity) for v in range(256)])
    shadow = Image.new("RGBA", glyphs.size, (r, g, b, 0))
    shadow.putalpha(alpha)
    return shadow.filter(ImageFilter.GaussianBlur(_SHADOW_SIGMA))


def _dash_segments(points: list[tuple[float, float]], dash: tuple[int, int]):
    """꺾은선을 따라 (on, off) 패턴의 선분들을 만든다. 모서리에서도 패턴이 이어진다."""
    on, off = dash
    period = on + off
    phase = 0.0
    for (ax, ay), (bx, by) in zip(points, points[1:]):
        length = math.hypot(bx - ax, by - ay)
        pos = 0.0
        while pos < length:
            in_on = phase < on
            step = min((on - phase) if in_on else (period - phase), length - pos)
            if in_on and step > 0:
                t0, t1 = pos / length, (pos + step) / length
                yield ((ax + (bx - ax) * t0, ay + (by - ay) * t0),
                       (ax + (bx - ax) * t1, ay + (by - ay) * t1))
            pos += step
            phase = (phase + step) % period


def create_canvas() -> Canvas:
    """드로잉 표면을 만든다. 텍스트 렌더링(FreeType)이 없으면 실패한다."""
    if not features.check("freetype2"):
        raise NoDrawingSurfaceError("Pillow가 FreeType 없이 빌드되어 텍스트를 그릴 수 없습니다")
    try:
        return Canvas()
    except (MemoryError, ValueError) as e:
        raise NoDrawingSurfaceError(f"캔버스 생성 실패: {e}") from e
