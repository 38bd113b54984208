"""레이어 합성 모듈 — 베이스 이미지 + 로고 + 텍스트 레이어.

미리보기와 일괄 처리 모두 render()를 호출한다. 그리기 순서는 고정이다:
필터 적용된 베이스 → 로고 → 텍스트(목록 순서) → 선택 표시(미리보기 전용).
"""

from dataclasses import dataclass
from typing import Callable

from PIL import Image

from content.options import Alignment, FilterSettings, LogoLayer, TextLayer
from .canvas import Canvas, TextStyle, create_canvas
from .layout import resolve
from .matte import matte
from .text import TextBlock, measure_block

# 선택 표시: 점선 6px/3px, 두께 2px
SELECTION_COLOR = "rgba(0, 150, 255, 0.8)"
SELECTION_WIDTH = 2
SELECTION_DASH = (6, 3)

Measure = Callable[[str, str, float], float]


@dataclass(frozen=True)
class Rect:
    """캔버스 좌표계의 사각형."""
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        """경계 포함."""
        return (self.x <= px <= self.x + self.width
                and self.y <= py <= self.y + self.height)


def logo_rect(canvas_size: tuple[float, float], logo_size: tuple[float, float],
              layer: LogoLayer) -> Rect:
    """스케일된 로고가 그려질 사각형."""
    w = logo_size[0] * layer.scale
    h = logo_size[1] * layer.scale
    x, y = resolve(layer.placement, canvas_size, (w, h))
    return Rect(x, y, w, h)


def text_block(layer: TextLayer, measure: Measure) -> TextBlock:
    return measure_block(layer.text, layer.font_family, layer.font_size,
                         layer.line_height, layer.padding, measure)


def text_rect(canvas_size: tuple[float, float], block: TextBlock, layer: TextLayer) -> Rect:
    """측정된 텍스트 블록이 그려질 사각형."""
    x, y = resolve(layer.placement, canvas_size, (block.width, block.height))
    return Rect(x, y, block.width, block.height)


def _line_x(rect: Rect, line_width: float, layer: TextLayer) -> float:
    if layer.alignment == Alignment.MIDDLE:
        return rect.x + rect.width / 2 - line_width / 2
    if layer.alignment == Alignment.END:
        return rect.x + rect.width - line_width - layer.padding
    return rect.x + layer.padding


def _draw_text_layer(canvas: Canvas, layer: TextLayer, selected: bool) -> None:
    block = text_block(layer, canvas.measure_text)
    rect = text_rect(canvas.size, block, layer)

    if layer.has_background:
        canvas.fill_rect(rect.x, rect.y, rect.width, rect.height, layer.background_color)

    style = TextStyle(
        font_family=layer.font_family,
        font_size=layer.font_size,
        color=layer.color,
        shadow=layer.shadow,
        stroke_color=layer.stroke_color,
        stroke_width=layer.stroke_width,
    )
    for i, (line, line_width) in enumerate(zip(block.lines, block.line_widths)):
        x = _line_x(rect, line_width, layer)
        y = rect.y + layer.padding + (i * layer.font_size * layer.line_height)
        # 외곽선 먼저, 채움은 항상
        if layer.stroke:
            canvas.draw_text(line, x, y, style, stroke=True)
        canvas.draw_text(line, x, y, style)

    if selected:
        canvas.stroke_dashed_rect(rect.x, rect.y, rect.width, rect.height,
                                  SELECTION_COLOR, SELECTION_WIDTH, SELECTION_DASH)


def render(
    canvas: Canvas,
    base: Image.Image,
    logo: Image.Image | None,
    texts: list[TextLayer],
    logo_layer: LogoLayer,
    filters: FilterSettings,
    selected_id: str | None = None,
) -> None:
    """모든 레이어를 canvas에 처음부터 다시 그린다. 입력은 변경하지 않는다."""
    # 크기 재설정 (이전 내용 폐기)
    canvas.reset(base.width, base.height)

    # 베이스 레이어 (필터는 베이스에만)
    canvas.draw_image(base, 0, 0, filters=filters)

    # 로고 레이어
    if logo is not None:
        keyed = matte(logo, logo_layer.remove_white_bg, logo_layer.remove_green_screen)
        rect = logo_rect(canvas.size, keyed.size, logo_layer)
        canvas.draw_image(keyed, rect.x, rect.y, rect.width, rect.height)

    # 텍스트 레이어들: 뒤 레이어가 위에 그려진다
    for layer in texts:
        _draw_text_layer(canvas, layer, selected_id is not None and layer.id == selected_id)


class LayerCompositor:
    """미리보기용. 캔버스 하나를 재사용하며 매번 처음부터 합성한다."""

    def __init__(self, canvas: Canvas | None = None):
        self._canvas = canvas or create_canvas()

    @property
    def canvas(self) -> Canvas:
        return self._canvas

    def compose(
        self,
        base: Image.Image,
        logo: Image.Image | None = None,
        texts: list[TextLayer] | None = None,
        logo_layer: LogoLayer | None = None,
        filters: FilterSettings | None = None,
        selected_id: str | None = None,
    ) -> Image.Image:
        """합성하여 RGB 이미지를 반환한다.

        Args:
            base: 베이스 사진 (캔버스 크기를 결정)
            logo: 로고 이미지 (None이면 생략)
            texts: 텍스트 레이어 목록 (그리기 순서)
            selected_id: 선택 표시를 그릴 텍스트 레이어 id
        """
        render(
            self._canvas, base, logo, texts or [],
            logo_layer or LogoLayer(), filters or FilterSettings(), selected_id,
        )
        return self._canvas.to_rgb()
