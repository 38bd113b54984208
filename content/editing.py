"""편집 상태 모듈 — 텍스트 레이어 추가/삭제/수정, 선택, 드래그.

모든 전이는 새 EditorState를 반환한다. 레이어는 통째로 교체되며
렌더러와 공유되는 값을 제자리에서 바꾸지 않는다.
히트 테스트는 렌더러와 같은 사각형 계산(renderer.layers)을 쓴다.
"""

from dataclasses import dataclass, field, replace
from typing import Callable

from renderer.layers import logo_rect, text_block, text_rect
from .options import Free, LogoLayer, TextLayer, new_text_layer

LOGO_TARGET = "logo"

Measure = Callable[[str, str, float], float]


@dataclass(frozen=True)
class Drag:
    """드래그 중인 대상과 잡은 지점의 오프셋."""
    kind: str               # "logo" 또는 "text"
    target_id: str
    grab_dx: float
    grab_dy: float


@dataclass(frozen=True)
class EditorState:
    logo: LogoLayer = field(default_factory=LogoLayer)
    texts: tuple[TextLayer, ...] = ()
    selected_id: str | None = None
    drag: Drag | None = None

    @property
    def selected_text(self) -> TextLayer | None:
        return next((t for t in self.texts if t.id == self.selected_id), None)


def add_text(state: EditorState, **changes) -> EditorState:
    """기본값 텍스트 레이어를 맨 위에 추가하고 선택한다."""
    layer = new_text_layer(**changes)
    return replace(state, texts=state.texts + (layer,), selected_id=layer.id)


def remove_text(state: EditorState, text_id: str) -> EditorState:
    """id로 레이어를 제거한다. 선택/드래그 대상이었으면 함께 해제한다."""
    texts = tuple(t for t in state.texts if t.id != text_id)
    selected = None if state.selected_id == text_id else state.selected_id
    drag = None if state.drag and state.drag.target_id == text_id else state.drag
    return replace(state, texts=texts, selected_id=selected, drag=drag)


def update_text(state: EditorState, text_id: str, **changes) -> EditorState:
    if "id" in changes:
        raise ValueError("레이어 id는 바꿀 수 없습니다")
    texts = tuple(replace(t, **changes) if t.id == text_id else t for t in state.texts)
    return replace(state, texts=texts)


def update_logo(state: EditorState, **changes) -> EditorState:
    return replace(state, logo=replace(state.logo, **changes))


def select(state: EditorState, text_id: str | None) -> EditorState:
    if text_id is not None and all(t.id != text_id for t in state.texts):
        raise KeyError(text_id)
    return replace(state, selected_id=text_id)


def hit_test(
    state: EditorState,
    point: tuple[float, float],
    canvas_size: tuple[float, float],
    logo_size: tuple[float, float] | None,
    measure: Measure,
) -> str | None:
    """point에 있는 가장 위 요소의 id를 반환한다 (로고는 "logo").

    텍스트는 나중 레이어부터 검사하고, 그다음 로고를 검사한다.
    """
    px, py = point
    for layer in reversed(state.texts):
        rect = text_rect(canvas_size, text_block(layer, measure), layer)
        if rect.contains(px, py):
            return layer.id
    if logo_size is not None and logo_rect(canvas_size, logo_size, state.logo).contains(px, py):
        return LOGO_TARGET
    return None


def press(
    state: EditorState,
    point: tuple[float, float],
    canvas_size: tuple[float, float],
    logo_size: tuple[float, float] | None,
    measure: Measure,
) -> EditorState:
    """마우스 누름: 선택을 갱신하고 자유 배치 요소면 드래그를 시작한다."""
    target = hit_test(state, point, canvas_size, logo_size, measure)
    if target is None:
        return replace(state, selected_id=None, drag=None)

    px, py = point
    if target == LOGO_TARGET:
        placement, kind, selected = state.logo.placement, "logo", None
    else:
        layer = next(t for t in state.texts if t.id == target)
        placement, kind, selected = layer.placement, "text", target

    drag = None
    # 앵커 배치는 선택만 되고 드래그되지 않는다
    if isinstance(placement, Free):
        drag = Drag(kind, target, px - placement.x, py - placement.y)
    return replace(state, selected_id=selected, drag=drag)


def move(state: EditorState, point: tuple[float, float]) -> EditorState:
    """드래그 중이면 대상의 자유 배치 좌표를 교체한다."""
    drag = state.drag
    if drag is None:
        return state
    placement = Free(point[0] - drag.grab_dx, point[1] - drag.grab_dy)
    if drag.kind == "logo":
        return update_logo(state, placement=placement)
    return update_text(state, drag.target_id, placement=placement)


def release(state: EditorState) -> EditorState:
    return replace(state, drag=None) if state.drag else state


def preview(compositor, base, logo, state: EditorState, filters):
    """현재 편집 상태로 미리보기 프레임을 합성한다 (선택 표시 포함)."""
    return compositor.compose(base, logo, list(state.texts), state.logo, filters,
                              state.selected_id)
