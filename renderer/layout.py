"""화면 레이아웃 모듈 — 앵커/자유 배치를 절대 픽셀 좌표로 변환한다."""

from content.options import Anchor, Anchored, Free, Placement

_TOP = (Anchor.TOP_LEFT, Anchor.TOP_CENTER, Anchor.TOP_RIGHT)
_MIDDLE = (Anchor.MIDDLE_LEFT, Anchor.CENTER, Anchor.MIDDLE_RIGHT)
_BOTTOM = (Anchor.BOTTOM_LEFT, Anchor.BOTTOM_CENTER, Anchor.BOTTOM_RIGHT)
_LEFT = (Anchor.TOP_LEFT, Anchor.MIDDLE_LEFT, Anchor.BOTTOM_LEFT)
_CENTER = (Anchor.TOP_CENTER, Anchor.CENTER, Anchor.BOTTOM_CENTER)
_RIGHT = (Anchor.TOP_RIGHT, Anchor.MIDDLE_RIGHT, Anchor.BOTTOM_RIGHT)


def resolve_position(
    canvas_w: float, canvas_h: float,
    element_w: float, element_h: float,
    anchor: Anchor | None, margin: float,
    free_x: float, free_y: float,
) -> tuple[float, float]:
    """요소의 좌상단 좌표 (x, y)를 계산한다.

    anchor가 None이면 자유 배치로 (free_x, free_y)를 그대로 반환한다.
    결과가 음수여도 잘라내지 않는다 (캔버스 밖으로 넘치는 배치 허용).
    """
    if anchor is None:
        return free_x, free_y

    # Y축
    if anchor in _TOP:
        y = margin
    elif anchor in _MIDDLE:
        y = (canvas_h - element_h) / 2
    else:
        y = canvas_h - element_h - margin

    # X축
    if anchor in _LEFT:
        x = margin
    elif anchor in _CENTER:
        x = (canvas_w - element_w) / 2
    else:
        x = canvas_w - element_w - margin

    return x, y


def resolve(placement: Placement, canvas_size: tuple[float, float],
            element_size: tuple[float, float]) -> tuple[float, float]:
    """배치 객체를 좌표로 변환한다. 렌더링과 히트 테스트 모두 이 함수를 쓴다."""
    canvas_w, canvas_h = canvas_size
    element_w, element_h = element_size
    if isinstance(placement, Free):
        return resolve_position(canvas_w, canvas_h, element_w, element_h,
                                None, 0, placement.x, placement.y)
    if isinstance(placement, Anchored):
        return resolve_position(canvas_w, canvas_h, element_w, element_h,
                                placement.anchor, placement.margin, 0, 0)
    raise TypeError(f"지원하지 않는 배치: {placement!r}")
