"""레이어 옵션 모듈 — 필터·로고·텍스트 레이어의 값 객체."""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum


class Anchor(str, Enum):
    """캔버스 가장자리 기준의 고정 위치 9종."""

    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    MIDDLE_LEFT = "middle-left"
    CENTER = "center"
    MIDDLE_RIGHT = "middle-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"


class Alignment(str, Enum):
    """텍스트 블록 안의 줄 정렬."""

    START = "start"
    MIDDLE = "middle"
    END = "end"


# 이전 설정 파일 호환용 별칭
_ALIGNMENT_ALIASES = {
    "left": Alignment.START,
    "center": Alignment.MIDDLE,
    "right": Alignment.END,
}
_FREE_NAMES = ("free", "absolute")


@dataclass(frozen=True)
class Free:
    """자유 배치: 좌상단 좌표를 그대로 사용한다."""
    x: float = 0
    y: float = 0


@dataclass(frozen=True)
class Anchored:
    """고정 위치 배치: 앵커 + 가장자리 여백."""
    anchor: Anchor
    margin: float = 20


Placement = Free | Anchored


def parse_alignment(value: str | Alignment) -> Alignment:
    if isinstance(value, Alignment):
        return value
    if value in _ALIGNMENT_ALIASES:
        return _ALIGNMENT_ALIASES[value]
    return Alignment(value)


def parse_placement(position: str | Anchor = "free", margin: float = 20,
                    x: float = 0, y: float = 0) -> Placement:
    """설정값(position, margin, x, y)을 배치 객체로 변환한다.

    position이 "free"(또는 "absolute")면 Free, 앵커 이름이면 Anchored.
    알 수 없는 이름은 ValueError.
    """
    if isinstance(position, Anchor):
        return Anchored(position, margin)
    if position in _FREE_NAMES:
        return Free(x, y)
    try:
        return Anchored(Anchor(position), margin)
    except ValueError:
        raise ValueError(f"알 수 없는 위치: {position!r}") from None


def _placement_from_dict(data: dict, default: Placement) -> Placement:
    if "position" not in data and "x" not in data and "y" not in data:
        return default
    base_x = default.x if isinstance(default, Free) else 0
    base_y = default.y if isinstance(default, Free) else 0
    return parse_placement(
        data.get("position", "free"),
        data.get("margin", 20),
        data.get("x", base_x),
        data.get("y", base_y),
    )


@dataclass(frozen=True)
class FilterSettings:
    """베이스 이미지 전역 필터 (모두 퍼센트)."""
    brightness: float = 100
    contrast: float = 100
    grayscale: float = 0
    sepia: float = 0

    @property
    def is_identity(self) -> bool:
        return (self.brightness == 100 and self.contrast == 100
                and self.grayscale == 0 and self.sepia == 0)

    @classmethod
    def from_dict(cls, data: dict) -> "FilterSettings":
        return cls(
            brightness=data.get("brightness", 100),
            contrast=data.get("contrast", 100),
            grayscale=data.get("grayscale", 0),
            sepia=data.get("sepia", 0),
        )


@dataclass(frozen=True)
class LogoLayer:
    """로고 레이어 옵션. scale은 원본 픽셀 크기에 곱해진다."""
    placement: Placement = Free(10, 10)
    scale: float = 0.2
    remove_white_bg: bool = False
    remove_green_screen: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "LogoLayer":
        return cls(
            placement=_placement_from_dict(data, Free(10, 10)),
            scale=data.get("scale", 0.2),
            remove_white_bg=data.get("remove_white_bg", False),
            remove_green_screen=data.get("remove_green_screen", False),
        )


def new_text_id() -> str:
    return f"text_{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class TextLayer:
    """텍스트 레이어 옵션.

    text는 줄바꿈(\\n)을 포함할 수 있다. background_color가 None 또는
    "transparent"면 배경을 채우지 않는다.
    """
    id: str = field(default_factory=new_text_id)
    text: str = "New text"
    placement: Placement = Free(50, 100)
    font_size: float = 48
    color: str = "#FFFFFF"
    font_family: str = "Arial"
    shadow: bool = True
    line_height: float = 1.2
    background_color: str | None = "transparent"
    padding: float = 10
    alignment: Alignment = Alignment.START
    stroke: bool = False
    stroke_color: str = "#000000"
    stroke_width: float = 2

    @property
    def has_background(self) -> bool:
        return self.background_color is not None and self.background_color != "transparent"

    @classmethod
    def from_dict(cls, data: dict) -> "TextLayer":
        defaults = cls()
        return cls(
            id=data.get("id") or new_text_id(),
            text=data.get("text", defaults.text),
            placement=_placement_from_dict(data, defaults.placement),
            font_size=data.get("font_size", defaults.font_size),
            color=data.get("color", defaults.color),
            font_family=data.get("font_family", defaults.font_family),
            shadow=data.get("shadow", defaults.shadow),
            line_height=data.get("line_height", defaults.line_height),
            background_color=data.get("background_color", defaults.background_color),
            padding=data.get("padding", defaults.padding),
            alignment=parse_alignment(data.get("alignment", defaults.alignment)),
            stroke=data.get("stroke", defaults.stroke),
            stroke_color=data.get("stroke_color", defaults.stroke_color),
            stroke_width=data.get("stroke_width", defaults.stroke_width),
        )


def new_text_layer(**changes) -> TextLayer:
    """새 고유 id와 기본값으로 텍스트 레이어를 만든다."""
    return replace(TextLayer(), **changes)
