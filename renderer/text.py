"""텍스트 모듈 — 폰트 로드와 여러 줄 텍스트 블록 크기 계산.

블록 크기 계산은 그리기에 쓰는 것과 같은 폰트(패밀리+크기)로 측정해야 한다.
"""

import logging
import os
import sys as _sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from PIL import ImageFont

logger = logging.getLogger(__name__)

# 프로젝트 폰트 경로
_FONT_DIR = Path(__file__).parent.parent / "assets" / "fonts"

# 패밀리 이름 → 후보 파일 이름 (Windows/macOS 이름, 리눅스 대체 폰트 순)
_FAMILIES = {
    "arial": ["arial.ttf", "Arial.ttf", "LiberationSans-Regular.ttf"],
    "verdana": ["verdana.ttf", "Verdana.ttf", "DejaVuSans.ttf"],
    "times new roman": ["times.ttf", "Times New Roman.ttf", "LiberationSerif-Regular.ttf"],
    "courier new": ["cour.ttf", "Courier New.ttf", "LiberationMono-Regular.ttf"],
    "georgia": ["georgia.ttf", "Georgia.ttf", "DejaVuSerif.ttf"],
    "palatino": ["pala.ttf", "Palatino.ttc", "Palatino Linotype.ttf"],
    "garamond": ["GARA.TTF", "Garamond.ttf"],
    "comic sans ms": ["comic.ttf", "Comic Sans MS.ttf"],
    "impact": ["impact.ttf", "Impact.ttf"],
    "roboto": ["Roboto-Regular.ttf"],
}


def _find_fallback() -> str:
    """OS에 맞는 폴백 폰트 경로를 반환한다."""
    if _sys.platform == "win32":
        candidates = ["C:/Windows/Fonts/arial.ttf"]
    elif _sys.platform == "darwin":
        candidates = ["/System/Library/Fonts/Helvetica.ttc", "/Library/Fonts/Arial.ttf"]
    else:
        candidates = [
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/usr/share/fonts/dejavu/DejaVuSans.ttf",
            "/usr/share/fonts/TTF/DejaVuSans.ttf",
        ]
    for path in candidates:
        if os.path.exists(path):
            return path
    return ""


_FALLBACK_FONT = _find_fallback()

# 사용자 지정 폰트 디렉토리 (config의 fonts.directories)
_font_dirs: list[Path] = [_FONT_DIR]

# 폰트 캐시
_font_cache: dict[tuple[str, float], ImageFont.FreeTypeFont] = {}

# FreeType이 래스터화할 수 있는 최소 크기
MIN_FONT_SIZE = 1


def set_font_directories(directories: list[str | Path]) -> None:
    """추가 폰트 디렉토리를 설정하고 캐시를 비운다."""
    _font_dirs[:] = [Path(d) for d in directories] + [_FONT_DIR]
    _font_cache.clear()


def _candidates(family: str) -> list[str]:
    names = _FAMILIES.get(family.strip().lower(), [])
    if not names and Path(family).suffix.lower() in (".ttf", ".otf", ".ttc"):
        names = [family]
    paths = []
    for name in names:
        for directory in _font_dirs:
            path = directory / name
            if path.exists():
                paths.append(str(path))
        # Pillow가 시스템 폰트 디렉토리에서 찾는다
        paths.append(name)
    if _FALLBACK_FONT:
        paths.append(_FALLBACK_FONT)
    return paths


def load_font(family: str, size: float) -> ImageFont.FreeTypeFont:
    """폰트를 로드한다 (캐싱). 찾지 못하면 Pillow 기본 폰트를 쓴다."""
    key = (family, size)
    if key in _font_cache:
        return _font_cache[key]

    font = None
    for path in _candidates(family):
        try:
            font = ImageFont.truetype(path, size)
            break
        except (OSError, ValueError):
            continue
    if font is None:
        logger.warning("폰트를 찾지 못해 기본 폰트 사용: %s (%s)", family, size)
        try:
            font = ImageFont.load_default(size)
        except (OSError, ValueError):
            font = ImageFont.load_default()

    _font_cache[key] = font
    return font


def measure_text(text: str, family: str, size: float) -> float:
    """한 줄 텍스트의 가로 진행 폭을 반환한다.

    크기가 0 이하면 폭도 0이다. 1px 미만은 1px로 재어 비례 축소한다.
    """
    if not text or size <= 0:
        return 0.0
    if size < MIN_FONT_SIZE:
        return load_font(family, MIN_FONT_SIZE).getlength(text) * size / MIN_FONT_SIZE
    return load_font(family, size).getlength(text)


def split_lines(text: str) -> list[str]:
    """명시적 줄바꿈으로 나눈다. 빈 줄도 유지한다."""
    return text.replace("\r\n", "\n").split("\n")


@dataclass(frozen=True)
class TextBlock:
    """패딩을 포함한 텍스트 블록 크기와 줄별 폭."""
    width: float
    height: float
    lines: tuple[str, ...]
    line_widths: tuple[float, ...]


def measure_block(
    text: str,
    font_family: str,
    font_size: float,
    line_height: float,
    padding: float,
    measure: Callable[[str, str, float], float] = measure_text,
) -> TextBlock:
    """여러 줄 텍스트 블록의 (폭, 높이)를 계산한다.

    높이 = 줄 수 * 크기 * 줄간격 + 2*패딩 - (크기*줄간격 - 크기).
    마지막 항은 한 줄 분량의 여분 행간을 빼서 한 줄짜리 블록이
    줄간격 배수만큼 커지지 않게 한다.
    """
    lines = split_lines(text)
    widths = tuple(measure(line, font_family, font_size) for line in lines)

    width = max(widths) + padding * 2
    height = (len(lines) * font_size * line_height + padding * 2
              - (font_size * line_height - font_size))
    return TextBlock(width, height, tuple(lines), widths)
