"""설정 파일 로더 모듈."""

import json
from pathlib import Path

from content.options import FilterSettings, LogoLayer, TextLayer

# 기본 설정 경로
_CONFIG_PATH = Path(__file__).parent / "config.json"

# 기본값 — config.json에 누락된 키가 있을 때 사용
_DEFAULTS = {
    "logging": {
        "level": "INFO",
    },
    "fonts": {
        "directories": [],
    },
    "sources": {
        "directory": "input/",
        "patterns": ["*.jpg", "*.jpeg", "*.png", "*.webp", "*.bmp"],
    },
    "logo": {
        "path": "",
        "position": "free",
        "x": 10,
        "y": 10,
        "margin": 20,
        "scale": 0.2,
        "remove_white_bg": False,
        "remove_green_screen": False,
    },
    "filters": {
        "brightness": 100,
        "contrast": 100,
        "grayscale": 0,
        "sepia": 0,
    },
    "texts": [],
    "output": {
        "directory": "output/",
        "format": "jpeg",
        "quality": 1.0,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """base 딕셔너리에 override 값을 병합한다 (깊은 병합)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Path | None = None) -> dict:
    """설정 파일을 읽어 딕셔너리로 반환한다.

    파일이 없으면 기본값을 사용한다.
    """
    config_path = path or _CONFIG_PATH
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            user_config = json.load(f)
        return _deep_merge(_DEFAULTS, user_config)
    return _deep_merge(_DEFAULTS, {})


def filter_settings(config: dict) -> FilterSettings:
    return FilterSettings.from_dict(config["filters"])


def logo_layer(config: dict) -> LogoLayer:
    return LogoLayer.from_dict(config["logo"])


def text_layers(config: dict) -> list[TextLayer]:
    """텍스트 레이어 목록 (설정 순서 = 그리기 순서)."""
    layers = [TextLayer.from_dict(item) for item in config["texts"]]
    ids = [layer.id for layer in layers]
    if len(ids) != len(set(ids)):
        raise ValueError("텍스트 레이어 id가 중복됩니다")
    return layers
