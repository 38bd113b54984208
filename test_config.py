"""설정 로더 테스트."""

import json
import logging

import pytest

from config import filter_settings, load_config, logo_layer, text_layers
from main import main
from content.options import Alignment, Anchor, Anchored, FilterSettings, Free


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(tmp_path / "none.json")
    assert config["output"] == {"directory": "output/", "format": "jpeg", "quality": 1.0}
    assert filter_settings(config) == FilterSettings()
    assert filter_settings(config).is_identity
    assert logo_layer(config).placement == Free(10, 10)
    assert text_layers(config) == []


def test_user_values_are_deep_merged(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "output": {"format": "png"},
        "filters": {"sepia": 40},
        "logo": {"position": "bottom-right", "margin": 12, "remove_white_bg": True},
    }), encoding="utf-8")
    config = load_config(path)
    assert config["output"]["format"] == "png"
    assert config["output"]["quality"] == 1.0
    assert filter_settings(config) == FilterSettings(sepia=40)

    logo = logo_layer(config)
    assert logo.placement == Anchored(Anchor.BOTTOM_RIGHT, 12)
    assert logo.remove_white_bg and not logo.remove_green_screen
    assert logo.scale == 0.2


def test_text_layers_keep_order_and_parse_fields(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"texts": [
        {"id": "a", "text": "Top", "position": "top-center", "margin": 5, "alignment": "center"},
        {"id": "b", "x": 3, "y": 4, "background_color": "rgba(0, 0, 0, 0.5)"},
        {"text": "generated id"},
    ]}), encoding="utf-8")
    layers = text_layers(load_config(path))

    assert [layer.id for layer in layers[:2]] == ["a", "b"]
    assert layers[0].placement == Anchored(Anchor.TOP_CENTER, 5)
    assert layers[0].alignment == Alignment.MIDDLE
    assert layers[1].placement == Free(3, 4)
    assert layers[1].has_background
    assert layers[2].id.startswith("text_")
    assert layers[2].placement == Free(50, 100)
    assert not layers[2].has_background


def test_duplicate_text_ids_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"texts": [{"id": "x"}, {"id": "x"}]}), encoding="utf-8")
    with pytest.raises(ValueError):
        text_layers(load_config(path))


def test_unknown_position_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"logo": {"position": "somewhere"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        logo_layer(load_config(path))


def test_main_logs_config_after_logging_setup(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"sources": {"directory": str(tmp_path / "in")}}),
                    encoding="utf-8")
    with caplog.at_level(logging.INFO):
        assert main([str(path)]) == 1
    messages = [r.getMessage() for r in caplog.records]
    assert f"설정 로드: {path}" in messages
