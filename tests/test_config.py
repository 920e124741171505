import json
import logging

import pytest

from mandelthing.config import (
    DEFAULT_HEIGHT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_WIDTH,
    RenderConfig,
    Settings,
    load_settings,
    parse_depth,
)
from mandelthing.errors import InvalidDepth, InvalidDimensions


def write_settings(tmp_path, content):
    path = tmp_path / "mandelthing.json"
    path.write_text(content if isinstance(content, str) else json.dumps(content))
    return str(path)


def test_defaults():
    settings = Settings()
    assert (settings.max_depth, settings.width, settings.height) == (256, 640, 480)


def test_parse_depth():
    assert parse_depth("256") == 256
    assert parse_depth(" 12 ") == 12
    assert parse_depth("2") == 2
    for bad in ("1", "0", "-5", "abc", "", "2.5"):
        with pytest.raises(InvalidDepth):
            parse_depth(bad)


def test_render_config_validation():
    assert RenderConfig(640, 480, 256).validate() == RenderConfig(640, 480, 256)
    with pytest.raises(InvalidDimensions):
        RenderConfig(0, 480, 256).validate()
    with pytest.raises(InvalidDimensions):
        RenderConfig(640, -1, 256).validate()
    with pytest.raises(InvalidDepth):
        RenderConfig(640, 480, 1).validate()
    with pytest.raises(InvalidDepth):
        RenderConfig(640, 480, 2.5).validate()


def test_from_settings():
    config = RenderConfig.from_settings(Settings(max_depth=100, width=320, height=200))
    assert config == RenderConfig(320, 200, 100)


def test_load_settings(tmp_path):
    path = write_settings(tmp_path, {"maxdepth": 500, "width": 800, "height": "600"})
    assert load_settings(path) == Settings(max_depth=500, width=800, height=600)


def test_missing_file_uses_defaults(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    settings = load_settings(str(tmp_path / "missing.json"))

    assert settings == Settings(DEFAULT_MAX_DEPTH, DEFAULT_WIDTH, DEFAULT_HEIGHT)
    assert "Using default settings" in caplog.text


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_malformed_file_uses_defaults(tmp_path, caplog, content):
    caplog.set_level(logging.WARNING)
    assert load_settings(write_settings(tmp_path, content)) == Settings()
    assert "Using default settings" in caplog.text


def test_bad_key_falls_back_alone(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    path = write_settings(tmp_path, {"maxdepth": 64, "width": "wide", "height": 2.5})

    settings = load_settings(path)

    assert settings == Settings(max_depth=64, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT)
    assert "'width'" in caplog.text
    assert "'height'" in caplog.text


def test_out_of_range_key_falls_back_alone(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    path = write_settings(tmp_path, {"maxdepth": 1, "width": 0, "height": 300})

    settings = load_settings(path)

    assert settings == Settings(max_depth=DEFAULT_MAX_DEPTH, width=DEFAULT_WIDTH, height=300)
    assert "'maxdepth'" in caplog.text
    assert "'width'" in caplog.text
    RenderConfig.from_settings(settings).validate()
