import json
import math

import pytest

from responsive.config import settings
from responsive.design import (
    DEFAULT_CONFIG,
    BaseDevice,
    Breakpoint,
    ConfigurationError,
    ResponsiveConfig,
    default_config,
    load_config,
    validate_config,
)


def _write(tmp_path, data):
    path = tmp_path / "responsive.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults_match_reference_values():
    cfg = default_config()
    assert cfg.base_device == BaseDevice(375, 812)
    assert cfg.base_font_size == 16
    assert cfg.max_font_scale_factor == 2
    assert cfg.max_font_size == 32
    assert len(cfg.breakpoints) == 6
    assert cfg == DEFAULT_CONFIG


def test_default_config_is_immutable():
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.base_font_size = 20  # type: ignore[misc]


def test_load_without_path_uses_defaults(monkeypatch):
    monkeypatch.delenv(settings.CONFIG_FILE_ENV, raising=False)
    assert load_config() == DEFAULT_CONFIG


def test_missing_file_falls_back_to_defaults(tmp_path):
    assert load_config(tmp_path / "absent.json") == DEFAULT_CONFIG


def test_partial_override(tmp_path):
    path = _write(tmp_path, {"baseFontSize": 14, "baseDevice": {"width": 390}})
    cfg = load_config(path)
    assert cfg.base_font_size == 14
    assert cfg.base_device == BaseDevice(390, 812)
    assert cfg.max_font_scale_factor == 2
    assert cfg.breakpoints == DEFAULT_CONFIG.breakpoints


def test_breakpoints_object_preserves_order_and_null_is_open(tmp_path):
    path = _write(tmp_path, {"breakpoints": {"compact": [0, 599], "wide": [600, None]}})
    cfg = load_config(path)
    assert list(cfg.breakpoints) == [
        Breakpoint("compact", 0, 599),
        Breakpoint("wide", 600, math.inf),
    ]


def test_breakpoints_row_list(tmp_path):
    path = _write(tmp_path, {"breakpoints": [["s", 0, 799], ["l", 800, 9000]]})
    cfg = load_config(path)
    assert [b.name for b in cfg.breakpoints] == ["s", "l"]


def test_env_var_selects_file(tmp_path, monkeypatch):
    path = _write(tmp_path, {"maxFontScaleFactor": 1.5})
    monkeypatch.setenv(settings.CONFIG_FILE_ENV, str(path))
    assert load_config().max_font_scale_factor == 1.5


@pytest.mark.parametrize(
    "data",
    [
        {"baseFontSize": 0},
        {"baseFontSize": "16"},
        {"maxFontScaleFactor": 0.5},
        {"baseDevice": {"width": -1, "height": 812}},
        {"baseDevice": [375, 812]},
        {"breakpoints": {"a": [0, 399], "b": [500, None]}},
        {"breakpoints": {"a": [0, 399], "b": [300, None]}},
        {"breakpoints": {"a": [0]}},
        {"breakpoints": {"a": ["0", None]}},
        {"breakpoints": [["a", 0]]},
        {"breakpoints": "group1"},
    ],
)
def test_malformed_config_fails_fast(tmp_path, data):
    with pytest.raises(ConfigurationError):
        load_config(_write(tmp_path, data))


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_non_object_json_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(_write(tmp_path, [1, 2, 3]))


def test_validate_config_direct():
    with pytest.raises(ConfigurationError):
        validate_config(ResponsiveConfig(base_device=BaseDevice(0, 812)))
    assert validate_config(ResponsiveConfig()) == DEFAULT_CONFIG
