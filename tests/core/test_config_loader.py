import os
import tempfile
from pathlib import Path

import pytest

from core.config import ConfigError, clear_config_cache, get_config


def _with_temp_config(yaml_text: str, overrides: str | None = None):
    prev = os.environ.get("MON_CONFIG_DIR")
    with tempfile.TemporaryDirectory() as d:
        tmp = Path(d)
        (tmp / "base.yaml").write_text(yaml_text, encoding="utf-8")
        if overrides is not None:
            (tmp / "overrides.local.yaml").write_text(
                overrides, encoding="utf-8"
            )
        os.environ["MON_CONFIG_DIR"] = str(tmp)
        clear_config_cache()
        yield get_config
    if prev is None:
        os.environ.pop("MON_CONFIG_DIR", None)
    else:
        os.environ["MON_CONFIG_DIR"] = prev


def test_valid_load():
    yaml_content_valid = (
        "schema_version: 1\n"
        "notifier:\n"
        "  host_version: '12.331'\n"
        "  chunk_size: 50\n"
        "modules:\n"
        "  dir: /data/modules\n"
        "  active: [foo, bar]\n"
        "logging: {level: debug}\n"
    )
    for load in _with_temp_config(yaml_content_valid):
        cfg = load()
        assert cfg.notifier.host_version == "12.331"
        assert cfg.notifier.chunk_size == 50
        assert cfg.notifier.package_type == "module"
        assert cfg.modules.active == ["foo", "bar"]
        assert cfg.logging.level == "debug"
        assert cfg.settings.path is None


def test_overrides_file_wins():
    base = "notifier: {chunk_size: 50, request_timeout_s: 10}\n"
    overrides = "notifier: {chunk_size: 5}\n"
    for load in _with_temp_config(base, overrides):
        cfg = load()
        assert cfg.notifier.chunk_size == 5
        assert cfg.notifier.request_timeout_s == 10


def test_missing_schema_version_assumed():
    for load in _with_temp_config("notifier: {}\n"):
        assert load().schema_version == 1


def test_empty_directory_yields_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("MON_CONFIG_DIR", str(tmp_path))
    cfg = get_config()
    assert cfg.notifier.chunk_size == 500
    assert cfg.notifier.initial_check_delay_s == 7.5


@pytest.mark.parametrize(
    "yaml_text",
    [
        "notifier:\n  unknown_field: 123\n",
        "scheduler: {interval_s: 60}\n",
        "logging: {level: verbose}\n",
        "- not\n- a mapping\n",
        "notifier: [unclosed\n",
    ],
)
def test_invalid_config_rejected(yaml_text):
    for load in _with_temp_config(yaml_text):
        with pytest.raises(ConfigError):
            load()


def test_shipped_base_config_loads(monkeypatch):
    root = Path(__file__).resolve().parents[2]
    monkeypatch.setenv("MON_CONFIG_DIR", str(root / "configs"))
    cfg = get_config()
    assert cfg.notifier.endpoint.endswith("/_api/packages/get")
    assert cfg.notifier.host_version == "13.345"
