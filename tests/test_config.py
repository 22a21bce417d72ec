import json

import pytest

from wolsearch.config.loader import (
    _migrate_config,
    load_config,
    save_config,
)
from wolsearch.config.schema import Config


def test_wol_config_defaults() -> None:
    config = Config()
    wol = config.wol

    assert wol.headless is True
    assert wol.timeout_ms == 30000
    assert wol.base_url == "https://wol.jw.org"
    assert wol.search_path == "/en/wol/s/r1/lp-e"
    assert wol.search_type == "par"
    assert wol.sort_by == "occ"
    assert wol.viewport_width == 1920
    assert wol.viewport_height == 1080
    assert config.logging.level == "INFO"


def test_config_migrates_legacy_wol_section() -> None:
    data = {
        "WOL": {
            "Headless": False,
            "TimeoutMs": 45000,
            "BaseUrl": "https://wol.example",
            "SearchPath": "/es/wol/s/r4/lp-s",
        },
        "Logging": {"LogLevel": {"Default": "Information"}},
    }

    migrated = _migrate_config(data)
    config = Config.model_validate(migrated)

    assert "WOL" not in migrated
    assert config.wol.headless is False
    assert config.wol.timeout_ms == 45000
    assert config.wol.base_url == "https://wol.example"
    assert config.wol.search_path == "/es/wol/s/r4/lp-s"
    assert config.logging.level == "INFO"


def test_config_migration_keeps_current_keys() -> None:
    data = {"wol": {"timeoutMs": 20000}, "WOL": {"TimeoutMs": 45000}}

    migrated = _migrate_config(data)

    assert migrated["wol"]["timeoutMs"] == 20000


def test_save_and_load_config(tmp_path) -> None:
    path = tmp_path / "config.json"
    config = Config()
    config.wol.headless = False

    written = save_config(config, path)
    loaded = load_config(path)

    assert written == path
    assert json.loads(path.read_text())["wol"]["headless"] is False
    assert loaded.wol.headless is False


def test_load_config_falls_back_to_defaults(tmp_path) -> None:
    missing = load_config(tmp_path / "missing.json")
    assert missing.wol.timeout_ms == 30000

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert load_config(broken).wol.timeout_ms == 30000

    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps({"wol": {"timeoutMs": 5}}))
    assert load_config(invalid).wol.timeout_ms == 30000


def test_config_migration_rejects_non_object_section() -> None:
    with pytest.raises(ValueError, match="wol must be an object"):
        _migrate_config({"WOL": {"Headless": False}, "wol": ["headless"]})

    migrated = _migrate_config({"WOL": {"Headless": False}, "wol": None})
    assert migrated["wol"] == {"headless": False}


def test_load_config_falls_back_when_legacy_section_collides(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"WOL": {"TimeoutMs": 45000}, "wol": "fast"}))

    config = load_config(path)

    assert config.wol.timeout_ms == 30000


def test_load_config_rejects_unknown_log_level(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"logging": {"level": "loud"}}))

    assert load_config(path).logging.level == "INFO"
