"""設定モジュールのテスト"""

import json

from gxt_editor.config import DEFAULT_CONFIG, MAX_RECENT_FILES, Config, get_config, set_config


def test_default_config_is_written(tmp_path):
    path = tmp_path / "conf" / "config.json"
    config = Config(path)

    assert path.exists()
    assert config.get("gxt_service") == "memory"
    assert config.get("ui.column_widths.key") == 140
    assert config.get("ui.missing", "fallback") == "fallback"


def test_user_config_is_merged(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"logging": {"level": "DEBUG"}, "gxt_service": "plugin:Service"}),
        encoding="utf-8",
    )

    config = Config(path)

    assert config.get("logging.level") == "DEBUG"
    assert config.get("logging.file") is True
    assert config.get("gxt_service") == "plugin:Service"


def test_broken_config_uses_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert Config(path).get("logging.level") == "INFO"


def test_set_persists(tmp_path):
    path = tmp_path / "config.json"
    Config(path).set("ui.window_size", [1024, 768])

    assert Config(path).get("ui.window_size") == [1024, 768]


def test_defaults_are_not_shared(tmp_path):
    config = Config(tmp_path / "config.json")
    config.get("ui")["window_size"] = [1, 1]

    assert DEFAULT_CONFIG["ui"]["window_size"] == [900, 600]


def test_recent_files(tmp_path):
    config = Config(tmp_path / "config.json")
    config.add_recent_file("/a.gxt")
    config.add_recent_file("/b.gxt")
    config.add_recent_file("/a.gxt")

    assert config.get_recent_files() == ["/a.gxt", "/b.gxt"]

    for i in range(MAX_RECENT_FILES + 5):
        config.add_recent_file(f"/{i}.gxt")
    assert len(config.get_recent_files()) == MAX_RECENT_FILES


def test_singleton(isolated_config):
    assert get_config() is isolated_config

    other = Config(isolated_config.path.parent / "other.json")
    set_config(other)
    assert get_config() is other


def test_clear_recent_files(tmp_path):
    path = tmp_path / "config.json"
    config = Config(path)
    config.add_recent_file("/a.gxt")

    config.clear_recent_files()

    assert config.get_recent_files() == []
    assert Config(path).get_recent_files() == []
