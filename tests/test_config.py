"""
設定檔載入 / 驗證 / 合併 測試
驗證只印警告不拋例外，用 capsys 檢查輸出。
"""
import argparse
import json

import pytest
from twcss_merge.config import (
    DEFAULT_DEBOUNCE,
    DEFAULT_IMPORT_PATH,
    DEFAULT_STYLESHEET,
    MergeSettings,
    load_config,
    resolve_settings,
    sample_config,
    validate_config,
    write_sample_config,
)


# ─── validate_config ─────────────────────────────────────────────────────────

class TestValidateConfig:
    def test_valid_config_no_warnings(self, tmp_path, capsys):
        css = tmp_path / "app.css"
        css.write_text("", encoding="utf-8")
        theme = tmp_path / "theme.css"
        theme.write_text("", encoding="utf-8")
        validate_config({
            "stylesheet": {"path": str(css), "frameworkImport": "tailwindcss"},
            "import": {"path": "../vendor/mishka_chelekom.css"},
            "theme": {"file": str(theme), "introducer": "@theme"},
            "watch": {"debounce": 0.5},
        })
        assert capsys.readouterr().out == ""

    def test_unknown_top_key_warns(self, capsys):
        validate_config({"unknownKey": "value"})
        assert "unknownKey" in capsys.readouterr().out

    def test_unknown_section_key_warns(self, capsys):
        validate_config({"theme": {"fiel": "theme.css"}})
        out = capsys.readouterr().out
        assert "[theme]" in out
        assert "fiel" in out

    def test_section_must_be_object(self, capsys):
        validate_config({"import": "../vendor/mishka.css"})
        assert "'import'" in capsys.readouterr().out

    def test_non_string_field_warns(self, capsys):
        validate_config({"import": {"path": 42}})
        assert "import.path" in capsys.readouterr().out

    def test_introducer_without_at_warns(self, capsys):
        validate_config({"theme": {"introducer": "theme"}})
        assert "theme.introducer" in capsys.readouterr().out

    @pytest.mark.parametrize("value", ["1s", True, -1])
    def test_invalid_debounce_warns(self, value, capsys):
        validate_config({"watch": {"debounce": value}})
        assert "watch.debounce" in capsys.readouterr().out

    def test_missing_stylesheet_warns(self, tmp_path, capsys):
        validate_config({"stylesheet": {"path": str(tmp_path / "missing.css")}})
        assert "stylesheet.path" in capsys.readouterr().out

    def test_empty_config_no_error(self, capsys):
        validate_config({})
        assert capsys.readouterr().out == ""


# ─── load_config ─────────────────────────────────────────────────────────────

class TestLoadConfig:
    def test_missing_file_returns_empty(self, tmp_path):
        assert load_config(str(tmp_path / "none.json")) == {}

    def test_loads_object(self, tmp_path):
        path = tmp_path / "twcss-merge.config.json"
        path.write_text(json.dumps({"import": {"path": "../vendor/x.css"}}), encoding="utf-8")
        assert load_config(str(path)) == {"import": {"path": "../vendor/x.css"}}

    def test_non_object_returns_empty(self, tmp_path, capsys):
        path = tmp_path / "cfg.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert load_config(str(path)) == {}
        assert "格式錯誤" in capsys.readouterr().out

    def test_invalid_json_returns_empty(self, tmp_path, capsys):
        path = tmp_path / "cfg.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_config(str(path)) == {}
        assert "JSON" in capsys.readouterr().out


# ─── resolve_settings ────────────────────────────────────────────────────────

class TestResolveSettings:
    def test_defaults(self):
        assert resolve_settings({}) == MergeSettings()
        settings = resolve_settings({})
        assert settings.stylesheet == DEFAULT_STYLESHEET
        assert settings.import_path == DEFAULT_IMPORT_PATH
        assert settings.theme_file is None
        assert settings.debounce == DEFAULT_DEBOUNCE

    def test_config_overrides_defaults(self):
        cfg = {
            "stylesheet": {"path": "web/app.css", "frameworkImport": "tw"},
            "import": {"path": "../vendor/x.css"},
            "theme": {"file": "theme.css", "introducer": "@theme inline"},
            "watch": {"debounce": 2},
        }
        settings = resolve_settings(cfg)
        assert settings == MergeSettings(
            stylesheet="web/app.css",
            import_path="../vendor/x.css",
            theme_file="theme.css",
            framework_import="tw",
            introducer="@theme inline",
            debounce=2.0,
        )

    def test_args_override_config(self):
        cfg = {"stylesheet": {"path": "web/app.css"}, "theme": {"file": "theme.css"}}
        args = argparse.Namespace(stylesheet="other.css", import_path=None, theme="new.css")
        settings = resolve_settings(cfg, args)
        assert settings.stylesheet == "other.css"
        assert settings.import_path == DEFAULT_IMPORT_PATH
        assert settings.theme_file == "new.css"

    def test_invalid_debounce_falls_back(self):
        assert resolve_settings({"watch": {"debounce": "fast"}}).debounce == DEFAULT_DEBOUNCE


# ─── sample config ───────────────────────────────────────────────────────────

class TestSampleConfig:
    def test_sample_has_no_warnings(self, capsys):
        cfg = sample_config()
        # 範例中的路徑不一定存在，其餘欄位不應觸發警告
        cfg["stylesheet"].pop("path")
        cfg["theme"].pop("file")
        validate_config(cfg)
        assert capsys.readouterr().out == ""

    def test_sample_resolves_to_defaults(self):
        settings = resolve_settings(sample_config())
        assert settings.stylesheet == DEFAULT_STYLESHEET
        assert settings.import_path == DEFAULT_IMPORT_PATH
        assert settings.debounce == DEFAULT_DEBOUNCE

    def test_write_then_load(self, tmp_path):
        path = tmp_path / "twcss-merge.config.json"
        assert write_sample_config(str(path)) is True
        assert json.loads(path.read_text(encoding="utf-8")) == sample_config()

    def test_write_refuses_existing_file(self, tmp_path):
        path = tmp_path / "twcss-merge.config.json"
        path.write_text("{}", encoding="utf-8")
        assert write_sample_config(str(path)) is False
        assert path.read_text(encoding="utf-8") == "{}"
        assert write_sample_config(str(path), force=True) is True
        assert "stylesheet" in json.loads(path.read_text(encoding="utf-8"))
