"""設定檔載入與基本驗證."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

DEFAULT_CONFIG_PATH = "twcss-merge.config.json"
DEFAULT_STYLESHEET = "assets/css/app.css"
DEFAULT_IMPORT_PATH = "../vendor/mishka_chelekom.css"
DEFAULT_FRAMEWORK_IMPORT = "tailwindcss"
DEFAULT_INTRODUCER = "@theme"
DEFAULT_DEBOUNCE = 1.0

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"stylesheet", "import", "theme", "watch"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "stylesheet": {"path", "frameworkImport"},
    "import": {"path"},
    "theme": {"file", "introducer"},
    "watch": {"debounce"},
}

# 需為字串的欄位
_STRING_FIELDS = [
    ("stylesheet", "path"),
    ("stylesheet", "frameworkImport"),
    ("import", "path"),
    ("theme", "file"),
    ("theme", "introducer"),
]


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


@dataclass
class MergeSettings:
    """CLI 參數 > 設定檔 > 預設值 合併後的結果."""
    stylesheet: str = DEFAULT_STYLESHEET
    import_path: str = DEFAULT_IMPORT_PATH
    theme_file: Optional[str] = None
    framework_import: str = DEFAULT_FRAMEWORK_IMPORT
    introducer: str = DEFAULT_INTRODUCER
    debounce: float = DEFAULT_DEBOUNCE


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    for section, key in _STRING_FIELDS:
        section_cfg = cfg.get(section)
        if not isinstance(section_cfg, dict):
            continue
        val = section_cfg.get(key)
        if val is not None and not isinstance(val, str):
            _warn(f"{section}.{key} 應為字串，目前是 {type(val).__name__}")

    # introducer 需以 @ 開頭
    introducer = _section(cfg, "theme").get("introducer")
    if isinstance(introducer, str) and not introducer.startswith("@"):
        _warn(f"theme.introducer '{introducer}' 應以 @ 開頭（例如 @theme）")

    # watch.debounce 值類型
    debounce = _section(cfg, "watch").get("debounce")
    if debounce is not None and (isinstance(debounce, bool) or not isinstance(debounce, (int, float))):
        _warn(f"watch.debounce 應為數字，目前是 {type(debounce).__name__}")
    elif isinstance(debounce, (int, float)) and debounce < 0:
        _warn("watch.debounce 不可為負數")

    # 檔案存在性提示（不強制，可能在其他目錄執行）
    stylesheet = _section(cfg, "stylesheet").get("path")
    if isinstance(stylesheet, str) and stylesheet and not Path(stylesheet).exists():
        _warn(f"stylesheet.path '{stylesheet}' 不存在")
    theme_file = _section(cfg, "theme").get("file")
    if isinstance(theme_file, str) and theme_file and not Path(theme_file).exists():
        _warn(f"theme.file '{theme_file}' 不存在（sync / watch 時需要）")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg: Any = json.load(f)
    except json.JSONDecodeError as e:
        print(f"   ⚠️  [config] '{config_path}' 不是合法的 JSON（{e}），回傳空設定。")
        return {}
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def _section(cfg: dict, name: str) -> dict:
    section = cfg.get(name, {})
    return section if isinstance(section, dict) else {}


def _pick(*values, default=None):
    for val in values:
        if val is not None:
            return val
    return default


def resolve_settings(cfg: dict, args=None) -> MergeSettings:
    """依 CLI 參數 > config > 預設值 的順序決定實際使用的設定."""
    stylesheet_cfg = _section(cfg, "stylesheet")
    import_cfg = _section(cfg, "import")
    theme_cfg = _section(cfg, "theme")
    watch_cfg = _section(cfg, "watch")

    debounce = _pick(getattr(args, "debounce", None), watch_cfg.get("debounce"), default=DEFAULT_DEBOUNCE)
    if isinstance(debounce, bool) or not isinstance(debounce, (int, float)) or debounce < 0:
        debounce = DEFAULT_DEBOUNCE

    return MergeSettings(
        stylesheet=_pick(getattr(args, "stylesheet", None), stylesheet_cfg.get("path"), default=DEFAULT_STYLESHEET),
        import_path=_pick(getattr(args, "import_path", None), import_cfg.get("path"), default=DEFAULT_IMPORT_PATH),
        theme_file=_pick(getattr(args, "theme", None), theme_cfg.get("file")),
        framework_import=_pick(
            getattr(args, "framework_import", None),
            stylesheet_cfg.get("frameworkImport"),
            default=DEFAULT_FRAMEWORK_IMPORT,
        ),
        introducer=_pick(theme_cfg.get("introducer"), default=DEFAULT_INTRODUCER),
        debounce=float(debounce),
    )


def sample_config() -> dict:
    """`init` 寫出的範例設定，各欄位皆為預設值."""
    return {
        "stylesheet": {
            "path": DEFAULT_STYLESHEET,
            "frameworkImport": DEFAULT_FRAMEWORK_IMPORT,
        },
        "import": {"path": DEFAULT_IMPORT_PATH},
        "theme": {
            "file": "assets/vendor/theme.css",
            "introducer": DEFAULT_INTRODUCER,
        },
        "watch": {"debounce": DEFAULT_DEBOUNCE},
    }


def write_sample_config(config_path: str = DEFAULT_CONFIG_PATH, force: bool = False) -> bool:
    """寫出範例設定檔；檔案已存在且未指定 force 時不覆寫，回傳 False."""
    path = Path(config_path)
    if path.exists() and not force:
        return False
    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_config(), f, indent=2, ensure_ascii=False)
        f.write("\n")
    return True
