"""
twcss-merge — Tailwind 4 樣式表 @import / @theme 合併引擎

在既有的主樣式表中冪等地加入 vendor @import，並以最新內容取代 @theme 區塊，
不動到其他規則、註解與排版。
"""

__version__ = "0.3.0"

from .import_detector import (
    IMPORT_FORMS,
    extract_import_targets,
    import_already_exists,
    normalize_import_path,
)
from .directives import (
    DirectiveKind,
    StyleDocument,
    classify_line,
    find_statement_end,
    resolve_insertion_index,
    validate_tailwind_structure,
)
from .theme_block import ThemeBlock, ensure_theme_exists, locate_theme_block
from .loader import Loaded, NotFound, read_theme_content
from .merger import (
    Added,
    AlreadyExists,
    Success,
    add_import,
    add_import_and_theme,
    insert_import,
    sync_stylesheet,
)
from .config import MergeSettings, load_config, resolve_settings, validate_config

__all__ = [
    "__version__",
    "IMPORT_FORMS",
    "extract_import_targets",
    "import_already_exists",
    "normalize_import_path",
    "DirectiveKind",
    "StyleDocument",
    "classify_line",
    "find_statement_end",
    "resolve_insertion_index",
    "validate_tailwind_structure",
    "ThemeBlock",
    "ensure_theme_exists",
    "locate_theme_block",
    "Loaded",
    "NotFound",
    "read_theme_content",
    "Added",
    "AlreadyExists",
    "Success",
    "add_import",
    "add_import_and_theme",
    "insert_import",
    "sync_stylesheet",
    "MergeSettings",
    "load_config",
    "resolve_settings",
    "validate_config",
]
