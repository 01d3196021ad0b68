"""
Merger — 對外的兩個合併操作

  add_import(css, path)                    → Added | AlreadyExists
  add_import_and_theme(css, path, theme)   → Success

皆為純函數：輸入文字、輸出新文字，不讀寫檔案。
"""

from dataclasses import dataclass
from typing import Union

from .directives import StyleDocument, resolve_insertion_index
from .import_detector import import_already_exists
from .loader import NotFound, read_theme_content
from .theme_block import DEFAULT_INTRODUCER, ensure_theme_exists


@dataclass(frozen=True)
class Added:
    text: str
    status = "added"


@dataclass(frozen=True)
class AlreadyExists:
    text: str
    status = "exists"


@dataclass(frozen=True)
class Success:
    text: str
    status = "ok"


ImportResult = Union[Added, AlreadyExists]


def insert_import(css_content: str, import_path: str) -> str:
    """不檢查是否重複，直接把 @import 放到正確位置."""
    statement = f'@import "{import_path}";'
    if not css_content.strip():
        return statement + "\n"

    doc = StyleDocument.from_text(css_content)
    index = resolve_insertion_index(doc)
    if index is None:
        # 沒有任何 directive → 放最前面，空一行後接原內容
        return statement + doc.newline * 2 + css_content
    return doc.insert_line_after(index, statement)


def add_import(css_content: str, import_path: str) -> ImportResult:
    if import_already_exists(css_content, import_path):
        return AlreadyExists(css_content)
    return Added(insert_import(css_content, import_path))


def add_import_and_theme(
    css_content: str,
    import_path: str,
    theme_content: str,
    introducer: str = DEFAULT_INTRODUCER,
) -> Success:
    """確保 @import 存在，並一律把 theme 區塊更新成 theme_content."""
    result = add_import(css_content, import_path)
    return Success(ensure_theme_exists(result.text, theme_content, introducer))


def sync_stylesheet(
    css_content: str,
    import_path: str,
    theme_path,
    introducer: str = DEFAULT_INTRODUCER,
) -> Union[Success, NotFound]:
    """先讀 theme 檔再合併；讀檔失敗直接回傳 NotFound，不產生任何合併結果."""
    loaded = read_theme_content(theme_path)
    if isinstance(loaded, NotFound):
        return loaded
    return add_import_and_theme(css_content, import_path, loaded.content, introducer)

