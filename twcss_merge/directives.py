"""
Directive 分類與 @import 插入位置

Tailwind 4 的頂層 directive 依序為 @import → @source → @plugin / @custom-variant，
新的 @import 一律接在同類或優先序最高的那一群後面，不重排既有內容。
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .import_detector import extract_import_targets, normalize_import_path


class DirectiveKind(Enum):
    IMPORT = "@import"
    SOURCE = "@source"
    PLUGIN = "@plugin"
    CUSTOM_VARIANT = "@custom-variant"
    THEME_OPEN = "@theme"
    OTHER = ""


_KIND_BY_TOKEN = {
    kind.value: kind for kind in DirectiveKind if kind is not DirectiveKind.OTHER
}

# 行首的 @keyword，後面必須接空白、引號、括號、分號或行尾（@themes 不算 @theme）
_LEADING_TOKEN = re.compile(r"^\s*(@[A-Za-z][A-Za-z-]*)(?=[\s\"'{(;]|$)")

# 由高到低：先找 @import，再找 @source，最後是 @plugin / @custom-variant 前言區
_INSERTION_PRIORITY = [
    {DirectiveKind.IMPORT},
    {DirectiveKind.SOURCE},
    {DirectiveKind.PLUGIN, DirectiveKind.CUSTOM_VARIANT},
]

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+\Z")


@dataclass(frozen=True)
class StyleDocument:
    """樣式表文字的唯讀行視圖；每次呼叫重新建立，不保存任何狀態。"""

    raw: str
    lines: tuple

    @classmethod
    def from_text(cls, text: str) -> "StyleDocument":
        # 保留行尾，"".join(lines) == raw
        return cls(raw=text, lines=tuple(_LINE_RE.findall(text)))

    @property
    def newline(self) -> str:
        for line in self.lines:
            if line.endswith("\r\n"):
                return "\r\n"
            if line.endswith("\n"):
                return "\n"
        return "\n"

    def line_offset(self, index: int) -> int:
        """第 index 行在 raw 中的起始字元位置."""
        return sum(len(line) for line in self.lines[:index])

    def line_index_at(self, offset: int) -> int:
        """回傳包含字元位置 offset 的行號."""
        pos = 0
        for index, line in enumerate(self.lines):
            pos += len(line)
            if offset < pos:
                return index
        return max(len(self.lines) - 1, 0)

    def insert_line_after(self, index: int, line: str) -> str:
        lines = list(self.lines)
        nl = self.newline
        if not lines[index].endswith("\n"):
            lines[index] += nl
        lines.insert(index + 1, line + nl)
        return "".join(lines)

    def replace_span(self, start: int, end: int, text: str) -> str:
        return self.raw[:start] + text + self.raw[end:]


def find_statement_end(text: str, pos: int = 0) -> Optional[int]:
    """從 pos 往後掃描一個敘述，回傳結尾之後的位置；找不到則回傳 None.

    結尾是區塊外的第一個 ;，或第一個 { 所對應的 }。( ) 與 [ ] 不計入深度，
    引號字串與 /* */ 註解中的符號略過。
    """
    depth = 0
    quote = None
    in_comment = False
    i = pos
    n = len(text)
    while i < n:
        ch = text[i]
        if in_comment:
            if text.startswith("*/", i):
                in_comment = False
                i += 2
                continue
        elif quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif text.startswith("/*", i):
            in_comment = True
            i += 2
            continue
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                return None
            depth -= 1
            if depth == 0:
                return i + 1
        elif ch == ";" and depth == 0:
            return i + 1
        i += 1
    return None


def classify_line(line: str) -> DirectiveKind:
    match = _LEADING_TOKEN.match(line)
    if not match:
        return DirectiveKind.OTHER
    return _KIND_BY_TOKEN.get(match.group(1).lower(), DirectiveKind.OTHER)


def classify_document(doc: StyleDocument) -> list:
    return [classify_line(line) for line in doc.lines]


def resolve_insertion_index(doc: StyleDocument) -> Optional[int]:
    """回傳新 @import 應插在哪一行之後；None 表示插在檔案最前面.

    回傳的是最後一個同類 directive「敘述結束」的那一行，因此
    @plugin "x" { ... } 這類區塊或跨行的 @import 不會被從中切開。
    """
    kinds = classify_document(doc)
    for group in _INSERTION_PRIORITY:
        indices = [i for i, kind in enumerate(kinds) if kind in group]
        if indices:
            anchor = indices[-1]
            end = find_statement_end(doc.raw, doc.line_offset(anchor))
            if end is None:
                # 沒有結束的敘述（缺分號、引號未閉合）就接在起始行之後
                return anchor
            return doc.line_index_at(end - 1)
    return None


def validate_tailwind_structure(css_content: str, framework_import: str = "tailwindcss") -> list:
    """檢查框架本身的 @import 是否位於所有 @import 之首。

    回傳錯誤訊息清單，空清單代表結構正確；不修改內容。
    """
    targets = extract_import_targets(css_content)
    framework = normalize_import_path(framework_import)
    if framework not in targets:
        return []
    if targets.index(framework) > 0:
        return [f"@import '{framework_import}' should come before other imports"]
    return []
