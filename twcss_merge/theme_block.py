"""
Theme Block — 定位並替換樣式表中的 @theme { ... } 區塊

以大括號深度找出區塊結尾；( ) 與 [ ] 不計入深度，因此
linear-gradient(...)、rgba(...) 之類的值不會提早結束區塊。
引號字串與 /* */ 註解中的大括號也會略過。
"""

import re
from dataclasses import dataclass
from typing import Optional

from .directives import StyleDocument, find_statement_end

DEFAULT_INTRODUCER = "@theme"


@dataclass(frozen=True)
class ThemeBlock:
    start_line: int
    end_line: int
    # raw 文字中的字元範圍 [start, end)，從 introducer 到對應的 }
    start: int
    end: int


def _introducer_pattern(introducer: str):
    return re.compile(rf"^(\s*){re.escape(introducer)}(?=[\s{{]|$)", re.IGNORECASE)


def locate_theme_block(css_content: str, introducer: str = DEFAULT_INTRODUCER) -> Optional[ThemeBlock]:
    """找出第一個 theme 區塊；不存在或大括號不成對時回傳 None.

    沒有區塊的敘述（例如 @theme reference;）會略過，繼續往下找。
    """
    doc = StyleDocument.from_text(css_content)
    pattern = _introducer_pattern(introducer)
    offset = 0
    for index, line in enumerate(doc.lines):
        match = pattern.match(line)
        if match:
            start = offset + len(match.group(1))
            end = find_statement_end(css_content, start + len(introducer))
            if end is not None and css_content[end - 1] == "}":
                return ThemeBlock(
                    start_line=index,
                    end_line=doc.line_index_at(end - 1),
                    start=start,
                    end=end,
                )
        offset += len(line)
    return None


def _replacement_block(theme_content: str, introducer: str) -> str:
    # theme 檔若帶有區塊外的文字（檔頭註解等），替換時只取區塊本身，
    # 否則每次 sync 都會再多一份
    block = locate_theme_block(theme_content, introducer)
    if block:
        return theme_content[block.start:block.end]
    return theme_content.strip()


def ensure_theme_exists(css_content: str, theme_content: str, introducer: str = DEFAULT_INTRODUCER) -> str:
    """以 theme_content 取代既有 theme 區塊，沒有則附加在檔尾。

    區塊範圍以外的內容逐字保留。附加時放入整份 theme_content（去除前後空白），
    取代時只換成 theme_content 裡的區塊。
    """
    doc = StyleDocument.from_text(css_content)
    block = locate_theme_block(css_content, introducer)
    if block:
        return doc.replace_span(block.start, block.end, _replacement_block(theme_content, introducer))
    new_block = theme_content.strip()
    if not new_block:
        return css_content
    nl = doc.newline
    return css_content.rstrip() + nl + nl + new_block + nl
