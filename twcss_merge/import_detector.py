"""
Import Detector — 判斷樣式表中是否已經 @import 某個目標

支援的寫法集中在 IMPORT_FORMS，新增寫法只需要在清單加一筆。
"""

import re

# 每種寫法各一個 pattern，target 群組即為被匯入的路徑
IMPORT_FORMS = [
    # @import "target"
    r'@import[ \t]+"(?P<target>[^"\n]+)"',
    # @import 'target'
    r"@import[ \t]+'(?P<target>[^'\n]+)'",
    # @import url("target")
    r'@import[ \t]+url\([ \t]*"(?P<target>[^"\n]+)"[ \t]*\)',
    # @import url('target')
    r"@import[ \t]+url\([ \t]*'(?P<target>[^'\n]+)'[ \t]*\)",
    # @import url(target)
    r"@import[ \t]+url\([ \t]*(?P<target>[^\"'()\s]+)[ \t]*\)",
]

# source(none)、layer(base)、media query 等修飾語，可跨行，直到分號為止；
# 遇到 { } 或下一個 @ 代表敘述沒有結束，不算數
_MODIFIER_TAIL = r"(?:\s+[^;{}@]*)?;"

_COMPILED_FORMS = [
    re.compile(form + _MODIFIER_TAIL, re.IGNORECASE) for form in IMPORT_FORMS
]


def normalize_import_path(path: str) -> str:
    """去除前後空白、反斜線轉 /、合併連續的 /。"""
    path = path.strip().replace("\\", "/")
    return re.sub(r"/+", "/", path)


def extract_import_targets(css_content: str) -> list:
    """依文件順序回傳所有格式正確之 @import 的（正規化後）目標。

    未閉合的引號或缺少分號的敘述不會被辨識，也不會拋例外。
    """
    found = []
    for pattern in _COMPILED_FORMS:
        for match in pattern.finditer(css_content):
            found.append((match.start(), normalize_import_path(match.group("target"))))
    # 同一敘述可能被多個 pattern 命中（理論上不會），以位置去重
    seen = set()
    targets = []
    for start, target in sorted(found):
        if start in seen:
            continue
        seen.add(start)
        targets.append(target)
    return targets


def import_already_exists(css_content: str, import_path: str) -> bool:
    """任一寫法的 @import 指向同一（正規化後）路徑即視為已存在。"""
    wanted = normalize_import_path(import_path)
    if not wanted:
        return False
    return wanted in extract_import_targets(css_content)
