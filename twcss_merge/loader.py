"""讀取 theme 原始檔；唯一會碰到檔案系統的元件."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Loaded:
    content: str
    status = "ok"


@dataclass(frozen=True)
class NotFound:
    path: str
    reason: str
    status = "error"

    def describe(self) -> str:
        messages = {
            "enoent": "file does not exist",
            "eisdir": "path is a directory",
            "eacces": "permission denied",
            "invalid_utf8": "file is not valid UTF-8",
        }
        return f"{self.path}: {messages.get(self.reason, self.reason)}"


LoadResult = Union[Loaded, NotFound]


def read_theme_content(path) -> LoadResult:
    """回傳檔案全文（不做任何解析），讀不到時回傳 NotFound 而非拋例外。"""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except FileNotFoundError:
        return NotFound(str(path), "enoent")
    except IsADirectoryError:
        return NotFound(str(path), "eisdir")
    except PermissionError:
        return NotFound(str(path), "eacces")
    except UnicodeDecodeError:
        return NotFound(str(path), "invalid_utf8")
    except OSError as e:
        return NotFound(str(path), e.strerror or str(e))
    return Loaded(content)
