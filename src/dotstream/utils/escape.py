# src/dotstream/utils/escape.py
"""
節點名稱的字元替換規則。
"""

# 只處理這三個字元；引號、空白、括號仍由呼叫者負責。
_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    (".", "DOT"),
    ("/", "SLASH"),
    ("-", "HYPHEN"),
)


def esc(node: str) -> str:
    """將節點名稱中的 `.`、`/`、`-` 替換為文字記號。"""
    for char, token in _SUBSTITUTIONS:
        node = node.replace(char, token)
    return node
