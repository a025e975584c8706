# src/dotstream/core/enums.py
"""
工作階段使用的列舉型別。

每個列舉的值就是寫入 DOT 文字或命令列參數時的原始字串，
因此所有接受列舉的參數也接受對應的字串值。
"""

# 1. 標準庫導入
from enum import Enum

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
# (無)


class GraphKind(Enum):
    """圖的種類，決定連線符號。"""

    DIRECTED = "digraph"
    UNDIRECTED = "graph"

    @property
    def connector(self) -> str:
        return "->" if self is GraphKind.DIRECTED else "--"


class OutputFormat(Enum):
    """渲染程式的輸出格式 (`-T<format>`)，皆屬於 graphviz.FORMATS。"""

    BMP = "bmp"
    DOT = "dot"
    JPG = "jpg"
    PDF = "pdf"
    PNG = "png"
    PS = "ps"
    SVG = "svg"


class Program(Enum):
    """要執行的佈局程式，皆屬於 graphviz.ENGINES。"""

    CIRCO = "circo"
    DOT = "dot"
    FDP = "fdp"
    NEATO = "neato"
    SFDP = "sfdp"
    TWOPI = "twopi"


class RankDirection(Enum):
    LR = "LR"
    RL = "RL"


class NodeShape(Enum):
    BOX = "box"
    CIRCLE = "circle"
    FOLDER = "folder"
    PLAINTEXT = "plaintext"
    TRIANGLE = "triangle"


class SessionPhase(Enum):
    """工作階段只會向前推進：UNOPENED -> OPEN -> CLOSED。"""

    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"
