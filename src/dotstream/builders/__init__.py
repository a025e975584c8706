"""
建構器套件，負責將圖形文件轉換為 NetworkX 圖結構。
"""

from .graph_builder import build_graph_data, build_graph_from_edges, load_graph_document

__all__ = [
    "build_graph_data",
    "build_graph_from_edges",
    "load_graph_document",
]
