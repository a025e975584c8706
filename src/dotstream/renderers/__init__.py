"""
渲染器套件，負責將圖結構串流到渲染子程序。
"""

from .stream_renderer import stream_graph

__all__ = [
    "stream_graph",
]
