"""
dotstream：逐行將 DOT 敘述串流到 Graphviz 渲染子程序。
"""

from .core import (
    DotSession,
    DotStreamError,
    ExecutableNotFound,
    GraphKind,
    NodeShape,
    OutputFormat,
    ProfileError,
    ProfileLoader,
    Program,
    RankDirection,
    RendererExitError,
    SessionClosedError,
    SessionPhase,
)
from .utils import esc

__all__ = [
    "DotSession",
    "DotStreamError",
    "ExecutableNotFound",
    "GraphKind",
    "NodeShape",
    "OutputFormat",
    "ProfileError",
    "ProfileLoader",
    "Program",
    "RankDirection",
    "RendererExitError",
    "SessionClosedError",
    "SessionPhase",
    "esc",
]
