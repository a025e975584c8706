"""
dotstream 的核心套件。

此套件包含渲染子程序的工作階段、列舉型別、錯誤分類與設定檔載入。
"""

from .config_loader import DEFAULT_SESSION_PROFILE, ProfileLoader
from .enums import GraphKind, NodeShape, OutputFormat, Program, RankDirection, SessionPhase
from .exceptions import DotStreamError, ExecutableNotFound, ProfileError, RendererExitError, SessionClosedError
from .session import DotSession

__all__ = [
    "DEFAULT_SESSION_PROFILE",
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
]
