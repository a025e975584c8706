"""
通用工具函式套件。
"""

from .escape import esc
from .logging_utils import logging_sink, setup_console_logging

__all__ = [
    "esc",
    "logging_sink",
    "setup_console_logging",
]
