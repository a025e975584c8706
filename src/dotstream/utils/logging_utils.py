# src/dotstream/utils/logging_utils.py
"""
提供與日誌記錄相關的通用工具。
"""

# 1. 標準庫導入
import logging
from collections.abc import Callable

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
# (無)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_console_logging(level: int = logging.INFO) -> logging.Logger:
    """
    為根日誌記錄器安裝唯一的主控台處理器。

    已有處理器時只調整根記錄器的等級，不會重複加入處理器。
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not root_logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(console_handler)
    return root_logger


def logging_sink(level: int = logging.DEBUG, logger: logging.Logger | None = None) -> Callable[[str], None]:
    """
    建立一個把診斷訊息轉交給 logging 的接收函式，可傳入 DotSession 的 diagnostics 參數。
    """
    target = logger or logging.getLogger("dotstream")

    def sink(message: str) -> None:
        target.log(level, message)

    return sink
