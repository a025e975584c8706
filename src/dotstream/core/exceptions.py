# src/dotstream/core/exceptions.py
"""
dotstream 的錯誤分類。

所有錯誤都會原樣傳遞給觸發它的呼叫者，本套件內部不做任何復原。
"""

# 1. 標準庫導入
import errno

# 2. 第三方庫導入
import graphviz

# 3. 本專案導入
# (無)


class DotStreamError(Exception):
    """dotstream 所有自訂錯誤的基底類別。"""


class ExecutableNotFound(DotStreamError, graphviz.ExecutableNotFound):
    """指定的渲染程式不在執行路徑 (PATH) 上。"""

    def __init__(self, program: str):
        super().__init__([program])
        self.program = program


class SessionClosedError(DotStreamError, BrokenPipeError):
    """在工作階段關閉後仍嘗試寫入。"""

    def __init__(self, message: str = "write to closed dot session"):
        super().__init__(errno.EPIPE, message)


class RendererExitError(DotStreamError, graphviz.CalledProcessError):
    """渲染程式以非零狀態碼結束。"""


class ProfileError(DotStreamError, ValueError):
    """設定檔或圖形文件無法載入或格式不正確。"""
