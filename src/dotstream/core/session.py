# src/dotstream/core/session.py
"""
封裝單一 Graphviz 渲染子程序的工作階段。

DotSession 負責啟動渲染程式、逐行把 DOT 敘述寫入其標準輸入，
並在關閉時寫出結尾的 `}`、關閉管線並等待程序結束。
每個公開方法都只是一次格式化加上一次 emit 呼叫。
"""

# 1. 標準庫導入
import logging
import shutil
import subprocess
import sys
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import IO, Any

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from dotstream.core.config_loader import ProfileLoader
from dotstream.core.enums import GraphKind, NodeShape, OutputFormat, Program, RankDirection, SessionPhase
from dotstream.core.exceptions import ExecutableNotFound, RendererExitError, SessionClosedError
from dotstream.utils.escape import esc

DEBUG_PREFIX = "dot> "


def _discard(message: str) -> None:
    """預設的診斷接收函式：不做任何事。"""


def _relay_output(source: IO[bytes], sink: IO[bytes]) -> None:
    """將子程序的標準輸出原封不動地轉送出去，直到 EOF。"""
    try:
        shutil.copyfileobj(source, sink)
        sink.flush()
    finally:
        source.close()


def _default_stdout() -> IO[bytes]:
    """
    取得呼叫者標準輸出的二進位串流。

    部分內嵌或 IDE 主控台的 sys.stdout 只有文字層，沒有 buffer 屬性；
    這時請改以 stdout= 傳入二進位串流。
    """
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        raise TypeError("sys.stdout has no binary buffer; pass a binary stream via stdout=")
    return buffer


def build_command(
    executable: str,
    output_format: OutputFormat,
    write_to_file: bool,
    filename: str | None,
) -> list[str]:
    """
    組出渲染程式的命令列。

    Args:
        executable: 已解析的可執行檔路徑。
        output_format: 輸出格式，轉為 `-T<format>`。
        write_to_file: 為 True 時加上 `-O` 或 `-o<filename>`；否則輸出至標準輸出。
        filename: 明確的輸出檔名；為空時由渲染程式自行命名。

    Returns:
        傳給 subprocess 的參數列表。
    """
    command = [executable, f"-T{output_format.value}"]
    if write_to_file:
        command.append(f"-o{filename}" if filename else "-O")
    return command


class DotSession:
    """
    一個 Graphviz 渲染子程序與其輸入管線的擁有者。

    同一個工作階段不支援多執行緒同時寫入；不同工作階段可以並行。
    """

    def __init__(
        self,
        output_format: OutputFormat | str,
        program: Program | str = Program.DOT,
        graph_kind: GraphKind | str = GraphKind.DIRECTED,
        strict: bool = True,
        write_to_file: bool = True,
        filename: str | Path | None = None,
        *,
        debug: bool = False,
        diagnostics: Callable[[str], None] | None = None,
        debug_stream: IO[str] | None = None,
        stdout: IO[bytes] | None = None,
        close_timeout: float | None = None,
    ):
        output_format = OutputFormat(output_format)
        program = Program(program)
        self._graph_kind = GraphKind(graph_kind)
        self._strict = bool(strict)

        executable = shutil.which(program.value)
        if executable is None:
            logging.error(f"找不到渲染程式 '{program.value}'，請確認 Graphviz 已安裝並位於 PATH 中。")
            raise ExecutableNotFound(program.value)

        self.args = build_command(executable, output_format, write_to_file, str(filename) if filename else None)
        self.debug = debug
        self.close_timeout = close_timeout
        self._diagnostics = diagnostics or _discard
        self._debug_stream = debug_stream
        self._phase = SessionPhase.UNOPENED
        self._relay: threading.Thread | None = None
        sink = None
        if not write_to_file:
            sink = stdout if stdout is not None else _default_stdout()

        self._process = subprocess.Popen(
            self.args,
            stdin=subprocess.PIPE,
            stdout=None if write_to_file else subprocess.PIPE,
        )
        self._stdin = self._process.stdin
        logging.debug(f"已啟動渲染程式 (pid={self._process.pid}): {' '.join(self.args)}")

        if sink is not None:
            self._relay = threading.Thread(
                target=_relay_output,
                args=(self._process.stdout, sink),
                name=f"dotstream-relay-{self._process.pid}",
                daemon=True,
            )
            self._relay.start()

    @classmethod
    def open(
        cls,
        output_format: OutputFormat | str,
        graph_kind: GraphKind | str = GraphKind.DIRECTED,
        filename: str | Path | None = None,
        **kwargs: Any,
    ) -> "DotSession":
        """便利建構子：使用 dot 程式、strict 模式，並寫入檔案。"""
        return cls(output_format, Program.DOT, graph_kind, True, True, filename, **kwargs)

    @classmethod
    def from_profile(cls, profile_path: Path, **overrides: Any) -> "DotSession":
        """依 YAML 設定檔建立工作階段；關鍵字參數優先於設定檔的值。"""
        kwargs = ProfileLoader(profile_path).session_kwargs()
        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**kwargs)

    @property
    def graph_kind(self) -> GraphKind:
        return self._graph_kind

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def pid(self) -> int:
        return self._process.pid

    def __enter__(self) -> "DotSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._phase is SessionPhase.CLOSED:
            return
        if exc_type is None:
            self.close()
            return
        try:
            self.close()
        except (OSError, subprocess.SubprocessError) as e:
            logging.error(f"關閉工作階段時發生錯誤 (保留原始例外): {e}")

    def _write_line(self, line: str) -> None:
        if self.debug:
            stream = self._debug_stream or sys.stderr
            stream.write(f"{DEBUG_PREFIX}{line}\n")
        self._stdin.write(f"{line}\n".encode("utf-8"))
        self._stdin.flush()

    def emit(self, template: str, *args: Any) -> None:
        """
        格式化一行 DOT 敘述並寫入渲染程式。

        第一次呼叫時會先寫出 `strict` (若啟用) 與 `{kind}{` 標頭。
        寫入失敗 (例如渲染程式已提前結束) 時，OSError 會原樣拋出。

        Raises:
            SessionClosedError: 工作階段已關閉。
        """
        if self._phase is SessionPhase.CLOSED:
            raise SessionClosedError()
        if self._phase is SessionPhase.UNOPENED:
            self._phase = SessionPhase.OPEN
            if self._strict:
                self._write_line("strict")
            self._write_line(f"{self._graph_kind.value}{{")
        self._write_line(template % args if args else template)

    def set_link(self, src: str, dst: str) -> None:
        self.emit(f"%s {self._graph_kind.connector} %s", esc(src), esc(dst))

    def set_label(self, node: str, label: str) -> None:
        self.emit('%s [label="%s"]', esc(node), label)

    def set_node_shape(self, node: str, shape: NodeShape | str) -> None:
        self.emit('%s [shape="%s"]', esc(node), NodeShape(shape).value)

    def set_node_sep(self, value: float) -> None:
        self.emit("nodesep=%f", value)

    def set_rank_sep(self, value: float) -> None:
        self.emit("ranksep=%f", value)

    def set_rank_dir(self, direction: RankDirection | str) -> None:
        self.emit("rankdir=%s", RankDirection(direction).value)

    def set_edge_weight(self, value: float) -> None:
        """設定之後所有邊的預設權重。"""
        self.emit("edge [weight=%f];", value)

    def create_cluster(self, name: str, nodes: Iterable[str]) -> None:
        """以 `name` 為標籤建立一個子圖，成員名稱經過 esc 處理並以分號連接。"""
        nodes = list(nodes)
        self._diagnostics(f"Creating cluster {name} with {nodes}")
        members = ";".join(esc(node) for node in nodes)
        self.emit('subgraph cluster_%s {label="%s";%s}', name, name, members)

    def _close_stdin(self) -> None:
        try:
            self._stdin.close()
        except BrokenPipeError:
            # 渲染程式已結束；失敗由結束狀態碼回報。
            logging.debug("關閉輸入管線時渲染程式已結束。")

    def _wait(self, timeout: float | None) -> int:
        try:
            returncode = self._process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logging.error(f"渲染程式超時 (超過 {timeout} 秒)，強制終止 pid={self._process.pid}。")
            self._process.kill()
            self._process.wait()
            raise
        finally:
            if self._relay is not None:
                self._relay.join()
        logging.debug(f"渲染程式已結束 (pid={self._process.pid}, returncode={returncode})。")
        return returncode

    def close(self, timeout: float | None = None) -> None:
        """
        寫出結尾的 `}`、關閉輸入管線，並阻塞直到渲染程式結束。

        無論哪一步失敗，工作階段都會進入 CLOSED 狀態且子程序會被回收。

        Args:
            timeout: 等待秒數；None 時使用 close_timeout，兩者皆為 None 則無限等待。

        Raises:
            SessionClosedError: 已經關閉過。
            RendererExitError: 渲染程式以非零狀態碼結束。
            subprocess.TimeoutExpired: 超過等待時間，程序已被終止。
        """
        if self._phase is SessionPhase.CLOSED:
            raise SessionClosedError("dot session already closed")
        if timeout is None:
            timeout = self.close_timeout

        write_error: OSError | None = None
        try:
            self.emit("}")
        except OSError as e:
            write_error = e
        finally:
            self._phase = SessionPhase.CLOSED
            self._close_stdin()
            returncode = self._wait(timeout)

        # 結束狀態碼比管線錯誤更能說明失敗原因。
        if returncode != 0:
            logging.error(f"渲染程式以狀態碼 {returncode} 結束: {' '.join(self.args)}")
            raise RendererExitError(returncode, self.args) from write_error
        if write_error is not None:
            raise write_error
