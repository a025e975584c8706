# tests/conftest.py
"""
Shared test fixtures.

A fake Graphviz executable is written into a temporary bin directory and put
first on PATH. It records argv and everything it reads from stdin, then copies
stdin to `-o<file>`, to `noname.gv.<format>` for `-O`, or to stdout.
Behaviour is steered through environment variables:

    FAKE_DOT_EXIT   exit status (default 0)
    FAKE_DOT_MODE   "echo" (default), "exit_early" (exit without reading stdin)
                    or "hang" (read stdin, then sleep)
"""
import os
import stat
import sys
from pathlib import Path

import pytest

from dotstream.core.enums import Program

_FAKE_RENDERER = '''#!{python}
import os
import sys
import time

record_dir = os.environ["FAKE_DOT_RECORD_DIR"]
mode = os.environ.get("FAKE_DOT_MODE", "echo")
status = int(os.environ.get("FAKE_DOT_EXIT", "0"))

with open(os.path.join(record_dir, "argv.txt"), "w", encoding="utf-8") as f:
    f.write("\\n".join([os.path.basename(sys.argv[0])] + sys.argv[1:]))

if mode == "exit_early":
    sys.exit(status)

data = sys.stdin.buffer.read()
with open(os.path.join(record_dir, "received.dot"), "wb") as f:
    f.write(data)

if mode == "hang":
    time.sleep(30)

out_file = None
fmt = "out"
for arg in sys.argv[1:]:
    if arg.startswith("-T"):
        fmt = arg[2:]
    elif arg == "-O":
        out_file = "noname.gv." + fmt
    elif arg.startswith("-o"):
        out_file = arg[2:]

if out_file:
    with open(out_file, "wb") as f:
        f.write(data)
else:
    sys.stdout.buffer.write(data)
    sys.stdout.flush()

sys.exit(status)
'''


class FakeRenderer:
    """Handle on the fake renderer's recordings."""

    def __init__(self, record_dir: Path, monkeypatch):
        self.record_dir = record_dir
        self._monkeypatch = monkeypatch

    def set_exit(self, status: int):
        self._monkeypatch.setenv("FAKE_DOT_EXIT", str(status))

    def set_mode(self, mode: str):
        self._monkeypatch.setenv("FAKE_DOT_MODE", mode)

    def received(self) -> str:
        return (self.record_dir / "received.dot").read_text(encoding="utf-8")

    def lines(self) -> list[str]:
        return self.received().splitlines()

    def argv(self) -> list[str]:
        return (self.record_dir / "argv.txt").read_text(encoding="utf-8").splitlines()


@pytest.fixture
def fake_renderer(tmp_path, monkeypatch) -> FakeRenderer:
    """Fake dot/neato/... executables on PATH; the working directory is tmp_path."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    record_dir = tmp_path / "records"
    record_dir.mkdir()

    script = _FAKE_RENDERER.format(python=sys.executable)
    for prog in Program:
        exe = bin_dir / prog.value
        exe.write_text(script, encoding="utf-8")
        exe.chmod(exe.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    monkeypatch.setenv("FAKE_DOT_RECORD_DIR", str(record_dir))
    monkeypatch.delenv("FAKE_DOT_EXIT", raising=False)
    monkeypatch.delenv("FAKE_DOT_MODE", raising=False)
    monkeypatch.chdir(tmp_path)
    return FakeRenderer(record_dir, monkeypatch)


@pytest.fixture
def empty_path(tmp_path, monkeypatch) -> Path:
    """PATH points at an empty directory, so no renderer can be found."""
    empty = tmp_path / "empty_bin"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    return empty
