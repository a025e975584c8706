# src/dotstream/__main__.py
"""
dotstream 主執行入口。
"""

# 1. 標準庫導入
# (無)

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from dotstream.cli import app


def main():
    """主函式，交由 Typer 解析命令列並執行對應的子命令。"""
    app(prog_name="dotstream")


if __name__ == "__main__":
    main()
