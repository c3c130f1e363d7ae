"""
bench-estimate 主程序入口

支持使用 python -m bench_estimate 方式运行
"""

import sys

from .cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
