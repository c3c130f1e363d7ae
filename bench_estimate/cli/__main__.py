"""
CLI模块的主入口

支持使用 python -m bench_estimate.cli 方式运行
"""

import sys

from .commands import main

if __name__ == "__main__":
    sys.exit(main())
