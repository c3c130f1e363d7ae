"""
运行器模块

顺序运行基准测试树并分发结果到控制台或CSV报告器。
"""

from .core import run_benchmarks, run_single, collect_benchmarks
from .reporters import ConsoleReporter, CsvReporter, RunSummary

__all__ = [
    "run_benchmarks",
    "run_single",
    "collect_benchmarks",
    "ConsoleReporter",
    "CsvReporter",
    "RunSummary",
]
