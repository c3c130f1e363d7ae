"""
bench-estimate: 自适应基准测试工具

给定一个可重复执行 N 次的工作负载，自动选择迭代次数，
估算单次执行的耗时及内存分配，无需预先指定样本数量。
"""

__version__ = "0.1.0"

from .estimator import Measurement, Estimate, AdaptiveEstimator, InsufficientTimeError
from .benchmarks import (
    Benchmarkable,
    Benchmark,
    bench,
    bgroup,
    nf,
    whnf,
    nf_io,
    whnf_io,
    nf_app_io,
    whnf_app_io,
)
from .config import BenchOptions, Settings
from .runner import run_benchmarks, CsvReporter
from .cli import default_main

__all__ = [
    "Measurement",
    "Estimate",
    "AdaptiveEstimator",
    "InsufficientTimeError",
    "Benchmarkable",
    "Benchmark",
    "bench",
    "bgroup",
    "nf",
    "whnf",
    "nf_io",
    "whnf_io",
    "nf_app_io",
    "whnf_app_io",
    "BenchOptions",
    "Settings",
    "run_benchmarks",
    "CsvReporter",
    "default_main",
]
