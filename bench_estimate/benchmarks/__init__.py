"""
基准测试模块

提供可测量工作负载的构造函数与基准测试树。
"""

from .base import Runnable, Result, Benchmarkable
from .workloads import nf, whnf, nf_io, whnf_io, nf_app_io, whnf_app_io, force_deep
from .tree import Benchmark, SingleBenchmark, BenchGroup, bench, bgroup, iter_benchmarks

__all__ = [
    "Runnable",
    "Result",
    "Benchmarkable",
    "nf",
    "whnf",
    "nf_io",
    "whnf_io",
    "nf_app_io",
    "whnf_app_io",
    "force_deep",
    "Benchmark",
    "SingleBenchmark",
    "BenchGroup",
    "bench",
    "bgroup",
    "iter_benchmarks",
]
