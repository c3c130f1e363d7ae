"""
运行时能力模块

提供计时时钟与内存分配统计源，二者均以对象形式注入采样器。
"""

from .base import RuntimeStats, NoRuntimeStats
from .stats import TracemallocStats, create_runtime_stats, list_supported_runtime_stats
from .clock import Clock, CpuClock, WallClock, create_clock

__all__ = [
    "RuntimeStats",
    "NoRuntimeStats",
    "TracemallocStats",
    "create_runtime_stats",
    "list_supported_runtime_stats",
    "Clock",
    "CpuClock",
    "WallClock",
    "create_clock",
]
