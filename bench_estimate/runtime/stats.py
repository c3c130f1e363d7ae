"""
运行时统计实现

基于 tracemalloc 的分配统计，以及按名称创建统计源的工厂函数。
"""

import tracemalloc
from typing import Dict, Tuple, Type

from .base import RuntimeStats, NoRuntimeStats


class TracemallocStats(RuntimeStats):
    """
    基于 tracemalloc 的分配统计

    仅在 tracemalloc 已启动时可用（例如 PYTHONTRACEMALLOC=1 或 -X tracemalloc）。
    报告的是试验前后被跟踪内存的净变化（分配减去释放），而非累计分配量，
    短命对象不计入，结果可能为负。CPython 的垃圾回收不搬移对象，
    因此复制字节数恒为0。
    """

    name = "tracemalloc"
    description = "被跟踪内存的净变化（分配减去释放）"

    @property
    def enabled(self) -> bool:
        return tracemalloc.is_tracing()

    def read(self) -> Tuple[int, int]:
        if not self.enabled:
            return 0, 0
        current, _peak = tracemalloc.get_traced_memory()
        return current, 0


# 支持的统计源
RUNTIME_STATS: Dict[str, Type[RuntimeStats]] = {
    "none": NoRuntimeStats,
    "tracemalloc": TracemallocStats,
}


def create_runtime_stats(name: str) -> RuntimeStats:
    """
    按名称创建统计源

    Args:
        name: 统计源名称

    Returns:
        统计源实例
    """
    stats_class = RUNTIME_STATS.get(name.lower())
    if stats_class is None:
        raise ValueError(f"Unsupported runtime stats source: {name}")
    return stats_class()


def list_supported_runtime_stats() -> Dict[str, dict]:
    """列出所有支持的统计源及其当前状态"""
    return {name: cls().get_stats_info() for name, cls in RUNTIME_STATS.items()}
