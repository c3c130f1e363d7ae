"""
测试辅助工具

确定性的时钟、分配统计源与工作负载。
"""

from typing import Callable, List, Optional, Tuple

from bench_estimate.runtime.base import RuntimeStats
from bench_estimate.runtime.clock import Clock


class FakeClock(Clock):
    """只在工作负载推进时走动的时钟"""

    name = "fake"

    def __init__(self, precision_ps: int = 1):
        self.current = 0
        self._precision = precision_ps

    def now(self) -> int:
        return self.current

    def precision(self) -> int:
        return self._precision

    def advance(self, picos: int) -> None:
        self.current += picos


class FakeStats(RuntimeStats):
    """手动累加的分配计数器"""

    name = "fake"

    def __init__(self, enabled: bool = True):
        self._enabled = enabled
        self.allocated = 0
        self.copied = 0
        self.reads = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    def read(self) -> Tuple[int, int]:
        self.reads += 1
        if not self._enabled:
            return 0, 0
        return self.allocated, self.copied


def constant_workload(clock: FakeClock, cost_ps: int,
                      stats: Optional[FakeStats] = None,
                      allocated_per_call: int = 0,
                      copied_per_call: int = 0) -> Tuple[Callable[[int], None], List[int]]:
    """
    每次调用耗时固定的工作负载

    Returns:
        (action, 每次试验的 n 记录)
    """
    calls: List[int] = []

    def action(n: int) -> None:
        calls.append(n)
        clock.advance(cost_ps * n)
        if stats is not None:
            stats.allocated += allocated_per_call * n
            stats.copied += copied_per_call * n

    return action, calls


def no_collect() -> int:
    return 0
