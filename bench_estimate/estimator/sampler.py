"""
试验采样器

对给定的迭代次数执行一次完整试验，返回耗时与分配统计的差值。
"""

import gc
import logging
from typing import Callable, Optional

from ..runtime.base import RuntimeStats, NoRuntimeStats
from ..runtime.clock import Clock, CpuClock
from .measurement import Measurement

logger = logging.getLogger(__name__)


class TrialSampler:
    """试验采样器"""

    def __init__(self, workload: Callable[[int], None],
                 runtime_stats: Optional[RuntimeStats] = None,
                 clock: Optional[Clock] = None,
                 collect: Callable[[], int] = gc.collect):
        """
        Args:
            workload: 执行 n 次工作负载的函数
            runtime_stats: 分配统计源，默认不可用
            clock: 计时时钟，默认进程CPU时间
            collect: 试验前调用的强制回收函数
        """
        self.workload = workload
        self.runtime_stats = runtime_stats or NoRuntimeStats()
        self.clock = clock or CpuClock()
        self.collect = collect

    def sample(self, n: int) -> Measurement:
        """
        执行 n 次迭代并测量

        Args:
            n: 迭代次数，必须为正整数

        Returns:
            本次试验的总测量值
        """
        if n <= 0:
            raise ValueError(f"Iteration count must be positive, got {n}")

        # 先回收上一次试验留下的垃圾，避免其回收停顿计入本次试验
        self.collect()
        start_time = self.clock.now()
        start_allocs, start_copied = self.runtime_stats.read()

        self.workload(n)

        end_time = self.clock.now()
        end_allocs, end_copied = self.runtime_stats.read()

        measurement = Measurement(
            time=end_time - start_time,
            allocated_bytes=end_allocs - start_allocs,
            copied_bytes=end_copied - start_copied,
        )
        logger.debug("trial n=%d: %s", n, measurement)
        return measurement
