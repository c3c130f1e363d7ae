"""
计时时钟

统一以皮秒为单位的时钟抽象，默认使用进程CPU时间。
"""

import time
from abc import ABC, abstractmethod
from typing import Dict, Type


PICOS_PER_NANO = 1000
PICOS_PER_SECOND = 10 ** 12


class Clock(ABC):
    """时钟接口"""

    name: str = "abstract"

    @abstractmethod
    def now(self) -> int:
        """当前读数 (皮秒)"""

    @abstractmethod
    def precision(self) -> int:
        """时钟分辨率 (皮秒)"""


class CpuClock(Clock):
    """进程CPU时间，不受其他进程调度的影响"""

    name = "cpu"

    def now(self) -> int:
        return time.process_time_ns() * PICOS_PER_NANO

    def precision(self) -> int:
        resolution = time.get_clock_info("process_time").resolution
        return int(resolution * PICOS_PER_SECOND)


class WallClock(Clock):
    """单调的墙上时间"""

    name = "wall"

    def now(self) -> int:
        return time.perf_counter_ns() * PICOS_PER_NANO

    def precision(self) -> int:
        resolution = time.get_clock_info("perf_counter").resolution
        return int(resolution * PICOS_PER_SECOND)


CLOCKS: Dict[str, Type[Clock]] = {
    "cpu": CpuClock,
    "wall": WallClock,
}


def create_clock(name: str) -> Clock:
    """按名称创建时钟"""
    clock_class = CLOCKS.get(name.lower())
    if clock_class is None:
        raise ValueError(f"Unsupported clock: {name}")
    return clock_class()
