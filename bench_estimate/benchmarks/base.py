"""
可运行对象基础类

定义测试框架调用叶子节点的统一接口，以及实现该接口的 Benchmarkable。
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..config.settings import BenchOptions
from ..estimator.base import AdaptiveEstimator, InsufficientTimeError
from ..estimator.measurement import Estimate
from ..estimator.sampler import TrialSampler
from ..runtime.base import RuntimeStats
from ..runtime.clock import Clock, create_clock
from ..runtime.stats import create_runtime_stats
from ..utils.formatters import pretty_estimate, csv_estimate

logger = logging.getLogger(__name__)


SINGLE_THREADED_MESSAGE = "Benchmarks should be run in a single-threaded mode (--jobs 1)"


@dataclass
class Result:
    """叶子节点的运行结果"""
    passed: bool
    description: str
    estimate: Optional[Estimate] = None

    @classmethod
    def success(cls, description: str, estimate: Optional[Estimate] = None) -> "Result":
        return cls(passed=True, description=description, estimate=estimate)

    @classmethod
    def failure(cls, description: str) -> "Result":
        return cls(passed=False, description=description)


class Runnable(ABC):
    """测试框架中的叶子节点"""

    @abstractmethod
    def run(self, options: BenchOptions) -> Result:
        """按解析后的选项运行并返回结果"""

    @classmethod
    def recognized_options(cls) -> List[str]:
        """该节点读取的选项名称"""
        return []


class Benchmarkable(Runnable):
    """
    可测量的工作负载

    包装一个执行 n 次工作负载的函数 action(n)。通常不直接构造，
    而是使用 nf / whnf / nf_io 等函数创建。
    """

    def __init__(self, action: Callable[[int], None], kind: str = "custom",
                 runtime_stats: Optional[RuntimeStats] = None,
                 clock: Optional[Clock] = None):
        """
        Args:
            action: 执行 n 次工作负载的函数
            kind: 工作负载类型，仅用于展示
            runtime_stats: 固定的统计源，None时按选项创建
            clock: 固定的时钟，None时按选项创建
        """
        self.action = action
        self.kind = kind
        self.runtime_stats = runtime_stats
        self.clock = clock

    def __call__(self, n: int) -> None:
        self.action(n)

    @classmethod
    def recognized_options(cls) -> List[str]:
        return BenchOptions.option_names()

    def run(self, options: BenchOptions) -> Result:
        """
        测量并格式化结果

        Args:
            options: 解析后的选项

        Returns:
            成功时描述为可读结果或CSV字段，失败时为错误信息
        """
        # 并发的CPU竞争会使计时模型失效
        if options.num_threads != 1:
            return Result.failure(SINGLE_THREADED_MESSAGE)

        try:
            stats = self.runtime_stats or create_runtime_stats(options.runtime_stats)
            clock = self.clock or create_clock(options.clock)
        except ValueError as e:
            return Result.failure(str(e))

        estimator = AdaptiveEstimator(
            TrialSampler(self, runtime_stats=stats, clock=clock),
            target_rel_stdev=options.target_rel_stdev,
            timeout_ps=options.timeout_ps,
            min_trials=options.min_trials,
        )
        try:
            est = estimator.estimate()
        except InsufficientTimeError as e:
            return Result.failure(str(e))

        if options.csv_enabled:
            description = csv_estimate(est, with_gc=stats.enabled)
        else:
            description = pretty_estimate(est, with_gc=stats.enabled)
        return Result.success(description, est)

    def __repr__(self) -> str:
        return f"Benchmarkable(kind={self.kind!r})"
