"""
自适应估算器

不断将迭代次数翻倍，直到两点估算的相对偏差达到目标精度，
或预计耗时即将超过超时限制。
"""

import logging
from typing import Optional

from .measurement import Measurement, Estimate
from .predict import predict_perturbed
from .sampler import TrialSampler

logger = logging.getLogger(__name__)


# 超时前至少需要完成的试验次数（n=1 与 n=2，共3次迭代）
DEFAULT_MIN_TRIALS = 2


class InsufficientTimeError(RuntimeError):
    """超时限制不足以完成最少次数的试验"""

    def __init__(self, elapsed_ps: int, timeout_ps: int, trials: int):
        self.elapsed_ps = elapsed_ps
        self.timeout_ps = timeout_ps
        self.trials = trials
        super().__init__(
            f"Timeout of {timeout_ps} ps exceeded after {trials} trial(s) "
            f"({elapsed_ps} ps elapsed); increase the timeout"
        )


class AdaptiveEstimator:
    """自适应估算器主类"""

    def __init__(self, sampler: TrialSampler,
                 target_rel_stdev: float,
                 timeout_ps: Optional[int] = None,
                 min_trials: int = DEFAULT_MIN_TRIALS,
                 precision_floor_ps: Optional[int] = None):
        """
        Args:
            sampler: 试验采样器
            target_rel_stdev: 目标相对标准差（小数，如0.05表示5%）
            timeout_ps: 超时限制 (皮秒)，None表示不限时
            min_trials: 超时前必须完成的最少试验次数
            precision_floor_ps: 时钟精度下限 (皮秒)，None使用默认的1毫秒
        """
        if target_rel_stdev <= 0:
            raise ValueError(f"Target relative stdev must be positive, got {target_rel_stdev}")
        if min_trials < 1:
            raise ValueError(f"min_trials must be at least 1, got {min_trials}")

        self.sampler = sampler
        self.target_rel_stdev = target_rel_stdev
        self.timeout_ps = timeout_ps
        self.min_trials = min_trials
        self.precision_floor_ps = precision_floor_ps

    def estimate(self) -> Estimate:
        """
        执行自适应测量

        Returns:
            单次迭代的估算结果

        Raises:
            InsufficientTimeError: 最初的试验已经超出超时限制
        """
        precision = self.sampler.clock.precision()

        n = 1
        t1 = self.sampler.sample(n)
        trials = 1
        elapsed = t1.time
        self._check_time_budget(elapsed, trials)

        # 已经被后续翻倍“越过”的试验耗时之和
        sum_of_ts = 0
        while True:
            t2 = self.sampler.sample(2 * n)
            trials += 1
            elapsed += t2.time
            self._check_time_budget(elapsed, trials)

            est = predict_perturbed(t1, t2, precision, self.precision_floor_ps)

            if self._is_stdev_in_target_range(est):
                logger.debug("precision reached at n=%d after %d trials", n, trials)
                return est.scale(n)
            if self._is_timeout_soon(sum_of_ts, t1, t2):
                logger.debug("timeout approaching at n=%d after %d trials", n, trials)
                return est.scale(n)

            sum_of_ts += t1.time
            n *= 2
            t1 = t2

    def _is_stdev_in_target_range(self, est: Estimate) -> bool:
        """比较未缩放的 sigma 与均值"""
        return est.sigma < int(self.target_rel_stdev * est.mean.time)

    def _is_timeout_soon(self, sum_of_ts: int, t1: Measurement, t2: Measurement) -> bool:
        """预计下一次翻倍后的总耗时，乘以1.2作为安全余量"""
        if self.timeout_ps is None:
            return False
        return (sum_of_ts + t1.time + 3 * t2.time) * 12 >= self.timeout_ps * 10

    def _check_time_budget(self, elapsed: int, trials: int) -> None:
        if self.timeout_ps is None or trials > self.min_trials:
            return
        if elapsed > self.timeout_ps:
            logger.warning("timeout of %d ps exceeded after %d trial(s)", self.timeout_ps, trials)
            raise InsufficientTimeError(elapsed, self.timeout_ps, trials)


def measure_until(sampler: TrialSampler, target_rel_stdev: float,
                  timeout_ps: Optional[int] = None,
                  min_trials: int = DEFAULT_MIN_TRIALS) -> Estimate:
    """AdaptiveEstimator 的便捷封装"""
    return AdaptiveEstimator(
        sampler,
        target_rel_stdev=target_rel_stdev,
        timeout_ps=timeout_ps,
        min_trials=min_trials,
    ).estimate()
