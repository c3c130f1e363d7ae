"""
测试自适应估算器

使用确定性的时钟验证收敛、超时与时间不足的处理。
"""

import math

import pytest

from bench_estimate.estimator.base import (
    AdaptiveEstimator,
    InsufficientTimeError,
    DEFAULT_MIN_TRIALS,
    measure_until,
)
from bench_estimate.estimator.sampler import TrialSampler

from helpers import FakeStats, constant_workload, no_collect


COST_PS = 100_000


def make_sampler(clock, cost_ps=COST_PS, stats=None, **workload_kwargs):
    action, calls = constant_workload(clock, cost_ps, stats, **workload_kwargs)
    sampler = TrialSampler(action, runtime_stats=stats, clock=clock, collect=no_collect)
    return sampler, calls


class TestConvergence:
    """测试无超时时的收敛"""

    def test_end_to_end_scenario(self, fake_clock):
        sampler, calls = make_sampler(fake_clock)
        est = AdaptiveEstimator(sampler, target_rel_stdev=0.05).estimate()

        assert 95_000 <= est.mean.time <= 105_000
        # 1ms 精度下限需要 n*c > 20 * 1.34ms，即 n = 2^19
        assert calls == [2 ** i for i in range(21)]
        assert est.sigma == math.isqrt(18 * 10 ** 17) // 2 ** 19

    @pytest.mark.parametrize("target", [0.01, 0.05, 0.20])
    def test_mean_within_target(self, fake_clock, target):
        sampler, _ = make_sampler(fake_clock)
        est = AdaptiveEstimator(sampler, target_rel_stdev=target).estimate()

        assert abs(est.mean.time - COST_PS) <= target * COST_PS
        assert est.sigma < target * est.mean.time

    def test_looser_target_stops_earlier(self, fake_clock):
        loose_sampler, loose_calls = make_sampler(fake_clock)
        AdaptiveEstimator(loose_sampler, target_rel_stdev=0.20).estimate()
        tight_sampler, tight_calls = make_sampler(fake_clock)
        AdaptiveEstimator(tight_sampler, target_rel_stdev=0.01).estimate()

        assert len(loose_calls) < len(tight_calls)

    def test_iteration_count_strictly_doubles(self, fake_clock):
        sampler, calls = make_sampler(fake_clock)
        AdaptiveEstimator(sampler, target_rel_stdev=0.20).estimate()
        assert all(b == 2 * a for a, b in zip(calls, calls[1:]))

    def test_allocations_scaled_per_iteration(self, fake_clock):
        stats = FakeStats()
        sampler, _ = make_sampler(fake_clock, stats=stats, allocated_per_call=48, copied_per_call=8)
        est = AdaptiveEstimator(sampler, target_rel_stdev=0.05).estimate()

        assert est.mean.allocated_bytes == 48
        assert est.mean.copied_bytes == 8

    def test_coarse_clock_widens_sigma(self, fake_clock):
        fake_clock._precision = 10 ** 10
        sampler, calls = make_sampler(fake_clock)
        AdaptiveEstimator(sampler, target_rel_stdev=0.05).estimate()
        # 10ms 精度比默认1ms下限多需要若干次翻倍
        assert calls[-1] > 2 ** 20

    def test_measure_until_wrapper(self, fake_clock):
        sampler, _ = make_sampler(fake_clock)
        assert measure_until(sampler, 0.05).mean.time == COST_PS


class TestTimeout:
    """测试超时限制"""

    def test_stops_before_horizon(self, fake_clock):
        timeout_ps = 10 ** 10
        sampler, calls = make_sampler(fake_clock)
        est = AdaptiveEstimator(sampler, target_rel_stdev=0.01, timeout_ps=timeout_ps).estimate()

        assert fake_clock.current <= timeout_ps
        assert est.mean.time == COST_PS
        # 未达到目标精度就停止
        assert calls[-1] == 2 ** 15

    def test_precision_still_wins_when_reached_first(self, fake_clock):
        sampler, calls = make_sampler(fake_clock)
        AdaptiveEstimator(sampler, target_rel_stdev=0.20, timeout_ps=10 ** 15).estimate()
        assert calls[-1] == 2 ** 18

    def test_three_iterations_fit_exactly(self, fake_clock):
        sampler, calls = make_sampler(fake_clock)
        est = AdaptiveEstimator(sampler, target_rel_stdev=0.05, timeout_ps=3 * COST_PS).estimate()

        assert calls == [1, 2]
        assert est.mean.time == COST_PS

    def test_fails_when_first_two_trials_exceed_horizon(self, fake_clock):
        sampler, calls = make_sampler(fake_clock)
        estimator = AdaptiveEstimator(sampler, target_rel_stdev=0.05, timeout_ps=2 * COST_PS)

        with pytest.raises(InsufficientTimeError) as excinfo:
            estimator.estimate()
        assert excinfo.value.trials == 2
        assert calls == [1, 2]

    def test_fails_after_single_trial(self, fake_clock):
        sampler, calls = make_sampler(fake_clock)
        estimator = AdaptiveEstimator(sampler, target_rel_stdev=0.05, timeout_ps=COST_PS // 2)

        with pytest.raises(InsufficientTimeError):
            estimator.estimate()
        assert calls == [1]

    def test_default_minimum_is_two_trials(self):
        assert DEFAULT_MIN_TRIALS == 2

    def test_min_trials_is_configurable(self, fake_clock):
        sampler, calls = make_sampler(fake_clock)
        est = AdaptiveEstimator(sampler, target_rel_stdev=0.05, timeout_ps=2 * COST_PS,
                                min_trials=1).estimate()
        assert calls == [1, 2]
        assert est.mean.time == COST_PS


class TestValidation:
    """测试参数校验"""

    @pytest.mark.parametrize("target", [0, -0.05])
    def test_rejects_non_positive_target(self, fake_clock, target):
        sampler, _ = make_sampler(fake_clock)
        with pytest.raises(ValueError):
            AdaptiveEstimator(sampler, target_rel_stdev=target)

    def test_rejects_zero_min_trials(self, fake_clock):
        sampler, _ = make_sampler(fake_clock)
        with pytest.raises(ValueError):
            AdaptiveEstimator(sampler, target_rel_stdev=0.05, min_trials=0)
