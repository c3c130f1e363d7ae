"""
估算引擎模块

提供核心的测量算法，包括试验采样、两点估算与自适应翻倍循环。
"""

from .measurement import Measurement, Estimate
from .predict import predict, predict_perturbed
from .sampler import TrialSampler
from .base import AdaptiveEstimator, InsufficientTimeError, measure_until

__all__ = [
    "Measurement",
    "Estimate",
    "predict",
    "predict_perturbed",
    "TrialSampler",
    "AdaptiveEstimator",
    "InsufficientTimeError",
    "measure_until",
]
