"""
两点估算器

根据 n 次与 2n 次迭代的两次试验结果，用最小二乘拟合单次迭代开销，
并以残差平方和的平方根作为噪声估计。
"""

import math
from typing import Optional

from .measurement import Measurement, Estimate, quot


# 时钟精度下限：1毫秒
DEFAULT_PRECISION_FLOOR_PS = 1_000_000_000


def predict(t1: Measurement, t2: Measurement) -> Estimate:
    """
    两点最小二乘拟合

    Args:
        t1: n 次迭代的测量值
        t2: 2n 次迭代的测量值

    Returns:
        未按 n 缩放的估算结果
    """
    t = quot(t1.time + 2 * t2.time, 5)
    a = quot(t1.allocated_bytes + 2 * t2.allocated_bytes, 5)
    c = quot(t1.copied_bytes + 2 * t2.copied_bytes, 5)

    d = (t1.time - t) ** 2 + (t2.time - 2 * t) ** 2
    return Estimate(mean=Measurement(t, a, c), sigma=math.isqrt(d))


def predict_perturbed(t1: Measurement, t2: Measurement,
                      precision_ps: int = 0,
                      floor_ps: Optional[int] = None) -> Estimate:
    """
    考虑时钟精度的两点估算

    时钟分辨率较粗时，两次试验可能恰好落在同一刻度上，使 sigma 接近0。
    这里将两次试验的时间各自偏移 ±精度，取四种组合中最大的 sigma。

    Args:
        t1: n 次迭代的测量值
        t2: 2n 次迭代的测量值
        precision_ps: 时钟报告的精度 (皮秒)
        floor_ps: 精度下限 (皮秒)，默认1毫秒

    Returns:
        均值取自未扰动的拟合，sigma 取扰动后的最大值
    """
    if floor_ps is None:
        floor_ps = DEFAULT_PRECISION_FLOOR_PS
    prec = max(precision_ps, floor_ps)

    sigma = max(
        predict(t1.shift_time(d1), t2.shift_time(d2)).sigma
        for d1 in (-prec, prec)
        for d2 in (-prec, prec)
    )
    return Estimate(mean=predict(t1, t2).mean, sigma=sigma)
