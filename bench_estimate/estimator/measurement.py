"""
测量结果数据类

定义单次试验的测量值与最终估算结果，所有字段均为整数（皮秒 / 字节）。
"""

from dataclasses import dataclass, replace


def quot(a: int, b: int) -> int:
    """整数除法，向零截断（与 // 的向下取整不同）"""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


@dataclass(frozen=True)
class Measurement:
    """一次试验（或单次迭代）的测量值"""
    time: int                  # 时间 (皮秒)
    allocated_bytes: int = 0   # 分配字节数，不可用时为0
    copied_bytes: int = 0      # 复制字节数，不可用时为0

    def scale(self, n: int) -> "Measurement":
        """将 n 次迭代的总量换算为单次迭代的量"""
        return Measurement(
            time=quot(self.time, n),
            allocated_bytes=quot(self.allocated_bytes, n),
            copied_bytes=quot(self.copied_bytes, n),
        )

    def shift_time(self, delta: int) -> "Measurement":
        """返回时间字段偏移 delta 皮秒后的副本"""
        return replace(self, time=self.time + delta)


@dataclass(frozen=True)
class Estimate:
    """估算结果：均值与偏差"""
    mean: Measurement
    sigma: int  # 标准差近似值 (皮秒)

    def scale(self, n: int) -> "Estimate":
        return Estimate(mean=self.mean.scale(n), sigma=quot(self.sigma, n))
