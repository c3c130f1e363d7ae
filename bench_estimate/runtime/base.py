"""
运行时统计基础类

将进程级的内存分配统计抽象为只读的能力对象，由调用方注入试验采样器。
"""

from abc import ABC, abstractmethod
from typing import Tuple


class RuntimeStats(ABC):
    """运行时分配统计的统一接口"""

    name: str = "abstract"
    description: str = ""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """是否提供分配统计"""

    @abstractmethod
    def read(self) -> Tuple[int, int]:
        """
        读取累计计数器

        Returns:
            (已分配字节数, 已复制字节数)
        """

    def get_stats_info(self) -> dict:
        """获取统计源基本信息"""
        return {
            "name": self.name,
            "enabled": self.enabled,
            "description": self.description,
        }


class NoRuntimeStats(RuntimeStats):
    """不可用的统计源，始终返回0"""

    name = "none"
    description = "不统计分配"

    @property
    def enabled(self) -> bool:
        return False

    def read(self) -> Tuple[int, int]:
        return 0, 0
