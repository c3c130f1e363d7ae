"""
全局配置模块

管理系统级的全局配置和单次运行的基准测试选项。
"""

from .settings import Settings, BenchOptions, get_settings, config_manager

__all__ = ["Settings", "BenchOptions", "get_settings", "config_manager"]
