"""
命令行接口模块

提供命令行工具，作为用户运行基准测试的主要方式。
"""

from .commands import main, default_main

__all__ = ["main", "default_main"]
