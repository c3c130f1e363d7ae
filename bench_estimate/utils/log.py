"""
日志配置

按全局设置配置标准库 logging。
"""

import logging
from typing import Optional

from ..config.settings import Settings


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(settings: Settings, level: Optional[str] = None) -> logging.Logger:
    """
    配置包级日志

    Args:
        settings: 全局设置，提供日志级别与日志文件
        level: 覆盖设置中的日志级别

    Returns:
        包根 logger
    """
    root = logging.getLogger("bench_estimate")
    root.setLevel((level or settings.log_level).upper())

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if settings.log_file:
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root
