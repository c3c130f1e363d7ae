"""
pytest配置文件

定义测试的全局配置和fixture。
"""

import logging
import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bench_estimate.config.settings import config_manager, Settings, ENV_PREFIX  # noqa: E402

from helpers import FakeClock, FakeStats  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """每个测试使用干净的全局设置与日志处理器"""
    for name in Settings.model_fields:
        monkeypatch.delenv(ENV_PREFIX + name.upper(), raising=False)
    config_manager.reset()
    yield
    config_manager.reset()
    package_logger = logging.getLogger("bench_estimate")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def fake_clock():
    """可手动推进的时钟，分辨率1皮秒"""
    return FakeClock()


@pytest.fixture
def fake_stats():
    """已启用的分配统计源"""
    return FakeStats()
