"""
全局系统设置

定义系统级配置参数、默认值，以及单次运行解析后的基准测试选项。
"""

import os
from typing import Optional, List, Literal

from pydantic import BaseModel, Field

from ..runtime.clock import PICOS_PER_SECOND


ENV_PREFIX = "BENCH_ESTIMATE_"

# 与 runtime.stats.RUNTIME_STATS、runtime.clock.CLOCKS 的键保持一致
RuntimeStatsName = Literal["none", "tracemalloc"]
ClockName = Literal["cpu", "wall"]


class Settings(BaseModel):
    """系统设置类"""

    # 日志配置
    log_level: str = Field(default="WARNING", description="日志级别")
    log_file: Optional[str] = Field(default=None, description="日志文件路径")

    # 测量配置
    relative_stdev: float = Field(default=5.0, gt=0, description="目标相对标准差(百分比)")
    timeout: Optional[float] = Field(default=None, gt=0, description="单个基准测试的超时时间(秒)")
    min_trials: int = Field(default=2, ge=1, description="超时前至少完成的试验次数")
    num_threads: int = Field(default=1, ge=1, description="并行任务数，测量要求为1")

    # 输出配置
    csv_path: Optional[str] = Field(default=None, description="CSV输出文件路径，指定后不输出控制台结果")

    # 运行时配置
    runtime_stats: RuntimeStatsName = Field(default="none", description="内存分配统计源 (none/tracemalloc)")
    clock: ClockName = Field(default="cpu", description="计时时钟 (cpu/wall)")

    @classmethod
    def from_env(cls) -> "Settings":
        """从 BENCH_ESTIMATE_* 环境变量读取设置"""
        values = {}
        for name in cls.model_fields:
            env_value = os.environ.get(ENV_PREFIX + name.upper())
            if env_value is not None:
                values[name] = env_value
        return cls(**values)


class BenchOptions(BaseModel):
    """单次运行解析后的选项，传入每个基准测试"""

    relative_stdev: float = Field(default=5.0, gt=0, description="目标相对标准差(百分比)")
    timeout: Optional[float] = Field(default=None, gt=0, description="超时时间(秒)")
    csv_path: Optional[str] = Field(default=None, description="CSV输出文件路径")
    num_threads: int = Field(default=1, ge=1, description="并行任务数")
    min_trials: int = Field(default=2, ge=1, description="超时前至少完成的试验次数")
    runtime_stats: RuntimeStatsName = Field(default="none", description="内存分配统计源")
    clock: ClockName = Field(default="cpu", description="计时时钟")

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "BenchOptions":
        """以全局设置为默认值，覆盖非None的参数"""
        values = {name: getattr(settings, name) for name in cls.model_fields}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def target_rel_stdev(self) -> float:
        """目标相对标准差（小数）"""
        return self.relative_stdev / 100

    @property
    def timeout_ps(self) -> Optional[int]:
        """超时时间 (皮秒)"""
        if self.timeout is None:
            return None
        return int(self.timeout * PICOS_PER_SECOND)

    @property
    def csv_enabled(self) -> bool:
        return self.csv_path is not None

    @classmethod
    def option_names(cls) -> List[str]:
        return list(cls.model_fields)


class ConfigManager:
    """配置管理器"""

    def __init__(self):
        self._settings: Optional[Settings] = None

    def get_settings(self) -> Settings:
        """获取设置实例（单例模式）"""
        if self._settings is None:
            self._settings = Settings.from_env()
        return self._settings

    def update_settings(self, **kwargs) -> None:
        """更新设置"""
        settings = self.get_settings()
        values = settings.model_dump()
        for key, value in kwargs.items():
            if key not in values:
                raise ValueError(f"Unknown setting: {key}")
            values[key] = value
        # 重新构造以触发校验
        self._settings = Settings(**values)

    def reset(self) -> None:
        self._settings = None


# 全局配置管理器实例
config_manager = ConfigManager()


def get_settings() -> Settings:
    """获取全局设置"""
    return config_manager.get_settings()
