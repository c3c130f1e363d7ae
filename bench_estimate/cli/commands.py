"""
CLI命令实现

提供命令行界面的具体命令实现，以及供基准测试脚本调用的 default_main。
"""

import importlib
from typing import Any, Callable, List, Optional, Sequence, Union

import click
from pydantic import ValidationError
from tabulate import tabulate

from ..benchmarks.tree import Benchmark, SingleBenchmark, BenchGroup
from ..config.settings import BenchOptions, get_settings
from ..runner.core import run_benchmarks, collect_benchmarks
from ..runtime.clock import CLOCKS
from ..runtime.stats import RUNTIME_STATS, list_supported_runtime_stats
from ..utils.formatters import format_benchmark_list
from ..utils.log import setup_logging


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

MEASUREMENT_OPTIONS = [
    click.option("--stdev", "relative_stdev", type=float, default=None,
                 help="目标相对标准差(百分比，默认5)。值越大测量越快越粗略，越小越慢越精确；"
                      "耗时过长时可配合 --timeout 使用"),
    click.option("--timeout", "-t", type=float, default=None,
                 help="单个基准测试的超时时间(秒)，会在超时前尽量给出结果"),
    click.option("--csv", "csv_path", type=click.Path(dir_okay=False), default=None,
                 help="CSV输出文件路径，指定后不输出控制台结果"),
    click.option("--jobs", "-j", "num_threads", type=int, default=None,
                 help="并行任务数，测量要求为1"),
    click.option("--min-trials", type=int, default=None,
                 help="超时前至少完成的试验次数(默认2)"),
    click.option("--runtime-stats", type=click.Choice(list(RUNTIME_STATS)), default=None,
                 help="内存分配统计源"),
    click.option("--clock", type=click.Choice(list(CLOCKS)), default=None,
                 help="计时时钟"),
    click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
                 default=None, help="日志级别"),
]


def measurement_options(func: Callable) -> Callable:
    """为命令添加测量相关选项"""
    for option in reversed(MEASUREMENT_OPTIONS):
        func = option(func)
    return func


def resolve_options(log_level: Optional[str] = None, **kwargs: Any) -> BenchOptions:
    """合并全局设置与命令行参数，并配置日志"""
    try:
        settings = get_settings()
        options = BenchOptions.from_settings(settings, **kwargs)
    except ValidationError as e:
        raise click.UsageError(f"无效的选项: {e}")
    setup_logging(settings, level=log_level)
    return options


def load_target(target: str) -> Union[Benchmark, List[Benchmark]]:
    """
    按 module:attribute 形式加载基准测试

    Args:
        target: 如 "mypkg.benches:benchmarks"

    Returns:
        基准测试或其列表
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"目标格式应为 module:attribute，实际为 {target!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"无法导入模块 {module_name}: {e}")

    try:
        benchmarks = getattr(module, attr)
    except AttributeError:
        raise click.BadParameter(f"模块 {module_name} 中没有 {attr}")

    if isinstance(benchmarks, (SingleBenchmark, BenchGroup)):
        return benchmarks
    if isinstance(benchmarks, (list, tuple)) and all(
            isinstance(b, (SingleBenchmark, BenchGroup)) for b in benchmarks):
        return list(benchmarks)
    raise click.BadParameter(f"{target} 不是基准测试或基准测试列表")


def execute(benchmarks: Union[Benchmark, Sequence[Benchmark]], options: BenchOptions) -> int:
    """运行基准测试，返回退出码"""
    try:
        summary = run_benchmarks(benchmarks, options)
    except OSError as e:
        click.echo(f"错误: {e}", err=True)
        raise click.Abort()
    if options.csv_enabled:
        click.echo(f"结果已保存到: {options.csv_path}", err=True)
    return 0 if summary.ok else 1


def list_benchmarks(benchmarks: Union[Benchmark, Sequence[Benchmark]]) -> str:
    rows = [(name, b.kind) for name, b in collect_benchmarks(benchmarks)]
    return format_benchmark_list(rows)


@click.group()
@click.version_option(version="0.1.0", prog_name="bench-estimate")
def cli():
    """自适应基准测试工具

    不断翻倍迭代次数，直到测量结果达到目标相对标准差，
    报告每次迭代的平均耗时与内存分配。
    """
    pass


@cli.command()
@click.argument("target")
@measurement_options
@click.pass_context
def run(ctx: click.Context, target: str, **kwargs: Any):
    """运行 TARGET (module:attribute) 中的基准测试"""
    benchmarks = load_target(target)
    options = resolve_options(**kwargs)
    ctx.exit(execute(benchmarks, options))


@cli.command(name="list")
@click.argument("target")
def list_command(target: str):
    """列出 TARGET (module:attribute) 中的基准测试"""
    click.echo(list_benchmarks(load_target(target)))


@cli.command()
def list_runtime_stats():
    """列出支持的内存分配统计源"""
    data = [[name, "是" if info["enabled"] else "否", info["description"]]
            for name, info in list_supported_runtime_stats().items()]
    click.echo(tabulate(data, headers=["统计源", "当前可用", "allocated 含义"], tablefmt="grid"))


def default_main(benchmarks: Union[Benchmark, Sequence[Benchmark]],
                 args: Optional[Sequence[str]] = None) -> None:
    """
    运行基准测试并报告结果

    供基准测试脚本直接调用：

        if __name__ == "__main__":
            default_main([bgroup("fibonacci", [bench("tenth", nf(fibo, 10))])])

    Args:
        benchmarks: 基准测试或其列表
        args: 命令行参数，默认读取 sys.argv
    """

    @click.command()
    @click.option("--list", "-l", "list_only", is_flag=True, help="只列出基准测试，不运行")
    @measurement_options
    @click.pass_context
    def command(ctx: click.Context, list_only: bool, **kwargs: Any):
        if list_only:
            click.echo(list_benchmarks(benchmarks))
            ctx.exit(0)
        options = resolve_options(**kwargs)
        ctx.exit(execute(benchmarks, options))

    command.main(args=list(args) if args is not None else None)


def main():
    """主程序入口"""
    cli()


if __name__ == "__main__":
    main()
