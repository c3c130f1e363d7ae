"""
基准测试运行器

按声明顺序逐个运行叶子节点，单个基准测试的失败不影响其他基准测试。
"""

import logging
import time
from typing import IO, List, Optional, Sequence, Tuple, Union

from ..benchmarks.base import Benchmarkable, Result
from ..benchmarks.tree import Benchmark, bgroup, iter_benchmarks
from ..config.settings import BenchOptions
from ..runtime.stats import create_runtime_stats
from .reporters import ConsoleReporter, CsvReporter, RunSummary

logger = logging.getLogger(__name__)


ROOT_GROUP_NAME = "All"


def collect_benchmarks(benchmarks: Union[Benchmark, Sequence[Benchmark]]
                       ) -> List[Tuple[str, Benchmarkable]]:
    """
    将基准测试树展开为 (点分名称, Benchmarkable) 列表

    所有基准测试挂在名为 All 的根分组下。
    """
    if not isinstance(benchmarks, (list, tuple)):
        benchmarks = [benchmarks]
    tree = bgroup(ROOT_GROUP_NAME, benchmarks)
    return [(".".join(path), b) for path, b in iter_benchmarks(tree)]


def run_single(name: str, benchmarkable: Benchmarkable, options: BenchOptions) -> Result:
    """运行单个基准测试，异常转换为失败结果"""
    try:
        result = benchmarkable.run(options)
    except Exception as e:
        logger.exception("benchmark %s raised", name)
        return Result.failure(f"{type(e).__name__}: {e}")
    if not result.passed:
        logger.warning("benchmark %s failed: %s", name, result.description)
    return result


def run_benchmarks(benchmarks: Union[Benchmark, Sequence[Benchmark]],
                   options: Optional[BenchOptions] = None,
                   stream: Optional[IO[str]] = None) -> RunSummary:
    """
    运行全部基准测试并报告结果

    Args:
        benchmarks: 基准测试或其列表
        options: 解析后的选项，指定 csv_path 时只写CSV文件
        stream: 控制台输出流，默认标准输出

    Returns:
        运行统计

    Raises:
        OSError: CSV文件无法打开或写入
    """
    options = options or BenchOptions()
    leaves = collect_benchmarks(benchmarks)

    if options.csv_enabled:
        with CsvReporter(options.csv_path, with_gc=_csv_with_gc(options)) as reporter:
            return _run_leaves(leaves, options, reporter)
    return _run_leaves(leaves, options, ConsoleReporter(stream))


def _csv_with_gc(options: BenchOptions) -> bool:
    """CSV表头是否包含分配列；未知统计源由各基准测试报告为失败"""
    try:
        return create_runtime_stats(options.runtime_stats).enabled
    except ValueError:
        return False


def _run_leaves(leaves, options: BenchOptions, reporter) -> RunSummary:
    summary = RunSummary()
    start = time.perf_counter()
    for name, benchmarkable in leaves:
        leaf_start = time.perf_counter()
        result = run_single(name, benchmarkable, options)
        reporter.report(name, result, time.perf_counter() - leaf_start)

        summary.total += 1
        if not result.passed:
            summary.failures += 1
    summary.elapsed = time.perf_counter() - start
    reporter.finish(summary)
    return summary
