"""
基准测试树

用命名的叶子与分组组织基准测试。
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple, Union

from .base import Benchmarkable


@dataclass
class SingleBenchmark:
    """叶子节点"""
    name: str
    benchmarkable: Benchmarkable


@dataclass
class BenchGroup:
    """分组节点"""
    name: str
    children: List["Benchmark"] = field(default_factory=list)


Benchmark = Union[SingleBenchmark, BenchGroup]


def bench(name: str, benchmarkable: Benchmarkable) -> SingleBenchmark:
    """为 Benchmarkable 命名"""
    if not isinstance(benchmarkable, Benchmarkable):
        raise TypeError(f"bench() expects a Benchmarkable, got {type(benchmarkable).__name__}")
    return SingleBenchmark(name, benchmarkable)


def bgroup(name: str, children: Sequence[Benchmark]) -> BenchGroup:
    """为一组基准测试命名"""
    return BenchGroup(name, list(children))


def iter_benchmarks(tree: Benchmark,
                    prefix: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], Benchmarkable]]:
    """
    按声明顺序遍历叶子节点

    Args:
        tree: 基准测试树
        prefix: 上层分组名称

    Yields:
        (完整路径, Benchmarkable)
    """
    path = prefix + (tree.name,)
    if isinstance(tree, SingleBenchmark):
        yield path, tree.benchmarkable
    else:
        for child in tree.children:
            yield from iter_benchmarks(child, path)
