"""
结果报告器

控制台报告器输出可读结果；CSV报告器将每个叶子节点写为一行。
"""

from dataclasses import dataclass
from typing import IO, Optional

import click

from ..benchmarks.base import Result
from ..utils.formatters import csv_estimate, csv_header, encode_csv


@dataclass
class RunSummary:
    """一次运行的统计"""
    total: int = 0
    failures: int = 0
    elapsed: float = 0.0  # 墙上时间 (秒)

    @property
    def ok(self) -> bool:
        return self.failures == 0


class ConsoleReporter:
    """控制台报告器"""

    def __init__(self, stream: Optional[IO[str]] = None):
        self.stream = stream

    def report(self, name: str, result: Result, elapsed: float) -> None:
        status = "OK" if result.passed else "FAIL"
        click.echo(f"{name}: {status} ({elapsed:.2f}s)", file=self.stream)
        for line in result.description.splitlines():
            click.echo(f"  {line}", file=self.stream)

    def finish(self, summary: RunSummary) -> None:
        if summary.ok:
            click.echo(f"\nAll {summary.total} tests passed ({summary.elapsed:.2f}s)",
                       file=self.stream)
        else:
            click.echo(f"\n{summary.failures} out of {summary.total} tests failed "
                       f"({summary.elapsed:.2f}s)", file=self.stream)


class CsvReporter:
    """
    CSV报告器

    以截断写入、行缓冲方式打开文件；作为上下文管理器使用，
    任何退出路径上都会关闭文件。
    """

    def __init__(self, path: str, with_gc: bool = False):
        self.path = path
        self.with_gc = with_gc
        self._handle: Optional[IO[str]] = None

    def __enter__(self) -> "CsvReporter":
        self._handle = open(self.path, "w", buffering=1, encoding="utf-8", newline="")
        try:
            self._handle.write(csv_header(self.with_gc) + "\n")
        except OSError:
            self._handle.close()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def report(self, name: str, result: Result, elapsed: float) -> None:
        if self._handle is None:
            raise RuntimeError("CsvReporter used outside of a with block")
        # 成功结果按表头的列渲染
        if result.passed and result.estimate is not None:
            fields = csv_estimate(result.estimate, with_gc=self.with_gc)
        elif result.passed:
            fields = result.description
        else:
            fields = encode_csv(result.description)
        self._handle.write(f"{encode_csv(name)},{fields}\n")

    def finish(self, summary: RunSummary) -> None:
        pass
