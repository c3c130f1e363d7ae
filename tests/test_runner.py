"""
测试基准测试运行器与报告器
"""

import io
import tracemalloc

import pytest

from bench_estimate.benchmarks import Benchmarkable, bench, bgroup
from bench_estimate.config.settings import BenchOptions
from bench_estimate.runner import run_benchmarks, collect_benchmarks, CsvReporter
from bench_estimate.benchmarks.base import Result
from bench_estimate.utils.formatters import decode_csv

from helpers import FakeClock, constant_workload


def fake_bench(name, cost_ps=100_000):
    clock = FakeClock()
    action, _ = constant_workload(clock, cost_ps)
    return bench(name, Benchmarkable(action, clock=clock))


def exploding_bench(name):
    def action(n):
        raise ZeroDivisionError("boom")
    return bench(name, Benchmarkable(action))


@pytest.fixture
def suite():
    return [
        bgroup("arith", [fake_bench("fast", 1_000), fake_bench("slow", 10_000_000)]),
        fake_bench('odd, "name"'),
    ]


class TestCollect:
    """测试名称展开"""

    def test_dotted_names_under_all(self, suite):
        names = [name for name, _ in collect_benchmarks(suite)]
        assert names == ["All.arith.fast", "All.arith.slow", 'All.odd, "name"']

    def test_single_benchmark(self):
        names = [name for name, _ in collect_benchmarks(fake_bench("solo"))]
        assert names == ["All.solo"]


class TestConsoleReporting:
    """测试控制台输出"""

    def test_reports_every_benchmark(self, suite):
        out = io.StringIO()
        summary = run_benchmarks(suite, BenchOptions(), stream=out)
        text = out.getvalue()

        assert summary.total == 3
        assert summary.ok
        assert "All.arith.fast: OK" in text
        assert "  1.0 ns ± " in text
        assert "All 3 tests passed" in text

    def test_failure_does_not_abort_siblings(self):
        out = io.StringIO()
        summary = run_benchmarks(
            [exploding_bench("bad"), fake_bench("good")], BenchOptions(), stream=out)
        text = out.getvalue()

        assert summary.failures == 1
        assert "All.bad: FAIL" in text
        assert "ZeroDivisionError: boom" in text
        assert "All.good: OK" in text
        assert "1 out of 2 tests failed" in text

    def test_parallel_configuration_fails_every_benchmark(self, suite):
        out = io.StringIO()
        summary = run_benchmarks(suite, BenchOptions(num_threads=2), stream=out)

        assert summary.failures == 3
        assert "single-threaded" in out.getvalue()


class TestCsvReporting:
    """测试CSV输出"""

    def test_writes_header_and_rows(self, suite, tmp_path):
        path = tmp_path / "results.csv"
        summary = run_benchmarks(suite, BenchOptions(csv_path=str(path)))
        lines = path.read_text(encoding="utf-8").splitlines()

        assert summary.ok
        assert lines[0] == "Name,Mean (ps),Stdev (ps)"
        assert lines[1].startswith("All.arith.fast,1000,")
        assert lines[2].startswith("All.arith.slow,10000000,")
        assert lines[3].startswith('"All.odd, ""name""",100000,')
        assert len(lines) == 4

    def test_no_console_output(self, suite, tmp_path, capsys):
        run_benchmarks(suite, BenchOptions(csv_path=str(tmp_path / "out.csv")))
        assert capsys.readouterr().out == ""

    def test_truncates_existing_file(self, tmp_path):
        path = tmp_path / "results.csv"
        path.write_text("stale\n" * 10, encoding="utf-8")
        run_benchmarks(fake_bench("x"), BenchOptions(csv_path=str(path)))

        assert "stale" not in path.read_text(encoding="utf-8")

    def test_allocation_columns_when_tracing(self, tmp_path):
        path = tmp_path / "results.csv"
        tracemalloc.start()
        try:
            run_benchmarks(fake_bench("x"), BenchOptions(csv_path=str(path), runtime_stats="tracemalloc"))
        finally:
            tracemalloc.stop()

        header, row = path.read_text(encoding="utf-8").splitlines()
        assert header == "Name,Mean (ps),Stdev (ps),Allocated,Copied"
        assert len(row.split(",")) == 5

    def test_failure_message_is_escaped(self, tmp_path):
        path = tmp_path / "results.csv"
        run_benchmarks(exploding_bench("bad"), BenchOptions(csv_path=str(path)))

        _, row = path.read_text(encoding="utf-8").splitlines()
        name, message = row.split(",", 1)
        assert name == "All.bad"
        assert decode_csv(message) == "ZeroDivisionError: boom"

    def test_unknown_runtime_stats_fails_each_benchmark(self, suite, tmp_path):
        path = tmp_path / "results.csv"
        options = BenchOptions.model_construct(csv_path=str(path), runtime_stats="perf")
        summary = run_benchmarks(suite, options)
        lines = path.read_text(encoding="utf-8").splitlines()

        assert summary.total == 3
        assert summary.failures == 3
        assert lines[0] == "Name,Mean (ps),Stdev (ps)"
        assert len(lines) == 4
        assert "perf" in decode_csv(lines[1].split(",", 1)[1])

    def test_injected_stats_follow_header_columns(self, tmp_path, fake_clock, fake_stats):
        path = tmp_path / "results.csv"
        action, _ = constant_workload(fake_clock, 100_000, fake_stats, allocated_per_call=8)
        b = bench("x", Benchmarkable(action, runtime_stats=fake_stats, clock=fake_clock))
        run_benchmarks(b, BenchOptions(csv_path=str(path)))

        header, row = path.read_text(encoding="utf-8").splitlines()
        assert header == "Name,Mean (ps),Stdev (ps)"
        assert row.startswith("All.x,100000,")
        assert len(row.split(",")) == 3

    def test_unwritable_path_raises(self, tmp_path):
        path = tmp_path / "missing" / "results.csv"
        with pytest.raises(OSError):
            run_benchmarks(fake_bench("x"), BenchOptions(csv_path=str(path)))

    def test_reporter_closes_file_on_error(self, tmp_path):
        path = tmp_path / "results.csv"
        reporter = CsvReporter(str(path))
        with pytest.raises(RuntimeError):
            with reporter:
                reporter.report("All.ok", Result.success("1,2"), 0.0)
                raise RuntimeError("interrupted")

        assert reporter._handle is None
        assert path.read_text(encoding="utf-8").splitlines() == [
            "Name,Mean (ps),Stdev (ps)", "All.ok,1,2"]

    def test_reporter_requires_with_block(self, tmp_path):
        reporter = CsvReporter(str(tmp_path / "x.csv"))
        with pytest.raises(RuntimeError):
            reporter.report("All.x", Result.success("1,2"), 0.0)
