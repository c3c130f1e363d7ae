#!/usr/bin/env python3
"""
Bench-Estimate 基本使用示例

演示如何声明基准测试树并用 default_main 运行。

    python docs/examples/basic_usage.py
    python docs/examples/basic_usage.py --stdev 2 --timeout 10
    python docs/examples/basic_usage.py --csv results.csv --runtime-stats tracemalloc
"""

import sys
import os

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from bench_estimate import bench, bgroup, nf, whnf, nf_io, default_main


def fibo(n):
    """朴素递归的斐波那契数"""
    if n < 2:
        return n
    return fibo(n - 1) + fibo(n - 2)


def squares(n):
    """惰性生成平方数"""
    return (i * i for i in range(n))


benchmarks = [
    bgroup("fibonacci", [
        bench("fifth", nf(fibo, 5)),
        bench("tenth", nf(fibo, 10)),
        bench("twentieth", nf(fibo, 20)),
    ]),
    bgroup("squares", [
        # nf 耗尽生成器，whnf 只取第一个元素
        bench("nf", nf(squares, 10_000)),
        bench("whnf", whnf(squares, 10_000)),
    ]),
    bench("sorted copy", nf_io(lambda: sorted(range(1000, 0, -1)))),
]


if __name__ == "__main__":
    default_main(benchmarks)
