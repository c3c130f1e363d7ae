"""
数据格式化工具

将估算结果渲染为带单位的可读字符串或CSV行。
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence, Tuple

from tabulate import tabulate

from ..estimator.measurement import Estimate


CSV_SPECIAL_CHARS = ',"\n\r'


def _fixed(value: float, decimals: int, width: int = 3) -> str:
    """定点格式，按十进制最短表示四舍五入（0.5进位），右对齐到 width"""
    quantum = Decimal(1).scaleb(-decimals)
    text = str(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    return text.rjust(width)


def show_picos(picos: int) -> str:
    """
    格式化皮秒时间

    每个单位在达到下一单位的995倍前使用，小于9.95时保留一位小数。

    Args:
        picos: 时间 (皮秒)

    Returns:
        格式化的时间字符串
    """
    t = float(picos)
    a = abs(t)
    if a == 0:
        return "0"
    if a < 995:
        return f"{_fixed(t, 0)} ps"
    if a < 995e1:
        return f"{_fixed(t / 1e3, 1)} ns"
    if a < 995e3:
        return f"{_fixed(t / 1e3, 0)} ns"
    if a < 995e4:
        return f"{_fixed(t / 1e6, 1)} μs"
    if a < 995e6:
        return f"{_fixed(t / 1e6, 0)} μs"
    if a < 995e7:
        return f"{_fixed(t / 1e9, 1)} ms"
    if a < 995e9:
        return f"{_fixed(t / 1e9, 0)} ms"
    return f"{_fixed(t / 1e12, 1, 0)} s"


def show_bytes(size: int) -> str:
    """
    格式化字节数（1024进制）

    Args:
        size: 字节数

    Returns:
        格式化的大小字符串
    """
    t = float(size)
    a = abs(t)
    if a < 1000:
        return f"{_fixed(t, 0)} B "
    if a < 10189:
        return f"{_fixed(t / 1024, 1)} KB"
    if a < 1023488:
        return f"{_fixed(t / 1024, 0)} KB"
    if a < 10433332:
        return f"{_fixed(t / 1048576, 1)} MB"
    if a < 1048051712:
        return f"{_fixed(t / 1048576, 0)} MB"
    if a < 10683731149:
        return f"{_fixed(t / 1073741824, 1)} GB"
    if a < 1073204953088:
        return f"{_fixed(t / 1073741824, 0)} GB"
    return f"{_fixed(t / 1099511627776, 1, 0)} TB"


def pretty_estimate(est: Estimate, with_gc: bool = False) -> str:
    """可读格式：均值 ± 两倍标准差（约95%概率区间）"""
    text = f"{show_picos(est.mean.time)} ± {show_picos(2 * est.sigma)}"
    if with_gc:
        text += (f", {show_bytes(est.mean.allocated_bytes)} allocated, "
                 f"{show_bytes(est.mean.copied_bytes)} copied")
    return text


def csv_estimate(est: Estimate, with_gc: bool = False) -> str:
    """CSV格式：精确整数，不做单位换算"""
    fields = [est.mean.time, est.sigma]
    if with_gc:
        fields += [est.mean.allocated_bytes, est.mean.copied_bytes]
    return ",".join(str(f) for f in fields)


def csv_header(with_gc: bool = False) -> str:
    header = "Name,Mean (ps),Stdev (ps)"
    if with_gc:
        header += ",Allocated,Copied"
    return header


def encode_csv(field: str) -> str:
    """含逗号、引号或换行的字段加双引号，内部引号加倍"""
    if any(ch in field for ch in CSV_SPECIAL_CHARS):
        return '"' + field.replace('"', '""') + '"'
    return field


def decode_csv(field: str) -> str:
    """encode_csv 的逆操作"""
    if len(field) >= 2 and field.startswith('"') and field.endswith('"'):
        return field[1:-1].replace('""', '"')
    return field


def format_benchmark_list(rows: Sequence[Tuple[str, str]]) -> str:
    """
    格式化基准测试列表

    Args:
        rows: (名称, 工作负载类型) 列表

    Returns:
        表格字符串
    """
    if not rows:
        return "无基准测试"
    data: List[list] = [[i, name, kind] for i, (name, kind) in enumerate(rows, 1)]
    return tabulate(data, headers=["#", "名称", "类型"], tablefmt="grid")
