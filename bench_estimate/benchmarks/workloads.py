"""
工作负载构造函数

将普通函数或有副作用的调用包装为 Benchmarkable。每次迭代都重新调用
并强制求值结果，避免惰性计算让后续迭代“白嫖”前面的结果。
"""

from collections.abc import Iterator, Mapping
from typing import Any, Callable, Optional, Set

from .base import Benchmarkable


# 无需遍历的原子类型
_ATOMIC_TYPES = (str, bytes, bytearray, int, float, complex, bool, type(None))


def force_shallow(value: Any) -> Any:
    """浅层求值：生成器/迭代器前进一步，其余值原样返回"""
    if isinstance(value, Iterator):
        next(value, None)
    return value


def force_deep(value: Any, _seen: Optional[Set[int]] = None) -> Any:
    """
    深度求值

    耗尽迭代器与生成器，并递归遍历容器中的所有元素。

    Args:
        value: 待求值的结果

    Returns:
        求值后的结果；迭代器会被替换为其元素组成的列表
    """
    if isinstance(value, _ATOMIC_TYPES):
        return value

    if _seen is None:
        _seen = set()
    if id(value) in _seen:
        return value
    _seen.add(id(value))

    if isinstance(value, Mapping):
        for key, item in value.items():
            force_deep(key, _seen)
            force_deep(item, _seen)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            force_deep(item, _seen)
    elif isinstance(value, Iterator):
        return [force_deep(item, _seen) for item in value]
    return value


def _func_to_bench(force: Callable[[Any], Any], f: Callable[[Any], Any], x: Any,
                   kind: str) -> Benchmarkable:
    def go(n: int) -> None:
        for _ in range(n):
            force(f(x))
    return Benchmarkable(go, kind=kind)


def _io_to_bench(force: Callable[[Any], Any], action: Callable[[], Any],
                 kind: str) -> Benchmarkable:
    def go(n: int) -> None:
        for _ in range(n):
            force(action())
    return Benchmarkable(go, kind=kind)


def nf(f: Callable[[Any], Any], x: Any) -> Benchmarkable:
    """
    测量计算 f(x) 并深度求值的时间

    注意深度求值需要额外遍历一次结果结构，对大型结果这部分开销不可忽略。
    """
    return _func_to_bench(force_deep, f, x, "nf")


def whnf(f: Callable[[Any], Any], x: Any) -> Benchmarkable:
    """测量计算 f(x) 的时间，仅浅层求值；除非明确需要，建议使用 nf"""
    return _func_to_bench(force_shallow, f, x, "whnf")


def nf_io(action: Callable[[], Any]) -> Benchmarkable:
    """测量执行无参数操作 action() 的副作用并深度求值结果的时间"""
    return _io_to_bench(force_deep, action, "nf_io")


def whnf_io(action: Callable[[], Any]) -> Benchmarkable:
    """测量执行无参数操作 action() 的副作用并浅层求值结果的时间"""
    return _io_to_bench(force_shallow, action, "whnf_io")


def nf_app_io(f: Callable[[Any], Any], x: Any) -> Benchmarkable:
    """
    测量执行有副作用的 f(x) 并深度求值结果的时间

    每次迭代都以 x 重新调用 f，适用于需要新鲜参数的操作。
    """
    return _func_to_bench(force_deep, f, x, "nf_app_io")


def whnf_app_io(f: Callable[[Any], Any], x: Any) -> Benchmarkable:
    """测量执行有副作用的 f(x) 并浅层求值结果的时间"""
    return _func_to_bench(force_shallow, f, x, "whnf_app_io")
