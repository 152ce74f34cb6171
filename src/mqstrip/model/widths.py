"""Width set normalization.

Breakpoint widths arrive in several shapes (a comma-separated string, a
single number, a mapping, a list). ``to_width_set`` turns any of them into a
frozenset of string tokens such as ``{"400", "1200"}``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import singledispatch

WidthSet = frozenset

EMPTY_WIDTHS: frozenset[str] = frozenset()


@singledispatch
def to_width_set(value: object) -> frozenset[str]:
    """Normalize *value* into a set of width tokens."""
    raise TypeError(f"Unsupported width value: {value!r}")


@to_width_set.register(type(None))
def _from_none(value: None) -> frozenset[str]:
    return EMPTY_WIDTHS


@to_width_set.register(str)
def _from_str(value: str) -> frozenset[str]:
    return frozenset(token.strip() for token in value.split(",") if token.strip())


@to_width_set.register(bool)
def _from_bool(value: bool) -> frozenset[str]:
    raise TypeError(f"Unsupported width value: {value!r}")


@to_width_set.register(int)
def _from_int(value: int) -> frozenset[str]:
    return frozenset({str(value)})


@to_width_set.register(float)
def _from_float(value: float) -> frozenset[str]:
    if value.is_integer():
        return frozenset({str(int(value))})
    return frozenset({str(value)})


@to_width_set.register(Mapping)
def _from_mapping(value: Mapping) -> frozenset[str]:
    return _union(value.values())


@to_width_set.register(Iterable)
def _from_iterable(value: Iterable) -> frozenset[str]:
    return _union(value)


def _union(values: Iterable[object]) -> frozenset[str]:
    tokens: set[str] = set()
    for item in values:
        tokens |= to_width_set(item)
    return frozenset(tokens)
