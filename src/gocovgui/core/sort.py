"""Ordering of the function list.

A single comparator factory covers every (column, direction) pair. The
direction flips the primary comparison only: ties on file or coverage are
always broken by ascending function name, so reversing a column never
reverses the order of tied rows.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from functools import cmp_to_key
from typing import TYPE_CHECKING

from gocovgui.core.model.types import SortDirection, SortKey

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from gocovgui.core.model.function import Function

_PRIMARY: dict[SortKey, Callable[[Function], str | float]] = {
    SortKey.NAME: operator.attrgetter("name"),
    SortKey.FILE: operator.attrgetter("file"),
    SortKey.COVERAGE: operator.attrgetter("coverage_percent"),
}


def _cmp(a: str | float, b: str | float) -> int:
    return (a > b) - (a < b)


def make_comparator(key: SortKey, direction: SortDirection) -> Callable[[Function, Function], int]:
    """Return a ``cmp``-style ordering function for *key* and *direction*."""
    primary = _PRIMARY[key]
    sign = -1 if direction is SortDirection.DESCENDING else 1

    def compare(a: Function, b: Function) -> int:
        result = sign * _cmp(primary(a), primary(b))
        if result == 0 and key is not SortKey.NAME:
            result = _cmp(a.name, b.name)
        return result

    return compare


def sort_functions(
    functions: Iterable[Function],
    key: SortKey = SortKey.COVERAGE,
    direction: SortDirection = SortDirection.DESCENDING,
) -> tuple[Function, ...]:
    return tuple(sorted(functions, key=cmp_to_key(make_comparator(key, direction))))


# --------------------------- Column headings ----------------------------------
@dataclass(frozen=True, slots=True)
class Heading:
    """Indicator state of one column heading.

    ``arrow`` is the direction currently shown on the column (``None`` for
    inactive columns); ``next_direction`` is what choosing the column applies.
    """

    key: SortKey
    arrow: SortDirection | None
    next_direction: SortDirection

    @property
    def active(self) -> bool:
        return self.arrow is not None


def headings(key: SortKey, direction: SortDirection) -> tuple[Heading, ...]:
    out: list[Heading] = []
    for column in SortKey:
        if column is key:
            out.append(Heading(key=column, arrow=direction, next_direction=direction.opposite))
        else:
            out.append(Heading(key=column, arrow=None, next_direction=SortDirection.ASCENDING))
    return tuple(out)


def next_direction(key: SortKey, direction: SortDirection, chosen: SortKey) -> SortDirection:
    """Direction applied when column *chosen* is picked while *key* is active."""
    for heading in headings(key, direction):
        if heading.key is chosen:
            return heading.next_direction
    msg = f"unknown sort column: {chosen!r}"
    raise ValueError(msg)


__all__ = [
    "Heading",
    "headings",
    "make_comparator",
    "next_direction",
    "sort_functions",
]
