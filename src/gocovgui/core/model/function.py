from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gocovgui.core.model.metrics import format_coverage

if TYPE_CHECKING:
    from pathlib import Path

# -----------------------------------------------------------------------------
# Statements
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CharSpan:
    """Half-open ``[start, end)`` range of character offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate that the span is not inverted."""
        if self.start < 0 or self.end < self.start:
            msg = f"invalid character span [{self.start}, {self.end})"
            raise ValueError(msg)


@dataclass(slots=True)
class StatementRange:
    """An uncovered statement, in bytes relative to the owning function body.

    ``chars`` is ``None`` until the function is first rendered; it then holds
    the character offsets of the same range within the decoded body. It is the
    only field ever assigned after construction and takes no part in equality.
    """

    byte_start: int
    byte_end: int
    chars: CharSpan | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate that the byte range is not inverted."""
        if self.byte_end < self.byte_start:
            msg = f"invalid statement range [{self.byte_start}, {self.byte_end})"
            raise ValueError(msg)

    @property
    def resolved(self) -> bool:
        return self.chars is not None


# -----------------------------------------------------------------------------
# Functions
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FunctionRow:
    """One row of the function list: an id plus its three display columns."""

    id: str
    name: str
    file: str
    coverage: str


@dataclass(frozen=True, slots=True)
class Function:
    """Coverage of one function, derived from a single collector record."""

    id: str
    name: str
    file: str
    path: Path
    body_start: int
    body_end: int
    statements_total: int
    statements_reached: int
    coverage_percent: float
    uncovered: tuple[StatementRange, ...] = ()

    @property
    def statements_missed(self) -> int:
        return self.statements_total - self.statements_reached

    @property
    def coverage(self) -> str:
        return format_coverage(self.coverage_percent, self.statements_reached, self.statements_total)

    def row(self) -> FunctionRow:
        return FunctionRow(id=self.id, name=self.name, file=self.file, coverage=self.coverage)


__all__ = [
    "CharSpan",
    "Function",
    "FunctionRow",
    "StatementRange",
]
