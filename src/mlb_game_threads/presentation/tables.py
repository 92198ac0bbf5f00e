from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class Column:
    label: str
    width: int
    align: Literal["left", "right"] = "left"

    def pad(self, value: object) -> str:
        text = "" if value is None else str(value)
        if self.align == "right":
            return text.rjust(self.width)
        return text.ljust(self.width)


class StatsTable:
    """Fixed-width text table for monospace embeds.

    Rows shorter than the column list are padded with blanks and longer rows
    are cut to fit. Values wider than their column are not truncated.
    """

    def __init__(self, columns: Sequence[Column], rows: Iterable[Sequence[object]] = ()) -> None:
        self.columns = tuple(columns)
        self.rows: list[tuple[object, ...]] = []
        for row in rows:
            self.add_row(row)

    def add_row(self, row: Sequence[object]) -> None:
        fitted = tuple(row[: len(self.columns)])
        fitted += ("",) * (len(self.columns) - len(fitted))
        self.rows.append(fitted)

    @property
    def width(self) -> int:
        return sum(column.width for column in self.columns)

    def render(self) -> str:
        header = "".join(column.pad(column.label) for column in self.columns)
        separator = "-" * self.width
        lines = [header.rstrip(), separator]
        for row in self.rows:
            lines.append("".join(column.pad(value) for column, value in zip(self.columns, row, strict=True)).rstrip())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()


def name_width(names: Iterable[str], buffer: int = 3) -> int:
    return max((len(name) for name in names), default=0) + buffer
