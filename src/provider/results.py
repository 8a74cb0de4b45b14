"""Tabular results handed back by the mock content provider.

`MatrixResult` is a small column-named, row-ordered container. It keeps rows as
tuples of opaque values and offers the dictionary view used across the rest of
the codebase (`list[dict[str, Any]]`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Sequence


@dataclass(slots=True)
class MatrixResult:
    """Rows of values addressed by a fixed list of column names."""

    columns: tuple[str, ...]
    _rows: list[tuple[Any, ...]] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.columns = tuple(self.columns)

    def add_row(self, values: Sequence[Any]) -> None:
        """Append *values* as the next row; arity must match the columns."""

        row = tuple(values)
        if len(row) != len(self.columns):
            raise ValueError(
                f"columns has {len(self.columns)} entries, row has {len(row)} values"
            )
        self._rows.append(row)

    @property
    def rows(self) -> list[tuple[Any, ...]]:
        return list(self._rows)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def column_index(self, name: str) -> int:
        """Return the position of column *name*."""

        try:
            return self.columns.index(name)
        except ValueError:
            raise KeyError(f"Column '{name}' not found in result") from None

    def value(self, row: int, column: str) -> Any:
        return self._rows[row][self.column_index(column)]

    def as_dicts(self) -> list[dict[str, Any]]:
        """Return rows as dictionaries keyed by column name."""

        return [dict(zip(self.columns, row)) for row in self._rows]

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(list(self._rows))

    def __len__(self) -> int:
        return len(self._rows)


def build_result(columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> MatrixResult:
    """Materialise *rows* under *columns*, preserving row order."""

    result = MatrixResult(columns=tuple(columns))
    for row in rows:
        result.add_row(row)
    return result


__all__ = ["MatrixResult", "build_result"]
