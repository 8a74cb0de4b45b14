"""Expectation records consumed by the mock content provider.

A `QueryExpectation` describes one anticipated read request and the rows it
should return. It is configured through chained ``with_*`` calls right after
registration:

    (
        provider.expect_query("content://contacts/1")
        .with_projection("id", "name")
        .with_selection("id = ?", "1")
        .return_row(1, "Ada")
    )

Each call overwrites the previous value for the same concern. Wildcard calls
(``with_any_*``) accept any value for that part of the request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from src.provider.errors import ResultShapeError
from src.provider.results import MatrixResult, build_result

DEFAULT_PLACEHOLDER_PREFIX = "column"
DEFAULT_UNSPECIFIED_COLUMN = "unspecified"


def sequences_equal(first: Sequence[Any] | None, second: Sequence[Any] | None) -> bool:
    """Compare two optional sequences, treating ``None`` and empty as equal."""

    first_empty = not first
    second_empty = not second
    if first_empty or second_empty:
        return first_empty == second_empty
    assert first is not None and second is not None
    if len(first) != len(second):
        return False
    return all(left == right for left, right in zip(first, second))


def _render_list(values: Sequence[Any] | None) -> str:
    return "[" + ", ".join(str(value) for value in values or ()) + "]"


def describe_query(
    target: Any,
    projection: Sequence[str] | None = None,
    selection: str | None = None,
    selection_args: Sequence[str] | None = None,
    sort_order: str | None = None,
) -> str:
    """Render a read request as a stable, human-readable string."""

    parts = [f"{target} {_render_list(projection)}"]
    if selection is not None or selection_args:
        expression = "None" if selection is None else f"'{selection}'"
        parts.append(f" selection: {expression} {_render_list(selection_args)}")
    if sort_order is not None:
        parts.append(f" sort: '{sort_order}'")
    return "".join(parts)


@dataclass(slots=True, eq=False)
class QueryExpectation:
    """One expected read request and the tabular result it yields."""

    target: Any
    placeholder_prefix: str = DEFAULT_PLACEHOLDER_PREFIX
    unspecified_column: str = DEFAULT_UNSPECIFIED_COLUMN
    projection: tuple[str, ...] | None = field(init=False, default=None)
    default_projection: tuple[str, ...] | None = field(init=False, default=None)
    selection: str | None = field(init=False, default=None)
    selection_args: tuple[str, ...] | None = field(init=False, default=None)
    sort_order: str | None = field(init=False, default=None)
    any_projection: bool = field(init=False, default=False)
    any_selection: bool = field(init=False, default=False)
    any_sort_order: bool = field(init=False, default=False)
    rows: list[tuple[Any, ...]] = field(init=False, default_factory=list)

    def with_projection(self, *columns: str) -> QueryExpectation:
        self.projection = tuple(columns)
        self.any_projection = False
        return self

    def with_default_projection(self, *columns: str) -> QueryExpectation:
        """Name result columns when the expectation carries no projection."""

        self.default_projection = tuple(columns)
        return self

    def with_any_projection(self) -> QueryExpectation:
        self.any_projection = True
        return self

    def with_selection(self, selection: str | None, *selection_args: str) -> QueryExpectation:
        self.selection = selection
        self.selection_args = tuple(selection_args)
        self.any_selection = False
        return self

    def with_any_selection(self) -> QueryExpectation:
        self.any_selection = True
        return self

    def with_sort_order(self, sort_order: str | None) -> QueryExpectation:
        self.sort_order = sort_order
        self.any_sort_order = False
        return self

    def with_any_sort_order(self) -> QueryExpectation:
        self.any_sort_order = True
        return self

    def return_row(self, *values: Any) -> QueryExpectation:
        """Append one result row; rows come back in the order they were added."""

        self.rows.append(tuple(values))
        return self

    def return_empty_result(self) -> QueryExpectation:
        self.rows.clear()
        return self

    def matches(
        self,
        target: Any,
        projection: Sequence[str] | None = None,
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
        sort_order: str | None = None,
    ) -> bool:
        """Return ``True`` if the actual request satisfies this expectation."""

        if target != self.target:
            return False
        if not self.any_projection and not sequences_equal(projection, self.projection):
            return False
        if not self.any_selection:
            if selection != self.selection:
                return False
            if not sequences_equal(selection_args, self.selection_args):
                return False
        if not self.any_sort_order and sort_order != self.sort_order:
            return False
        return True

    def result_columns(self) -> tuple[str, ...]:
        """Resolve the column names the result will carry."""

        if self.any_projection:
            if not self.rows:
                return (self.unspecified_column,)
            width = len(self.rows[0])
            return tuple(f"{self.placeholder_prefix}{index}" for index in range(1, width + 1))
        if self.projection is not None:
            return self.projection
        return self.default_projection or ()

    def get_result(self) -> MatrixResult:
        """Build the tabular result registered for this expectation."""

        columns = self.result_columns()
        for index, row in enumerate(self.rows):
            if len(row) != len(columns):
                raise ResultShapeError(
                    f"Row {index} of expectation {self} has {len(row)} values "
                    f"but {len(columns)} columns were resolved: {_render_list(columns)}"
                )
        return build_result(columns, self.rows)

    def describe(self) -> str:
        return describe_query(
            self.target,
            self.projection,
            self.selection,
            self.selection_args,
            self.sort_order,
        )

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True, slots=True)
class TypeQueryExpectation:
    """One expected type lookup and the literal type string it answers with."""

    target: Any
    type: str

    def matches(self, target: Any) -> bool:
        return target == self.target

    def __str__(self) -> str:
        return f"{self.target} --> {self.type}"


__all__ = [
    "DEFAULT_PLACEHOLDER_PREFIX",
    "DEFAULT_UNSPECIFIED_COLUMN",
    "QueryExpectation",
    "TypeQueryExpectation",
    "describe_query",
    "sequences_equal",
]
