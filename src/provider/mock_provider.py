"""A programmable mock content provider.

Tests register the read requests and type lookups they expect, in call order,
then hand the provider to the code under test. Every incoming request is
compared against the oldest remaining expectation of its kind; anything that
does not line up raises immediately. Call `verify` at teardown (or use the
provider as a context manager) to fail on expectations that were never used.

Mutations are not modelled: `insert`, `update` and `delete` always raise.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Mapping, NoReturn, Protocol, Sequence

from src.core.observability import ProviderObservationSink
from src.provider.errors import (
    MismatchedCallError,
    UnexpectedCallError,
    UnmetExpectationsError,
    UnsupportedOperationError,
)
from src.provider.expectations import (
    DEFAULT_PLACEHOLDER_PREFIX,
    DEFAULT_UNSPECIFIED_COLUMN,
    QueryExpectation,
    TypeQueryExpectation,
    describe_query,
)
from src.provider.results import MatrixResult

LOGGER = logging.getLogger(__name__)


class DataProvider(Protocol):
    """Structured data-access surface that production code talks to."""

    def query(
        self,
        target: Any,
        projection: Sequence[str] | None = None,
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
        sort_order: str | None = None,
    ) -> MatrixResult:  # pragma: no cover - interface
        """Return rows for *target* restricted by the optional clauses."""

    def get_type(self, target: Any) -> str | None:  # pragma: no cover - interface
        """Return the type string describing *target*."""

    def insert(self, target: Any, values: Mapping[str, Any]) -> Any:  # pragma: no cover - interface
        ...

    def update(
        self,
        target: Any,
        values: Mapping[str, Any],
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
    ) -> int:  # pragma: no cover - interface
        ...

    def delete(
        self,
        target: Any,
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
    ) -> int:  # pragma: no cover - interface
        ...


def _render_queue(entries: Sequence[Any]) -> str:
    return "[" + ", ".join(str(entry) for entry in entries) + "]"


@dataclass
class MockContentProvider(DataProvider):
    """Expectation-driven double for `DataProvider`."""

    placeholder_prefix: str = DEFAULT_PLACEHOLDER_PREFIX
    unspecified_column: str = DEFAULT_UNSPECIFIED_COLUMN
    logger: ProviderObservationSink | None = None
    session_id: str = "mock-provider"
    _expected_queries: deque[QueryExpectation] = field(init=False, default_factory=deque)
    _expected_type_queries: deque[TypeQueryExpectation] = field(init=False, default_factory=deque)

    def expect_query(self, target: Any) -> QueryExpectation:
        """Register the next expected read request and return its builder."""

        expectation = QueryExpectation(
            target,
            placeholder_prefix=self.placeholder_prefix,
            unspecified_column=self.unspecified_column,
        )
        self._expected_queries.append(expectation)
        return expectation

    def expect_type_query(self, target: Any, type: str) -> TypeQueryExpectation:
        """Register the next expected type lookup."""

        expectation = TypeQueryExpectation(target=target, type=type)
        self._expected_type_queries.append(expectation)
        return expectation

    @property
    def pending_queries(self) -> list[QueryExpectation]:
        return list(self._expected_queries)

    @property
    def pending_type_queries(self) -> list[TypeQueryExpectation]:
        return list(self._expected_type_queries)

    def query(
        self,
        target: Any,
        projection: Sequence[str] | None = None,
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
        sort_order: str | None = None,
    ) -> MatrixResult:
        actual = describe_query(target, projection, selection, selection_args, sort_order)
        if not self._expected_queries:
            self._log_event("query_unexpected", {"actual": actual})
            LOGGER.warning("Unexpected query: %s", actual)
            raise UnexpectedCallError(f"Unexpected query: {actual}", actual=actual)

        expectation = self._expected_queries.popleft()
        if not expectation.matches(target, projection, selection, selection_args, sort_order):
            expected = str(expectation)
            self._log_event("query_mismatched", {"expected": expected, "actual": actual})
            LOGGER.warning("Incorrect query. Expected %s, got %s", expected, actual)
            raise MismatchedCallError(
                f"Incorrect query.\n    Expected: {expected}\n      Actual: {actual}",
                expected=expected,
                actual=actual,
            )

        result = expectation.get_result()
        LOGGER.debug("Matched query %s (%d rows)", actual, result.row_count)
        self._log_event("query_matched", {"actual": actual, "row_count": result.row_count})
        return result

    def get_type(self, target: Any) -> str:
        actual = str(target)
        if not self._expected_type_queries:
            self._log_event("type_query_unexpected", {"actual": actual})
            LOGGER.warning("Unexpected get_type query: %s", actual)
            raise UnexpectedCallError(f"Unexpected get_type query: {actual}", actual=actual)

        expectation = self._expected_type_queries.popleft()
        if not expectation.matches(target):
            expected = str(expectation)
            self._log_event("type_query_mismatched", {"expected": expected, "actual": actual})
            LOGGER.warning("Incorrect get_type query. Expected %s, got %s", expected, actual)
            raise MismatchedCallError(
                f"Incorrect get_type query.\n    Expected: {expected}\n      Actual: {actual}",
                expected=expected,
                actual=actual,
            )

        LOGGER.debug("Matched get_type query %s", actual)
        self._log_event("type_query_matched", {"actual": actual, "type": expectation.type})
        return expectation.type

    def insert(self, target: Any, values: Mapping[str, Any]) -> Any:
        self._unsupported("insert", target)

    def update(
        self,
        target: Any,
        values: Mapping[str, Any],
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
    ) -> int:
        self._unsupported("update", target)

    def delete(
        self,
        target: Any,
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
    ) -> int:
        self._unsupported("delete", target)

    def verify(self) -> None:
        """Fail if any registered expectation has not been consumed."""

        queries = [str(entry) for entry in self._expected_queries]
        type_queries = [str(entry) for entry in self._expected_type_queries]
        if not queries and not type_queries:
            self._log_event("verify_passed", {})
            return

        problems: list[str] = []
        if queries:
            problems.append(f"Not all expected queries have been called: {_render_queue(queries)}")
        if type_queries:
            problems.append(
                "Not all expected get_type queries have been called: "
                f"{_render_queue(type_queries)}"
            )
        self._log_event(
            "verify_failed",
            {"queries": queries or None, "type_queries": type_queries or None},
        )
        raise UnmetExpectationsError("\n".join(problems), queries=queries, type_queries=type_queries)

    def __enter__(self) -> MockContentProvider:
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        if exc_type is None:
            self.verify()

    def _unsupported(self, operation: str, target: Any) -> NoReturn:
        self._log_event("unsupported_operation", {"operation": operation, "target": str(target)})
        raise UnsupportedOperationError(f"{operation} is not supported by MockContentProvider")

    def _log_event(self, event: str, payload: dict[str, Any]) -> None:
        if self.logger is None:
            return
        self.logger.log_event(self.session_id, event, payload)


__all__ = ["DataProvider", "MockContentProvider"]
