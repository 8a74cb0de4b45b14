"""Failures raised by the mock content provider."""

from __future__ import annotations

from typing import Sequence


class MockProviderError(AssertionError):
    """Base class for expectation failures surfaced to the test runner."""


class UnexpectedCallError(MockProviderError):
    """Raised when a request arrives with no expectation of its kind left."""

    def __init__(self, message: str, actual: str) -> None:
        super().__init__(message)
        self.actual = actual


class MismatchedCallError(MockProviderError):
    """Raised when a request does not satisfy the head expectation."""

    def __init__(self, message: str, expected: str, actual: str) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class UnmetExpectationsError(MockProviderError):
    """Raised by ``verify`` when expectations were never consumed."""

    def __init__(
        self,
        message: str,
        queries: Sequence[str] = (),
        type_queries: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.queries = list(queries)
        self.type_queries = list(type_queries)


class UnsupportedOperationError(NotImplementedError):
    """Raised whenever a mutation endpoint of the provider is invoked."""


class ResultShapeError(ValueError):
    """Raised when registered rows do not fit the resolved column names."""
