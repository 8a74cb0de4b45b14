"""Tests for the expectation-driven mock content provider."""

from __future__ import annotations

import logging

import pytest

from src.core.observability import InMemoryProviderLogger
from src.provider.errors import (
    MismatchedCallError,
    MockProviderError,
    UnexpectedCallError,
    UnmetExpectationsError,
    UnsupportedOperationError,
)
from src.provider.mock_provider import MockContentProvider

CONTACTS = "content://contacts"
CONTACT = "content://contacts/1"


@pytest.fixture()
def provider() -> MockContentProvider:
    return MockContentProvider()


def test_query_returns_registered_rows(provider: MockContentProvider) -> None:
    provider.expect_query(CONTACTS).with_projection("id", "name").return_row(1, "a").return_row(
        2, "b"
    )

    result = provider.query(CONTACTS, ["id", "name"])

    assert result.columns == ("id", "name")
    assert result.rows == [(1, "a"), (2, "b")]
    provider.verify()


def test_expectations_are_consumed_in_order(provider: MockContentProvider) -> None:
    provider.expect_query(CONTACTS).with_any_projection().return_row("first")
    provider.expect_query(CONTACTS).with_any_projection().return_row("second")

    assert provider.query(CONTACTS).rows == [("first",)]
    assert provider.query(CONTACTS).rows == [("second",)]
    provider.verify()


def test_head_is_compared_even_if_later_entry_matches(provider: MockContentProvider) -> None:
    provider.expect_query(CONTACT)
    provider.expect_query(CONTACTS)

    with pytest.raises(MismatchedCallError) as excinfo:
        provider.query(CONTACTS)

    assert excinfo.value.expected == "content://contacts/1 []"
    assert excinfo.value.actual == "content://contacts []"
    assert [str(entry) for entry in provider.pending_queries] == ["content://contacts []"]


def test_mismatch_message_shows_both_requests(provider: MockContentProvider) -> None:
    provider.expect_query(CONTACTS).with_selection("id = ?", "1")

    with pytest.raises(MismatchedCallError) as excinfo:
        provider.query(CONTACTS, None, "id = ?", ["2"])

    message = str(excinfo.value)
    assert message.startswith("Incorrect query.")
    assert "Expected: content://contacts [] selection: 'id = ?' [1]" in message
    assert "Actual: content://contacts [] selection: 'id = ?' [2]" in message


def test_mismatch_on_arguments_alone_is_visible(provider: MockContentProvider) -> None:
    provider.expect_query(CONTACTS).with_selection(None, "1")

    with pytest.raises(MismatchedCallError) as excinfo:
        provider.query(CONTACTS)

    assert excinfo.value.expected == "content://contacts [] selection: None [1]"
    assert excinfo.value.actual == "content://contacts []"
    assert excinfo.value.expected != excinfo.value.actual


def test_unexpected_query_renders_request(provider: MockContentProvider) -> None:
    with pytest.raises(UnexpectedCallError) as excinfo:
        provider.query(CONTACTS, ["id"], "name = ?", ["Ada"], "id")

    rendered = "content://contacts [id] selection: 'name = ?' [Ada] sort: 'id'"
    assert rendered in str(excinfo.value)
    assert excinfo.value.actual == rendered


def test_failures_are_assertion_errors(provider: MockContentProvider) -> None:
    with pytest.raises(AssertionError):
        provider.query(CONTACTS)
    with pytest.raises(MockProviderError):
        provider.get_type(CONTACTS)


def test_get_type_returns_registered_type(provider: MockContentProvider) -> None:
    provider.expect_type_query(CONTACT, "vnd.example/contact")
    provider.expect_type_query(CONTACTS, "vnd.example/dir")

    assert provider.get_type(CONTACT) == "vnd.example/contact"
    assert provider.get_type(CONTACTS) == "vnd.example/dir"
    provider.verify()


def test_get_type_mismatch(provider: MockContentProvider) -> None:
    provider.expect_type_query(CONTACT, "vnd.example/contact")

    with pytest.raises(MismatchedCallError) as excinfo:
        provider.get_type(CONTACTS)

    assert excinfo.value.expected == "content://contacts/1 --> vnd.example/contact"
    assert excinfo.value.actual == CONTACTS
    assert provider.pending_type_queries == []


def test_queues_are_independent(provider: MockContentProvider) -> None:
    provider.expect_type_query(CONTACT, "vnd.example/contact")

    with pytest.raises(UnexpectedCallError):
        provider.query(CONTACT)
    assert provider.get_type(CONTACT) == "vnd.example/contact"


def test_verify_is_idempotent_when_empty(provider: MockContentProvider) -> None:
    provider.verify()
    provider.verify()
    provider.verify()


def test_verify_reports_unmet_expectations(provider: MockContentProvider) -> None:
    provider.expect_query(CONTACTS).with_projection("id")
    provider.expect_type_query(CONTACT, "vnd.example/contact")

    with pytest.raises(UnmetExpectationsError) as excinfo:
        provider.verify()

    assert excinfo.value.queries == ["content://contacts [id]"]
    assert excinfo.value.type_queries == ["content://contacts/1 --> vnd.example/contact"]
    assert "Not all expected queries have been called" in str(excinfo.value)
    assert "Not all expected get_type queries have been called" in str(excinfo.value)


def test_verify_reports_only_non_empty_queue(provider: MockContentProvider) -> None:
    provider.expect_type_query(CONTACT, "vnd.example/contact")

    with pytest.raises(UnmetExpectationsError) as excinfo:
        provider.verify()

    assert excinfo.value.queries == []
    assert "expected queries" not in str(excinfo.value)


@pytest.mark.parametrize(
    ("operation", "args"),
    [
        ("insert", (CONTACTS, {"name": "Ada"})),
        ("update", (CONTACT, {"name": "Ada"}, "id = ?", ["1"])),
        ("delete", (CONTACT,)),
    ],
)
def test_mutations_are_unsupported(provider: MockContentProvider, operation, args) -> None:
    provider.expect_query(CONTACTS)

    with pytest.raises(UnsupportedOperationError, match=operation):
        getattr(provider, operation)(*args)
    assert len(provider.pending_queries) == 1


def test_context_manager_verifies_on_exit() -> None:
    with pytest.raises(UnmetExpectationsError):
        with MockContentProvider() as provider:
            provider.expect_query(CONTACTS)


def test_context_manager_keeps_original_exception() -> None:
    with pytest.raises(RuntimeError, match="boom"):
        with MockContentProvider() as provider:
            provider.expect_query(CONTACTS)
            raise RuntimeError("boom")


def test_placeholder_settings_flow_to_expectations() -> None:
    provider = MockContentProvider(placeholder_prefix="col_", unspecified_column="none")
    provider.expect_query(CONTACTS).with_any_projection().return_row(1, 2)
    provider.expect_query(CONTACTS).with_any_projection()

    assert provider.query(CONTACTS, ["a", "b"]).columns == ("col_1", "col_2")
    assert provider.query(CONTACTS).columns == ("none",)


def test_events_are_reported_to_logger() -> None:
    sink = InMemoryProviderLogger()
    provider = MockContentProvider(logger=sink, session_id="T-1")
    provider.expect_query(CONTACTS).with_projection("id").return_row(1)
    provider.expect_type_query(CONTACT, "vnd.example/contact")

    provider.query(CONTACTS, ["id"])
    provider.get_type(CONTACT)
    provider.verify()
    with pytest.raises(UnexpectedCallError):
        provider.get_type(CONTACT)
    with pytest.raises(UnsupportedOperationError):
        provider.delete(CONTACT)

    assert sink.names() == [
        "query_matched",
        "type_query_matched",
        "verify_passed",
        "type_query_unexpected",
        "unsupported_operation",
    ]
    assert sink.events[0]["row_count"] == 1
    assert sink.events[0]["session_id"] == "T-1"


def test_failures_are_logged(provider: MockContentProvider, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="src.provider.mock_provider"):
        with pytest.raises(UnexpectedCallError):
            provider.query(CONTACTS)

    assert "Unexpected query: content://contacts []" in caplog.text
