from __future__ import annotations

import pytest

from tmapi.core.domain.query import Operator, Predicate, encode, eq, is_null, not_null


@pytest.mark.parametrize("operator", list(Operator))
def test_encode_known_operators(operator: Operator) -> None:
    assert encode("email", operator, "x@y.com") == f"email-{operator.value}-x@y.com"


def test_encode_accepts_plain_strings() -> None:
    assert encode("id", "gte", 5) == "id-gte-5"


def test_unknown_operator_is_forwarded() -> None:
    assert encode("name", "ilike", "A%") == "name-ilike-A%"


def test_value_hyphens_are_not_escaped() -> None:
    assert encode("ref", "eq", "a-b") == "ref-eq-a-b"


def test_null_and_boolean_values() -> None:
    assert is_null("unsubscribed").encode() == "unsubscribed-is-null"
    assert not_null("bounced").encode() == "bounced-nt-null"
    assert encode("active", Operator.EQ, True) == "active-eq-true"


def test_predicate_str_matches_encode() -> None:
    predicate = Predicate("list_id", Operator.EQ, 123)
    assert str(predicate) == "list_id-eq-123"
    assert eq("list_id", 123) == predicate
