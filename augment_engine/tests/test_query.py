import pytest

from augment_engine.domain.errors import InvalidArgumentError
from augment_engine.domain.query import Criterion, Query


def test_missing_field_semantics():
    doc = {"id": "1"}
    assert Criterion("deleted", "ne", True).matches(doc)
    assert Criterion("deleted", "eq", None).matches(doc)
    assert not Criterion("deleted", "eq", True).matches(doc)
    assert not Criterion("n", "gt", 1).matches(doc)
    assert Criterion("n", "exists", False).matches(doc)
    assert Criterion("id", "exists", True).matches(doc)


def test_incomparable_values_do_not_match():
    assert not Criterion("n", "lt", 5).matches({"n": "abc"})


def test_query_is_a_conjunction():
    q = Query().and_where("a", "eq", 1).and_where("b", "in", (2, 3))
    assert q.matches({"a": 1, "b": 3})
    assert not q.matches({"a": 1, "b": 4})
    assert Query().matches({})


def test_unknown_operator_rejected():
    with pytest.raises(InvalidArgumentError):
        Criterion("a", "like", "x")
