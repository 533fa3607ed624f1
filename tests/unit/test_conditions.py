"""Tests for filter-to-fragment translation."""

import pytest

from pgspec.builder import Parameter, ParameterBinder, build_conditions
from pgspec.exceptions import SQLBuilderError, UnsupportedOperatorError


def render(condition: object) -> tuple[str, list]:
    binder = ParameterBinder()
    sql = binder.render_all(build_conditions(condition))  # type: ignore[arg-type]
    return sql, binder.params


def test_raw_text_passes_through() -> None:
    assert build_conditions("age > 18") == (("age > 18",),)


def test_empty_raw_text_adds_nothing() -> None:
    assert build_conditions("") == ()
    assert build_conditions("   ") == ()


def test_scalar_is_equality() -> None:
    assert build_conditions({"status": "active"}) == (('"status" = ', Parameter("active")),)


def test_none_is_null_check_without_parameter() -> None:
    sql, params = render({"deleted_at": None})
    assert sql == '"deleted_at" IS NULL'
    assert params == []


@pytest.mark.parametrize(
    ("operator", "symbol"),
    [("$eq", "="), ("$neq", "!="), ("$gt", ">"), ("$gte", ">="), ("$lt", "<"), ("$lte", "<="), ("$like", "LIKE")],
)
def test_comparison_operators(operator: str, symbol: str) -> None:
    sql, params = render({"age": {operator: 30}})
    assert sql == f'"age" {symbol} $1'
    assert params == [30]


def test_operators_without_dollar_prefix() -> None:
    sql, params = render({"age": {"gte": 18, "lt": 65}})
    assert sql == '"age" >= $1 AND "age" < $2'
    assert params == [18, 65]


def test_operators_follow_fixed_order() -> None:
    sql, params = render({"age": {"$lt": 65, "$gte": 18}})
    assert sql == '"age" >= $1 AND "age" < $2'
    assert params == [18, 65]


def test_in_binds_one_parameter_per_element() -> None:
    sql, params = render({"name": {"$in": ["key1", "key2", "key3"]}})
    assert sql == '"name" IN ($1, $2, $3)'
    assert params == ["key1", "key2", "key3"]


def test_not_in() -> None:
    sql, params = render({"name": {"$nin": ["a"]}})
    assert sql == '"name" NOT IN ($1)'
    assert params == ["a"]


def test_empty_membership() -> None:
    assert render({"name": {"$in": []}}) == ("FALSE", [])
    assert render({"name": {"$nin": []}}) == ("TRUE", [])


def test_is_null_operator() -> None:
    assert render({"email": {"$isNull": True}}) == ('"email" IS NULL', [])
    assert render({"email": {"$isNull": False}}) == ('"email" IS NOT NULL', [])


def test_columns_join_with_and() -> None:
    sql, params = render({"name": {"$in": ["key1", "key2"]}, "value": {"$like": "value%"}})
    assert sql == '"name" IN ($1, $2) AND "value" LIKE $3'
    assert params == ["key1", "key2", "value%"]


def test_unknown_operator_raises() -> None:
    with pytest.raises(UnsupportedOperatorError) as exc_info:
        build_conditions({"name": {"$regex": "^a"}})
    assert exc_info.value.operator == "$regex"
    assert "name" in str(exc_info.value)
    assert isinstance(exc_info.value, SQLBuilderError)


def test_column_names_are_escaped() -> None:
    sql, _ = render({'we"ird': 1})
    assert sql == '"we""ird" = $1'
