"""Tests for the chaining SQL generator."""

from dataclasses import replace

import pytest

from pgspec.builder import OnConflict, QueryKind, QueryState, SQLGenerator, SQLResult, render_state
from pgspec.exceptions import MissingDataError, SQLBuilderError, UnsupportedOperationError


def test_select_with_where_and_limit() -> None:
    result = SQLGenerator("users").select("id", "name").where({"status": "active"}).limit(10).get_sql_with_params()
    assert result == SQLResult('SELECT "id", "name" FROM "users" WHERE "status" = $1 LIMIT 10', ("active",))


def test_select_defaults_to_star() -> None:
    assert SQLGenerator("users").get_sql() == 'SELECT * FROM "users"'
    assert SQLGenerator("users").select().get_sql() == 'SELECT * FROM "users"'


def test_select_in_and_like() -> None:
    result = (
        SQLGenerator("kv_store")
        .select()
        .where({"name": {"$in": ["key1", "key2"]}, "value": {"$like": "value%"}})
        .get_sql_with_params()
    )
    assert result.sql == 'SELECT * FROM "kv_store" WHERE "name" IN ($1, $2) AND "value" LIKE $3'
    assert result.params == ("key1", "key2", "value%")


def test_full_select() -> None:
    sql = (
        SQLGenerator("orders")
        .select("id", "total")
        .join("users", "users.id = orders.user_id", "left")
        .where("orders.total > 0")
        .group_by("id", "total")
        .order_by("total", "desc")
        .order_by("id")
        .limit(10)
        .offset(20)
        .get_sql()
    )
    assert sql == (
        'SELECT "id", "total" FROM "orders" LEFT JOIN "users" ON users.id = orders.user_id '
        'WHERE orders.total > 0 GROUP BY "id", "total" ORDER BY "total" DESC, "id" ASC LIMIT 10 OFFSET 20'
    )


def test_from_changes_table() -> None:
    assert SQLGenerator("a").from_("b").get_sql() == 'SELECT * FROM "b"'


def test_zero_limit_and_offset_are_omitted() -> None:
    assert SQLGenerator("t").limit(0).offset(0).get_sql() == 'SELECT * FROM "t"'


def test_placeholders_number_across_where_calls() -> None:
    result = (
        SQLGenerator("t").where({"a": 1}).where("b IS NOT NULL").where({"c": {"$in": [2, 3]}, "d": 4}).get_sql_with_params()
    )
    assert result.sql == 'SELECT * FROM "t" WHERE "a" = $1 AND b IS NOT NULL AND "c" IN ($2, $3) AND "d" = $4'
    assert result.params == (1, 2, 3, 4)


def test_insert_single_row() -> None:
    result = SQLGenerator("kv").insert({"name": "k", "value": "v"}).get_sql_with_params()
    assert result.sql == 'INSERT INTO "kv" ("name", "value") VALUES ($1, $2)'
    assert result.params == ("k", "v")


def test_insert_many_binds_missing_keys_as_none() -> None:
    result = SQLGenerator("t").insert_many([{"a": 1, "b": 2}, {"a": 3}]).get_sql_with_params()
    assert result.sql == 'INSERT INTO "t" ("a", "b") VALUES ($1, $2), ($3, $4)'
    assert result.params == (1, 2, 3, None)


def test_upsert_do_nothing() -> None:
    sql = SQLGenerator("kv").insert({"name": "k", "value": "v"}, on_conflict={"columns": ["name"]}).get_sql()
    assert sql == 'INSERT INTO "kv" ("name", "value") VALUES ($1, $2) ON CONFLICT ("name") DO NOTHING'


def test_upsert_do_update_uses_first_row() -> None:
    result = (
        SQLGenerator("kv")
        .insert_many(
            [{"name": "k1", "value": "v1"}, {"name": "k2", "value": "v2"}],
            on_conflict=OnConflict(columns=("name",), update=("value",)),
        )
        .get_sql_with_params()
    )
    assert result.sql == (
        'INSERT INTO "kv" ("name", "value") VALUES ($1, $2), ($3, $4) ON CONFLICT ("name") DO UPDATE SET "value" = $5'
    )
    assert result.params == ("k1", "v1", "k2", "v2", "v1")


def test_upsert_without_columns() -> None:
    sql = SQLGenerator("kv").insert({"name": "k"}, on_conflict=OnConflict()).get_sql()
    assert sql == 'INSERT INTO "kv" ("name") VALUES ($1) ON CONFLICT DO NOTHING'


def test_upsert_update_requires_conflict_columns() -> None:
    with pytest.raises(SQLBuilderError):
        OnConflict(columns=(), update=("value",))


def test_update_numbers_set_before_where() -> None:
    result = SQLGenerator("t").where({"name": "k"}).update({"value": None}).get_sql_with_params()
    assert result.sql == 'UPDATE "t" SET "value" = $1 WHERE "name" = $2'
    assert result.params == (None, "k")


def test_update_without_where() -> None:
    assert SQLGenerator("t").update({"a": 1, "b": 2}).get_sql() == 'UPDATE "t" SET "a" = $1, "b" = $2'


def test_delete() -> None:
    result = SQLGenerator("t").where({"name": {"$in": ["key2", "key3"]}}).delete().get_sql_with_params()
    assert result.sql == 'DELETE FROM "t" WHERE "name" IN ($1, $2)'
    assert result.params == ("key2", "key3")


@pytest.mark.parametrize(
    "generator",
    [
        SQLGenerator("t").insert(None),
        SQLGenerator("t").insert_many([]),
        SQLGenerator("t").insert({}),
        SQLGenerator("t").update(None),
        SQLGenerator("t").update({}),
    ],
)
def test_missing_payload(generator: SQLGenerator) -> None:
    with pytest.raises(MissingDataError):
        generator.get_sql_with_params()


def test_invalid_join_type() -> None:
    with pytest.raises(SQLBuilderError):
        SQLGenerator("t").join("u", "u.id = t.id", "CROSS")


def test_invalid_sort_direction() -> None:
    with pytest.raises(SQLBuilderError):
        SQLGenerator("t").order_by("id", "UP")


@pytest.mark.parametrize("method", ["limit", "offset"])
def test_negative_limit_or_offset(method: str) -> None:
    with pytest.raises(SQLBuilderError):
        getattr(SQLGenerator("t"), method)(-1)


def test_unknown_kind_is_unsupported() -> None:
    state = replace(QueryState(table="t"), kind="MERGE")  # type: ignore[arg-type]
    with pytest.raises(UnsupportedOperationError):
        render_state(state)


def test_rendering_is_repeatable() -> None:
    generator = SQLGenerator("t").where({"a": 1, "b": {"$in": [2, 3]}})
    assert generator.get_sql_with_params() == generator.get_sql_with_params()


def test_state_is_immutable() -> None:
    generator = SQLGenerator("t")
    before = generator.state
    generator.where({"a": 1}).limit(5)
    assert before.where == ()
    assert before.limit == 0
    assert generator.state.limit == 5


def test_payload_is_copied() -> None:
    row = {"a": 1}
    generator = SQLGenerator("t").insert(row)
    row["b"] = 2
    assert generator.get_sql() == 'INSERT INTO "t" ("a") VALUES ($1)'


def test_clear_keeps_table() -> None:
    generator = SQLGenerator("t").select("a").where({"a": 1}).order_by("a").limit(3).update({"a": 2})
    generator.clear()
    assert generator.table == "t"
    assert generator.state.kind is QueryKind.SELECT
    assert generator.get_sql_with_params() == SQLResult('SELECT * FROM "t"', ())


def test_count() -> None:
    generator = SQLGenerator("t").join("u", "u.id = t.uid").where({"a": 1}).order_by("a").limit(5)
    assert generator.count() == SQLResult('SELECT COUNT(*) AS "count" FROM "t" INNER JOIN "u" ON u.id = t.uid WHERE "a" = $1', (1,))


def test_table_name_is_escaped() -> None:
    assert SQLGenerator('we"ird').get_sql() == 'SELECT * FROM "we""ird"'


def test_sql_result_as_list() -> None:
    assert SQLResult("SELECT $1", (1,)).as_list() == [1]
