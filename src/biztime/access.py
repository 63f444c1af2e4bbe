"""
Generic, table-agnostic data access.

Every operation builds one parameterized statement from server-defined
identifiers (see `biztime.tables`) and caller-supplied values, executes it
inside a scoped transaction and normalizes the driver response into a
`Result`. Nothing raises across this boundary: validation problems come back
as VALIDATION failures, zero affected rows as NOT_FOUND where that matters,
and anything the store rejects as QUERY.

The statement builders are plain functions returning `(query, params)` so
the generated SQL and the bound-value order can be inspected without a
database.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Union

import psycopg
from psycopg import sql

from biztime.db import Database
from biztime.log import get_logger
from biztime.result import ErrorKind, Result, ValidationError
from biztime.tables import Table, get_table
from biztime.validators import PreparedPayload

logger = get_logger(__name__)

Columns = Union[str, Iterable[str]]
Statement = tuple[sql.Composed, tuple]


@dataclass(frozen=True)
class Criteria:
    """
    A WHERE clause with `%s` placeholders plus the values bound to them, in order.

    Templates must be server-defined; never build one from request input.
    """

    clause: sql.Composable
    values: tuple = ()
    columns: tuple[str, ...] = ()
    placeholders: int = 1

    @classmethod
    def where(cls, template: str, *values) -> "Criteria":
        return cls(
            clause=sql.SQL(template),
            values=tuple(values),
            placeholders=template.replace("%%", "").count("%s"),
        )

    @classmethod
    def equals(cls, column: str, value) -> "Criteria":
        return cls(
            clause=sql.SQL("{} = %s").format(sql.Identifier(column)),
            values=(value,),
            columns=(column,),
        )


# =============================================================================
# Statement builders
# =============================================================================


class StatementError(Exception):
    """A statement that would be rejected by the store, caught before it is sent."""


def _column_list(table: Table, columns: Columns) -> sql.Composable:
    if isinstance(columns, str):
        if columns.strip() == "*":
            return sql.SQL("*")
        columns = [c.strip() for c in columns.split(",") if c.strip()]
    columns = table.check_columns(columns)
    if not columns:
        raise ValidationError(f"No columns given for {table.name}")
    return sql.SQL(", ").join(sql.Identifier(c) for c in columns)


def _table_name(table) -> str:
    return table.name if isinstance(table, Table) else str(table)


def _where(table: Table, criteria: Criteria) -> sql.Composable:
    table.check_columns(criteria.columns)
    if criteria.placeholders != len(criteria.values):
        raise StatementError(
            f"criteria has {criteria.placeholders} placeholder(s) "
            f"but {len(criteria.values)} value(s)"
        )
    return criteria.clause


def build_select(columns: Columns, table, criteria: Criteria = None) -> Statement:
    table = get_table(table)
    query = sql.SQL("SELECT {columns} FROM {table}").format(
        columns=_column_list(table, columns),
        table=table.identifier,
    )
    params = ()
    if criteria is not None:
        query += sql.SQL(" WHERE {}").format(_where(table, criteria))
        params = criteria.values
    query += sql.SQL(" ORDER BY {}").format(sql.Identifier(table.primary_key))
    return query, params


def build_insert(table, payload: PreparedPayload, returning: Columns = "*") -> Statement:
    table = get_table(table)
    if not payload:
        raise ValidationError(f"Nothing to insert into {table.name}")
    query = sql.SQL(
        "INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING {returning}"
    ).format(
        table=table.identifier,
        columns=_column_list(table, payload.columns),
        placeholders=sql.SQL(", ").join(sql.Placeholder() for _ in payload.positions),
        returning=_column_list(table, returning),
    )
    return query, tuple(payload.values)


def build_update(table, primary_key: str, primary_key_value, payload: PreparedPayload) -> Statement:
    """
    UPDATE ... SET col = %s, ... WHERE pk = %s RETURNING pk, col, ...

    The primary key value is always the last bound parameter.
    """
    table = get_table(table)
    table.check_columns([primary_key])
    if not payload:
        raise ValidationError(f"Nothing to update in {table.name}")
    table.check_columns(payload.columns)

    assignments = sql.SQL(", ").join(
        sql.SQL("{} = {}").format(sql.Identifier(column), sql.Placeholder())
        for column in payload.columns
    )
    returning = [primary_key] + [c for c in payload.columns if c != primary_key]
    query = sql.SQL(
        "UPDATE {table} SET {assignments} WHERE {pk} = {pk_placeholder} RETURNING {returning}"
    ).format(
        table=table.identifier,
        assignments=assignments,
        pk=sql.Identifier(primary_key),
        pk_placeholder=sql.Placeholder(),
        returning=_column_list(table, returning),
    )
    return query, (*payload.values, primary_key_value)


def build_delete(table, criteria: Criteria, returning: Columns = "*") -> Statement:
    table = get_table(table)
    query = sql.SQL("DELETE FROM {table} WHERE {where} RETURNING {returning}").format(
        table=table.identifier,
        where=_where(table, criteria),
        returning=_column_list(table, returning),
    )
    return query, criteria.values


# =============================================================================
# Data access
# =============================================================================


class DataAccess:
    """Runs generated statements against a `Database` and wraps every outcome in a `Result`."""

    def __init__(self, database: Database):
        self.database = database

    def _run(
        self,
        operation: str,
        build: Callable[[], Statement],
        shape: Callable[[list[dict]], Result],
    ) -> Result:
        try:
            query, params = build()
        except ValidationError as e:
            logger.warning("%s refused: %s", operation, e)
            return Result.failure(ErrorKind.VALIDATION, str(e))
        except StatementError as e:
            logger.warning("%s refused: %s", operation, e)
            return Result.failure(ErrorKind.QUERY, str(e))

        try:
            with self.database.transaction() as cur:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("%s: %s %s", operation, query.as_string(cur), params)
                cur.execute(query, params)
                rows = cur.fetchall()
        except psycopg.Error as e:
            message = str(e).strip() or e.__class__.__name__
            logger.warning("%s failed: %s", operation, message)
            return Result.failure(ErrorKind.QUERY, message)

        return shape(rows)

    def select_all(self, columns: Columns, table) -> Result:
        """Every row of `table`. An empty table is a successful empty list."""
        return self._run(
            f"select all from {_table_name(table)}",
            lambda: build_select(columns, table),
            Result.ok,
        )

    def select(self, columns: Columns, table, criteria: Criteria) -> Result:
        """
        Rows matching `criteria`, shaped by how many were found.

        Zero rows is NOT_FOUND, one row comes back as a single record and
        several as a list. Prefer `select_one` or `select_many` when the
        caller knows which shape it wants.
        """

        def shape(rows):
            if not rows:
                return Result.not_found()
            if len(rows) == 1:
                return Result.ok(rows[0])
            return Result.ok(rows)

        return self._run(
            f"select from {_table_name(table)}",
            lambda: build_select(columns, table, criteria),
            shape,
        )

    def select_one(self, columns: Columns, table, criteria: Criteria) -> Result:
        """Exactly one matching row as a record."""

        def shape(rows):
            if not rows:
                return Result.not_found()
            if len(rows) > 1:
                return Result.failure(ErrorKind.QUERY, f"expected one row, found {len(rows)}")
            return Result.ok(rows[0])

        return self._run(
            f"select one from {_table_name(table)}",
            lambda: build_select(columns, table, criteria),
            shape,
        )

    def select_many(self, columns: Columns, table, criteria: Criteria) -> Result:
        """All matching rows as a list, possibly empty."""
        return self._run(
            f"select many from {_table_name(table)}",
            lambda: build_select(columns, table, criteria),
            Result.ok,
        )

    def insert(self, table, payload: PreparedPayload, returning: Columns = "*") -> Result:
        return self._run(
            f"insert into {_table_name(table)}",
            lambda: build_insert(table, payload, returning),
            lambda rows: Result.ok(rows[0]),
        )

    def update(self, table, primary_key: str, primary_key_value: Any, payload: PreparedPayload) -> Result:
        def shape(rows):
            if not rows:
                return Result.not_found()
            return Result.ok(rows[0])

        return self._run(
            f"update {_table_name(table)}",
            lambda: build_update(table, primary_key, primary_key_value, payload),
            shape,
        )

    def delete(self, table, criteria: Criteria, returning: Columns = "*") -> Result:
        def shape(rows):
            if not rows:
                return Result.not_found()
            return Result.ok(rows, status="deleted")

        return self._run(
            f"delete from {_table_name(table)}",
            lambda: build_delete(table, criteria, returning),
            shape,
        )
