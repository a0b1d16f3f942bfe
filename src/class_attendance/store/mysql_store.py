from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

import mysql.connector

from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .change_feed import ChangeFeed
from .model import ChangeEvent, ChangeKind, Filter, Op, Ordering
from .repository import ChangeCallback, RecordStore, Unsubscribe

logger = logging.getLogger(__name__)

# Identifiers cannot be bound as parameters, so only these ever reach SQL text.
TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    "classes": ("id", "class_name", "created_at"),
    "subjects": ("id", "subject_name", "class_id", "created_at"),
    "students": ("id", "first_name", "last_name", "roll_no", "class_id", "created_at"),
    "users": ("id", "full_name", "username", "password_hash", "role", "is_active", "created_at"),
    "attendance": ("id", "student_id", "class_id", "subject_name", "date", "status", "recorded_by", "created_at"),
}

_SQL_OPS = {
    Op.EQ: "=",
    Op.NEQ: "<>",
    Op.GT: ">",
    Op.GTE: ">=",
    Op.LT: "<",
    Op.LTE: "<=",
}


class MySQLRecordStore(RecordStore):
    def __init__(self, conn_factory: DatabaseConnection, *, feed: Optional[ChangeFeed] = None):
        self._conn_factory = conn_factory
        self._feed = feed or ChangeFeed()

    @staticmethod
    def _check_table(table: str) -> tuple[str, ...]:
        columns = TABLE_COLUMNS.get(table)
        if columns is None:
            raise StoreError(f"Unknown table: {table}")
        return columns

    @classmethod
    def _check_columns(cls, table: str, columns: Iterable[str]) -> list[str]:
        known = cls._check_table(table)
        out = list(columns)
        for c in out:
            if c not in known:
                raise StoreError(f"Unknown column {table}.{c}")
        return out

    @classmethod
    def _where(cls, table: str, filters: Iterable[Filter]) -> tuple[str, list[object]]:
        clauses: list[str] = []
        params: list[object] = []
        for f in filters:
            cls._check_columns(table, [f.column])
            if f.op == Op.IN:
                values = list(f.value)
                if not values:
                    clauses.append("1=0")
                    continue
                clauses.append(f"`{f.column}` IN ({', '.join(['%s'] * len(values))})")
                params.extend(values)
            else:
                clauses.append(f"`{f.column}` {_SQL_OPS[f.op]} %s")
                params.append(f.value)

        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    def insert(self, table: str, rows: Sequence[dict]) -> None:
        rows = [dict(r) for r in rows]
        if not rows:
            return

        columns = self._check_columns(table, sorted({c for r in rows for c in r}))
        sql = (
            f"INSERT INTO `{table}` ({', '.join(f'`{c}`' for c in columns)}) "
            f"VALUES ({', '.join(['%s'] * len(columns))})"
        )
        params = [tuple(r.get(c) for c in columns) for r in rows]

        try:
            # One transaction: db_cursor rolls the whole batch back on failure.
            with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
                cur.executemany(sql, params)
        except mysql.connector.Error as e:
            logger.error("Insert of %d row(s) into %s failed: %s", len(rows), table, e)
            raise StoreError(f"Failed to insert into {table}: {e}") from e

        self._feed.publish(ChangeEvent(table=table, kind=ChangeKind.INSERT, rows=tuple(rows)))

    def select(
        self,
        table: str,
        *,
        columns: Optional[Sequence[str]] = None,
        filters: Iterable[Filter] = (),
        order_by: Iterable[Ordering] = (),
        limit: Optional[int] = None,
    ) -> list[dict]:
        cols = self._check_columns(table, columns or self._check_table(table))
        where, params = self._where(table, filters)

        sql = f"SELECT {', '.join(f'`{c}`' for c in cols)} FROM `{table}`{where}"
        orderings = list(order_by)
        if orderings:
            self._check_columns(table, [o.column for o in orderings])
            sql += " ORDER BY " + ", ".join(f"`{o.column}` {'DESC' if o.descending else 'ASC'}" for o in orderings)
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, tuple(params))
                return fetchall(cur)
        except mysql.connector.Error as e:
            logger.error("Select from %s failed: %s", table, e)
            raise StoreError(f"Failed to read {table}: {e}") from e

    def count(self, table: str, *, filters: Iterable[Filter] = ()) -> int:
        self._check_table(table)
        where, params = self._where(table, filters)

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT COUNT(*) AS n FROM `{table}`{where}", tuple(params))
                row = fetchone(cur)
                return int(row["n"]) if row else 0
        except mysql.connector.Error as e:
            logger.error("Count on %s failed: %s", table, e)
            raise StoreError(f"Failed to count {table}: {e}") from e

    def subscribe(self, table: str, callback: ChangeCallback) -> Unsubscribe:
        self._check_table(table)
        return self._feed.subscribe(table, callback)
