from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping


class Op(str, Enum):
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"


@dataclass(frozen=True)
class Filter:
    """One ``column <op> value`` condition; conditions in a query are ANDed."""

    column: str
    op: Op
    value: Any

    def matches(self, row: Mapping[str, Any]) -> bool:
        current = row.get(self.column)
        if self.op == Op.IN:
            return current in tuple(self.value)
        if self.op == Op.EQ:
            return current == self.value
        if self.op == Op.NEQ:
            return current != self.value
        if current is None:
            return False
        if self.op == Op.GT:
            return current > self.value
        if self.op == Op.GTE:
            return current >= self.value
        if self.op == Op.LT:
            return current < self.value
        return current <= self.value


def eq(column: str, value: Any) -> Filter:
    return Filter(column, Op.EQ, value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, Op.GTE, value)


def lte(column: str, value: Any) -> Filter:
    return Filter(column, Op.LTE, value)


def in_(column: str, values) -> Filter:
    return Filter(column, Op.IN, tuple(values))


@dataclass(frozen=True)
class Ordering:
    column: str
    descending: bool = False


class ChangeKind(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """Row-level change notification for one table."""

    table: str
    kind: ChangeKind
    rows: tuple[dict, ...]
    occurred_at: datetime = field(default_factory=datetime.now)
