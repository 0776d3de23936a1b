"""Structured selection predicates.

A Predicate is an immutable conjunction of Clause triples
(field, operator, value). Keeping it structured rather than a closure lets a
store translate it into its own query language (``to_filter()``) while the
in-memory store simply calls ``matches()``.

Example::

    p = Predicate.of(Clause("tenant_id", Operator.IN, frozenset({"t1"})))
    p &= Predicate.of(Clause("title", Operator.CONTAINS_CI, "pony"))
    p.to_filter()
    # [("tenant_id", "in", frozenset({"t1"})), ("title", "contains_ci", "pony")]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from .models import field_value


class Operator(str, Enum):
    EQ = "eq"
    IN = "in"
    CONTAINS_CI = "contains_ci"  # Case-insensitive substring
    LTE = "lte"
    GTE = "gte"
    EXISTS = "exists"


@dataclass(frozen=True)
class Clause:
    """One field test. A missing field fails every operator except ``EXISTS False``."""

    field: str
    op: Operator
    value: Any

    def matches(self, item: Any) -> bool:
        actual = field_value(item, self.field)
        if self.op is Operator.EXISTS:
            return (actual is not None) == bool(self.value)
        if actual is None:
            return False
        if self.op is Operator.EQ:
            return actual == self.value
        if self.op is Operator.IN:
            return actual in self.value
        if self.op is Operator.CONTAINS_CI:
            return str(self.value).casefold() in str(actual).casefold()
        if self.op is Operator.LTE:
            return actual <= self.value
        if self.op is Operator.GTE:
            return actual >= self.value
        raise ValueError(f"Unknown operator: {self.op!r}")

    def as_triple(self) -> tuple[str, str, Any]:
        return (self.field, self.op.value, self.value)


class Predicate:
    """Immutable AND of clauses. The empty predicate matches everything."""

    __slots__ = ("_clauses",)

    def __init__(self, clauses: tuple[Clause, ...] = ()) -> None:
        self._clauses = tuple(clauses)

    @classmethod
    def always(cls) -> "Predicate":
        return cls()

    @classmethod
    def of(cls, *clauses: Clause) -> "Predicate":
        return cls(clauses)

    @classmethod
    def all_of(cls, *predicates: "Predicate") -> "Predicate":
        clauses: list[Clause] = []
        for predicate in predicates:
            clauses.extend(predicate.clauses)
        return cls(tuple(clauses))

    @property
    def clauses(self) -> tuple[Clause, ...]:
        return self._clauses

    def matches(self, item: Any) -> bool:
        # Every clause is evaluated; the result never depends on clause order.
        results = [clause.matches(item) for clause in self._clauses]
        return all(results)

    def to_filter(self) -> list[tuple[str, str, Any]]:
        """Field/operator/value triples, ANDed, for store query translation."""
        return [clause.as_triple() for clause in self._clauses]

    def fields(self) -> frozenset[str]:
        return frozenset(clause.field for clause in self._clauses)

    def __and__(self, other: "Predicate") -> "Predicate":
        if not isinstance(other, Predicate):
            return NotImplemented
        return Predicate(self._clauses + other.clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def __bool__(self) -> bool:
        # An empty predicate is still a valid ("match all") predicate.
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Predicate):
            return NotImplemented
        return self._clauses == other.clauses

    def __hash__(self) -> int:
        return hash(self._clauses)

    def __repr__(self) -> str:
        return f"Predicate({list(self.to_filter())!r})"


__all__ = [
    "Clause",
    "Operator",
    "Predicate",
]
