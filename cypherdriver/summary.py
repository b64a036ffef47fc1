"""Summary information about an executed statement."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import IntEnum
from typing import Any, Mapping

# Keys of the counters map as reported by the server.
NODES_CREATED = "nodes-created"
NODES_DELETED = "nodes-deleted"
RELATIONSHIPS_CREATED = "relationships-created"
RELATIONSHIPS_DELETED = "relationships-deleted"
PROPERTIES_SET = "properties-set"
LABELS_ADDED = "labels-added"
LABELS_REMOVED = "labels-removed"
INDEXES_ADDED = "indexes-added"
INDEXES_REMOVED = "indexes-removed"
CONSTRAINTS_ADDED = "constraints-added"
CONSTRAINTS_REMOVED = "constraints-removed"


class StatementType(IntEnum):
    """Kind of statement that was executed."""

    UNKNOWN = 0
    READ_ONLY = 1
    READ_WRITE = 2
    WRITE_ONLY = 3
    SCHEMA_WRITE = 4


@dataclass(frozen=True)
class InputPosition:
    """A position in a statement: offset from 0, line and column from 1."""

    offset: int
    line: int
    column: int


@dataclass(frozen=True)
class Notification:
    """A notification produced by the server while executing a statement."""

    code: str = ""
    title: str = ""
    description: str = ""
    severity: str = ""
    position: InputPosition | None = None


@dataclass
class Plan:
    """A node of the plan the database planner produced for a statement."""

    operator: str = ""
    arguments: dict[str, Any] = field(default_factory=dict)
    identifiers: list[str] = field(default_factory=list)
    children: list[Plan] = field(default_factory=list)


@dataclass
class ProfiledPlan:
    """A node of an executed plan, with the work it incurred."""

    operator: str = ""
    arguments: dict[str, Any] = field(default_factory=dict)
    identifiers: list[str] = field(default_factory=list)
    db_hits: int = 0
    records: int = 0
    children: list[ProfiledPlan] = field(default_factory=list)


@dataclass
class Summary:
    """Raw summary as received at the end of a result stream.

    ``t_first`` and ``t_last`` are in milliseconds.
    """

    server_name: str = ""
    server_version: str = ""
    statement_type: int = 0
    counters: dict[str, int] | None = None
    t_first: int = 0
    t_last: int = 0
    plan: Plan | None = None
    profiled_plan: ProfiledPlan | None = None
    notifications: list[Notification] | None = None


@dataclass(frozen=True)
class ServerInfo:
    """Address and version of the server that ran the statement."""

    address: str
    version: str


@dataclass(frozen=True)
class Statement:
    """Text and parameters of the executed statement."""

    text: str
    params: Mapping[str, Any] | None


def _counter(key: str) -> property:
    def read(self: Counters) -> int:
        return self.values.get(key, 0)

    read.__doc__ = f"Value of the '{key}' counter, 0 when absent."
    return property(read)


@dataclass(frozen=True)
class Counters:
    """Statistics about the changes a statement made to the database."""

    values: Mapping[str, int] = field(default_factory=dict)

    def contains_updates(self) -> bool:
        """True when the server reported any counters at all."""
        return len(self.values) > 0

    nodes_created = _counter(NODES_CREATED)
    nodes_deleted = _counter(NODES_DELETED)
    relationships_created = _counter(RELATIONSHIPS_CREATED)
    relationships_deleted = _counter(RELATIONSHIPS_DELETED)
    properties_set = _counter(PROPERTIES_SET)
    labels_added = _counter(LABELS_ADDED)
    labels_removed = _counter(LABELS_REMOVED)
    indexes_added = _counter(INDEXES_ADDED)
    indexes_removed = _counter(INDEXES_REMOVED)
    constraints_added = _counter(CONSTRAINTS_ADDED)
    constraints_removed = _counter(CONSTRAINTS_REMOVED)


@dataclass(frozen=True)
class ResultSummary:
    """Everything known about a statement once its result is consumed."""

    server: ServerInfo
    statement: Statement
    statement_type: StatementType
    counters: Counters
    plan: Plan | None
    profile: ProfiledPlan | None
    notifications: list[Notification] | None
    result_available_after: timedelta
    result_consumed_after: timedelta

    @classmethod
    def from_summary(
        cls, summary: Summary, cypher: str, params: Mapping[str, Any] | None
    ) -> ResultSummary:
        """Build the public summary from a raw summary and the statement."""
        notifications = (
            None if summary.notifications is None else list(summary.notifications)
        )
        return cls(
            server=ServerInfo(address=summary.server_name, version=summary.server_version),
            statement=Statement(text=cypher, params=params),
            statement_type=StatementType(summary.statement_type),
            counters=Counters(dict(summary.counters or {})),
            plan=summary.plan,
            profile=summary.profiled_plan,
            notifications=notifications,
            result_available_after=timedelta(milliseconds=summary.t_first),
            result_consumed_after=timedelta(milliseconds=summary.t_last),
        )