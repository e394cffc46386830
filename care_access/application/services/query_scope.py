"""Query scoping: structured queries plus branch and assignment filter builders.

A ScopedQuery holds the base statement, the predicates appended so far and
the positional argument list. Builders append one predicate per call and bind
arguments as $1, $2, ... numbered after the arguments already present, so
base-statement parameters and scoping parameters share one sequence.

Builders are not idempotent: calling one twice appends two predicates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import TextClause, text

from care_access.core.constants import BRANCH_TAG_COLUMN, NO_BRANCH_SENTINEL
from care_access.domain.exceptions import ValidationException
from care_access.domain.value_objects import validate_table_alias

# Single-quoted literals are matched first so $n inside them is left alone.
_PLACEHOLDER_RE = re.compile(r"'(?:[^']|'')*'|\$(\d+)")

# Matches nothing; used when an assignment filter is active but the user has no id.
MATCH_NOTHING = "1 = 0"


@dataclass
class ScopedQuery:
    """Base SQL statement plus appended predicates and positional arguments.

    has_where is True when the base statement already ends in its own WHERE
    clause, so the first appended predicate is joined with AND.
    """

    base: str
    args: list[Any] = field(default_factory=list)
    has_where: bool = False
    predicates: list[str] = field(default_factory=list)

    @property
    def has_filter(self) -> bool:
        """True once the rendered statement contains a WHERE clause."""
        return self.has_where or bool(self.predicates)

    def bind(self, value: Any) -> str:
        """Append value to args and return its placeholder ($k, k = new arg count)."""
        self.args.append(value)
        return f"${len(self.args)}"

    def where(self, predicate: str) -> ScopedQuery:
        """Append a predicate; joined with WHERE or AND when rendered."""
        self.predicates.append(predicate)
        return self

    @property
    def sql(self) -> str:
        """Rendered statement with $n placeholders."""
        rendered = self.base
        for i, predicate in enumerate(self.predicates):
            joiner = " AND " if (self.has_where or i > 0) else " WHERE "
            rendered += joiner + predicate
        return rendered

    def to_statement(self) -> tuple[TextClause, dict[str, Any]]:
        """Return a SQLAlchemy text() clause with :p<n> binds and its parameter dict.

        $n inside single-quoted string literals is kept as written. Dollar-quoted
        bodies and quoted identifiers are not recognized, so placeholders must
        not appear inside them.
        """
        named = _PLACEHOLDER_RE.sub(
            lambda m: f":p{m.group(1)}" if m.group(1) else m.group(0), self.sql
        )
        params = {f"p{i}": value for i, value in enumerate(self.args, start=1)}
        return text(named), params


@dataclass(frozen=True)
class AssignmentTarget:
    """Relation linking scoped rows to the users assigned to them.

    user_list_column stores a JSON array of user ids.
    """

    table: str
    key_column: str
    user_list_column: str
    tenant_column: str | None = "tenant_id"
    alias: str = "ac"

    def __post_init__(self) -> None:
        for name in ("table", "key_column", "user_list_column", "alias"):
            validate_table_alias(getattr(self, name))
        if self.tenant_column is not None:
            validate_table_alias(self.tenant_column)


RESIDENT_CAREGIVERS = AssignmentTarget(
    table="resident_caregivers",
    key_column="resident_id",
    user_list_column="user_list",
)


def apply_branch_filter(
    query: ScopedQuery,
    user_branch_tag: str | None,
    table_alias: str,
    active: bool,
) -> None:
    """Restrict query to rows whose <alias>.branch_tag matches the user's branch.

    No-op when active is False. A user without a branch tag (None or '')
    matches rows with NULL branch_tag or the '-' sentinel; no argument is
    bound. Otherwise the tag is bound as the next positional parameter.

    Raises:
        ValidationException: If table_alias is empty or not a plain identifier.
    """
    alias = validate_table_alias(table_alias)
    if not active:
        return
    column = f"{alias}.{BRANCH_TAG_COLUMN}"
    if not user_branch_tag:
        query.where(f"({column} IS NULL OR {column} = '{NO_BRANCH_SENTINEL}')")
        return
    query.where(f"{column} = {query.bind(user_branch_tag)}")


def _like_contains_quoted(value: str) -> str:
    """LIKE pattern matching value as a quoted JSON string element."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f'%"{escaped}"%'


def apply_assignment_filter(
    query: ScopedQuery,
    user_id: str | None,
    table_alias: str,
    active: bool,
    *,
    assignment: AssignmentTarget = RESIDENT_CAREGIVERS,
) -> None:
    """Restrict query to rows the user is assigned to through the assignment relation.

    No-op when active is False. Appends an EXISTS predicate against
    assignment.table keyed on <alias>.<key_column>, binding one LIKE pattern
    for the user id. When active and user_id is absent nothing can match.

    Raises:
        ValidationException: If table_alias is empty or not a plain identifier.
    """
    alias = validate_table_alias(table_alias)
    if not active:
        return
    if not user_id:
        query.where(MATCH_NOTHING)
        return
    if assignment.alias == alias:
        raise ValidationException(
            f"Table alias {alias!r} collides with the assignment alias",
            field="table_alias",
        )
    a = assignment.alias
    conditions = [f"{a}.{assignment.key_column} = {alias}.{assignment.key_column}"]
    if assignment.tenant_column:
        conditions.append(f"{a}.{assignment.tenant_column} = {alias}.{assignment.tenant_column}")
    placeholder = query.bind(_like_contains_quoted(user_id))
    conditions.append(
        f"CAST({a}.{assignment.user_list_column} AS TEXT) LIKE {placeholder} ESCAPE '\\'"
    )
    query.where(
        f"EXISTS (SELECT 1 FROM {assignment.table} {a} WHERE {' AND '.join(conditions)})"
    )
