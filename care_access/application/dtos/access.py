"""Caller identity as seen by query scoping."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserAccessContext:
    """Acting user for one access decision.

    branch_tag None (or empty) means the user has no branch assignment.
    tenant_id None means system context.
    """

    user_id: str | None
    role_code: str
    tenant_id: str | None = None
    branch_tag: str | None = None
