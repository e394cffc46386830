"""Verify permission resolution and query scoping against a live database.

Usage:
    uv run python -m scripts.verify_permission_scoping [--tenant <tenant_id>] [--verbose]
Resolves Manager/Admin/Nurse on residents (Read) for the tenant (default:
DEFAULT_TENANT_ID) and checks the expected flags, then checks the branch
filter renderings. Prints PASSED/FAILED per check. Exits 0 if all checks
pass, 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable

from care_access.application.services import (
    PermissionResolver,
    ScopedQuery,
    apply_branch_filter,
)
from care_access.core.config import get_settings
from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import CareAccessException
from care_access.domain.value_objects import PermissionFlags
from care_access.infrastructure.persistence.database import dispose_engine, session_scope
from care_access.infrastructure.persistence.repositories import RolePermissionStore
from care_access.shared.telemetry.logging import setup_logging

RESIDENTS_QUERY = "SELECT * FROM residents r LEFT JOIN units u ON u.unit_id = r.unit_id"

EXPECTED_RESIDENT_READ: dict[str, PermissionFlags] = {
    "Manager": PermissionFlags(assigned_only=False, branch_only=True),
    "Admin": PermissionFlags(assigned_only=False, branch_only=False),
    "Nurse": PermissionFlags(assigned_only=True, branch_only=False),
}


def _report(name: str, ok: bool, detail: str = "") -> bool:
    status = "PASSED" if ok else "FAILED"
    print(f"[{status}] {name}" + (f": {detail}" if detail else ""))
    return ok


def _branch_checks() -> list[tuple[str, Callable[[], tuple[bool, str]]]]:
    def without_tag() -> tuple[bool, str]:
        q = ScopedQuery(RESIDENTS_QUERY)
        apply_branch_filter(q, None, "u", True)
        expected = RESIDENTS_QUERY + " WHERE (u.branch_tag IS NULL OR u.branch_tag = '-')"
        return q.sql == expected and q.args == [], q.sql

    def with_tag() -> tuple[bool, str]:
        q = ScopedQuery(RESIDENTS_QUERY)
        apply_branch_filter(q, "BranchA", "u", True)
        expected = RESIDENTS_QUERY + " WHERE u.branch_tag = $1"
        return q.sql == expected and q.args == ["BranchA"], f"{q.sql} {q.args}"

    def inactive() -> tuple[bool, str]:
        q = ScopedQuery(RESIDENTS_QUERY, args=["t1"])
        apply_branch_filter(q, "BranchA", "u", False)
        return q.sql == RESIDENTS_QUERY and q.args == ["t1"], q.sql

    return [
        ("branch filter without branch tag", without_tag),
        ("branch filter with branch tag", with_tag),
        ("inactive branch filter is a no-op", inactive),
    ]


async def _run(tenant_id: str) -> bool:
    results: list[bool] = []
    async with session_scope() as session:
        resolver = PermissionResolver(RolePermissionStore(session))
        for role_code, expected in EXPECTED_RESIDENT_READ.items():
            name = f"{role_code}/residents/R (tenant {tenant_id})"
            try:
                flags = await resolver.resolve(
                    role_code, "residents", PermissionType.READ, tenant_id
                )
            except CareAccessException as e:
                results.append(_report(name, False, f"{e.error_code}: {e.message}"))
                continue
            results.append(
                _report(
                    name,
                    flags == expected,
                    f"assigned_only={flags.assigned_only}, branch_only={flags.branch_only}",
                )
            )

    for name, check in _branch_checks():
        ok, detail = check()
        results.append(_report(name, ok, detail))
    return all(results)


async def main(argv: list[str] | None = None) -> int:
    """Run all checks; return process exit code."""
    parser = argparse.ArgumentParser(description="Verify permission scoping")
    parser.add_argument("--tenant", help="Tenant id (default: DEFAULT_TENANT_ID)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    tenant_id = args.tenant or get_settings().default_tenant_id
    try:
        passed = await _run(tenant_id)
    except CareAccessException as e:
        print(f"{e.error_code}: {e.message}", file=sys.stderr)
        return 1
    finally:
        await dispose_engine()
    print("\nAll checks passed" if passed else "\nSome checks failed")
    return 0 if passed else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
