"""Print the role_permissions table joined with role names.

Usage:
    uv run python -m scripts.check_role_permissions [--role Manager] [--resource residents] [--tenant <tenant_id>]
Without --tenant the rows of every tenant are printed; with it, only that
tenant's rows plus system rows. Requires DATABASE_URL.
"""

import argparse
import asyncio
import sys

from care_access.application.dtos import RolePermissionFilter
from care_access.domain.exceptions import CareAccessException
from care_access.infrastructure.persistence.database import dispose_engine, session_scope
from care_access.infrastructure.persistence.repositories import (
    RolePermissionStore,
    RoleRepository,
)

_HEADER = (
    f"{'Permission ID':<14} | {'Tenant ID':<14} | {'Role Code':<12} | {'Role Name':<18} | "
    f"{'Resource':<14} | Op | Assigned | Branch | Active"
)


def _short(value: str, width: int = 12) -> str:
    return value if len(value) <= width else value[:width] + ".."


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print role permissions")
    parser.add_argument("--role", help="Filter by role_code (e.g. Manager, Nurse)")
    parser.add_argument("--resource", help="Filter by resource_type (e.g. residents)")
    parser.add_argument("--tenant", help="Show this tenant's rows plus system rows")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    filters = RolePermissionFilter(role_code=args.role, resource_type=args.resource)
    async with session_scope() as session:
        store = RolePermissionStore(session)
        if args.tenant:
            rows, _ = await store.list_permissions(args.tenant, filters)
        else:
            rows = await store.list_all_tenants(filters)
        roles = {r.role_code: r for r in await RoleRepository(session).list_roles()}

    if not rows:
        print("No role permissions match")
        return 0

    print(_HEADER)
    print("-" * len(_HEADER))
    for row in rows:
        role = roles.get(row.role_code)
        name = role.display_name if role else "Unknown"
        active = role.is_active if role else True
        print(
            f"{_short(row.permission_id):<14} | {_short(row.tenant_id or 'System'):<14} | "
            f"{row.role_code:<12} | {_short(name, 16):<18} | {row.resource_type:<14} | "
            f"{row.permission_type.value:<2} | {str(row.assigned_only).upper():<8} | "
            f"{str(row.branch_only).upper():<6} | {str(active).upper()}"
        )
    print(f"\nTotal permissions: {len(rows)}")
    return 0


async def main(argv: list[str] | None = None) -> int:
    """Print the table; exit code 1 when the store is unavailable or not configured."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    try:
        return await _run(args)
    except CareAccessException as e:
        print(f"{e.error_code}: {e.message}", file=sys.stderr)
        return 1
    finally:
        await dispose_engine()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
