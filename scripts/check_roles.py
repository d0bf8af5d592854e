#!/usr/bin/env python3
"""Validate the role tables and print the access matrix.

Usage:
    python scripts/check_roles.py
    python scripts/check_roles.py --role caretaker
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.auth.permissions import (  # noqa: E402
    get_role_permissions,
    has_menu_access,
    has_permission,
    validate_role_table,
)
from backend.constants import PERMISSIONS, MenuSection, UserRole  # noqa: E402


def _mark(allowed: bool) -> str:
    return "x" if allowed else "."


def print_matrix(roles: list[UserRole]) -> None:
    header = "".join(f"{role.value:>11}" for role in roles)
    print(f"{'permission':<24}{header}")
    for permission_id in sorted(PERMISSIONS):
        cells = "".join(f"{_mark(has_permission(role, permission_id)):>11}" for role in roles)
        print(f"{permission_id:<24}{cells}")
    print()
    print(f"{'menu':<24}{header}")
    for section in MenuSection:
        cells = "".join(f"{_mark(has_menu_access(role, section)):>11}" for role in roles)
        print(f"{section.value:<24}{cells}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--role", choices=[role.value for role in UserRole], help="Only show one role")
    args = parser.parse_args(argv)

    issues = validate_role_table()
    for issue in issues:
        print(f"[error] {issue}", file=sys.stderr)

    roles = [UserRole(args.role)] if args.role else list(UserRole)
    for role in roles:
        profile = get_role_permissions(role)
        print(f"{profile.display_name}: {profile.description}")
    print()
    print_matrix(roles)
    return 1 if issues else 0


if __name__ == "__main__":
    raise SystemExit(main())
