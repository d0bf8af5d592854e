import dataclasses

import pytest

from backend.auth.permissions import ensure_valid_role_table, validate_role_table
from backend.constants import (
    PERMISSIONS,
    ROLE_PERMISSIONS,
    Permission,
    PermissionCategory,
    UserRole,
)
from backend.core.errors import RoleTableError


def _table_with(key: UserRole, **changes):
    table = dict(ROLE_PERMISSIONS)
    table[key] = dataclasses.replace(ROLE_PERMISSIONS[key], **changes)
    return table


def test_shipped_tables_are_consistent():
    assert validate_role_table() == []
    ensure_valid_role_table()


def test_every_catalog_entry_is_granted_somewhere():
    granted = set().union(*(profile.permissions for profile in ROLE_PERMISSIONS.values()))
    assert granted == set(PERMISSIONS)


def test_dangling_permission_is_reported():
    tenant = ROLE_PERMISSIONS[UserRole.TENANT]
    table = _table_with(UserRole.TENANT, permissions=tenant.permissions | {"payments.refund"})

    issues = validate_role_table(PERMISSIONS, table)

    assert issues == ["role 'tenant' grants unknown permission 'payments.refund'"]


def test_orphan_catalog_entry_is_reported():
    catalog = dict(PERMISSIONS)
    catalog["rooms.archive"] = Permission(
        id="rooms.archive",
        name="Archive Rooms",
        description="Archive unused rooms",
        category=PermissionCategory.PROPERTIES,
    )

    issues = validate_role_table(catalog, ROLE_PERMISSIONS)

    assert issues == ["permission 'rooms.archive' is not granted to any role"]


def test_missing_role_is_reported():
    table = {role: profile for role, profile in ROLE_PERMISSIONS.items() if role is not UserRole.CARETAKER}

    issues = validate_role_table(PERMISSIONS, table)

    assert "role 'caretaker' has no permission profile" in issues


def test_unknown_menu_section_is_reported():
    table = _table_with(UserRole.CARETAKER, menu_access=frozenset({"dashboard", "maintenance"}))

    issues = validate_role_table(PERMISSIONS, table)

    assert issues == ["role 'caretaker' lists unknown menu section 'maintenance'"]


def test_mislabelled_profile_is_reported():
    table = _table_with(UserRole.TENANT, role=UserRole.LANDLORD)

    issues = validate_role_table(PERMISSIONS, table)

    assert len(issues) == 1
    assert issues[0].startswith("profile stored under 'tenant' declares role")


def test_catalog_key_mismatch_is_reported():
    catalog = dict(PERMISSIONS)
    catalog["reports.view"] = dataclasses.replace(PERMISSIONS["reports.view"], id="reports.read")

    issues = validate_role_table(catalog, ROLE_PERMISSIONS)

    assert "catalog key 'reports.view' does not match permission id 'reports.read'" in issues


def test_ensure_valid_role_table_raises_with_all_issues():
    tenant = ROLE_PERMISSIONS[UserRole.TENANT]
    table = _table_with(
        UserRole.TENANT,
        permissions=tenant.permissions | {"payments.refund"},
        menu_access=tenant.menu_access | {"billing"},
    )

    with pytest.raises(RoleTableError) as exc:
        ensure_valid_role_table(PERMISSIONS, table)

    assert len(exc.value.issues) == 2


def test_tables_cannot_be_modified():
    with pytest.raises(TypeError):
        ROLE_PERMISSIONS[UserRole.TENANT] = ROLE_PERMISSIONS[UserRole.LANDLORD]  # type: ignore[index]
    with pytest.raises(TypeError):
        PERMISSIONS["payments.refund"] = PERMISSIONS["payments.view"]  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        ROLE_PERMISSIONS[UserRole.TENANT].data_access.can_view_reports = True  # type: ignore[misc]
    with pytest.raises(AttributeError):
        ROLE_PERMISSIONS[UserRole.TENANT].permissions.add("settings.users")  # type: ignore[attr-defined]
