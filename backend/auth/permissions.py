"""
Role-based access control for the rental dashboard.

Every check is a membership lookup against the static tables in
``backend.constants``. Anything not explicitly granted is denied, and an
unrecognised role is treated the same way: boolean checks return ``False`` and
profile lookups return ``None``. Callers that prefer an explicit error can use
:func:`parse_role`, which raises :class:`InvalidRoleError`.

Usage:
    from backend.auth.permissions import has_permission, has_menu_access

    if has_menu_access(user_role, "reports"):
        ...
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Mapping, Optional, Tuple, Union

from ..constants import (
    DATA_ACCESS_ALIASES,
    DATA_ACCESS_FLAGS,
    NAVIGATION_ITEMS,
    PERMISSIONS,
    ROLE_PERMISSIONS,
    MenuSection,
    NavigationItem,
    Permission,
    PermissionCategory,
    RolePermissions,
    UserRole,
)
from ..core.errors import InvalidRoleError, RoleTableError

logger = logging.getLogger(__name__)

RoleLike = Union[UserRole, str, None]

_MENU_SECTIONS = frozenset(section.value for section in MenuSection)


def _value(item: object) -> Optional[str]:
    if isinstance(item, Enum):
        item = item.value
    return item if isinstance(item, str) else None


def resolve_role(role: RoleLike) -> Optional[UserRole]:
    """Return the matching ``UserRole`` or ``None`` when ``role`` is not recognised."""
    if isinstance(role, UserRole):
        return role
    value = _value(role)
    if value is None:
        return None
    try:
        return UserRole(value)
    except ValueError:
        return None


def parse_role(role: RoleLike) -> UserRole:
    resolved = resolve_role(role)
    if resolved is None:
        raise InvalidRoleError(role)
    return resolved


def get_role_permissions(role: RoleLike) -> Optional[RolePermissions]:
    resolved = resolve_role(role)
    if resolved is None:
        if role is not None:
            logger.info("No permission profile for unknown role %r", role)
        return None
    return ROLE_PERMISSIONS.get(resolved)


def has_permission(role: RoleLike, permission_id: object) -> bool:
    profile = get_role_permissions(role)
    permission = _value(permission_id)
    if profile is None or permission is None:
        return False
    return permission in profile.permissions


def has_menu_access(role: RoleLike, menu_id: object) -> bool:
    profile = get_role_permissions(role)
    menu = _value(menu_id)
    if profile is None or menu is None:
        return False
    return menu in profile.menu_access


def normalize_flag_name(flag_name: object) -> Optional[str]:
    """Map ``canAssignTenants`` or ``can_assign_tenants`` to the attribute name."""
    name = _value(flag_name)
    if name is None:
        return None
    name = DATA_ACCESS_ALIASES.get(name, name)
    return name if name in DATA_ACCESS_FLAGS else None


def can_access_feature(role: RoleLike, flag_name: object) -> bool:
    profile = get_role_permissions(role)
    if profile is None:
        return False
    attribute = normalize_flag_name(flag_name)
    if attribute is None:
        logger.warning("Unknown data-access flag %r requested", flag_name)
        return False
    return bool(getattr(profile.data_access, attribute))


def get_permissions_by_category(category: Union[PermissionCategory, str]) -> FrozenSet[Permission]:
    """Catalog entries in ``category``; empty for a category with no entries."""
    value = _value(category)
    return frozenset(permission for permission in PERMISSIONS.values() if permission.category.value == value)


def get_navigation(role: RoleLike) -> Tuple[NavigationItem, ...]:
    """Sidebar entries the role may open, in display order."""
    profile = get_role_permissions(role)
    if profile is None:
        return ()
    return tuple(item for item in NAVIGATION_ITEMS if item.section.value in profile.menu_access)


def validate_role_table(
    catalog: Mapping[str, Permission] = PERMISSIONS,
    role_table: Mapping[UserRole, RolePermissions] = ROLE_PERMISSIONS,
) -> List[str]:
    """Return every inconsistency between ``role_table`` and ``catalog``."""
    issues: List[str] = []

    for key, permission in catalog.items():
        if key != permission.id:
            issues.append(f"catalog key {key!r} does not match permission id {permission.id!r}")

    granted: set = set()
    for role in UserRole:
        profile = role_table.get(role)
        if profile is None:
            issues.append(f"role {role.value!r} has no permission profile")
            continue
        if profile.role != role:
            issues.append(f"profile stored under {role.value!r} declares role {profile.role!r}")
        for permission_id in sorted(profile.permissions - set(catalog)):
            issues.append(f"role {role.value!r} grants unknown permission {permission_id!r}")
        for menu_id in sorted(profile.menu_access - _MENU_SECTIONS):
            issues.append(f"role {role.value!r} lists unknown menu section {menu_id!r}")
        granted |= profile.permissions

    for permission_id in sorted(set(catalog) - granted):
        issues.append(f"permission {permission_id!r} is not granted to any role")

    return issues


def ensure_valid_role_table(
    catalog: Mapping[str, Permission] = PERMISSIONS,
    role_table: Mapping[UserRole, RolePermissions] = ROLE_PERMISSIONS,
) -> None:
    issues = validate_role_table(catalog, role_table)
    if issues:
        for issue in issues:
            logger.error("Role table: %s", issue)
        raise RoleTableError(issues)


@dataclass(frozen=True)
class RoleContext:
    """Permission helpers bound to one caller's role, which may be missing."""

    role: Optional[UserRole]
    profile: Optional[RolePermissions]

    @classmethod
    def for_role(cls, role: RoleLike) -> "RoleContext":
        resolved = resolve_role(role)
        return cls(role=resolved, profile=ROLE_PERMISSIONS.get(resolved) if resolved else None)

    @property
    def is_landlord(self) -> bool:
        return self.role is UserRole.LANDLORD

    @property
    def is_caretaker(self) -> bool:
        return self.role is UserRole.CARETAKER

    @property
    def is_tenant(self) -> bool:
        return self.role is UserRole.TENANT

    @property
    def can_view_all_tenants(self) -> bool:
        return self.can_access_feature("can_view_all_tenants")

    @property
    def can_view_all_payments(self) -> bool:
        return self.can_access_feature("can_view_all_payments")

    @property
    def can_view_reports(self) -> bool:
        return self.can_access_feature("can_view_reports")

    @property
    def can_manage_properties(self) -> bool:
        return self.can_access_feature("can_manage_properties")

    @property
    def can_manage_settings(self) -> bool:
        return self.can_access_feature("can_manage_settings")

    @property
    def can_assign_tenants(self) -> bool:
        return self.can_access_feature("can_assign_tenants")

    def has_permission(self, permission_id: object) -> bool:
        return has_permission(self.role, permission_id)

    def has_menu_access(self, menu_id: object) -> bool:
        return has_menu_access(self.role, menu_id)

    def can_access_feature(self, flag_name: object) -> bool:
        return can_access_feature(self.role, flag_name)

    def navigation(self) -> Tuple[NavigationItem, ...]:
        return get_navigation(self.role)


ensure_valid_role_table()
