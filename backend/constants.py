from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple


class UserRole(str, Enum):
    LANDLORD = "landlord"
    CARETAKER = "caretaker"
    TENANT = "tenant"


class PermissionCategory(str, Enum):
    DASHBOARD = "dashboard"
    PROPERTIES = "properties"
    TENANTS = "tenants"
    PAYMENTS = "payments"
    REPORTS = "reports"
    SETTINGS = "settings"
    NOTIFICATIONS = "notifications"


class PermissionId(str, Enum):
    DASHBOARD_VIEW = "dashboard.view"
    DASHBOARD_ANALYTICS = "dashboard.analytics"
    PROPERTIES_VIEW = "properties.view"
    PROPERTIES_MANAGE = "properties.manage"
    ROOMS_VIEW = "rooms.view"
    ROOMS_MANAGE = "rooms.manage"
    TENANTS_VIEW = "tenants.view"
    TENANTS_MANAGE = "tenants.manage"
    TENANTS_ASSIGN = "tenants.assign"
    TENANTS_CONTACT = "tenants.contact"
    PAYMENTS_VIEW = "payments.view"
    PAYMENTS_VIEW_ALL = "payments.view_all"
    PAYMENTS_MANAGE = "payments.manage"
    PAYMENTS_COLLECT = "payments.collect"
    REPORTS_VIEW = "reports.view"
    REPORTS_EXPORT = "reports.export"
    REPORTS_ANALYTICS = "reports.analytics"
    SETTINGS_VIEW = "settings.view"
    SETTINGS_MANAGE = "settings.manage"
    SETTINGS_USERS = "settings.users"
    NOTIFICATIONS_VIEW = "notifications.view"
    NOTIFICATIONS_SEND = "notifications.send"
    NOTIFICATIONS_MANAGE = "notifications.manage"


class MenuSection(str, Enum):
    DASHBOARD = "dashboard"
    ROOMS = "rooms"
    TENANTS = "tenants"
    PAYMENTS = "payments"
    REPORTS = "reports"
    NOTIFICATIONS = "notifications"
    SETTINGS = "settings"


@dataclass(frozen=True)
class Permission:
    id: str
    name: str
    description: str
    category: PermissionCategory


@dataclass(frozen=True)
class DataAccess:
    can_view_all_tenants: bool = False
    can_view_all_payments: bool = False
    can_view_reports: bool = False
    can_manage_properties: bool = False
    can_manage_settings: bool = False
    can_assign_tenants: bool = False


@dataclass(frozen=True)
class RolePermissions:
    role: UserRole
    display_name: str
    description: str
    permissions: FrozenSet[str]
    menu_access: FrozenSet[str]
    data_access: DataAccess


@dataclass(frozen=True)
class NavigationItem:
    section: MenuSection
    label: str
    href: str


# Flag names as the dashboard client spells them
DATA_ACCESS_ALIASES = MappingProxyType(
    {
        "canViewAllTenants": "can_view_all_tenants",
        "canViewAllPayments": "can_view_all_payments",
        "canViewReports": "can_view_reports",
        "canManageProperties": "can_manage_properties",
        "canManageSettings": "can_manage_settings",
        "canAssignTenants": "can_assign_tenants",
    }
)
DATA_ACCESS_FLAGS: FrozenSet[str] = frozenset(DATA_ACCESS_ALIASES.values())


def _permission(permission_id: PermissionId, name: str, description: str, category: PermissionCategory) -> Tuple[str, Permission]:
    return permission_id.value, Permission(
        id=permission_id.value,
        name=name,
        description=description,
        category=category,
    )


PERMISSIONS: Mapping[str, Permission] = MappingProxyType(
    dict(
        [
            _permission(PermissionId.DASHBOARD_VIEW, "View Dashboard", "Access to main dashboard overview", PermissionCategory.DASHBOARD),
            _permission(PermissionId.DASHBOARD_ANALYTICS, "View Analytics", "Access to detailed analytics and metrics", PermissionCategory.DASHBOARD),
            _permission(PermissionId.PROPERTIES_VIEW, "View Properties", "View property information", PermissionCategory.PROPERTIES),
            _permission(PermissionId.PROPERTIES_MANAGE, "Manage Properties", "Create, edit, and delete properties", PermissionCategory.PROPERTIES),
            _permission(PermissionId.ROOMS_VIEW, "View Room Matrix", "Access to room matrix and occupancy view", PermissionCategory.PROPERTIES),
            _permission(PermissionId.ROOMS_MANAGE, "Manage Rooms", "Edit room details and assignments", PermissionCategory.PROPERTIES),
            _permission(PermissionId.TENANTS_VIEW, "View Tenants", "View tenant information", PermissionCategory.TENANTS),
            _permission(PermissionId.TENANTS_MANAGE, "Manage Tenants", "Create, edit, and delete tenant records", PermissionCategory.TENANTS),
            _permission(PermissionId.TENANTS_ASSIGN, "Assign Tenants", "Assign tenants to rooms", PermissionCategory.TENANTS),
            _permission(PermissionId.TENANTS_CONTACT, "Contact Tenants", "Send notifications to tenants", PermissionCategory.TENANTS),
            _permission(PermissionId.PAYMENTS_VIEW, "View Payments", "View payment records", PermissionCategory.PAYMENTS),
            _permission(PermissionId.PAYMENTS_VIEW_ALL, "View All Payments", "View all tenant payments", PermissionCategory.PAYMENTS),
            _permission(PermissionId.PAYMENTS_MANAGE, "Manage Payments", "Process and manage payments", PermissionCategory.PAYMENTS),
            _permission(PermissionId.PAYMENTS_COLLECT, "Collect Payments", "Initiate payment collection", PermissionCategory.PAYMENTS),
            _permission(PermissionId.REPORTS_VIEW, "View Reports", "Access to financial and occupancy reports", PermissionCategory.REPORTS),
            _permission(PermissionId.REPORTS_EXPORT, "Export Reports", "Export reports to files", PermissionCategory.REPORTS),
            _permission(PermissionId.REPORTS_ANALYTICS, "Advanced Analytics", "Access to detailed analytics and insights", PermissionCategory.REPORTS),
            _permission(PermissionId.SETTINGS_VIEW, "View Settings", "View system settings", PermissionCategory.SETTINGS),
            _permission(PermissionId.SETTINGS_MANAGE, "Manage Settings", "Modify system settings", PermissionCategory.SETTINGS),
            _permission(PermissionId.SETTINGS_USERS, "Manage Users", "Manage user accounts and roles", PermissionCategory.SETTINGS),
            _permission(PermissionId.NOTIFICATIONS_VIEW, "View Notifications", "View system notifications", PermissionCategory.NOTIFICATIONS),
            _permission(PermissionId.NOTIFICATIONS_SEND, "Send Notifications", "Send notifications to tenants", PermissionCategory.NOTIFICATIONS),
            _permission(PermissionId.NOTIFICATIONS_MANAGE, "Manage Notifications", "Configure notification settings", PermissionCategory.NOTIFICATIONS),
        ]
    )
)


def _ids(*members: Enum) -> FrozenSet[str]:
    return frozenset(member.value for member in members)


# Each role is enumerated in full; roles never inherit from one another.
ROLE_PERMISSIONS: Mapping[UserRole, RolePermissions] = MappingProxyType(
    {
        UserRole.LANDLORD: RolePermissions(
            role=UserRole.LANDLORD,
            display_name="Landlord/Admin",
            description="Full system access with complete property management control",
            permissions=_ids(
                PermissionId.DASHBOARD_VIEW,
                PermissionId.DASHBOARD_ANALYTICS,
                PermissionId.PROPERTIES_VIEW,
                PermissionId.PROPERTIES_MANAGE,
                PermissionId.ROOMS_VIEW,
                PermissionId.ROOMS_MANAGE,
                PermissionId.TENANTS_VIEW,
                PermissionId.TENANTS_MANAGE,
                PermissionId.TENANTS_ASSIGN,
                PermissionId.TENANTS_CONTACT,
                PermissionId.PAYMENTS_VIEW,
                PermissionId.PAYMENTS_VIEW_ALL,
                PermissionId.PAYMENTS_MANAGE,
                PermissionId.PAYMENTS_COLLECT,
                PermissionId.REPORTS_VIEW,
                PermissionId.REPORTS_EXPORT,
                PermissionId.REPORTS_ANALYTICS,
                PermissionId.SETTINGS_VIEW,
                PermissionId.SETTINGS_MANAGE,
                PermissionId.SETTINGS_USERS,
                PermissionId.NOTIFICATIONS_VIEW,
                PermissionId.NOTIFICATIONS_SEND,
                PermissionId.NOTIFICATIONS_MANAGE,
            ),
            menu_access=_ids(
                MenuSection.DASHBOARD,
                MenuSection.ROOMS,
                MenuSection.TENANTS,
                MenuSection.PAYMENTS,
                MenuSection.REPORTS,
                MenuSection.NOTIFICATIONS,
                MenuSection.SETTINGS,
            ),
            data_access=DataAccess(
                can_view_all_tenants=True,
                can_view_all_payments=True,
                can_view_reports=True,
                can_manage_properties=True,
                can_manage_settings=True,
                can_assign_tenants=True,
            ),
        ),
        UserRole.CARETAKER: RolePermissions(
            role=UserRole.CARETAKER,
            display_name="Caretaker",
            description="Property maintenance and tenant management with limited financial access",
            permissions=_ids(
                PermissionId.DASHBOARD_VIEW,
                PermissionId.PROPERTIES_VIEW,
                PermissionId.ROOMS_VIEW,
                PermissionId.ROOMS_MANAGE,
                PermissionId.TENANTS_VIEW,
                PermissionId.TENANTS_MANAGE,
                PermissionId.TENANTS_ASSIGN,
                PermissionId.TENANTS_CONTACT,
                PermissionId.PAYMENTS_VIEW,
                PermissionId.PAYMENTS_COLLECT,
                PermissionId.SETTINGS_VIEW,
                PermissionId.NOTIFICATIONS_VIEW,
                PermissionId.NOTIFICATIONS_SEND,
            ),
            menu_access=_ids(
                MenuSection.DASHBOARD,
                MenuSection.ROOMS,
                MenuSection.TENANTS,
                MenuSection.PAYMENTS,
                MenuSection.NOTIFICATIONS,
                MenuSection.SETTINGS,
            ),
            data_access=DataAccess(
                can_view_all_tenants=True,
                can_assign_tenants=True,
            ),
        ),
        UserRole.TENANT: RolePermissions(
            role=UserRole.TENANT,
            display_name="Tenant",
            description="Personal account access with payment history and room details",
            permissions=_ids(
                PermissionId.DASHBOARD_VIEW,
                PermissionId.PAYMENTS_VIEW,
                PermissionId.NOTIFICATIONS_VIEW,
            ),
            menu_access=_ids(
                MenuSection.DASHBOARD,
                MenuSection.PAYMENTS,
                MenuSection.NOTIFICATIONS,
            ),
            data_access=DataAccess(),
        ),
    }
)

# Sidebar order
NAVIGATION_ITEMS: Tuple[NavigationItem, ...] = (
    NavigationItem(MenuSection.DASHBOARD, "Dashboard", "/dashboard"),
    NavigationItem(MenuSection.ROOMS, "Room Matrix", "/rooms"),
    NavigationItem(MenuSection.TENANTS, "Tenants", "/tenants"),
    NavigationItem(MenuSection.PAYMENTS, "Payments", "/payments"),
    NavigationItem(MenuSection.REPORTS, "Reports", "/reports"),
    NavigationItem(MenuSection.NOTIFICATIONS, "Notifications", "/notifications"),
    NavigationItem(MenuSection.SETTINGS, "Settings", "/settings"),
)

SESSION_COOKIE_NAME = "rf.session"

CORS_ALLOW_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:5000",
]
