from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants import MenuSection, NavigationItem, Permission, PermissionCategory, RolePermissions, UserRole


class PermissionRead(BaseModel):
    id: str
    name: str
    description: str
    category: PermissionCategory

    model_config = ConfigDict(from_attributes=True)


class DataAccessRead(BaseModel):
    can_view_all_tenants: bool
    can_view_all_payments: bool
    can_view_reports: bool
    can_manage_properties: bool
    can_manage_settings: bool
    can_assign_tenants: bool

    model_config = ConfigDict(from_attributes=True)


class NavigationItemRead(BaseModel):
    section: MenuSection
    label: str
    href: str

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_item(cls, item: NavigationItem) -> "NavigationItemRead":
        return cls.model_validate(item)


class RolePermissionsRead(BaseModel):
    role: UserRole
    display_name: str
    description: str
    permissions: List[str]
    menu_access: List[str]
    data_access: DataAccessRead

    @classmethod
    def from_profile(cls, profile: RolePermissions) -> "RolePermissionsRead":
        return cls(
            role=profile.role,
            display_name=profile.display_name,
            description=profile.description,
            permissions=sorted(profile.permissions),
            menu_access=sorted(profile.menu_access),
            data_access=DataAccessRead.model_validate(profile.data_access),
        )


class SessionCreate(BaseModel):
    role: UserRole
    subject: Optional[str] = Field(default=None, max_length=128)


class SessionRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: UserRole


class CurrentRoleRead(BaseModel):
    role: UserRole
    is_landlord: bool
    is_caretaker: bool
    is_tenant: bool
    profile: RolePermissionsRead
    navigation: List[NavigationItemRead] = []


class AccessDecision(BaseModel):
    role: UserRole
    target: str
    allowed: bool


def permission_to_read(permission: Permission) -> PermissionRead:
    return PermissionRead.model_validate(permission)
