from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..auth.jwt import require_permission
from ..auth.permissions import get_role_permissions
from ..constants import PermissionId, UserRole
from ..schemas.schemas import RolePermissionsRead

router = APIRouter()

require_user_admin = require_permission(PermissionId.SETTINGS_USERS)


@router.get("", response_model=List[RolePermissionsRead], dependencies=[Depends(require_user_admin)])
def list_roles() -> List[RolePermissionsRead]:
    return [RolePermissionsRead.from_profile(get_role_permissions(role)) for role in UserRole]


@router.get("/{role_name}", response_model=RolePermissionsRead, dependencies=[Depends(require_user_admin)])
def read_role(role_name: str) -> RolePermissionsRead:
    profile = get_role_permissions(role_name)
    if profile is None:
        raise HTTPException(status_code=404, detail="Role not found")
    return RolePermissionsRead.from_profile(profile)
