from typing import List, Optional

from fastapi import APIRouter, Depends

from ..auth.jwt import require_permission
from ..auth.permissions import get_permissions_by_category
from ..constants import PERMISSIONS, PermissionId
from ..schemas.schemas import PermissionRead, permission_to_read

router = APIRouter()

require_settings_view = require_permission(PermissionId.SETTINGS_VIEW)


@router.get("", response_model=List[PermissionRead], dependencies=[Depends(require_settings_view)])
def list_permissions(category: Optional[str] = None) -> List[PermissionRead]:
    """Catalog entries for the settings screen, grouped by ``category`` when given."""
    if category is None:
        permissions = PERMISSIONS.values()
    else:
        permissions = get_permissions_by_category(category)
    return [permission_to_read(permission) for permission in sorted(permissions, key=lambda p: p.id)]
