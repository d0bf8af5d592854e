import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from ..auth.jwt import create_access_token, get_current_role, get_role_context
from ..auth.permissions import (
    RoleContext,
    can_access_feature,
    get_navigation,
    get_role_permissions,
    has_menu_access,
    has_permission,
)
from ..config import settings
from ..constants import UserRole
from ..schemas.schemas import (
    AccessDecision,
    CurrentRoleRead,
    NavigationItemRead,
    RolePermissionsRead,
    SessionCreate,
    SessionRead,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _default_subject(role: UserRole) -> str:
    return f"test-{role.value}-user"


@router.post("/session", response_model=SessionRead, status_code=201)
def create_session(payload: SessionCreate, response: Response) -> SessionRead:
    """Issue a session for any role. Only available when role switching is enabled."""
    if not settings.allow_role_switching:
        raise HTTPException(status_code=404, detail="Role switching is disabled.")

    subject: Optional[str] = payload.subject or _default_subject(payload.role)
    token = create_access_token(subject, payload.role)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    logger.info("Issued %s session for %s", payload.role.value, subject)
    return SessionRead(access_token=token, role=payload.role)


@router.post("/logout", status_code=204)
def logout(response: Response) -> Response:
    response.delete_cookie(settings.session_cookie_name)
    response.status_code = 204
    return response


@router.get("/me", response_model=CurrentRoleRead)
def read_current_role(role: UserRole = Depends(get_current_role)) -> CurrentRoleRead:
    context = RoleContext.for_role(role)
    return CurrentRoleRead(
        role=role,
        is_landlord=context.is_landlord,
        is_caretaker=context.is_caretaker,
        is_tenant=context.is_tenant,
        profile=RolePermissionsRead.from_profile(get_role_permissions(role)),
        navigation=[NavigationItemRead.from_item(item) for item in get_navigation(role)],
    )


@router.get("/navigation", response_model=list[NavigationItemRead])
def read_navigation(context: RoleContext = Depends(get_role_context)) -> list[NavigationItemRead]:
    # Anonymous callers get an empty menu rather than an error.
    return [NavigationItemRead.from_item(item) for item in context.navigation()]


@router.get("/check/permission/{permission_id}", response_model=AccessDecision)
def check_permission(permission_id: str, role: UserRole = Depends(get_current_role)) -> AccessDecision:
    return AccessDecision(role=role, target=permission_id, allowed=has_permission(role, permission_id))


@router.get("/check/menu/{menu_id}", response_model=AccessDecision)
def check_menu(menu_id: str, role: UserRole = Depends(get_current_role)) -> AccessDecision:
    return AccessDecision(role=role, target=menu_id, allowed=has_menu_access(role, menu_id))


@router.get("/check/feature/{flag_name}", response_model=AccessDecision)
def check_feature(flag_name: str, role: UserRole = Depends(get_current_role)) -> AccessDecision:
    return AccessDecision(role=role, target=flag_name, allowed=can_access_feature(role, flag_name))
