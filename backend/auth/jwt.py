import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from ..config import settings
from ..constants import PERMISSIONS, MenuSection, UserRole
from ..core.request_context import bind_role, log_context
from .permissions import (
    RoleContext,
    RoleLike,
    can_access_feature,
    has_menu_access,
    has_permission,
    normalize_flag_name,
    parse_role,
    resolve_role,
)

logger = logging.getLogger(__name__)

session_bearer = HTTPBearer(auto_error=False)

FORBIDDEN_DETAIL = "Operation not permitted for your role"


def create_access_token(subject: str, role: RoleLike, expires_minutes: Optional[int] = None) -> str:
    resolved = parse_role(role)
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {"sub": subject, "role": resolved.value, "type": "access", "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require_exp": True},
    )


def _session_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


def _role_claim(token: str) -> Optional[str]:
    try:
        payload = decode_token(token)
    except JWTError:
        return None
    if payload.get("sub") is None or payload.get("type") not in (None, "access"):
        return None
    return payload.get("role")


def get_current_role(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(session_bearer),
) -> UserRole:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    token = _session_token(request, credentials)
    if not token:
        raise credentials_exception
    claim = _role_claim(token)
    if claim is None:
        raise credentials_exception

    role = parse_role(claim)
    bind_role(request, role)
    return role


def get_optional_role(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(session_bearer),
) -> Optional[UserRole]:
    token = _session_token(request, credentials)
    if not token:
        return None
    role = resolve_role(_role_claim(token))
    bind_role(request, role)
    return role


def get_role_context(role: Optional[UserRole] = Depends(get_optional_role)) -> RoleContext:
    return RoleContext.for_role(role)


def _deny(request: Request, check: str, target: str) -> HTTPException:
    logger.warning("Authorization denied: %s %s", check, target, extra=log_context(request))
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_DETAIL)


def require_permission(permission_id: str):
    permission = getattr(permission_id, "value", permission_id)
    if permission not in PERMISSIONS:
        raise ValueError(f"Unknown permission id: {permission_id!r}")

    def permission_checker(request: Request, role: UserRole = Depends(get_current_role)) -> UserRole:
        if has_permission(role, permission):
            return role
        raise _deny(request, "permission", permission)

    return permission_checker


def require_menu_access(menu_id: str):
    menu = MenuSection(getattr(menu_id, "value", menu_id)).value

    def menu_checker(request: Request, role: UserRole = Depends(get_current_role)) -> UserRole:
        if has_menu_access(role, menu):
            return role
        raise _deny(request, "menu", menu)

    return menu_checker


def require_feature(flag_name: str):
    flag = normalize_flag_name(flag_name)
    if flag is None:
        raise ValueError(f"Unknown data-access flag: {flag_name!r}")

    def feature_checker(request: Request, role: UserRole = Depends(get_current_role)) -> UserRole:
        if can_access_feature(role, flag):
            return role
        raise _deny(request, "feature", flag)

    return feature_checker


def require_roles(*allowed_roles: RoleLike):
    allowed = {parse_role(role) for role in allowed_roles}

    def role_checker(request: Request, role: UserRole = Depends(get_current_role)) -> UserRole:
        if not allowed or role in allowed:
            return role
        raise _deny(request, "role", ",".join(sorted(r.value for r in allowed)))

    return role_checker
