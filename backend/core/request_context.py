import uuid
from typing import Any, Dict, Optional

from fastapi import Request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"


def assign_request_id(request: Request) -> str:
    request_id = request.headers.get(REQUEST_ID_HEADER) or request.headers.get(CORRELATION_ID_HEADER)
    if not request_id:
        request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    return request_id


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def bind_role(request: Request, role: Optional[str]) -> None:
    request.state.role = role


def log_context(request: Request) -> Dict[str, Any]:
    """Fields attached to authorization log records for this request."""
    role = getattr(request.state, "role", None)
    return {
        "request_id": get_request_id(request),
        "role": getattr(role, "value", role),
        "path": request.url.path,
    }
