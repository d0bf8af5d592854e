import logging
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class InvalidRoleError(ValueError):
    """Raised when a value is not one of the recognised user roles."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown role: {value!r}")


class RoleTableError(RuntimeError):
    """The static role tables are inconsistent with the permission catalog."""

    def __init__(self, issues: List[str]) -> None:
        self.issues = list(issues)
        super().__init__("Role table is invalid: " + "; ".join(self.issues))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore[override]
        return JSONResponse(
            status_code=422,
            content={
                "detail": "Validation failed.",
                "errors": jsonable_encoder(exc.errors()),
                "path": str(request.url),
            },
        )

    @app.exception_handler(InvalidRoleError)
    async def invalid_role_handler(request: Request, exc: InvalidRoleError) -> JSONResponse:  # type: ignore[override]
        logger.warning("Rejected request with unknown role %r on %s", exc.value, request.url.path)
        return JSONResponse(
            status_code=403,
            content={
                "detail": "Operation not permitted for your role",
                "path": str(request.url),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore[override]
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error.",
                "path": str(request.url),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # type: ignore[override]
        payload: Dict[str, Any] = {"detail": exc.detail or "HTTP error.", "path": str(request.url)}
        if exc.headers:
            payload["headers"] = exc.headers
        return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)
