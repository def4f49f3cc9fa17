"""Exception handlers for the FastAPI app."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from admin_permissions.services.authorization import PermissionDeniedError
from admin_permissions.services.catalog import UnknownModuleError
from admin_permissions.services.selection import SelectionNotFoundError


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SelectionNotFoundError)
    async def selection_not_found_handler(request: Request, exc: SelectionNotFoundError) -> JSONResponse:  # noqa: WPS430
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(UnknownModuleError)
    async def unknown_module_handler(request: Request, exc: UnknownModuleError) -> JSONResponse:  # noqa: WPS430
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(PermissionDeniedError)
    async def permission_denied_handler(request: Request, exc: PermissionDeniedError) -> JSONResponse:  # noqa: WPS430
        return JSONResponse(
            status_code=403,
            content={"detail": str(exc), "required": list(exc.required), "mode": exc.mode.value},
        )
