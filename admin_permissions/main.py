"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from admin_permissions.api.error_handlers import register_exception_handlers
from admin_permissions.api.routers import get_api_router
from admin_permissions.core.config import AppSettings, get_settings
from admin_permissions.core.logging import configure_logging
from admin_permissions.services.authorization import get_held_permission_store
from admin_permissions.services.catalog import load_catalog
from admin_permissions.services.navigation import load_navigation

LOGGER = logging.getLogger("admin_permissions.main")


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: D401
    """Application lifespan context for startup/shutdown hooks."""

    held = get_held_permission_store().snapshot()
    LOGGER.info(
        "service_started",
        extra={"permissions": len(app.state.catalog), "held": len(held)},
    )
    yield


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Application factory.

    The permission catalog is loaded here so a malformed or cyclic
    configuration stops the service before it serves a request.
    """

    settings = settings or get_settings()
    configure_logging(settings)

    catalog = load_catalog(settings.resolved_catalog_path())
    navigation = load_navigation(settings.resolved_navigation_path(), catalog)

    app = FastAPI(
        title="Admin Permissions Core",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.navigation = navigation

    register_exception_handlers(app)
    app.include_router(get_api_router())
    return app


app = create_app()
