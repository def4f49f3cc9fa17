"""Permission catalog, dependency resolution and authorization for the admin dashboard."""


def __getattr__(name):
    """Lazy import so the pure permission modules load without FastAPI."""
    if name == "create_app":
        from .main import create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
