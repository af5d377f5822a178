"""API route registrations."""

from interfaces.api.routes.backup_routes import router as backup_router
from interfaces.api.routes.migration_routes import router as migration_router

__all__ = ["backup_router", "migration_router"]
