# API endpoints and routers

from .trips_endpoints import router as trips_router
from .admin_endpoints import router as admin_router
from .health_endpoints import router as health_router

__all__ = [
    "trips_router",
    "admin_router",
    "health_router",
]
