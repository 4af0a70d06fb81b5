from notestore.web.routers.health import router as health_router
from notestore.web.routers.notes import router as notes_router

__all__ = [
    "health_router",
    "notes_router",
]
