"""API Routes for WasteLink."""

from wastelink.infrastructure.api.routes.recycler_router import router as recycler_router

__all__ = [
    "recycler_router",
]
