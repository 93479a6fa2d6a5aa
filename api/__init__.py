"""API module containing endpoint routers."""
from api.sitters import router as sitters_router
from api.search import router as search_router
from api.owners import router as owners_router
from api.restaurants import router as restaurants_router
from api.mapbox import router as mapbox_router

__all__ = [
    "sitters_router",
    "search_router",
    "owners_router",
    "restaurants_router",
    "mapbox_router"
]
