"""Root API router that aggregates all endpoint modules."""
from fastapi import APIRouter

from research_node.api.routes import auth, health, items, loader, metrics, sort

api_router = APIRouter()
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(items.router, tags=["items"])
api_router.include_router(sort.router, tags=["sort"])
api_router.include_router(metrics.router, tags=["metrics"])
api_router.include_router(health.router, tags=["health"])
api_router.include_router(loader.router)
