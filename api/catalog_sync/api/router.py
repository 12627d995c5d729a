"""
Routers de la API.

- `root_router`: /health y /sync (sin prefijo)
- `api_router`: /api/products
"""
from fastapi import APIRouter

from catalog_sync.api.endpoints import health, products, sync


root_router = APIRouter()
root_router.include_router(health.router)
root_router.include_router(sync.router)

api_router = APIRouter(prefix="/api")
api_router.include_router(products.router)
