from fastapi import APIRouter

from .routes import cron, health

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(cron.router, tags=["cron"])
