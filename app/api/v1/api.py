from fastapi import APIRouter

from app.api.v1.routes import sync

api_router = APIRouter()

api_router.include_router(sync.router)
