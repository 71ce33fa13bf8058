from fastapi import APIRouter

from zipmod_dedup.routers.conflicts import router as conflicts_router
from zipmod_dedup.routers.mods import router as mods_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(conflicts_router)
api_router.include_router(mods_router)
