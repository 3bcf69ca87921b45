from fastapi import APIRouter

from .endpoints import health, sheets, preferences

api_v1_router = APIRouter()
api_v1_router.include_router(health.router, tags=["健康检查"])
api_v1_router.include_router(sheets.router, prefix="/sheets", tags=["表格数据"])
api_v1_router.include_router(preferences.router, prefix="/preferences", tags=["偏好"])
