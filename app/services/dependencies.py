"""
服务依赖注入模块
"""
import logging
from typing import Annotated, Optional
from fastapi import Depends, Header, Query
from app.core.config import settings
from app.dependencies import SheetsClientDep
from app.services.base import PreferenceStoreError
from app.services.preferences import PreferenceService, RedisStore
from app.services.sheets import SheetService, SheetSource

logger = logging.getLogger("app.services.dependencies")

# 全局服务实例
_redis_store = None


def get_redis_store() -> RedisStore:
    """获取 Redis 存储"""
    global _redis_store
    if _redis_store is None:
        _redis_store = RedisStore()
    return _redis_store


def get_preference_service(
    store: Annotated[RedisStore, Depends(get_redis_store)],
) -> PreferenceService:
    """获取偏好服务"""
    return PreferenceService(store)


def get_owner(x_client_id: Annotated[Optional[str], Header()] = None) -> Optional[str]:
    """偏好归属，来自 X-Client-Id 请求头"""
    return x_client_id


async def resolve_spreadsheet_id(
    spreadsheet_id: Annotated[Optional[str], Query(description="Google spreadsheet ID")] = None,
    owner: Annotated[Optional[str], Depends(get_owner)] = None,
    preferences: Annotated[PreferenceService, Depends(get_preference_service)] = None,
) -> Optional[str]:
    """按 请求参数 -> 已保存偏好 -> 全局配置 的顺序确定 spreadsheet ID"""
    if spreadsheet_id and spreadsheet_id.strip():
        return spreadsheet_id.strip()
    try:
        stored = await preferences.get_sheet_id(owner)
    except PreferenceStoreError as e:
        logger.warning(f"读取偏好失败，使用全局配置: {e}")
        stored = None
    return stored or settings.sheets.spreadsheet_id


def get_sheet_service(
    client: SheetsClientDep,
    spreadsheet_id: Annotated[Optional[str], Depends(resolve_spreadsheet_id)],
) -> SheetService:
    """获取 Sheet 服务"""
    source = SheetSource(
        spreadsheet_id=spreadsheet_id,
        api_key=settings.sheets.api_key,
        range=settings.sheets.range,
    )
    return SheetService(source, client)


# 类型别名，方便在端点中使用
RedisStoreDep = Annotated[RedisStore, Depends(get_redis_store)]
PreferenceServiceDep = Annotated[PreferenceService, Depends(get_preference_service)]
OwnerDep = Annotated[Optional[str], Depends(get_owner)]
SheetServiceDep = Annotated[SheetService, Depends(get_sheet_service)]
