"""
偏好服务：记住用户最近选择的 spreadsheet ID
"""
from typing import Optional

from app.services.base import BaseService
from .keys import PreferenceKeys
from .redis_store import RedisStore


class PreferenceService(BaseService):
    """读写单个字符串偏好（当前 spreadsheet ID）"""

    def __init__(self, store: RedisStore) -> None:
        super().__init__("PreferenceService")
        self.store = store

    async def get_sheet_id(self, owner: str = None) -> Optional[str]:
        value = await self.store.get(PreferenceKeys.sheet_id_key(owner))
        return value or None

    async def set_sheet_id(self, sheet_id: Optional[str], owner: str = None) -> Optional[str]:
        """保存 spreadsheet ID；空值视为清除偏好。返回保存后的值"""
        key = PreferenceKeys.sheet_id_key(owner)
        value = (sheet_id or "").strip()
        if not value:
            await self.store.delete(key)
            self.log_info(f"清除偏好: {key}")
            return None
        await self.store.set(key, value)
        self.log_info(f"保存偏好: {key}")
        return value
