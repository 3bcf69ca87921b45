"""
偏好模块 - 基于 Redis 保存用户偏好
"""

from .redis_store import RedisStore
from .keys import PreferenceKeys
from .preference_service import PreferenceService

__all__ = [
    "RedisStore",
    "PreferenceKeys",
    "PreferenceService",
]
