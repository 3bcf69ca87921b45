"""
服务层模块 - 提供业务逻辑实现
"""

from .base import (
    BaseService,
    ServiceException,
    ConfigError,
    RemoteError,
    SheetShapeError,
    PreferenceStoreError,
)

__all__ = [
    "BaseService",
    "ServiceException",
    "ConfigError",
    "RemoteError",
    "SheetShapeError",
    "PreferenceStoreError",
]
