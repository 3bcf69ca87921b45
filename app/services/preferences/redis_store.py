"""
Redis 键值存储 - 保存字符串偏好
"""
from typing import Optional
import asyncio
import redis.asyncio as redis
from app.services.base import BaseService, PreferenceStoreError
from app.core.config import settings


class RedisStore(BaseService):
    """Redis 字符串键值封装"""

    def __init__(self, redis_url: Optional[str] = None, redis_client: Optional[redis.Redis] = None):
        """
        初始化 Redis 存储

        Args:
            redis_url: Redis 连接 URL，不提供则从配置读取
            redis_client: 已创建的客户端（测试时可注入）
        """
        super().__init__("RedisStore")
        self.redis_url = redis_url or settings.redis.dsn
        self.redis_client: Optional[redis.Redis] = redis_client
        self._lock: Optional[asyncio.Lock] = None

    async def _ensure_connected(self) -> redis.Redis:
        """确保 Redis 连接"""
        if self.redis_client is None:
            # 锁只能在事件循环内创建
            if self._lock is None:
                self._lock = asyncio.Lock()
            async with self._lock:
                if self.redis_client is None:
                    client = None
                    try:
                        client = redis.from_url(
                            self.redis_url,
                            encoding="utf-8",
                            decode_responses=True
                        )
                        # 测试连接
                        await client.ping()
                        self.redis_client = client
                        self.log_info("Redis 连接成功")
                    except Exception as e:
                        self.log_error(f"Redis 连接失败: {e}")
                        if client is not None:
                            await client.aclose()
                        raise PreferenceStoreError(
                            f"无法连接到 Redis: {str(e)}",
                            code="REDIS_CONNECTION_ERROR"
                        ) from e
        return self.redis_client

    async def get(self, key: str) -> Optional[str]:
        """
        获取字符串值

        Args:
            key: 键

        Returns:
            值，不存在返回 None
        """
        client = await self._ensure_connected()
        try:
            value = await client.get(key)
        except Exception as e:
            self.log_error(f"读取失败: {key}", error=e)
            raise PreferenceStoreError(
                f"读取偏好失败: {str(e)}",
                code="STORE_GET_ERROR",
                details={"key": key}
            ) from e
        self.log_debug(f"读取 {key}: {'命中' if value is not None else '未命中'}")
        return value

    async def set(self, key: str, value: str) -> bool:
        """写入字符串值（不过期）"""
        client = await self._ensure_connected()
        try:
            result = await client.set(key, value)
        except Exception as e:
            self.log_error(f"写入失败: {key}", error=e)
            raise PreferenceStoreError(
                f"写入偏好失败: {str(e)}",
                code="STORE_SET_ERROR",
                details={"key": key}
            ) from e
        self.log_debug(f"写入成功: {key}")
        return bool(result)

    async def delete(self, key: str) -> bool:
        """删除键"""
        client = await self._ensure_connected()
        try:
            result = await client.delete(key)
        except Exception as e:
            self.log_error(f"删除失败: {key}", error=e)
            raise PreferenceStoreError(
                f"删除偏好失败: {str(e)}",
                code="STORE_DELETE_ERROR",
                details={"key": key}
            ) from e
        self.log_debug(f"删除 {key}, 结果={result}")
        return bool(result)

    async def close(self) -> None:
        """关闭 Redis 连接"""
        if self.redis_client:
            await self.redis_client.aclose()
            self.redis_client = None
            self.log_info("Redis 连接已关闭")
