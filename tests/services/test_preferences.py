import pytest

from app.services.base import PreferenceStoreError
from app.services.preferences import PreferenceKeys, PreferenceService, RedisStore


def test_sheet_id_key():
    assert PreferenceKeys.sheet_id_key() == "shl:pref:sheet_id:default"
    assert PreferenceKeys.sheet_id_key("  ") == "shl:pref:sheet_id:default"
    assert PreferenceKeys.sheet_id_key("browser-1") == "shl:pref:sheet_id:browser-1"


@pytest.mark.asyncio
async def test_set_and_get_sheet_id(fake_redis):
    prefs = PreferenceService(RedisStore(redis_client=fake_redis))

    assert await prefs.get_sheet_id() is None
    assert await prefs.set_sheet_id("  1abcXYZ ") == "1abcXYZ"
    assert await prefs.get_sheet_id() == "1abcXYZ"
    assert fake_redis.data == {"shl:pref:sheet_id:default": "1abcXYZ"}


@pytest.mark.asyncio
async def test_preferences_are_scoped_by_owner(fake_redis):
    prefs = PreferenceService(RedisStore(redis_client=fake_redis))
    await prefs.set_sheet_id("one", owner="a")
    await prefs.set_sheet_id("two", owner="b")

    assert await prefs.get_sheet_id("a") == "one"
    assert await prefs.get_sheet_id("b") == "two"
    assert await prefs.get_sheet_id() is None


@pytest.mark.asyncio
async def test_blank_sheet_id_clears_preference(fake_redis):
    prefs = PreferenceService(RedisStore(redis_client=fake_redis))
    await prefs.set_sheet_id("1abcXYZ")

    assert await prefs.set_sheet_id("") is None
    assert await prefs.get_sheet_id() is None
    assert fake_redis.data == {}


@pytest.mark.asyncio
async def test_store_failure_raises_preference_error(fake_redis):
    async def broken_get(key):
        raise ConnectionError("redis down")

    fake_redis.get = broken_get
    prefs = PreferenceService(RedisStore(redis_client=fake_redis))

    with pytest.raises(PreferenceStoreError) as exc_info:
        await prefs.get_sheet_id()
    assert exc_info.value.code == "STORE_GET_ERROR"


@pytest.mark.asyncio
async def test_close_releases_client(fake_redis):
    store = RedisStore(redis_client=fake_redis)
    await store.close()
    assert fake_redis.closed
    assert store.redis_client is None


class _UnreachableRedis:
    def __init__(self):
        self.closed = False

    async def ping(self):
        raise ConnectionError("Connection refused")

    async def aclose(self):
        self.closed = True


@pytest.mark.asyncio
async def test_failed_connect_closes_client(monkeypatch):
    import app.services.preferences.redis_store as redis_store

    created = []

    def from_url(url, **kwargs):
        created.append(_UnreachableRedis())
        return created[-1]

    monkeypatch.setattr(redis_store.redis, "from_url", from_url)
    store = RedisStore(redis_url="redis://127.0.0.1:6379/0")

    for _ in range(2):
        with pytest.raises(PreferenceStoreError) as exc_info:
            await store.get("shl:pref:sheet_id:default")
        assert exc_info.value.code == "REDIS_CONNECTION_ERROR"

    assert len(created) == 2
    assert all(c.closed for c in created)
    assert store.redis_client is None
