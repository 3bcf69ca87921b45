import json
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import httpx
import pytest

from app.clients.google_sheets import SheetsClient

BASE_URL = "https://sheets.test/v4/spreadsheets"


class FakeSheetsApi:
    """In-memory stand-in for the Sheets v4 values endpoints."""

    def __init__(self, values: Optional[List[List[Any]]] = None):
        self.values = values
        self.calls: List[httpx.Request] = []
        self.fail_status: Optional[int] = None
        self.fail_body: Any = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.fail_status is not None:
            if isinstance(self.fail_body, (dict, list)):
                return httpx.Response(self.fail_status, json=self.fail_body)
            return httpx.Response(self.fail_status, text=self.fail_body or "")

        path = unquote(request.url.path)
        if request.method == "GET":
            body: Dict[str, Any] = {"range": "Sheet1!A1:Z1000", "majorDimension": "ROWS"}
            if self.values:
                body["values"] = self.values
            return httpx.Response(200, json=body)

        if request.method == "POST" and path.endswith(":append"):
            rows = json.loads(request.content)["values"]
            self.values = (self.values or []) + rows
            return httpx.Response(200, json={"updates": {"updatedRows": len(rows)}})

        return httpx.Response(404, json={"error": {"code": 404, "message": "not found"}})

    @property
    def posts(self) -> List[httpx.Request]:
        return [r for r in self.calls if r.method == "POST"]

    def client(self) -> SheetsClient:
        return SheetsClient(base_url=BASE_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_api():
    return FakeSheetsApi([["Title", "Status"], ["A", "Open"]])


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the preference store."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value
        return True

    async def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_redis():
    return FakeRedis()
