import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from app.core.config import settings
from app.services.base import RemoteError


class SheetsClient:
	"""
	最小实现：Sheets v4 values 读取 + values:append 追加，API Key 鉴权。
	非 2xx 响应与无法解析的读取响应体统一抛出 RemoteError。
	"""

	def __init__(
		self,
		base_url: Optional[str] = None,
		timeout_seconds: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self._logger = logging.getLogger("shl.sheets")
		self.base_url = (base_url or settings.sheets.base_url).rstrip("/")
		self.timeout_seconds = timeout_seconds or settings.sheets.timeout_seconds
		self._transport = transport
		self._client: Optional[httpx.AsyncClient] = None

	def _get_client(self) -> httpx.AsyncClient:
		if self._client is None:
			self._client = httpx.AsyncClient(
				timeout=self.timeout_seconds,
				headers={"Accept": "application/json"},
				transport=self._transport,
			)
		return self._client

	def _values_url(self, spreadsheet_id: str, range_a1: str, suffix: str = "") -> str:
		# URL 中的 range 需要进行 path 安全编码，但保留 '!' 和 ':'
		encoded_range = quote(range_a1, safe="!:")
		return f"{self.base_url}/{quote(spreadsheet_id, safe='')}/values/{encoded_range}{suffix}"

	# ---------- values.get：读取指定范围的值 ----------
	async def read_range_values(
		self,
		spreadsheet_id: str,
		range_a1: str,
		api_key: str,
	) -> List[List[Any]]:
		url = self._values_url(spreadsheet_id, range_a1)
		self._logger.debug(f"读取表格范围数据: spreadsheet_id={spreadsheet_id}, range={range_a1}")

		response = await self._send("GET", url, params={"key": api_key})
		body = self._parse_body(response, "values get")

		values = body.get("values")
		if values is None:
			return []
		if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
			self._logger.error(f"values 字段结构异常: {type(values).__name__}")
			raise RemoteError(
				"values get failed: response 'values' is not a 2-D array",
				code="MALFORMED_BODY",
				details={"status_code": response.status_code},
			)

		self._logger.debug(f"成功获取表格数据，行数: {len(values)}")
		return values

	# ---------- values.append：在范围末尾插入一行或多行 ----------
	async def append_range_values(
		self,
		spreadsheet_id: str,
		range_a1: str,
		rows: List[List[str]],
		api_key: str,
	) -> Dict[str, Any]:
		url = self._values_url(spreadsheet_id, range_a1, suffix=":append")
		params = {
			"valueInputOption": "USER_ENTERED",
			"insertDataOption": "INSERT_ROWS",
			"key": api_key,
		}
		self._logger.debug(f"追加表格数据: spreadsheet_id={spreadsheet_id}, range={range_a1}, rows={len(rows)}")

		response = await self._send("POST", url, params=params, json={"values": rows})
		# 2xx 表示已写入，响应体格式不影响结果
		try:
			body = response.json() if response.content else {}
		except ValueError:
			body = None
		if not isinstance(body, dict):
			self._logger.warning(f"append 响应体无法解析: status={response.status_code}, 原始内容: {response.text[:200]}")
			return {}
		return body

	async def close(self) -> None:
		if self._client is not None:
			await self._client.aclose()
			self._client = None

	async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
		client = self._get_client()
		try:
			response = await client.request(method, url, **kwargs)
		except httpx.HTTPError as ex:
			self._logger.error(f"Sheets API 请求失败: {method} {url}: {ex}")
			raise RemoteError(
				f"Sheets API request failed: {ex}",
				code="REQUEST_FAILED",
				details={"status_code": None},
			) from ex

		if response.is_success:
			return response

		payload = self._error_payload(response)
		detail = payload.get("message") if isinstance(payload, dict) else None
		message = f"Sheets API request failed: status={response.status_code}"
		if detail:
			message += f", detail={detail}"
		self._logger.error(
			f"Sheets API 错误: {method} {url}, status={response.status_code}, resp: \n"
			f"{json.dumps(payload, indent=4, ensure_ascii=False)}"
		)
		raise RemoteError(
			message,
			code=str(response.status_code),
			details={"status_code": response.status_code, "error": payload},
		)

	@staticmethod
	def _error_payload(response: httpx.Response) -> Any:
		"""取出 Google 错误体 {"error": {...}}，无法解析时退化为原始文本"""
		try:
			body = response.json()
		except ValueError:
			return {"message": response.text} if response.text else {}
		if isinstance(body, dict) and isinstance(body.get("error"), dict):
			return body["error"]
		return body

	def _parse_body(self, response: httpx.Response, action: str) -> Dict[str, Any]:
		try:
			body = response.json()
		except ValueError as ex:
			self._logger.error(f"解析响应体失败: {ex}, 原始内容: {response.text[:200]}")
			raise RemoteError(
				f"{action} failed: invalid json body: {ex}",
				code="MALFORMED_BODY",
				details={"status_code": response.status_code},
			) from ex
		if not isinstance(body, dict):
			raise RemoteError(
				f"{action} failed: expected a JSON object, got {type(body).__name__}",
				code="MALFORMED_BODY",
				details={"status_code": response.status_code},
			)
		return body
