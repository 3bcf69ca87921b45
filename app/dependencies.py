"""
依赖注入模块 - 提供全局客户端依赖
"""
from typing import Annotated
from fastapi import Depends, Request
from app.clients.google_sheets import SheetsClient


def get_sheets_client(request: Request) -> SheetsClient:
	"""获取全局 Sheets client"""
	return request.app.state.sheets_client


# 类型别名，方便在端点中使用
SheetsClientDep = Annotated[SheetsClient, Depends(get_sheets_client)]
