"""
表格数据 API 端点
"""
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, HTTPException, Query, Path
from pydantic import BaseModel, Field
from app.services.base import ConfigError, RemoteError, ServiceException, SheetShapeError
from app.services.dependencies import SheetServiceDep
from app.services.sheets import row_detail

router = APIRouter()


class RowsResponse(BaseModel):
    """表格列表响应"""
    columns: List[str]
    rows: List[Dict[str, str]]
    metadata: Dict[str, Any]


class RowField(BaseModel):
    column: str
    value: str


class RowDetailResponse(BaseModel):
    """单行详情响应"""
    index: int
    title: str
    fields: List[RowField]


class AppendRowRequest(BaseModel):
    """新行草稿：列名 -> 值"""
    values: Dict[str, Optional[str]] = Field(default_factory=dict)


class AppendRowResponse(BaseModel):
    success: bool
    message: str = ""


def _to_http_error(e: ServiceException) -> HTTPException:
    if isinstance(e, ConfigError):
        return HTTPException(status_code=400, detail=e.message)
    if isinstance(e, SheetShapeError):
        return HTTPException(status_code=409, detail=e.message)
    if isinstance(e, RemoteError):
        return HTTPException(status_code=502, detail=e.message)
    return HTTPException(status_code=500, detail=e.message)


@router.get("/rows", response_model=RowsResponse, summary="读取表格数据（分页）")
async def list_rows(
    offset: int = Query(0, description="偏移量，用于分页", ge=0),
    limit: int = Query(50, description="返回数据条数限制", ge=1, le=1000),
    sheet_service: SheetServiceDep = None,
) -> RowsResponse:
    try:
        snapshot = await sheet_service.fetch()
    except ServiceException as e:
        raise _to_http_error(e)

    total_count = snapshot.get_row_count()
    page = snapshot.rows[offset:offset + limit]
    return RowsResponse(
        columns=list(snapshot.columns),
        rows=[dict(row) for row in page],
        metadata={
            "spreadsheet_id": sheet_service.source.spreadsheet_id,
            "range": sheet_service.source.range,
            "offset": offset,
            "limit": limit,
            "returned_count": len(page),
            "total_count": total_count,
            "has_more": offset + limit < total_count,
        },
    )


@router.get("/rows/{index}", response_model=RowDetailResponse, summary="读取单行详情")
async def get_row(
    index: int = Path(..., description="行序号（从 0 开始，不含表头）", ge=0),
    sheet_service: SheetServiceDep = None,
) -> RowDetailResponse:
    try:
        snapshot = await sheet_service.fetch()
    except ServiceException as e:
        raise _to_http_error(e)

    try:
        detail = row_detail(snapshot, index)
    except IndexError:
        raise HTTPException(status_code=404, detail=f"未找到第 {index} 行")
    return RowDetailResponse(**detail.to_dict())


@router.post("/rows", response_model=AppendRowResponse, status_code=201, summary="追加一行")
async def append_row(
    body: AppendRowRequest,
    sheet_service: SheetServiceDep = None,
) -> AppendRowResponse:
    try:
        await sheet_service.append(body.values)
    except ServiceException as e:
        raise _to_http_error(e)
    return AppendRowResponse(success=True, message="追加成功")
