"""
Sheet 数据适配服务 - 读取表格为列式快照，并按当前表头追加新行
"""
from typing import Optional

from app.clients.google_sheets import SheetsClient
from app.services.base import BaseService, ConfigError, SheetShapeError
from .models import (
    ColumnSet,
    NewRowDraft,
    RowDetail,
    SheetSnapshot,
    SheetSource,
    build_append_row,
)


class SheetService(BaseService):
    """单个 spreadsheet 范围的读取与追加"""

    def __init__(self, source: SheetSource, client: Optional[SheetsClient] = None):
        """
        初始化 Sheet 服务

        Args:
            source: spreadsheet ID、API Key 与范围
            client: Sheets HTTP 客户端，不提供则按全局配置创建
        """
        super().__init__("SheetService")
        self.source = source
        self.client = client or SheetsClient()

    async def fetch(self) -> SheetSnapshot:
        """
        读取整个范围并转换为快照

        Returns:
            SheetSnapshot，范围内没有数据时为空快照

        Raises:
            ConfigError: 缺少 spreadsheet ID 或 API Key（不发起请求）
            RemoteError: 非 2xx 响应或响应体无法解析
        """
        self._ensure_configured()
        self.log_info(f"获取表格数据: spreadsheet_id={self.source.spreadsheet_id}, range={self.source.range}")

        values = await self.client.read_range_values(
            self.source.spreadsheet_id,
            self.source.range,
            self.source.api_key,
        )
        if not values:
            self.log_warning("表格范围内没有数据")
            return SheetSnapshot()

        snapshot = SheetSnapshot.from_values(values)

        self.record_metric("rows_fetched", snapshot.get_row_count())
        self.record_metric("cols_fetched", len(snapshot.columns))
        self.log_info(f"读取完成，共 {len(snapshot.columns)} 列 {snapshot.get_row_count()} 行")
        return snapshot

    async def fetch_columns(self) -> ColumnSet:
        """读取当前表头"""
        snapshot = await self.fetch()
        return snapshot.columns

    async def append(self, draft: NewRowDraft) -> None:
        """
        追加一行。写入前重新读取表头，按当前列顺序对齐草稿值。

        Args:
            draft: 列名 -> 值；缺失的列写入空字符串，未知列忽略

        Raises:
            ConfigError: 缺少 spreadsheet ID 或 API Key（不发起请求）
            SheetShapeError: 表格没有表头行，无法对齐
            RemoteError: 读取或写入失败
        """
        self._ensure_configured()

        columns = await self.fetch_columns()
        if not columns:
            raise SheetShapeError(
                f"无法追加：范围 {self.source.range} 没有表头行",
                code="NO_HEADER_ROW",
                details={"range": self.source.range},
            )

        ignored = [key for key in draft if key not in columns]
        if ignored:
            self.log_debug(f"忽略未知列: {ignored}")

        row = build_append_row(columns, draft)
        await self.client.append_range_values(
            self.source.spreadsheet_id,
            self.source.range,
            [row],
            self.source.api_key,
        )
        self.record_metric("rows_appended", self.get_metrics().get("rows_appended", 0) + 1)
        self.log_info(f"追加完成: range={self.source.range}, 列数={len(row)}")

    def _ensure_configured(self) -> None:
        missing = self.source.missing_fields()
        if missing:
            self.log_error(f"缺少必要配置: {', '.join(missing)}")
            raise ConfigError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set SHL_SHEETS__SPREADSHEET_ID / SHL_SHEETS__API_KEY or choose a spreadsheet.",
                code="MISSING_CONFIG",
                details={"missing": missing},
            )


def row_detail(snapshot: SheetSnapshot, index: int) -> RowDetail:
    """构造单行详情：标题取首列值，空值显示为 N/A"""
    if index < 0 or index >= len(snapshot.rows):
        raise IndexError(f"row index out of range: {index}")
    row = snapshot.rows[index]
    title = row.get(snapshot.columns[0], "") if snapshot.columns else ""
    return RowDetail(
        index=index,
        title=title or "No Title",
        fields=tuple((name, row.get(name) or "N/A") for name in snapshot.columns),
    )
