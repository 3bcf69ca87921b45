"""
Sheets 服务模块 - 表格读取与追加
"""

from .sheet_service import SheetService, row_detail
from .models import SheetSnapshot, SheetSource, RowDetail, build_append_row

__all__ = [
    "SheetService",
    "SheetSnapshot",
    "SheetSource",
    "RowDetail",
    "row_detail",
    "build_append_row",
]
