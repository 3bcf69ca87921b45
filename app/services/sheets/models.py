"""
Sheets 相关数据模型
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


ColumnSet = Tuple[str, ...]
Row = Mapping[str, str]
NewRowDraft = Mapping[str, Any]


@dataclass(frozen=True)
class SheetSource:
    """一个 spreadsheet 范围的读写配置"""
    spreadsheet_id: Optional[str]  # spreadsheet ID
    api_key: Optional[str]  # Google API Key
    range: str = "Sheet1"  # 范围，通常为 sheet 名称

    def missing_fields(self) -> List[str]:
        """返回缺失的必要字段名"""
        missing = []
        if not (self.spreadsheet_id or "").strip():
            missing.append("spreadsheet_id")
        if not (self.api_key or "").strip():
            missing.append("api_key")
        return missing


@dataclass(frozen=True)
class SheetSnapshot:
    """一次完整读取的结果：有序列名 + 按列名取值的行，创建后不可修改"""
    columns: ColumnSet = ()
    rows: Tuple[Row, ...] = ()

    @classmethod
    def from_values(cls, values: List[List[Any]]) -> 'SheetSnapshot':
        """从二维数组创建快照：首行为表头，其余行按位置对齐到表头。

        - 超出表头长度的单元格丢弃
        - 缺失的单元格补空字符串
        - 空数组返回空快照
        """
        if not values:
            return cls()

        columns = normalize_headers(values[0])
        rows = tuple(
            MappingProxyType({
                name: _cell_text(row[idx]) if idx < len(row) else ""
                for idx, name in enumerate(columns)
            })
            for row in values[1:]
        )
        return cls(columns=columns, rows=rows)

    def is_empty(self) -> bool:
        return not self.columns

    def get_row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": list(self.columns),
            "rows": [dict(row) for row in self.rows],
        }


@dataclass(frozen=True)
class RowDetail:
    """单行详情，用于详情视图"""
    index: int
    title: str
    fields: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "title": self.title,
            "fields": [{"column": c, "value": v} for c, v in self.fields],
        }


def _cell_text(cell: Any) -> str:
    if cell is None:
        return ""
    if isinstance(cell, str):
        return cell
    if isinstance(cell, bool):
        return "TRUE" if cell else "FALSE"
    return str(cell)


def normalize_headers(header_row: List[Any]) -> ColumnSet:
    """表头转为字符串；重复的列名追加 _2、_3 等后缀以保证唯一"""
    seen: Dict[str, int] = {}
    taken = set()
    columns: List[str] = []
    for cell in header_row:
        name = _cell_text(cell)
        if name in taken:
            n = seen.get(name, 1)
            candidate = f"{name}_{n + 1}"
            while candidate in taken:
                n += 1
                candidate = f"{name}_{n + 1}"
            seen[name] = n + 1
            name = candidate
        taken.add(name)
        columns.append(name)
    return tuple(columns)


def build_append_row(columns: ColumnSet, draft: NewRowDraft) -> List[str]:
    """按列顺序把草稿映射为一行位置值，缺失列为空字符串，多余的键忽略"""
    return [_cell_text(draft.get(name)) for name in columns]
