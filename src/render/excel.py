"""
Excel (XLSX) 렌더러: openpyxl 기반, 2열(Field / Value) 워크시트.

- 헤더 행: 굵게, 흰 글씨, 파란 배경
- 값 있는 필드만 한 행씩 (생략 규칙은 DOCX와 동일)
- 모든 셀 4면 thin border
- 데이터 셀은 항상 문자열 타입 ("="로 시작해도 수식 아님), 제어 문자 제거
- 열 너비: 가장 긴 셀 + 2, [10, 50]으로 clamp
"""

from collections.abc import Mapping
from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from src.core.config import XlsxStyle
from src.domain.schemas import OutputFormat, TemplateDefinition
from src.render.base import FieldRenderer
from src.render.formatting import format_field_value, is_renderable

HEADER_ROW = ("Field", "Value")
COLUMN_PADDING = 2

_THIN = Side(style="thin")
CELL_BORDER = Border(top=_THIN, left=_THIN, bottom=_THIN, right=_THIN)


def cell_text(text: str) -> str:
    """워크시트에 쓸 수 없는 제어 문자 제거 (Word에서 붙여넣은 세로 탭 등)."""
    return ILLEGAL_CHARACTERS_RE.sub("", text)


class ExcelFieldRenderer(FieldRenderer):
    """
    Excel 문서 렌더러 (스키마 기반).

    Usage:
        renderer = ExcelFieldRenderer(XlsxStyle())
        data = renderer.render(template, values)
    """

    output_format = OutputFormat.XLSX

    def __init__(self, style: XlsxStyle | None = None):
        self.style = style or XlsxStyle()

    def render(self, template: TemplateDefinition, values: Mapping[str, Any]) -> bytes:
        wb = Workbook()
        wb.properties.creator = self.style.creator
        wb.properties.title = template.name

        ws = wb.active
        ws.title = self.style.sheet_title

        # 헤더
        ws.append(list(HEADER_ROW))
        header_font = Font(bold=True, color=self.style.header_font_color)
        header_fill = PatternFill(
            start_color=self.style.header_fill,
            end_color=self.style.header_fill,
            fill_type="solid",
        )
        for cell in ws[1]:
            cell.font = header_font
            cell.fill = header_fill

        # 데이터 행
        for field in template.fields:
            value = values.get(field.name)
            if is_renderable(value):
                ws.append([cell_text(field.label), cell_text(format_field_value(value))])
                for cell in ws[ws.max_row]:
                    cell.data_type = "s"

        self._apply_borders(ws)
        self._fit_columns(ws)

        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    def _apply_borders(self, ws: Worksheet) -> None:
        for row in ws.iter_rows():
            for cell in row:
                cell.border = CELL_BORDER

    def _fit_columns(self, ws: Worksheet) -> None:
        """열 너비 = clamp(최장 셀 길이 + 2, min, max)."""
        for col_idx, column in enumerate(ws.iter_cols(), start=1):
            width = self.style.min_column_width
            for cell in column:
                text = "" if cell.value is None else str(cell.value)
                width = max(width, min(len(text) + COLUMN_PADDING, self.style.max_column_width))
            ws.column_dimensions[get_column_letter(col_idx)].width = width


def render_xlsx(
    template: TemplateDefinition,
    values: Mapping[str, Any],
    style: XlsxStyle | None = None,
) -> bytes:
    """Excel 문서 생성 (간편 함수)."""
    return ExcelFieldRenderer(style).render(template, values)
