"""
Render layer: DOCX/XLSX 출력 생성.

역할:
- 템플릿 + 값 맵 → 최종 파일 (docxtpl: Word, openpyxl: Excel)
- 고정 레이아웃 질문지 → Word (python-docx)
"""

from .base import DocumentRenderer, FieldRenderer
from .excel import ExcelFieldRenderer, render_xlsx
from .questionnaire import QuestionnaireRenderer, render_questionnaire
from .word import DocxFieldRenderer, render_docx

__all__ = [
    "DocumentRenderer",
    "FieldRenderer",
    "DocxFieldRenderer",
    "ExcelFieldRenderer",
    "QuestionnaireRenderer",
    "render_docx",
    "render_xlsx",
    "render_questionnaire",
]
