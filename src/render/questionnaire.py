"""
Dun's 100 제출 질문지 렌더러 (고정 레이아웃, RTL 히브리어).

스키마 기반이 아님: 섹션/라벨/행 수가 코드에 고정.

섹션 순서:
1. (로고) + 제목
2. 사무소 정보 표
3. 담당 파트너 이력
4. 입/퇴사 인원 표
5. 변호사 명단 (10행)
6. 주요 사건 블록 (10개, 블록당 병합 헤더 + 라벨/값 5행)
7. 추천인 표 (10행)
8. 서명 표

모든 문단은 w:bidi + 우측 정렬, 모든 run은 w:rtl + complex-script 폰트/크기,
모든 표는 w:bidiVisual.
"""

import logging
from collections.abc import Sequence
from io import BytesIO
from typing import Any, TypeVar

from docx import Document
from docx.document import Document as DocumentObject
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Mm, Pt, RGBColor
from docx.table import Table, _Cell
from docx.text.paragraph import Paragraph

from src.core.config import QuestionnaireStyle
from src.domain.constants import (
    QUESTIONNAIRE_LAWYER_ROWS,
    QUESTIONNAIRE_MATTER_BLOCKS,
    QUESTIONNAIRE_REFEREE_ROWS,
)
from src.domain.schemas import (
    FirmDetails,
    LawyerEntry,
    MatterEntry,
    OutputFormat,
    QuestionnaireData,
    RefereeEntry,
    SignatureDetails,
)
from src.render.base import DocumentRenderer
from src.render.formatting import (
    format_deal_value,
    format_opposing_counsel,
    localize_lawyer_level,
    localize_practice_area,
    localize_practice_areas,
    localize_status,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

TABLE_STYLE = "Table Grid"

# =============================================================================
# Labels
# =============================================================================

TITLE = "שאלון Dun's 100"

SECTION_FIRM = "פרטי המשרד"
SECTION_BIO = "קורות חיים"
SECTION_CHANGES = "שינויים בצוות המשרד"
SECTION_LAWYERS = "עורכי הדין בתחום"
SECTION_MATTERS = "עסקאות ותיקים מרכזיים"
SECTION_REFEREES = "ממליצים"
SECTION_SIGNATURE = "אישור וחתימה"

FIRM_LABELS = (
    "שם המשרד בעברית",
    "שם המשרד באנגלית",
    "מספר ח.פ./ שותפות/ עוסק מורשה",
    "שם השותפ/ה אחראי/ת על תחום פעילות",
    "ותק השותפ/ה האחראי/ת",
    "תחום פעילות",
)

BIO_PROMPT = "אנא הציגו בקצרה את קורות החיים של השותפ/ה האחראי/ת"

CHANGES_HEADER = ("", "שותפים", "עורכי דין")
JOINED_LABEL = "הצטרפו"
LEFT_LABEL = "עזבו"

LAWYER_HEADER = ("#", "שם", "דרגה", "תחומי עיסוק", "שנת הסמכה")

MATTER_HEADER = "עסקה / תיק"
MATTER_LABELS = (
    "שם הלקוח/ה",
    "פירוט השירותים שהוענקו",
    'משרדי עו"ד נוספים שהיו מעורבים',
    "היקף עסקה מידי",
    "סטאטוס הפרויקט",
)

REFEREE_HEADER = ("#", "שם", "תפקיד", "חברה", "טלפון", 'דוא"ל', "נקודות לשיחה")

SIGNATURE_LABELS = (
    "שם החותם/ת",
    "תפקיד",
    "תאריך",
    'דוא"ל',
    "טלפון",
)

# =============================================================================
# OOXML helpers
# =============================================================================

# CT_PPr / CT_RPr / CT_TblPr / CT_TcPr 스키마 순서상 뒤에 오는 요소들
_BIDI_SUCCESSORS = (
    "w:adjustRightInd", "w:snapToGrid", "w:spacing", "w:ind", "w:contextualSpacing",
    "w:mirrorIndents", "w:suppressOverlap", "w:jc", "w:textDirection",
    "w:textAlignment", "w:textboxTightWrap", "w:outlineLvl", "w:divId",
    "w:cnfStyle", "w:rPr", "w:sectPr", "w:pPrChange",
)
_SZ_CS_SUCCESSORS = (
    "w:highlight", "w:u", "w:effect", "w:bdr", "w:shd", "w:fitText", "w:vertAlign",
    "w:rtl", "w:cs", "w:em", "w:lang", "w:eastAsianLayout", "w:specVanish", "w:oMath",
)
_BIDI_VISUAL_SUCCESSORS = (
    "w:tblStyleRowBandSize", "w:tblStyleColBandSize", "w:tblW", "w:jc",
    "w:tblCellSpacing", "w:tblInd", "w:tblBorders", "w:shd", "w:tblLayout",
    "w:tblCellMar", "w:tblLook", "w:tblCaption", "w:tblDescription", "w:tblPrChange",
)
_SHD_SUCCESSORS = (
    "w:noWrap", "w:tcMar", "w:textDirection", "w:tcFitText", "w:vAlign",
    "w:hideMark", "w:headers", "w:cellIns", "w:cellDel", "w:cellMerge", "w:tcPrChange",
)


def set_paragraph_rtl(paragraph: Paragraph) -> None:
    """문단 방향 RTL (w:bidi) + 우측 정렬."""
    pPr = paragraph._p.get_or_add_pPr()
    if pPr.find(qn("w:bidi")) is None:
        pPr.insert_element_before(OxmlElement("w:bidi"), *_BIDI_SUCCESSORS)
    paragraph.alignment = WD_ALIGN_PARAGRAPH.RIGHT


def set_table_rtl(table: Table) -> None:
    """표 열 순서 RTL (w:bidiVisual)."""
    tblPr = table._tbl.tblPr
    if tblPr.find(qn("w:bidiVisual")) is None:
        tblPr.insert_element_before(OxmlElement("w:bidiVisual"), *_BIDI_VISUAL_SUCCESSORS)


def set_cell_background(cell: _Cell, hex_color: str) -> None:
    """셀 배경색 (w:shd)."""
    tcPr = cell._tc.get_or_add_tcPr()
    shd = tcPr.find(qn("w:shd"))
    if shd is None:
        shd = OxmlElement("w:shd")
        tcPr.insert_element_before(shd, *_SHD_SUCCESSORS)
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), hex_color)


def _pad(items: Sequence[T], size: int, section: str) -> list[T | None]:
    """고정 행 수 맞춤: 부족분은 None, 초과분은 경고 후 절단."""
    if len(items) > size:
        logger.warning(
            f"Questionnaire section '{section}' has {len(items)} entries, "
            f"only the first {size} are rendered"
        )
    padded: list[T | None] = list(items[:size])
    padded.extend([None] * (size - len(padded)))
    return padded


def _count(value: int | None) -> str:
    return "" if value is None else str(value)


# =============================================================================
# Renderer
# =============================================================================


class QuestionnaireRenderer(DocumentRenderer):
    """
    Dun's 100 질문지 DOCX 렌더러.

    Usage:
        renderer = QuestionnaireRenderer(QuestionnaireStyle())
        data = renderer.render(questionnaire_data, logo=png_bytes)
    """

    output_format = OutputFormat.DOCX

    def __init__(self, style: QuestionnaireStyle | None = None):
        self.style = style or QuestionnaireStyle()

    def render(self, data: QuestionnaireData, logo: bytes | None = None) -> bytes:
        """
        질문지 생성.

        Args:
            data: 질문지 입력
            logo: 로고 이미지 바이트 (None이면 style.logo_path, 그것도 없으면 생략)

        Returns:
            DOCX 바이트
        """
        if logo is None and self.style.logo_path is not None:
            logo = self.style.logo_path.read_bytes()

        doc = Document()

        if logo:
            self._add_logo(doc, logo)

        title = f"{TITLE} {data.year}" if data.year else TITLE
        self._add_heading(doc, title, level=0)

        self._add_firm_section(doc, data.firm)
        self._add_bio_section(doc, data.firm)
        self._add_changes_section(doc, data.firm)
        self._add_lawyer_section(doc, data.lawyers)
        self._add_matter_section(doc, data.matters)
        self._add_referee_section(doc, data.referees)
        self._add_signature_section(doc, data.signature)

        buffer = BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def _add_firm_section(self, doc: DocumentObject, firm: FirmDetails) -> None:
        self._add_heading(doc, SECTION_FIRM)
        values = (
            firm.name_hebrew,
            firm.name_english,
            firm.company_id,
            firm.responsible_partner,
            firm.partner_seniority,
            localize_practice_area(firm.practice_area),
        )
        self._add_label_table(doc, list(zip(FIRM_LABELS, values)))

    def _add_bio_section(self, doc: DocumentObject, firm: FirmDetails) -> None:
        self._add_heading(doc, SECTION_BIO)
        self._add_paragraph(doc, BIO_PROMPT, bold=True)
        self._add_paragraph(doc, firm.partner_bio)

    def _add_changes_section(self, doc: DocumentObject, firm: FirmDetails) -> None:
        self._add_heading(doc, SECTION_CHANGES)
        table = self._add_table(doc, rows=3, cols=len(CHANGES_HEADER))
        self._fill_header_row(table, 0, CHANGES_HEADER)

        rows = (
            (JOINED_LABEL, firm.partners_joined, firm.lawyers_joined),
            (LEFT_LABEL, firm.partners_left, firm.lawyers_left),
        )
        for idx, (label, partners, lawyers) in enumerate(rows, start=1):
            cells = table.rows[idx].cells
            self._fill_label_cell(cells[0], label)
            self._fill_cell(cells[1], _count(partners))
            self._fill_cell(cells[2], _count(lawyers))

    def _add_lawyer_section(self, doc: DocumentObject, lawyers: list[LawyerEntry]) -> None:
        self._add_heading(doc, SECTION_LAWYERS)
        entries = _pad(lawyers, QUESTIONNAIRE_LAWYER_ROWS, "lawyers")

        table = self._add_table(doc, rows=len(entries) + 1, cols=len(LAWYER_HEADER))
        self._fill_header_row(table, 0, LAWYER_HEADER)

        for idx, lawyer in enumerate(entries, start=1):
            row = [str(idx), "", "", "", ""]
            if lawyer is not None:
                row[1:] = [
                    lawyer.name,
                    localize_lawyer_level(lawyer.level),
                    localize_practice_areas(lawyer.practice_areas),
                    _count(lawyer.admission_year),
                ]
            self._fill_row(table, idx, row)

    def _add_matter_section(self, doc: DocumentObject, matters: list[MatterEntry]) -> None:
        self._add_heading(doc, SECTION_MATTERS)
        entries = _pad(matters, QUESTIONNAIRE_MATTER_BLOCKS, "matters")

        for idx, matter in enumerate(entries, start=1):
            header = f"{MATTER_HEADER} {idx}"
            values: tuple[str, ...] = ("",) * len(MATTER_LABELS)
            if matter is not None:
                if matter.title:
                    header = f"{header}: {matter.title}"
                values = (
                    matter.client_name,
                    matter.service_description,
                    format_opposing_counsel(matter.opposing_counsel),
                    format_deal_value(matter.deal_value),
                    localize_status(matter.status),
                )

            table = self._add_table(doc, rows=len(MATTER_LABELS) + 1, cols=2)
            header_cell = table.rows[0].cells[0].merge(table.rows[0].cells[1])
            self._fill_cell(
                header_cell,
                header,
                bold=True,
                color=self.style.header_font_color,
                fill=self.style.header_fill,
            )
            for row_idx, (label, value) in enumerate(zip(MATTER_LABELS, values), start=1):
                cells = table.rows[row_idx].cells
                self._fill_label_cell(cells[0], label)
                self._fill_cell(cells[1], value)

            # 블록 간 간격
            self._add_paragraph(doc, "")

    def _add_referee_section(self, doc: DocumentObject, referees: list[RefereeEntry]) -> None:
        self._add_heading(doc, SECTION_REFEREES)
        entries = _pad(referees, QUESTIONNAIRE_REFEREE_ROWS, "referees")

        table = self._add_table(doc, rows=len(entries) + 1, cols=len(REFEREE_HEADER))
        self._fill_header_row(table, 0, REFEREE_HEADER)

        for idx, referee in enumerate(entries, start=1):
            row = [str(idx)] + [""] * (len(REFEREE_HEADER) - 1)
            if referee is not None:
                row[1:] = [
                    referee.full_name,
                    referee.title,
                    referee.company,
                    referee.phone,
                    referee.email,
                    "\n".join(referee.speaking_points),
                ]
            self._fill_row(table, idx, row)

    def _add_signature_section(self, doc: DocumentObject, signature: SignatureDetails) -> None:
        self._add_heading(doc, SECTION_SIGNATURE)
        values = (
            signature.signer_name,
            signature.signer_role,
            signature.signed_on,
            signature.contact_email,
            signature.contact_phone,
        )
        self._add_label_table(doc, list(zip(SIGNATURE_LABELS, values)))

    # -------------------------------------------------------------------------
    # Building blocks
    # -------------------------------------------------------------------------

    def _add_logo(self, doc: DocumentObject, logo: bytes) -> None:
        paragraph = doc.add_paragraph()
        paragraph.add_run().add_picture(BytesIO(logo), width=Mm(self.style.logo_width_mm))
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _add_heading(self, doc: DocumentObject, text: str, level: int = 1) -> Paragraph:
        heading = doc.add_heading(level=level)
        self._add_run(heading, text)
        set_paragraph_rtl(heading)
        return heading

    def _add_paragraph(self, doc: DocumentObject, text: str, bold: bool = False) -> Paragraph:
        paragraph = doc.add_paragraph()
        self._add_run(paragraph, text, bold=bold)
        set_paragraph_rtl(paragraph)
        return paragraph

    def _add_table(self, doc: DocumentObject, rows: int, cols: int) -> Table:
        table = doc.add_table(rows=rows, cols=cols)
        table.style = TABLE_STYLE
        set_table_rtl(table)
        return table

    def _add_label_table(self, doc: DocumentObject, pairs: list[tuple[str, str]]) -> Table:
        """라벨(금색) / 값 2열 표."""
        table = self._add_table(doc, rows=len(pairs), cols=2)
        for row, (label, value) in zip(table.rows, pairs):
            self._fill_label_cell(row.cells[0], label)
            self._fill_cell(row.cells[1], value)
        return table

    def _fill_header_row(self, table: Table, row_idx: int, labels: Sequence[str]) -> None:
        for cell, label in zip(table.rows[row_idx].cells, labels):
            self._fill_cell(
                cell,
                label,
                bold=True,
                color=self.style.header_font_color,
                fill=self.style.header_fill,
            )

    def _fill_row(self, table: Table, row_idx: int, values: Sequence[str]) -> None:
        for cell, value in zip(table.rows[row_idx].cells, values):
            self._fill_cell(cell, value)

    def _fill_label_cell(self, cell: _Cell, label: str) -> None:
        self._fill_cell(cell, label, bold=True, fill=self.style.label_fill)

    def _fill_cell(
        self,
        cell: _Cell,
        text: str,
        bold: bool = False,
        color: str | None = None,
        fill: str | None = None,
    ) -> None:
        """셀 첫 문단에 RTL run 하나. 빈 문자열이면 빈 셀 (문단은 RTL 유지)."""
        paragraph = cell.paragraphs[0]
        if text:
            self._add_run(paragraph, str(text), bold=bold, color=color)
        set_paragraph_rtl(paragraph)
        if fill:
            set_cell_background(cell, fill)

    def _add_run(
        self,
        paragraph: Paragraph,
        text: str,
        bold: bool = False,
        color: str | None = None,
    ) -> Any:
        """RTL run: 고정 폰트(ascii/hAnsi/cs), sz + szCs, w:rtl, w:cs."""
        run = paragraph.add_run(text)
        font = run.font
        font.name = self.style.font
        font.size = Pt(self.style.font_size_pt)
        font.bold = bold or None
        if color:
            font.color.rgb = RGBColor.from_string(color)

        rPr = run._r.get_or_add_rPr()
        rPr.get_or_add_rFonts().set(qn("w:cs"), self.style.font)
        if rPr.find(qn("w:szCs")) is None:
            sz_cs = OxmlElement("w:szCs")
            sz_cs.set(qn("w:val"), str(int(self.style.font_size_pt * 2)))
            rPr.insert_element_before(sz_cs, *_SZ_CS_SUCCESSORS)

        font.rtl = True
        font.complex_script = True
        return run


def render_questionnaire(
    data: QuestionnaireData,
    logo: bytes | None = None,
    style: QuestionnaireStyle | None = None,
) -> bytes:
    """질문지 생성 (간편 함수)."""
    return QuestionnaireRenderer(style).render(data, logo)
