"""
렌더링 표시 규칙.

- 필드 값 표시 문자열 / 생략 규칙 (스키마 렌더러 공통)
- 통화: ILS → he-IL 형식, 그 외 → en-US 형식, 소수점 없음
- 상태/실무분야/직급 키 → 히브리어 표시명 (모르는 키는 그대로)
- 상대 법무법인 목록 → 줄바꿈 join
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from babel.numbers import format_currency as babel_format_currency
from babel.numbers import get_currency_symbol

from src.core.paths import display_scalar, join_display
from src.domain.schemas import DealValue, OpposingCounsel

# =============================================================================
# Field values
# =============================================================================


def format_field_value(value: Any) -> str:
    """렌더링용 값 문자열. 리스트 override도 resolve와 같은 ", " join."""
    if isinstance(value, (list, tuple)):
        return join_display(value)
    return display_scalar(value)


def is_renderable(value: Any) -> bool:
    """생략 규칙: None, "" 는 출력하지 않음."""
    return value is not None and value != ""


# =============================================================================
# Currency
# =============================================================================

RLM = "\u200f"
NBSP = "\u00a0"

ILS_LOCALE = "he_IL"
DEFAULT_LOCALE = "en_US"

# 소수점 없음. 부호는 format_currency에서 직접 붙임
ILS_PATTERN = f"{RLM}#,##0{NBSP}¤"
SYMBOL_PATTERN = "¤#,##0"
# "CHF"처럼 문자로 끝나는 기호는 숫자와 NBSP로 분리 (CLDR currencySpacing)
SPACED_SYMBOL_PATTERN = f"¤{NBSP}#,##0"


def _round_whole(amount: Any) -> Decimal:
    """정수 단위 반올림 (half-up)."""
    return Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def format_currency(amount: Any, currency: str) -> str:
    """
    통화 표시 (Babel CLDR 로케일 데이터).

    - ILS: he-IL (RLM + "1,500,000" + NBSP + "₪")
    - 그 외: en-US ("$1,500,000", "CA$1,500,000", "CHF 1,500,000")

    Args:
        amount: 금액 (int/float/Decimal/숫자 문자열)
        currency: ISO 통화 코드
    """
    code = (currency or "").upper()
    value = _round_whole(amount)
    negative = value < 0

    if code == "ILS":
        text = babel_format_currency(
            abs(value), code, format=ILS_PATTERN, locale=ILS_LOCALE, currency_digits=False
        )
        return f"{RLM}-{text[len(RLM):]}" if negative else text

    symbol = get_currency_symbol(code, locale=DEFAULT_LOCALE)
    pattern = SPACED_SYMBOL_PATTERN if symbol[-1:].isalpha() else SYMBOL_PATTERN
    text = babel_format_currency(
        abs(value), code, format=pattern, locale=DEFAULT_LOCALE, currency_digits=False
    )
    return f"-{text}" if negative else text


def format_deal_value(deal_value: DealValue | None) -> str:
    if deal_value is None:
        return ""
    return format_currency(deal_value.amount, deal_value.currency)


# =============================================================================
# Localized labels
# =============================================================================

STATUS_LABELS = {
    # matter workflow
    "draft": "טיוטה",
    "review": "בבדיקה",
    "approved": "מאושר",
    "exported": "יוצא",
    # project status
    "in_progress": "בתהליך",
    "completed": "הושלם",
    "pending": "ממתין",
    "closed": "סגור",
}

PRACTICE_AREA_LABELS = {
    "cooperative_associations": "אגודות שיתופיות",
    "environmental": "איכות הסביבה",
    "insurance": "ביטוח",
    "national_insurance": "ביטוח לאומי",
    "blockchain_crypto": "בלוקצ'יין וקריפטו",
    "banking_finance": "בנקאות ומימון",
    "legal_collection_enforcement": "גבייה והוצאה לפועל",
    "mediation": "גישור",
    "family_inheritance_mediation": "גישור משפחה וירושה",
    "internet_law": "דיני אינטרנט",
    "family_inheritance_law": "דיני משפחה וירושה",
    "tort_law": "דיני נזיקין",
    "sports_law": "דיני ספורט",
    "employment_law": "דיני עבודה",
    "military_security_law": "דין צבאי וביטחוני",
    "immigration_citizenship": "הגירה ואזרחות",
    "hitech": "הייטק",
    "high_tech": "הייטק",
    "urban_renewal": "התחדשות עירונית",
    "franchising": "זכיינות",
    "insolvency": "חדלות פירעון",
    "commercial_litigation": "ליטיגציה מסחרית",
    "private_clients_trusts_wealth": "לקוחות פרטיים, נאמנויות וניהול עושר",
    "defamation": "לשון הרע",
    "mergers_acquisitions": "מיזוגים ורכישות",
    "project_finance_energy_infrastructure": "מימון פרויקטים, אנרגיה ותשתיות",
    "municipal_taxation": "מיסוי מוניציפלי",
    "taxes": "מסים",
    "hospitality": "מלונאות ואירוח",
    "nonprofits": 'מלכ"רים',
    "international_trade": "סחר בינלאומי",
    "administrative_law": "משפט מנהלי",
    "criminal_law": "משפט פלילי",
    "real_estate": 'נדל"ן',
    "cyber": "סייבר",
    "white_collar": "עבירות צווארון לבן",
    "ip_patent_prosecution": "קניין רוחני - רישום פטנטים",
    "ip_litigation": "קניין רוחני - ליטיגציה",
    "ip_commercial": "קניין רוחני - מסחרי",
    "investment_funds": "קרנות השקעה",
    "regulation": "רגולציה",
    "local_authorities": "רשויות מקומיות",
    "medical_malpractice": "רשלנות רפואית",
    "capital_markets": "שוק ההון",
    "class_actions": "תובענות ייצוגיות",
    "transportation": "תחבורה",
    "competition_antitrust": "תחרות והגבלים עסקיים",
    "planning_construction": "תכנון ובנייה",
    "media_communications": "תקשורת ומדיה",
}

LAWYER_LEVEL_LABELS = {
    "managing_partner": "שותף/ה מנהל/ת",
    "senior_partner": "שותף/ה בכיר/ה",
    "partner": "שותף/ה",
    "counsel": "יועץ/ת",
    "senior_associate": 'עו"ד בכיר/ה',
    "associate": 'עו"ד',
}


def localize_status(key: str | None) -> str:
    return STATUS_LABELS.get(key or "", key or "")


def localize_practice_area(key: str | None) -> str:
    return PRACTICE_AREA_LABELS.get(key or "", key or "")


def localize_lawyer_level(key: str | None) -> str:
    return LAWYER_LEVEL_LABELS.get(key or "", key or "")


def localize_practice_areas(keys: Iterable[str]) -> str:
    return ", ".join(localize_practice_area(k) for k in keys)


# =============================================================================
# Lists
# =============================================================================


def format_opposing_counsel(counsels: Iterable[OpposingCounsel]) -> str:
    """
    "{firm} (ייצג את {party}, {practice area})" 줄바꿈 join.

    practice area 없으면 괄호 안은 대리 당사자만.
    """
    lines = []
    for counsel in counsels:
        detail = f"ייצג את {counsel.represented_party}"
        if counsel.practice_area:
            detail += f", {localize_practice_area(counsel.practice_area)}"
        lines.append(f"{counsel.firm_name} ({detail})")
    return "\n".join(lines)
