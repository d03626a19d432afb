"""
Data schemas for the export engine.

규칙:
- 템플릿 정의는 등록 후 불변 (frozen dataclass + tuple)
- 소스 레코드(MatterData)는 외부 소유 → dict 그대로 읽기 전용으로 취급
- 질문지 입력은 collaborator의 camelCase 레코드에서 from_dict로 변환
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Enums
# =============================================================================

class FieldType(str, Enum):
    """템플릿 필드 타입."""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    TEXTAREA = "textarea"


# max_length가 의미 있는 타입
STRING_FIELD_TYPES = frozenset([FieldType.TEXT, FieldType.TEXTAREA])


class DirectoryType(str, Enum):
    """템플릿 대상 디렉토리."""
    DUNS_100 = "duns_100"
    CHAMBERS = "chambers"
    LEGAL_500 = "legal_500"
    CUSTOM = "custom"


class OutputFormat(str, Enum):
    """출력 포맷. pdf는 선언만 되어 있고 렌더러 없음."""
    DOCX = "docx"
    XLSX = "xlsx"
    PDF = "pdf"


# =============================================================================
# Template Schemas
# =============================================================================

@dataclass(frozen=True)
class TemplateField:
    """템플릿 필드 하나."""
    name: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    max_length: int | None = None
    options: tuple[str, ...] = ()
    mapped_from: str | None = None  # 없으면 override로만 값 공급

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
            "max_length": self.max_length,
            "options": list(self.options),
            "mapped_from": self.mapped_from,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TemplateField":
        return cls(
            name=data["name"],
            label=data.get("label", data["name"]),
            type=FieldType(data.get("type", "text")),
            required=bool(data.get("required", False)),
            max_length=data.get("max_length"),
            options=tuple(data.get("options") or ()),
            mapped_from=data.get("mapped_from"),
        )


@dataclass(frozen=True)
class TemplateDefinition:
    """
    이름/버전이 있는 export 템플릿.

    엔진 생성 시 한 번 등록되고 이후 불변.
    """
    id: str
    name: str
    type: DirectoryType
    output_format: OutputFormat
    fields: tuple[TemplateField, ...] = ()
    description: str = ""
    version: str = ""

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "description": self.description,
            "output_format": self.output_format.value,
            "version": self.version,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TemplateDefinition":
        return cls(
            id=data["id"],
            name=data["name"],
            type=DirectoryType(data.get("type", "custom")),
            output_format=OutputFormat(data["output_format"]),
            fields=tuple(TemplateField.from_dict(f) for f in data.get("fields", [])),
            description=data.get("description", ""),
            version=str(data.get("version", "")),
        )


# =============================================================================
# Validation / Generation Results
# =============================================================================

@dataclass
class ValidationIssue:
    """길이/타입 위반 한 건."""
    field: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "reason": self.reason}


@dataclass
class ValidationResult:
    """
    검증 결과.

    첫 위반에서 멈추지 않고 모든 위반을 수집 (full-report).
    """
    valid: bool
    missing_fields: list[str] = field(default_factory=list)
    invalid_fields: list[ValidationIssue] = field(default_factory=list)

    def error_messages(self) -> list[str]:
        """오케스트레이터 에러 문자열 (누락 → 위반 순서 유지)."""
        return [
            *(f"Missing required field: {name}" for name in self.missing_fields),
            *(f"{issue.field}: {issue.reason}" for issue in self.invalid_fields),
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "missing_fields": list(self.missing_fields),
            "invalid_fields": [i.to_dict() for i in self.invalid_fields],
        }


@dataclass
class GenerationResult:
    """
    문서 생성 결과.

    - 성공: buffer, file_name, mime_type
    - 실패: errors (사람이 읽을 수 있는 문자열, 순서 유지)
    """
    success: bool
    file_name: str = ""
    mime_type: str = ""
    buffer: bytes | None = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, buffer: bytes, file_name: str, mime_type: str) -> "GenerationResult":
        return cls(success=True, file_name=file_name, mime_type=mime_type, buffer=buffer)

    @classmethod
    def failure(cls, *errors: str) -> "GenerationResult":
        return cls(success=False, errors=list(errors))

    def to_dict(self) -> dict[str, Any]:
        """JSON 응답/로그용. buffer는 포함하지 않음."""
        data: dict[str, Any] = {
            "success": self.success,
            "file_name": self.file_name,
            "mime_type": self.mime_type,
        }
        if self.success:
            data["size"] = len(self.buffer or b"")
        else:
            data["errors"] = list(self.errors)
        return data


# =============================================================================
# Submission Questionnaire Schemas (고정 레이아웃 DOCX 입력)
# =============================================================================

@dataclass
class DealValue:
    """거래 규모."""
    amount: float
    currency: str = "ILS"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "DealValue | None":
        if not data or data.get("amount") is None:
            return None
        return cls(amount=data["amount"], currency=data.get("currency") or "ILS")


@dataclass
class OpposingCounsel:
    """사건에 관여한 상대/타 법무법인."""
    firm_name: str
    represented_party: str
    practice_area: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OpposingCounsel":
        return cls(
            firm_name=data.get("firmName", ""),
            represented_party=data.get("representedParty", ""),
            practice_area=data.get("practiceArea"),
        )


@dataclass
class FirmDetails:
    """법무법인 기본 정보 + 변호사 입/퇴사 현황."""
    name_hebrew: str = ""
    name_english: str = ""
    company_id: str = ""
    responsible_partner: str = ""
    partner_seniority: str = ""
    practice_area: str = ""
    partner_bio: str = ""
    partners_joined: int | None = None
    lawyers_joined: int | None = None
    partners_left: int | None = None
    lawyers_left: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "FirmDetails":
        data = data or {}
        return cls(
            name_hebrew=data.get("nameHebrew", ""),
            name_english=data.get("nameEnglish", ""),
            company_id=data.get("companyId", ""),
            responsible_partner=data.get("responsiblePartner", ""),
            partner_seniority=str(data.get("partnerSeniority") or ""),
            practice_area=data.get("practiceArea", ""),
            partner_bio=data.get("partnerBio", ""),
            partners_joined=data.get("partnersJoined"),
            lawyers_joined=data.get("lawyersJoined"),
            partners_left=data.get("partnersLeft"),
            lawyers_left=data.get("lawyersLeft"),
        )


@dataclass
class LawyerEntry:
    """변호사 명단 한 행."""
    name: str
    level: str = ""
    practice_areas: list[str] = field(default_factory=list)
    admission_year: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LawyerEntry":
        name = data.get("name") or " ".join(
            part for part in (data.get("firstName"), data.get("lastName")) if part
        )
        return cls(
            name=name,
            level=data.get("level", ""),
            practice_areas=list(data.get("practiceAreas") or []),
            admission_year=data.get("admissionYear"),
        )


@dataclass
class MatterEntry:
    """질문지의 사건(matter) 블록 하나."""
    title: str = ""
    client_name: str = ""
    service_description: str = ""
    opposing_counsel: list[OpposingCounsel] = field(default_factory=list)
    deal_value: DealValue | None = None
    status: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatterEntry":
        return cls(
            title=data.get("title", ""),
            client_name=data.get("clientName", ""),
            service_description=data.get("serviceDescription", ""),
            opposing_counsel=[
                OpposingCounsel.from_dict(c) for c in data.get("opposingCounsel") or []
            ],
            deal_value=DealValue.from_dict(data.get("dealValue")),
            status=data.get("status", ""),
        )


@dataclass
class RefereeEntry:
    """추천인(referee) 한 행."""
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    company: str = ""
    phone: str = ""
    email: str = ""
    speaking_points: list[str] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RefereeEntry":
        return cls(
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            title=data.get("title") or data.get("position") or "",
            company=data.get("company", ""),
            phone=data.get("phone", ""),
            email=data.get("email", ""),
            speaking_points=list(data.get("speakingPoints") or []),
        )


@dataclass
class SignatureDetails:
    """서명/확인 표."""
    signer_name: str = ""
    signer_role: str = ""
    signed_on: str = ""
    contact_email: str = ""
    contact_phone: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "SignatureDetails":
        data = data or {}
        return cls(
            signer_name=data.get("signerName", ""),
            signer_role=data.get("signerRole", ""),
            signed_on=str(data.get("signedOn") or ""),
            contact_email=data.get("contactEmail", ""),
            contact_phone=data.get("contactPhone", ""),
        )


@dataclass
class QuestionnaireData:
    """
    Dun's 100 제출 질문지 전체 입력.

    lawyers/matters/referees 개수는 자유, 렌더러가 고정 행 수로 맞춤.
    """
    firm: FirmDetails = field(default_factory=FirmDetails)
    lawyers: list[LawyerEntry] = field(default_factory=list)
    matters: list[MatterEntry] = field(default_factory=list)
    referees: list[RefereeEntry] = field(default_factory=list)
    signature: SignatureDetails = field(default_factory=SignatureDetails)
    year: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuestionnaireData":
        return cls(
            firm=FirmDetails.from_dict(data.get("firm")),
            lawyers=[LawyerEntry.from_dict(x) for x in data.get("lawyers") or []],
            matters=[MatterEntry.from_dict(x) for x in data.get("matters") or []],
            referees=[RefereeEntry.from_dict(x) for x in data.get("referees") or []],
            signature=SignatureDetails.from_dict(data.get("signature")),
            year=data.get("year"),
        )
