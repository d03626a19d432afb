"""
Pytest fixtures for the export engine tests.

테스트 구성:
- 정상 케이스, 필수 필드 누락 케이스 등 분리
- 레지스트리는 케이스마다 새로 생성 (전역 상태 없음)
"""

import base64
import itertools
from pathlib import Path
from typing import Any

import pytest
import yaml

from src.app.services.export import TemplateEngine
from src.domain.schemas import (
    DirectoryType,
    FieldType,
    OutputFormat,
    TemplateDefinition,
    TemplateField,
)
from src.templates.catalog import build_default_registry
from src.templates.registry import TemplateRegistry

# 1x1 PNG
PNG_1X1 = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드 (raw dict)."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def sample_matter() -> dict[str, Any]:
    """정상 매터 레코드 (모든 필수 필드 포함)."""
    return {
        "title": "Acme Acquisition of Beta Ltd.",
        "clientName": "Acme Corp",
        "counterparties": ["Beta Ltd", "Gamma Holdings"],
        "dealValue": {"amount": 1500000, "currency": "USD"},
        "synthesizedData": {
            "description": "Advised Acme on the acquisition of Beta.",
            "keyAchievements": ["Closed in 6 weeks", "Cleared antitrust review"],
            "legalNovelty": "First cross-border deal of its kind.",
            "practiceAreas": ["M&A", "Antitrust"],
        },
        "leadPartner": "Dana Levi",
        "teamMembers": ["Noa Cohen", "Avi Mizrahi"],
    }


@pytest.fixture
def sample_referee() -> dict[str, Any]:
    """referees-2024 용 추천인 레코드."""
    return {
        "firstName": "Ruth",
        "lastName": "Katz",
        "email": "ruth@example.com",
        "phone": "+972-50-0000000",
        "company": "Acme Corp",
        "title": "General Counsel",
        "relationshipType": "Client",
        "mattersDiscuss": "Beta acquisition",
        "speakingPoints": ["Responsiveness", "Deal strategy"],
        "contactStatus": "Confirmed",
    }


@pytest.fixture
def questionnaire_payload() -> dict[str, Any]:
    """질문지 입력 (camelCase, API 본문 형태)."""
    return {
        "year": 2024,
        "firm": {
            "nameHebrew": "לוי ושות'",
            "nameEnglish": "Levi & Co.",
            "companyId": "558812345",
            "responsiblePartner": "Dana Levi",
            "partnerSeniority": 15,
            "practiceArea": "real_estate",
            "partnerBio": "Dana has led the real estate group since 2010.",
            "partnersJoined": 2,
            "lawyersJoined": 5,
            "partnersLeft": 0,
            "lawyersLeft": 1,
        },
        "lawyers": [
            {
                "name": "Dana Levi",
                "level": "managing_partner",
                "practiceAreas": ["real_estate", "urban_renewal"],
                "admissionYear": 2005,
            },
            {"firstName": "Noa", "lastName": "Cohen", "level": "associate", "practiceAreas": []},
        ],
        "matters": [
            {
                "title": "Tower A",
                "clientName": "Acme Real Estate",
                "serviceDescription": "Representation in the purchase of Tower A.",
                "opposingCounsel": [
                    {
                        "firmName": "Cohen & Partners",
                        "representedParty": "the seller",
                        "practiceArea": "real_estate",
                    },
                    {"firmName": "Gold Law", "representedParty": "the bank"},
                ],
                "dealValue": {"amount": 1500000, "currency": "ILS"},
                "status": "completed",
            },
        ],
        "referees": [
            {
                "firstName": "Ruth",
                "lastName": "Katz",
                "title": "CEO",
                "company": "Acme Real Estate",
                "phone": "050-0000000",
                "email": "ruth@example.com",
                "speakingPoints": ["Tower A", "Urban renewal"],
            },
        ],
        "signature": {
            "signerName": "Dana Levi",
            "signerRole": "Managing Partner",
            "signedOn": "2024-05-01",
            "contactEmail": "dana@levi.co.il",
            "contactPhone": "03-0000000",
        },
    }


@pytest.fixture
def png_logo() -> bytes:
    """1x1 PNG 로고."""
    return PNG_1X1


# =============================================================================
# Template / Engine Fixtures
# =============================================================================


@pytest.fixture
def chambers_like_template() -> TemplateDefinition:
    """title, clientName 필수 + description 2000자 제한 DOCX 템플릿."""
    return TemplateDefinition(
        id="test-chambers",
        name="Test Chambers Submission",
        type=DirectoryType.CHAMBERS,
        output_format=OutputFormat.DOCX,
        fields=(
            TemplateField(name="title", label="Matter Name", required=True, mapped_from="title"),
            TemplateField(
                name="clientName", label="Client", required=True, mapped_from="clientName"
            ),
            TemplateField(
                name="description",
                label="Synopsis",
                type=FieldType.TEXTAREA,
                max_length=2000,
                mapped_from="synthesizedData.description",
            ),
            TemplateField(
                name="matterValue",
                label="Matter Value",
                type=FieldType.NUMBER,
                mapped_from="dealValue.amount",
            ),
            TemplateField(name="jurisdictions", label="Jurisdictions"),
        ),
    )


@pytest.fixture
def registry() -> TemplateRegistry:
    """기본 카탈로그로 만든 레지스트리 (freeze 상태)."""
    return build_default_registry()


@pytest.fixture
def fixed_clock():
    """1700000000000부터 1씩 증가하는 결정론적 시계."""
    counter = itertools.count(1_700_000_000_000)
    return lambda: next(counter)


@pytest.fixture
def engine(registry: TemplateRegistry, fixed_clock) -> TemplateEngine:
    """기본 카탈로그 + 결정론적 시계 엔진."""
    return TemplateEngine(registry, clock=fixed_clock)
