#!/usr/bin/env python3
"""
generate_export.py - 매터 레코드 파일로 제출 문서 생성

입력 레코드는 JSON 또는 YAML (확장자로 판단).

사용법:
    # 스키마 기반 (템플릿 id 지정)
    python scripts/generate_export.py matter.json --template chambers-2024

    # override 지정 (여러 번 가능)
    python scripts/generate_export.py matter.yaml --template chambers-2024 \\
        --override clientName=Acme --override practiceGroup=Corporate

    # Dun's 100 질문지
    python scripts/generate_export.py submission.json --questionnaire --logo logo.png

    # 템플릿 목록
    python scripts/generate_export.py --list
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.app.services.export import build_default_engine  # noqa: E402
from src.core.config import load_config  # noqa: E402
from src.core.logging import setup_logging  # noqa: E402
from src.domain.errors import PolicyRejectError  # noqa: E402
from src.domain.schemas import QuestionnaireData  # noqa: E402


def load_record(path: Path) -> dict[str, Any]:
    """JSON/YAML 레코드 로드."""
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Record must be a mapping: {path}")
    return data


def parse_overrides(pairs: list[str]) -> dict[str, str]:
    """["name=value", ...] → {name: value}."""
    overrides: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Invalid override (expected name=value): {pair}")
        overrides[name.strip()] = value
    return overrides


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="매터 레코드 → 법률 디렉토리 제출 문서 생성",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("record", nargs="?", type=Path, help="입력 레코드 (JSON/YAML)")
    parser.add_argument("--template", "-t", help="템플릿 id (예: chambers-2024)")
    parser.add_argument(
        "--questionnaire",
        action="store_true",
        help="Dun's 100 질문지 생성 (레코드 = 질문지 데이터)",
    )
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="필드 override (여러 번 지정 가능)",
    )
    parser.add_argument("--logo", type=Path, help="질문지 로고 이미지")
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=Path("."),
        help="출력 디렉터리 (기본: 현재 디렉터리)",
    )
    parser.add_argument("--config", type=Path, help="설정 파일 (기본: default.yaml)")
    parser.add_argument("--list", action="store_true", help="템플릿 목록 출력")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except PolicyRejectError as e:
        print(f"설정 오류: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level)
    engine = build_default_engine(config)

    if args.list:
        for template in engine.list_templates():
            print(f"{template.id}\t{template.output_format.value}\t{template.name}")
        return 0

    if args.record is None:
        parser.error("record is required")
    if not args.questionnaire and not args.template:
        parser.error("--template or --questionnaire is required")

    try:
        record = load_record(args.record)
        overrides = parse_overrides(args.override)
        logo = args.logo.read_bytes() if args.logo else None
        questionnaire = QuestionnaireData.from_dict(record) if args.questionnaire else None
    except (OSError, ValueError, AttributeError, TypeError, yaml.YAMLError) as e:
        print(f"입력 오류: {e}", file=sys.stderr)
        return 2

    if questionnaire is not None:
        result = engine.generate_questionnaire(questionnaire, logo)
    else:
        result = engine.generate(args.template, record, overrides or None)

    if not result.success:
        for error in result.errors:
            print(f"❌ {error}", file=sys.stderr)
        return 1

    args.output_dir.mkdir(parents=True, exist_ok=True)
    output_path = args.output_dir / result.file_name
    output_path.write_bytes(result.buffer or b"")
    print(f"✅ {output_path} ({len(result.buffer or b'')} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
