"""
test_generate_export.py - generate_export.py 스크립트 테스트

테스트 케이스:
- TC1: JSON/YAML 레코드 → 출력 디렉터리에 문서 저장 (exit 0)
- TC2: 검증 실패 → 에러 출력, 파일 없음 (exit 1)
- TC3: 잘못된 입력 (override 형식, 비-mapping 레코드) → exit 2
- TC4: --questionnaire / --list
"""

import json
import sys
from pathlib import Path

import pytest
import yaml

# scripts 모듈 임포트를 위한 경로 추가
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent / "scripts"))

from generate_export import load_record, main, parse_overrides


@pytest.fixture
def matter_json(tmp_path: Path, sample_matter) -> Path:
    path = tmp_path / "matter.json"
    path.write_text(json.dumps(sample_matter), encoding="utf-8")
    return path


# =============================================================================
# Helpers
# =============================================================================


class TestLoadRecord:
    """레코드 파일 로드 테스트."""

    def test_json(self, matter_json, sample_matter):
        assert load_record(matter_json) == sample_matter

    def test_yaml(self, tmp_path, sample_matter):
        path = tmp_path / "matter.yaml"
        path.write_text(yaml.safe_dump(sample_matter, allow_unicode=True), encoding="utf-8")

        assert load_record(path) == sample_matter

    def test_not_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            load_record(path)


class TestParseOverrides:
    """--override 파싱 테스트."""

    def test_pairs(self):
        assert parse_overrides(["clientName=Acme", "note=a=b"]) == {
            "clientName": "Acme",
            "note": "a=b",
        }

    def test_empty_value_allowed(self):
        assert parse_overrides(["jurisdictions="]) == {"jurisdictions": ""}

    @pytest.mark.parametrize("pair", ["clientName", "=Acme"])
    def test_invalid(self, pair):
        with pytest.raises(ValueError):
            parse_overrides([pair])


# =============================================================================
# main
# =============================================================================


class TestMain:
    """CLI 진입점 테스트."""

    def test_generate_docx(self, matter_json, tmp_path, capsys):
        out_dir = tmp_path / "out"

        code = main([str(matter_json), "-t", "chambers-2024", "-o", str(out_dir)])

        assert code == 0
        files = list(out_dir.glob("*.docx"))
        assert len(files) == 1
        assert files[0].name.startswith("AcmeAcquisitionofBetaLtd_chambers_")
        assert "✅" in capsys.readouterr().out

    def test_validation_failure(self, tmp_path, sample_matter, capsys):
        del sample_matter["clientName"]
        path = tmp_path / "matter.json"
        path.write_text(json.dumps(sample_matter), encoding="utf-8")
        out_dir = tmp_path / "out"

        code = main([str(path), "-t", "chambers-2024", "-o", str(out_dir)])

        assert code == 1
        assert "Missing required field: clientName" in capsys.readouterr().err
        assert not out_dir.exists()

    def test_invalid_override(self, matter_json, tmp_path):
        code = main([str(matter_json), "-t", "chambers-2024", "--override", "oops"])

        assert code == 2

    def test_missing_record_file(self, tmp_path):
        code = main([str(tmp_path / "none.json"), "-t", "chambers-2024"])

        assert code == 2

    def test_template_required(self, matter_json):
        with pytest.raises(SystemExit):
            main([str(matter_json)])

    def test_questionnaire(self, tmp_path, questionnaire_payload):
        path = tmp_path / "submission.json"
        path.write_text(json.dumps(questionnaire_payload), encoding="utf-8")

        code = main([str(path), "--questionnaire", "-o", str(tmp_path)])

        assert code == 0
        assert len(list(tmp_path.glob("LeviCo_duns_100_*.docx"))) == 1

    def test_list(self, capsys):
        assert main(["--list"]) == 0

        out = capsys.readouterr().out
        assert "chambers-2024\tdocx\tChambers Submission" in out
        assert "referees-2024\txlsx" in out

    def test_malformed_questionnaire(self, tmp_path, capsys):
        path = tmp_path / "submission.json"
        path.write_text(json.dumps({"lawyers": ["x"]}), encoding="utf-8")

        code = main([str(path), "--questionnaire", "-o", str(tmp_path)])

        assert code == 2
        assert "입력 오류" in capsys.readouterr().err
        assert list(tmp_path.glob("*.docx")) == []
