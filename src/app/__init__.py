"""
App layer: HTTP 서버 (FastAPI).

역할:
- 템플릿 카탈로그 조회, 레코드 사전 검증, 문서 생성 엔드포인트
- 생성/검증 로직 없음 (services에 위임)

폴더 구분:
- src/app/services/ → 검증, 매핑, export orchestrator
- src/templates/ → 템플릿 레지스트리 + 카탈로그 (catalog.yaml)
"""
