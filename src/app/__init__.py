"""
App layer: 웹 서버 (FastAPI + Jinja2).

역할:
- 편지 폼 화면, 편지 생성 SSE 엔드포인트, 헬스 체크
- 업스트림 호출은 providers/에 위임
- 요청 검증/에러 분류는 domain/에 위임
"""
