"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- vault: 예치 / 전량 상환 / 스냅샷
- impact: 임팩트 풀 / 인증서
- agent: 트레이딩 지갑 자본 배분
- admin: 거버넌스 / 일시정지
- events: 감사 이벤트 조회
"""
