"""
Web 서비스 패키지

응답 변환 처리
"""

from web.services.view_service import ViewService

__all__ = [
    "ViewService",
]
