"""
Impact Pool 패키지

기부금 보관 및 영향 증명 인증서 발행
"""

from vault.impact.pool import ImpactPool

__all__ = ["ImpactPool"]
