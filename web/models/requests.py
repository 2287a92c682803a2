"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증

금액은 기초 자산 최소 단위(wei) 정수 문자열로 받는다 (JSON 숫자 정밀도 문제 방지).
"""

from pydantic import BaseModel, Field

AMOUNT_PATTERN = r"^\d+$"


class AmountRequest(BaseModel):
    """금액 요청 (deposit, donate, withdraw_from_pool, set_min_deposit)"""

    amount: str = Field(..., pattern=AMOUNT_PATTERN, description="금액 (최소 단위 정수)")

    model_config = {
        "json_schema_extra": {
            "examples": [{"amount": "100000000000000000000"}],
        }
    }


class WithdrawRequest(BaseModel):
    """전량 상환 요청"""

    donation_bps: int | None = Field(
        default=None,
        description="이번 인출의 기부율 (없으면 저장된 기본 기부율)",
    )


class BpsRequest(BaseModel):
    """bps 값 요청 (기부율, 수수료율, 배분 한도)

    범위 검증은 Vault 연산에서 수행 (범위 밖이면 422).
    """

    bps: int = Field(..., description="basis points (0~10000)")


class AddressRequest(BaseModel):
    """주소 요청 (fee_recipient, agent)"""

    address: str = Field(..., description="0x + 40 hex 주소")


class ImpactPoolRequest(BaseModel):
    """임팩트 풀 참조 변경 요청"""

    ref: str = Field(..., min_length=1, description="임팩트 풀 참조")


class AllocateRequest(BaseModel):
    """트레이딩 지갑 배분 요청"""

    wallet: str = Field(..., description="트레이딩 지갑 주소")
    amount: str = Field(..., pattern=AMOUNT_PATTERN, description="금액 (최소 단위 정수)")


class ReturnCapitalRequest(BaseModel):
    """자본 회수 요청"""

    wallet: str = Field(..., description="트레이딩 지갑 주소")
    amount: str = Field(..., pattern=AMOUNT_PATTERN, description="회수 총액 (원금 + 수익)")
    reported_profit: str = Field(default="0", pattern=AMOUNT_PATTERN, description="보고 수익")


class ReturnAllCapitalRequest(BaseModel):
    """지갑 원금 전액 회수 요청"""

    wallet: str = Field(..., description="트레이딩 지갑 주소")
    reported_profit: str = Field(default="0", pattern=AMOUNT_PATTERN, description="보고 수익")
