"""
금액 단위 변환 유틸리티

내부 저장: 최소 단위(wei) 정수 | 외부 표시: 토큰 단위 Decimal
(ethers의 parseUnits / formatUnits와 같은 규칙)
"""

from decimal import Decimal, InvalidOperation


def to_base_units(value: Decimal | str | int, decimals: int) -> int:
    """토큰 단위 금액을 최소 단위 정수로 변환

    Args:
        value: 토큰 단위 금액 (예: "1.5")
        decimals: 토큰 소수 자릿수 (예: 18)

    Returns:
        최소 단위 정수

    Raises:
        ValueError: 숫자가 아니거나, 음수이거나, 소수 자릿수를 넘는 경우

    Example:
        >>> to_base_units("1.5", 18)
        1500000000000000000
    """
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"금액 형식이 올바르지 않습니다: {value!r}") from e

    if not amount.is_finite() or amount < 0:
        raise ValueError(f"금액은 0 이상의 유한한 값이어야 합니다: {value!r}")

    scaled = amount.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"소수 자릿수가 {decimals}자리를 초과합니다: {value!r}")

    return int(scaled)


def format_units(amount: int, decimals: int) -> Decimal:
    """최소 단위 정수를 토큰 단위 Decimal로 변환

    Example:
        >>> format_units(1500000000000000000, 18)
        Decimal('1.5')
    """
    result = Decimal(amount).scaleb(-decimals)
    # 불필요한 0 제거 (지수 표기 방지)
    normalized = result.normalize()
    if normalized == normalized.to_integral_value():
        return normalized.quantize(Decimal(1))
    return normalized
