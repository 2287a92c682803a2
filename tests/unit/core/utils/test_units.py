"""
금액 단위 변환 테스트
"""

from decimal import Decimal

import pytest

from core.utils.units import format_units, to_base_units


class TestToBaseUnits:
    """to_base_units 테스트"""

    def test_integer_string(self) -> None:
        assert to_base_units("100", 18) == 100 * 10**18

    def test_fraction(self) -> None:
        assert to_base_units("1.5", 18) == 1_500_000_000_000_000_000

    def test_smallest_unit(self) -> None:
        assert to_base_units("0.000000000000000001", 18) == 1

    def test_decimal_and_int_input(self) -> None:
        assert to_base_units(Decimal("0.25"), 6) == 250_000
        assert to_base_units(3, 6) == 3_000_000

    def test_zero(self) -> None:
        assert to_base_units("0", 18) == 0

    def test_too_many_decimals(self) -> None:
        with pytest.raises(ValueError, match="소수 자릿수"):
            to_base_units("0.0000001", 6)

    def test_negative(self) -> None:
        with pytest.raises(ValueError):
            to_base_units("-1", 18)

    @pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            to_base_units(value, 18)


class TestFormatUnits:
    """format_units 테스트"""

    def test_fraction(self) -> None:
        assert format_units(1_500_000_000_000_000_000, 18) == Decimal("1.5")

    def test_whole_number_has_no_exponent(self) -> None:
        """정수 값은 지수 표기 없이 표시"""
        result = format_units(100 * 10**18, 18)
        assert result == Decimal(100)
        assert str(result) == "100"

    def test_zero(self) -> None:
        assert str(format_units(0, 18)) == "0"

    def test_scenario_amount(self) -> None:
        assert format_units(108_820_000_000_000_000_000, 18) == Decimal("108.82")

    def test_reverses_to_base_units(self) -> None:
        amount = to_base_units("0.98", 18)
        assert format_units(amount, 18) == Decimal("0.98")
