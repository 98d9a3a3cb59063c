from decimal import Decimal

import pytest

from events.service.pricing import (
    calculate_member_pricing,
    calculate_stripe_fee,
    calculate_total_with_stripe_fee,
    to_cents,
)


class TestCalculateMemberPricing:
    def test_non_member_pays_regular_price(self) -> None:
        result = calculate_member_pricing(100, 50, 1, False)

        assert result.total_fee == Decimal("100")
        assert result.has_member_discount is True
        assert result.member_discount_applied is False
        assert result.savings == Decimal("50")

    def test_non_member_pays_regular_price_for_every_ticket(self) -> None:
        assert calculate_member_pricing(100, 50, 5, False).total_fee == Decimal("500")

    @pytest.mark.parametrize(
        "regular,member,tickets,expected_total",
        [
            (100, 50, 1, "50"),
            (100, 50, 2, "150"),
            (100, 50, 5, "450"),
            (80, 60, 10, "780"),
        ],
    )
    def test_member_price_applies_to_one_ticket(
        self, regular: int, member: int, tickets: int, expected_total: str
    ) -> None:
        result = calculate_member_pricing(regular, member, tickets, True)

        assert result.total_fee == Decimal(expected_total)
        assert result.member_discount_applied is True
        assert result.savings == Decimal(regular - member)

    @pytest.mark.parametrize("member", [100, None, 150])
    def test_no_discount_unless_member_price_is_lower(self, member: int | None) -> None:
        result = calculate_member_pricing(100, member, 3, True)

        assert result.total_fee == Decimal("300")
        assert result.has_member_discount is False
        assert result.member_discount_applied is False
        assert result.savings == Decimal("0")

    def test_free_event(self) -> None:
        result = calculate_member_pricing(0, 0, 5, True)

        assert result.total_fee == Decimal("0")
        assert result.has_member_discount is False

    def test_zero_tickets_follow_the_formula(self) -> None:
        assert calculate_member_pricing(100, 50, 0, True).total_fee == Decimal("-50")

    def test_decimal_prices_are_exact(self) -> None:
        result = calculate_member_pricing(Decimal("29.99"), Decimal("19.99"), 3, True)

        assert result.total_fee == Decimal("79.97")
        assert result.savings == Decimal("10.00")

    def test_reports_unit_prices(self) -> None:
        result = calculate_member_pricing(100, 50, 3, True)

        assert result.regular_fee_per_ticket == Decimal("100")
        assert result.member_fee_per_ticket == Decimal("50")


class TestStripeFee:
    def test_total_with_fee(self) -> None:
        assert calculate_total_with_stripe_fee(100) == Decimal("102.03")

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amounts(self, amount: int) -> None:
        assert calculate_total_with_stripe_fee(amount) == Decimal("0")
        assert calculate_stripe_fee(amount) == Decimal("0")

    def test_fee(self) -> None:
        assert calculate_stripe_fee(100) == Decimal("2.03")

    def test_member_checkout_flow(self) -> None:
        pricing = calculate_member_pricing(100, 50, 3, True)
        total = calculate_total_with_stripe_fee(pricing.total_fee)
        fee = calculate_stripe_fee(pricing.total_fee)

        assert pricing.total_fee == Decimal("250")
        assert total == Decimal("254.63")
        assert total - fee == pricing.total_fee


def test_to_cents() -> None:
    assert to_cents(Decimal("102.03")) == 10203
    assert to_cents(Decimal("0.005")) == 1
