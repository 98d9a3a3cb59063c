"""Member discount and Stripe fee arithmetic.

A verified member gets the member price on exactly one ticket; every other
ticket is charged at the regular price. Card payments pass Stripe's fee on to
the payer so the association receives the full amount.
"""

from decimal import ROUND_HALF_UP, Decimal

from events.schema import MemberPricingSchema

STRIPE_FEE_RATE = Decimal("0.017")
STRIPE_FEE_FIXED = Decimal("0.30")
CENT = Decimal("0.01")

Number = Decimal | int | float | str


def _to_decimal(value: Number | None) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def calculate_member_pricing(
    regular_price: Number | None,
    member_price: Number | None,
    tickets: int,
    is_member_verified: bool,
) -> MemberPricingSchema:
    """Price ``tickets`` tickets, applying the member price to one of them.

    A member discount exists only when the event is paid and the member price
    is set and strictly lower than the regular price.

    >>> calculate_member_pricing(100, 50, 3, True).total_fee
    Decimal('250')
    """
    regular_fee_per_ticket = _to_decimal(regular_price)
    member_fee_per_ticket = _to_decimal(member_price) if member_price is not None else regular_fee_per_ticket

    has_member_discount = (
        regular_fee_per_ticket > 0 and member_price is not None and member_fee_per_ticket < regular_fee_per_ticket
    )
    member_discount_applied = has_member_discount and is_member_verified

    if member_discount_applied:
        total_fee = member_fee_per_ticket + (tickets - 1) * regular_fee_per_ticket
    else:
        total_fee = tickets * regular_fee_per_ticket

    savings = regular_fee_per_ticket - member_fee_per_ticket if has_member_discount else Decimal("0")

    return MemberPricingSchema(
        total_fee=total_fee,
        has_member_discount=has_member_discount,
        member_discount_applied=member_discount_applied,
        savings=savings,
        member_fee_per_ticket=member_fee_per_ticket,
        regular_fee_per_ticket=regular_fee_per_ticket,
    )


def calculate_total_with_stripe_fee(amount: Number) -> Decimal:
    """Gross up ``amount`` so that what remains after Stripe's fee equals ``amount``.

    total = (amount + fixed) / (1 - rate), rounded to cents. Non-positive amounts give 0.
    """
    amount = _to_decimal(amount)
    if amount <= 0:
        return Decimal("0")
    total = (amount + STRIPE_FEE_FIXED) / (1 - STRIPE_FEE_RATE)
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_stripe_fee(amount: Number) -> Decimal:
    """The fee part of :func:`calculate_total_with_stripe_fee`."""
    amount = _to_decimal(amount)
    if amount <= 0:
        return Decimal("0")
    return (calculate_total_with_stripe_fee(amount) - amount).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: Decimal) -> int:
    """Convert a currency amount to the integer minor unit Stripe expects."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
