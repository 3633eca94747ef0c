from __future__ import annotations

from decimal import Decimal

ZERO = Decimal("0.00")


def _decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def calculate_total_amount(post, number_of_people: int) -> Decimal:
    """
    Price a booking request against a listing.

    First match wins: per-person rate times the party size, then the fixed
    total, then the flat amount, otherwise zero.
    """
    if post.price_per_person:
        return (_decimal(post.price_per_person) * number_of_people).quantize(ZERO)
    if post.price_total:
        return _decimal(post.price_total).quantize(ZERO)
    if post.price_amount:
        return _decimal(post.price_amount).quantize(ZERO)
    return ZERO
