from decimal import Decimal

from posts.models import Post
from posts.pricing import calculate_total_amount


def test_per_person_rate_is_multiplied_by_party_size():
    post = Post(price_per_person=Decimal("50"), price_total=Decimal("400"))
    assert calculate_total_amount(post, 3) == Decimal("150.00")


def test_fixed_total_used_when_no_per_person_rate():
    post = Post(price_total=Decimal("400"), price_amount=Decimal("90"))
    assert calculate_total_amount(post, 3) == Decimal("400.00")


def test_flat_amount_is_last_resort():
    post = Post(price_amount=Decimal("90"))
    assert calculate_total_amount(post, 5) == Decimal("90.00")


def test_unpriced_listing_is_free():
    assert calculate_total_amount(Post(), 2) == Decimal("0.00")
