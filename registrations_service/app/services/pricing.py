"""Course price resolution.

The catalog shows one effective price per course, picked by a fixed precedence:
a time-boxed special offer, then the early-bird price, then the base price.
Everything here is pure so the same rules serve the catalog, the registration
form and the stored ``price_offered``.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol


class PricedCourse(Protocol):
	base_price: int
	early_bird_price: int | None
	special_offer_price: int | None


def effective_price(course: PricedCourse) -> int:
	"""Return the first price set among special offer, early bird and base."""
	for price in (course.special_offer_price, course.early_bird_price):
		if price:
			return price
	return course.base_price


def discount_percent(base_price: int | None, price: int | None) -> int:
	"""Percentage off ``base_price``, rounded half up like the storefront shows it.

	0 when either price is missing, and never negative.
	"""
	if not base_price or not price:
		return 0
	percent = (Decimal(base_price) - Decimal(price)) / Decimal(base_price) * 100
	rounded = int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
	return max(rounded, 0)


def bundle_price(
	confirmed_bundles: int,
	*,
	offer_price: int,
	base_price: int,
	offer_slots: int,
) -> int:
	"""Bundle is sold at the offer price until ``offer_slots`` bundles are confirmed."""
	if confirmed_bundles < offer_slots:
		return offer_price
	return base_price
