from types import SimpleNamespace

import pytest

from registrations_service.app.services.pricing import bundle_price, discount_percent, effective_price


def _course(base, early=None, special=None):
	return SimpleNamespace(base_price=base, early_bird_price=early, special_offer_price=special)


def test_special_offer_wins_over_early_bird():
	assert effective_price(_course(1999, early=1499, special=999)) == 999


def test_early_bird_used_without_special_offer():
	assert effective_price(_course(1999, early=1499)) == 1499


def test_base_price_is_the_fallback():
	assert effective_price(_course(1999)) == 1999
	# zero means "not set", same as missing
	assert effective_price(_course(1999, early=0, special=0)) == 1999


@pytest.mark.parametrize(
	("base", "price", "expected"),
	[
		(1999, 1499, 25),
		(8, 7, 13),
		(1000, 1000, 0),
		(1000, 1200, 0),
		(None, 500, 0),
		(1000, None, 0),
		(0, 0, 0),
	],
)
def test_discount_percent(base, price, expected):
	assert discount_percent(base, price) == expected


def test_bundle_price_switches_after_offer_slots():
	kwargs = {"offer_price": 2499, "base_price": 3999, "offer_slots": 10}
	assert bundle_price(0, **kwargs) == 2499
	assert bundle_price(9, **kwargs) == 2499
	assert bundle_price(10, **kwargs) == 3999
	assert bundle_price(25, **kwargs) == 3999


@pytest.mark.parametrize(
	("base", "early", "special"),
	[(1999, 1499, None), (1999, None, 999), (1999, 1999, None), (500, 400, 300), (100, None, None)],
)
def test_effective_price_never_exceeds_base(base, early, special):
	price = effective_price(_course(base, early=early, special=special))
	assert price <= base
	if price == base:
		assert discount_percent(base, price) == 0
