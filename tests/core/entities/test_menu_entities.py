"""Tests for menu entities and margin computation."""

import pytest

from catering.core.entities.menu import MenuItem, compute_margin_percent
from catering.core.exceptions import InvalidSellingPriceError


class TestComputeMargin:
    def test_margin(self):
        assert compute_margin_percent(150.0, 60.0) == 60.0

    def test_margin_rounded_to_two_places(self):
        assert compute_margin_percent(90.0, 30.0) == 66.67

    def test_cost_above_price_gives_negative_margin(self):
        assert compute_margin_percent(100.0, 125.0) == -25.0

    @pytest.mark.parametrize("price", [0.0, -10.0])
    def test_non_positive_price_rejected(self, price):
        with pytest.raises(InvalidSellingPriceError):
            compute_margin_percent(price, 10.0)


class TestMenuItemReprice:
    def test_reprice_cost_only(self):
        item = MenuItem(business_id=1, name="Dal", cost_per_serving=20, selling_price=80)
        item.reprice(cost_per_serving=40)
        assert item.cost_per_serving == 40
        assert item.margin_percent == 50.0

    def test_reprice_to_zero_price_raises(self):
        item = MenuItem(business_id=1, name="Dal", cost_per_serving=20, selling_price=80)
        with pytest.raises(InvalidSellingPriceError):
            item.reprice(selling_price=0)
