"""
Tests for pricing recommendations
"""

import pytest

from saleshub.analysis.errors import InvalidArgument
from saleshub.analysis.pricing import BASE_PRICING, recommend_pricing


class TestRecommendPricing:

    def test_unknown_industry_falls_back_to_technology(self):
        result = recommend_pricing("UnknownIndustry", "Enterprise", "High")
        assert result.base_price == 100000
        assert result.adjusted_price == 85000
        assert result.price_range.minimum == 80000
        assert result.price_range.maximum == 120000

    def test_retail_smb_low_competition(self):
        result = recommend_pricing("Retail", "SMB", "Low")
        assert result.base_price == 1000
        assert result.adjusted_price == 1150
        assert result.price_range.minimum == 800
        assert result.price_range.maximum == 1200

    def test_range_ignores_competition(self):
        ranges = {
            competition: recommend_pricing("Retail", "SMB", competition).price_range
            for competition in ("High", "Medium", "Low")
        }
        assert set(ranges.values()) == {ranges["Medium"]}
        assert ranges["High"].minimum == 800

    def test_defaults_use_medium_tier_without_adjustment(self):
        result = recommend_pricing()
        assert result.base_price == 25000
        assert result.adjusted_price == 25000
        assert (result.price_range.minimum, result.price_range.maximum) == (20000, 30000)

    @pytest.mark.parametrize("industry", list(BASE_PRICING))
    def test_deal_size_tiers(self, industry):
        rates = BASE_PRICING[industry]
        assert recommend_pricing(industry, "Enterprise").base_price == rates["high"]
        assert recommend_pricing(industry, "SMB").base_price == rates["low"]
        assert recommend_pricing(industry, "Mid-Market").base_price == rates["medium"]

    def test_unrecognised_competition_has_no_effect(self):
        result = recommend_pricing("Healthcare", "Medium", "Fierce")
        assert result.adjusted_price == result.base_price == 15000

    def test_static_talking_points(self):
        result = recommend_pricing("Finance")
        assert len(result.discount_opportunities) == 4
        assert "Early payment discount" in result.discount_opportunities
        assert len(result.value_justification) == 4

    def test_to_dict_shape(self):
        data = recommend_pricing("Manufacturing", "Enterprise", "Low").to_dict()
        assert data["base_price"] == 50000
        assert data["adjusted_price"] == 57500
        assert data["price_range"] == {"minimum": 40000, "maximum": 60000}

    def test_idempotent(self):
        assert recommend_pricing("Retail", "SMB", "Low") == recommend_pricing("Retail", "SMB", "Low")

    def test_non_string_argument(self):
        with pytest.raises(InvalidArgument):
            recommend_pricing("Retail", 5)
