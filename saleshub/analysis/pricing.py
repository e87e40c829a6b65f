"""
Pricing Recommender
Static industry price table with deal size tier and competition multiplier
"""

from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .errors import optional_text, round_half_up

DEFAULT_INDUSTRY = "Technology"

# Base price in USD per industry and tier
BASE_PRICING: Mapping[str, Mapping[str, int]] = MappingProxyType({
    "Technology": MappingProxyType({"low": 5000, "medium": 25000, "high": 100000}),
    "Healthcare": MappingProxyType({"low": 3000, "medium": 15000, "high": 75000}),
    "Finance": MappingProxyType({"low": 10000, "medium": 50000, "high": 200000}),
    "Manufacturing": MappingProxyType({"low": 2000, "medium": 10000, "high": 50000}),
    "Retail": MappingProxyType({"low": 1000, "medium": 8000, "high": 35000}),
})

DEAL_SIZE_TIERS: Mapping[str, str] = MappingProxyType({
    "Enterprise": "high",
    "SMB": "low",
})
DEFAULT_TIER = "medium"

COMPETITION_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "High": 0.85,
    "Low": 1.15,
})
DEFAULT_MULTIPLIER = 1.0

PRICE_RANGE_SPREAD = 0.2

DISCOUNT_OPPORTUNITIES = (
    "Volume discount for multi-year contracts",
    "Early payment discount",
    "Referral program incentive",
    "Implementation services package",
)

VALUE_JUSTIFICATION = (
    "ROI calculation and cost savings",
    "Competitive advantage analysis",
    "Risk mitigation benefits",
    "Operational efficiency gains",
)


@dataclass(frozen=True)
class PriceRange:
    minimum: int
    maximum: int


@dataclass(frozen=True)
class PricingRecommendation:
    base_price: int
    adjusted_price: int
    price_range: PriceRange
    discount_opportunities: List[str]
    value_justification: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def recommend_pricing(
    industry: Optional[str] = None,
    deal_size: Optional[str] = None,
    competition: Optional[str] = None
) -> PricingRecommendation:
    """
    Recommend a price for a deal

    Args:
        industry: Industry name, unknown values use the Technology row
        deal_size: "Enterprise", "SMB" or anything else for the medium tier
        competition: "High" (discount), "Low" (premium) or anything else

    Returns:
        PricingRecommendation with a +/-20% range around the base price
    """
    industry = optional_text(industry, "industry")
    deal_size = optional_text(deal_size, "deal_size")
    competition = optional_text(competition, "competition")

    rates = BASE_PRICING.get(industry, BASE_PRICING[DEFAULT_INDUSTRY])
    base_price = rates[DEAL_SIZE_TIERS.get(deal_size, DEFAULT_TIER)]
    multiplier = COMPETITION_MULTIPLIERS.get(competition, DEFAULT_MULTIPLIER)

    adjusted_price = round_half_up(base_price * multiplier)

    return PricingRecommendation(
        base_price=base_price,
        adjusted_price=adjusted_price,
        price_range=PriceRange(
            minimum=round_half_up(base_price * (1 - PRICE_RANGE_SPREAD)),
            maximum=round_half_up(base_price * (1 + PRICE_RANGE_SPREAD)),
        ),
        discount_opportunities=list(DISCOUNT_OPPORTUNITIES),
        value_justification=list(VALUE_JUSTIFICATION),
    )
