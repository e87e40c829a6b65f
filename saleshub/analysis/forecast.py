"""
Sales Forecast Generator
Extrapolates monthly revenue from the lead score and static conversion assumptions
"""

from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import InvalidArgument, optional_number, round_half_up

BASELINE_REVENUE = 50000
BASELINE_OPPORTUNITIES = 25
BASELINE_WEIGHTED_VALUE = 250000

# Revenue at a perfect lead score, used to scale the pipeline by score
FULL_SCORE_REVENUE = 100000
FULL_SCORE_WEIGHTED_VALUE = 250000

NEXT_MONTH_GROWTH = 1.2
THIRD_MONTH_GROWTH = 1.3

CONVERSION_RATES: Mapping[str, str] = MappingProxyType({
    "lead_to_opportunity": "25-30%",
    "opportunity_to_proposal": "40-50%",
    "proposal_to_close": "60-70%",
    "overall_conversion": "6-8%",
})

SALES_CYCLE_LENGTH = "45-60 days"

PERFORMANCE_INDICATORS = (
    "Lead quality score improvement",
    "Conversion rate optimization",
    "Sales cycle acceleration",
    "Customer acquisition cost reduction",
)


@dataclass(frozen=True)
class PipelineContext:
    """Caller supplied pipeline figures, zero or missing means use the baseline"""
    expected_revenue: Optional[float] = None
    total_opportunities: Optional[int] = None
    weighted_value: Optional[float] = None

    def __post_init__(self):
        optional_number(self.expected_revenue, "expected_revenue")
        optional_number(self.total_opportunities, "total_opportunities")
        optional_number(self.weighted_value, "weighted_value")

    @classmethod
    def from_lead_score(cls, lead_score: int) -> "PipelineContext":
        """Pipeline scaled by lead score"""
        _check_lead_score(lead_score)
        return cls(
            expected_revenue=lead_score / 100 * FULL_SCORE_REVENUE,
            total_opportunities=BASELINE_OPPORTUNITIES,
            weighted_value=lead_score / 100 * FULL_SCORE_WEIGHTED_VALUE,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PipelineContext":
        if not isinstance(data, Mapping):
            raise InvalidArgument(
                f"pipeline context must be an object, got {type(data).__name__}"
            )
        return cls(
            expected_revenue=data.get("expected_revenue"),
            total_opportunities=data.get("total_opportunities"),
            weighted_value=data.get("weighted_value"),
        )


@dataclass(frozen=True)
class MonthlyForecast:
    this_month: float
    next_month: int
    third_month: int


@dataclass(frozen=True)
class PipelineMetrics:
    total_opportunities: int
    weighted_pipeline: float
    average_deal_size: int
    sales_cycle_length: str


@dataclass(frozen=True)
class ForecastData:
    monthly_forecast: MonthlyForecast
    conversion_rates: Dict[str, str]
    pipeline_metrics: PipelineMetrics
    performance_indicators: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _check_lead_score(lead_score: Any) -> None:
    optional_number(lead_score, "lead_score")
    if lead_score is None or not 0 <= lead_score <= 100:
        raise InvalidArgument(f"lead_score must be within 0..100, got {lead_score!r}")


def generate_forecast(
    lead_score: int,
    pipeline_context: Optional[Union[PipelineContext, Mapping[str, Any]]] = None
) -> ForecastData:
    """
    Build a three month revenue forecast

    Args:
        lead_score: Lead score 0-100
        pipeline_context: Pipeline figures; scaled from lead_score when omitted

    Returns:
        ForecastData
    """
    _check_lead_score(lead_score)

    if pipeline_context is None:
        context = PipelineContext.from_lead_score(lead_score)
    elif isinstance(pipeline_context, PipelineContext):
        context = pipeline_context
    else:
        context = PipelineContext.from_dict(pipeline_context)

    this_month = context.expected_revenue or BASELINE_REVENUE
    opportunities = context.total_opportunities or BASELINE_OPPORTUNITIES
    weighted = context.weighted_value or BASELINE_WEIGHTED_VALUE

    return ForecastData(
        monthly_forecast=MonthlyForecast(
            this_month=this_month,
            next_month=round_half_up(this_month * NEXT_MONTH_GROWTH),
            third_month=round_half_up(this_month * THIRD_MONTH_GROWTH),
        ),
        conversion_rates=dict(CONVERSION_RATES),
        pipeline_metrics=PipelineMetrics(
            total_opportunities=opportunities,
            weighted_pipeline=weighted,
            average_deal_size=round_half_up(weighted / opportunities),
            sales_cycle_length=SALES_CYCLE_LENGTH,
        ),
        performance_indicators=list(PERFORMANCE_INDICATORS),
    )
