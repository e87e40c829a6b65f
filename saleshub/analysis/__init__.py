"""
Deterministic sales analysis: lead scoring, stage detection, pricing, forecasting
"""

from .errors import InvalidArgument
from .lead_scorer import ProspectAttributes, score_lead, score_breakdown, lead_grade, qualification_reasoning
from .stage_classifier import StageAssessment, classify_stage
from .pricing import PricingRecommendation, recommend_pricing
from .forecast import ForecastData, PipelineContext, generate_forecast

__all__ = [
    "InvalidArgument",
    "ProspectAttributes",
    "score_lead",
    "score_breakdown",
    "lead_grade",
    "qualification_reasoning",
    "StageAssessment",
    "classify_stage",
    "PricingRecommendation",
    "recommend_pricing",
    "ForecastData",
    "PipelineContext",
    "generate_forecast",
]
