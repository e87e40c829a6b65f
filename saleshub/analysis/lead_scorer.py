"""
Lead Qualification Scoring
BANT-style scoring: budget, authority, need, timeline (0-25 each, 0-100 total)
"""

from dataclasses import dataclass, asdict, fields
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import structlog

from .errors import InvalidArgument, optional_text

logger = structlog.get_logger("saleshub.analysis.lead_scorer")

MAX_DIMENSION_POINTS = 25
MAX_SCORE = 100

# (keywords, points) tiers per dimension, checked in order, first match wins
BUDGET_TIERS: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (("high", "50k+"), 25),
    (("medium", "10k-50k"), 15),
    (("low", "1k-10k"), 10),
)

AUTHORITY_TIERS: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (("ceo", "director", "manager"), 25),
    (("head", "lead"), 20),
)

NEED_TIERS: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (("critical", "urgent", "severe"), 25),
    (("significant", "important"), 20),
    (("moderate", "some"), 15),
)

TIMELINE_TIERS: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (("immediate", "asap", "this month"), 25),
    (("quarter", "3 months"), 20),
    (("6 months", "this year"), 15),
)

# Lowest score for each grade, highest grade first
GRADE_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (80, "A"),
    (60, "B"),
    (40, "C"),
)
DEFAULT_GRADE = "D"

_CAMEL_ALIASES = MappingProxyType({
    "budgetRange": "budget_range",
    "decisionMaker": "decision_maker",
    "painPoints": "pain_points",
    "companySize": "company_size",
})


@dataclass(frozen=True)
class ProspectAttributes:
    """Prospect signals supplied by the caller. Every field is optional."""
    budget_range: Optional[str] = None
    role: Optional[str] = None
    decision_maker: Optional[str] = None
    pain_points: Optional[str] = None
    timeline: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None

    def __post_init__(self):
        for f in fields(self):
            optional_text(getattr(self, f.name), f.name)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProspectAttributes":
        """Build from request JSON, accepting snake_case or camelCase keys"""
        if not isinstance(data, Mapping):
            raise InvalidArgument(
                f"prospect data must be an object, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name in known and value is not None:
                values[name] = value

        return cls(**values)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


def _tier_points(text: Optional[str], tiers) -> int:
    if not text:
        return 0
    lowered = text.lower()
    for keywords, points in tiers:
        if any(keyword in lowered for keyword in keywords):
            return min(points, MAX_DIMENSION_POINTS)
    return 0


def _authority_points(prospect: ProspectAttributes) -> int:
    if prospect.decision_maker == "Yes":
        return MAX_DIMENSION_POINTS
    return _tier_points(prospect.role, AUTHORITY_TIERS)


def _coerce(prospect: Union[ProspectAttributes, Mapping[str, Any]]) -> ProspectAttributes:
    if isinstance(prospect, ProspectAttributes):
        return prospect
    return ProspectAttributes.from_dict(prospect)


def score_breakdown(prospect: Union[ProspectAttributes, Mapping[str, Any]]) -> Dict[str, int]:
    """Points per dimension, each in [0, 25]"""
    prospect = _coerce(prospect)
    return {
        "budget": _tier_points(prospect.budget_range, BUDGET_TIERS),
        "authority": _authority_points(prospect),
        "need": _tier_points(prospect.pain_points, NEED_TIERS),
        "timeline": _tier_points(prospect.timeline, TIMELINE_TIERS),
    }


def score_lead(prospect: Union[ProspectAttributes, Mapping[str, Any]]) -> int:
    """
    Score a prospect from 0 to 100

    Args:
        prospect: ProspectAttributes or the raw prospect_data mapping

    Returns:
        Sum of the four dimension scores, capped at 100
    """
    breakdown = score_breakdown(prospect)
    score = min(sum(breakdown.values()), MAX_SCORE)
    logger.debug("Lead scored", score=score, **breakdown)
    return score


def lead_grade(score: int) -> str:
    """Convert numeric lead score to letter grade"""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return DEFAULT_GRADE


def qualification_reasoning(prospect: Union[ProspectAttributes, Mapping[str, Any]]) -> List[str]:
    """Human readable reasoning lines shown next to the score"""
    prospect = _coerce(prospect)
    return [
        f"Budget qualification: {prospect.budget_range or 'Not specified'}",
        f"Decision authority: {prospect.decision_maker or 'Unknown'}",
        f"Need intensity: {'High' if prospect.pain_points else 'To be determined'}",
        f"Timeline urgency: {prospect.timeline or 'To be determined'}",
    ]
