"""
Sales Stage Classifier
Keyword-based detection of the pipeline stage from a conversation transcript
"""

from dataclasses import dataclass, field, asdict
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import structlog

from .errors import optional_text, round_half_up

logger = structlog.get_logger("saleshub.analysis.stage_classifier")

DEFAULT_TRANSCRIPT = "Initial conversation"
DEFAULT_STAGE = "Prospecting"
FALLBACK_NEXT_STEPS = "Continue relationship building"

# Declaration order matters: later stages overwrite earlier ones
STAGE_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "Prospecting": ("hello", "hi", "introduction", "reach out", "new", "first time"),
    "Qualification": ("need", "requirement", "budget", "timeline", "decision", "authority"),
    "Needs Analysis": ("problem", "challenge", "current", "solution", "feature", "how"),
    "Proposal": ("quote", "price", "proposal", "offer", "package", "cost"),
    "Negotiation": ("discount", "negotiate", "better", "compare", "competing", "alternative"),
    "Closing": ("deal", "close", "agreement", "sign", "start", "begin"),
})

STAGE_NEXT_STEPS: Mapping[str, str] = MappingProxyType({
    "Prospecting": "Focus on qualification - ask about budget, authority, need, and timeline",
    "Qualification": "Move to needs analysis - understand specific challenges and requirements",
    "Needs Analysis": "Prepare proposal - focus on value proposition and ROI",
    "Proposal": "Negotiate terms - address objections and finalize details",
    "Negotiation": "Close the deal - create urgency and commitment",
    "Closing": "Follow up - ensure implementation and satisfaction",
})

# Same list for every stage
PROGRESSION_OPPORTUNITIES: Tuple[str, ...] = (
    "Speed up sales cycle",
    "Improve conversion rate",
    "Reduce sales cost",
)


@dataclass(frozen=True)
class StageAssessment:
    """Detected stage with confidence and advice"""
    current_stage: str
    confidence_score: int
    next_steps: str
    progression_opportunities: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def count_stage_matches(transcript: str) -> Dict[str, int]:
    """Number of distinct keywords of each stage found in the transcript"""
    lowered = transcript.lower()
    return {
        stage: sum(1 for keyword in keywords if keyword in lowered)
        for stage, keywords in STAGE_KEYWORDS.items()
    }


def classify_stage(transcript: Optional[str] = None) -> StageAssessment:
    """
    Detect the sales stage of a conversation

    Stages are scanned in declaration order and every stage with at least
    one keyword hit replaces the current one, so the last matching stage
    wins even if an earlier stage had more hits.

    Args:
        transcript: Conversation text (defaults to "Initial conversation")

    Returns:
        StageAssessment
    """
    transcript = optional_text(transcript, "transcript")
    if transcript is None:
        transcript = DEFAULT_TRANSCRIPT

    current_stage = DEFAULT_STAGE
    confidence = 0.0

    for stage, matches in count_stage_matches(transcript).items():
        if matches > 0:
            current_stage = stage
            confidence = matches / len(STAGE_KEYWORDS[stage]) * 100

    assessment = StageAssessment(
        current_stage=current_stage,
        confidence_score=round_half_up(confidence),
        next_steps=STAGE_NEXT_STEPS.get(current_stage, FALLBACK_NEXT_STEPS),
        progression_opportunities=list(PROGRESSION_OPPORTUNITIES),
    )

    logger.debug(
        "Stage classified",
        stage=assessment.current_stage,
        confidence=assessment.confidence_score
    )
    return assessment
