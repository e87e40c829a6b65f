"""
AI Sales Assistant
Lead qualification, stage analysis, pricing and forecasting combined with
dual-LLM sales strategy, persisted per user
"""

import asyncio
import csv
import io
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import structlog

from ..analysis.forecast import PipelineContext, generate_forecast
from ..analysis.lead_scorer import ProspectAttributes, lead_grade, qualification_reasoning, score_lead
from ..analysis.pricing import DEFAULT_INDUSTRY, recommend_pricing
from ..analysis.stage_classifier import DEFAULT_TRANSCRIPT, classify_stage
from ..config import get_settings
from ..llm.providers import DeepSeekProvider, GeminiProvider, LLMProvider
from ..schemas import SalesAssistantRequest
from ..store.supabase_client import SupabaseClient, supabase_client
from ..utils.helpers import safe_json_dumps

logger = structlog.get_logger("saleshub.services.sales_assistant")

DEFAULT_DEAL_SIZE = "Medium"
DEFAULT_COMPETITION = "Medium"

GEMINI_UNAVAILABLE = "Sales analysis temporarily unavailable"
DEEPSEEK_UNAVAILABLE = "Strategic recommendations temporarily unavailable"

PROPOSAL_DATA = {
    "proposal_structure": {
        "executive_summary": "Overview of solution and benefits",
        "problem_statement": "Current challenges and impact",
        "proposed_solution": "Detailed solution description",
        "implementation_plan": "Timeline and milestones",
        "investment_required": "Pricing and payment terms",
        "roi_analysis": "Expected return on investment",
        "next_steps": "Implementation and engagement process"
    },
    "value_proposition": [
        "Cost reduction through automation",
        "Increased efficiency and productivity",
        "Improved customer satisfaction",
        "Competitive advantage in market",
        "Scalable solution for growth"
    ],
    "proposal_templates": [
        "Standard business proposal",
        "Enterprise solution package",
        "Industry-specific offering",
        "Custom enterprise agreement"
    ]
}

KEY_TOPICS_COVERED = [
    "Business requirements and needs",
    "Budget and investment considerations",
    "Timeline and implementation planning",
    "Technical specifications and capabilities"
]

NEXT_CONVERSATION_GOALS = [
    "Deepen understanding of specific requirements",
    "Present tailored solution proposal",
    "Address any remaining concerns or objections",
    "Negotiate terms and finalize agreement"
]

CRM_INTEGRATION = {
    "data_sync": {
        "lead_information": "Automatic CRM update with prospect details",
        "activity_tracking": "Log all interactions and follow-ups",
        "stage_updates": "Update sales stage automatically",
        "opportunity_scoring": "Real-time lead score updates"
    },
    "automation_workflows": [
        "Lead scoring and routing automation",
        "Follow-up task creation and scheduling",
        "Proposal generation and sending",
        "Pipeline reporting and analytics"
    ],
    "integrations": [
        "Salesforce CRM sync",
        "HubSpot marketing automation",
        "Pipedrive pipeline management",
        "Microsoft Dynamics integration"
    ]
}

ANALYSIS_PROMPT = """
Sales Analysis Request:

Prospect Type: {prospect_type}
Sales Stage: {sales_stage}
Lead Score: {lead_score}/100
Prospect Data: {prospect_data}
Conversation Transcript: {transcript}
Deal Context: {deal_context}
Competitive Situation: {competitive_situation}

Please provide:
1. Lead qualification analysis and scoring rationale
2. Sales strategy recommendations for this prospect
3. Objection handling and value proposition refinement
4. Next steps and action items for sales progression
5. Competitive positioning and differentiation strategy
6. ROI and business case development
7. Sales timeline and milestone planning
8. Risk assessment and mitigation strategies
"""


class AIServiceUnavailableError(Exception):
    """Neither LLM provider produced an answer"""
    pass


class SessionNotFoundError(Exception):
    """Session does not exist or belongs to another user"""
    pass


class UnsupportedExportFormatError(ValueError):
    """Export format other than json, txt or csv"""
    pass


EXPORT_MEDIA_TYPES = {
    "json": "application/json",
    "txt": "text/plain",
    "csv": "text/csv",
}

CSV_EXPORT_HEADERS = ["Session ID", "Prospect Type", "Sales Stage", "Lead Score", "Grade", "Created At"]


@dataclass(frozen=True)
class SessionExport:
    """Rendered session file"""
    content: str
    media_type: str
    filename: str


def _check_export_format(export_format: Optional[str]) -> str:
    normalized = (export_format or "").lower()
    if normalized not in EXPORT_MEDIA_TYPES:
        raise UnsupportedExportFormatError(
            f"Unsupported format: {export_format}. Supported formats: json, txt, csv"
        )
    return normalized


def _session_text(session: Dict[str, Any]) -> str:
    qualification = session.get("lead_qualification") or {}
    lines = [
        "Sales Assistant Session",
        "=" * 50,
        "",
        f"Prospect Type: {session.get('prospect_type', '')}",
        f"Sales Stage: {session.get('sales_stage', '')}",
        f"Lead Score: {qualification.get('score', '')} ({qualification.get('grade', '')})",
        f"Created: {session.get('created_at', '')}",
        "",
        "Analysis:",
        "-" * 50,
        json.dumps(session.get("ai_analysis") or {}, indent=2, ensure_ascii=False, default=str),
    ]
    return "\n".join(lines)


def _session_csv(session: Dict[str, Any]) -> str:
    qualification = session.get("lead_qualification") or {}
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_EXPORT_HEADERS)
    writer.writerow([
        session.get("id", ""),
        session.get("prospect_type", ""),
        session.get("sales_stage", ""),
        qualification.get("score", ""),
        qualification.get("grade", ""),
        session.get("created_at", ""),
    ])
    return buffer.getvalue()


def render_session_export(session: Dict[str, Any], export_format: str) -> SessionExport:
    """
    Render a stored session as a downloadable file

    Args:
        session: Stored session row
        export_format: "json", "txt" or "csv" (case-insensitive)

    Raises:
        UnsupportedExportFormatError: any other format
    """
    export_format = _check_export_format(export_format)

    if export_format == "json":
        content = json.dumps(session, indent=2, ensure_ascii=False, default=str)
    elif export_format == "txt":
        content = _session_text(session)
    else:
        content = _session_csv(session)

    session_id = str(session.get("id", "session"))
    return SessionExport(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[export_format],
        filename=f"sales_assistant_{session_id[:8]}.{export_format}"
    )


def build_sales_prompt(
    request: SalesAssistantRequest,
    lead_score: int,
    detected_stage: str
) -> str:
    """Prompt shared by both providers"""
    return ANALYSIS_PROMPT.format(
        prospect_type=request.prospect_type,
        sales_stage=request.sales_stage or detected_stage,
        lead_score=lead_score,
        prospect_data=safe_json_dumps(request.prospect_data),
        transcript=request.conversation_transcript or "N/A",
        deal_context=request.deal_context or "Standard business deal",
        competitive_situation=request.competitive_situation or "Moderate competition"
    )


class SalesAssistant:
    """Runs one sales assistant analysis and manages stored sessions"""

    def __init__(
        self,
        store: Optional[SupabaseClient] = None,
        providers: Optional[Tuple[LLMProvider, LLMProvider]] = None
    ):
        self.settings = get_settings()
        self.store = store or supabase_client
        self.gemini, self.deepseek = providers or (GeminiProvider(), DeepSeekProvider())

    @property
    def table(self) -> str:
        return self.settings.sessions_table

    async def _generate_strategy(self, prompt: str) -> Tuple[Optional[str], Optional[str]]:
        """Ask both providers concurrently"""
        gemini_text, deepseek_text = await asyncio.gather(
            self.gemini.generate(prompt),
            self.deepseek.generate(prompt)
        )
        return gemini_text, deepseek_text

    async def analyze(self, request: SalesAssistantRequest, user_id: str) -> Dict[str, Any]:
        """
        Run the full analysis for one request and persist it

        Args:
            request: Validated request body
            user_id: Authenticated user id

        Returns:
            Response payload

        Raises:
            AIServiceUnavailableError: both providers failed
            SupabaseError: session could not be stored
        """
        prospect = ProspectAttributes.from_dict(request.prospect_data)

        lead_score = score_lead(prospect)
        grade = lead_grade(lead_score)
        stage = classify_stage(request.conversation_transcript or DEFAULT_TRANSCRIPT)
        pricing = recommend_pricing(
            prospect.industry or DEFAULT_INDUSTRY,
            prospect.company_size or DEFAULT_DEAL_SIZE,
            request.competitive_situation or DEFAULT_COMPETITION
        )

        logger.info(
            "Sales analysis started",
            user_id=user_id,
            prospect_type=request.prospect_type,
            lead_score=lead_score,
            stage=stage.current_stage
        )

        prompt = build_sales_prompt(request, lead_score, stage.current_stage)
        gemini_text, deepseek_text = await self._generate_strategy(prompt)

        if not gemini_text and not deepseek_text:
            logger.error("Both AI providers failed", user_id=user_id)
            raise AIServiceUnavailableError("AI sales analysis services are currently unavailable")

        lead_qualification = {
            "score": lead_score,
            "grade": grade,
            "reasoning": qualification_reasoning(prospect)
        }
        ai_analysis = {
            "lead_qualification": lead_qualification,
            "sales_strategy": {
                "gemini_recommendations": gemini_text or GEMINI_UNAVAILABLE,
                "deepseek_strategy": deepseek_text or DEEPSEEK_UNAVAILABLE,
                "combined_approach": (
                    "Comprehensive dual-AI sales strategy completed"
                    if gemini_text and deepseek_text
                    else "Basic sales analysis completed"
                )
            }
        }

        conversation_analysis = {
            "stage_assessment": stage.to_dict(),
            "engagement_level": "High" if request.conversation_transcript else "Initial contact",
            "key_topics_covered": list(KEY_TOPICS_COVERED),
            "next_conversation_goals": list(NEXT_CONVERSATION_GOALS)
        }

        forecast = generate_forecast(lead_score, PipelineContext.from_lead_score(lead_score))

        row = {
            "user_id": user_id,
            "prospect_type": request.prospect_type,
            "sales_stage": request.sales_stage or stage.current_stage,
            "ai_analysis": ai_analysis,
            "lead_qualification": lead_qualification,
            "proposal_data": PROPOSAL_DATA,
            "pricing_recommendations": pricing.to_dict(),
            "conversation_analysis": conversation_analysis,
            "crm_integration": CRM_INTEGRATION,
            "forecasting_data": forecast.to_dict()
        }

        session = await self.store.insert_row(self.table, row)

        logger.info(
            "Sales analysis completed",
            user_id=user_id,
            session_id=session.get("id"),
            combined_approach=ai_analysis["sales_strategy"]["combined_approach"]
        )

        return {
            "success": True,
            "session_id": session.get("id"),
            "lead_analysis": {
                "score": lead_score,
                "grade": grade,
                "qualification": lead_qualification
            },
            "sales_strategy": ai_analysis["sales_strategy"],
            "proposal": PROPOSAL_DATA,
            "pricing": row["pricing_recommendations"],
            "stage_analysis": conversation_analysis["stage_assessment"],
            "forecasting": row["forecasting_data"],
            "crm_integration": CRM_INTEGRATION,
            "created_at": session.get("created_at"),
            "user_id": user_id
        }

    async def list_sessions(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Caller's sessions, newest first, with total count"""
        return await self.store.select_rows(
            self.table,
            {"user_id": user_id},
            limit=limit,
            offset=offset
        )

    async def get_session(self, user_id: str, session_id: str) -> Dict[str, Any]:
        session = await self.store.get_row(self.table, {"id": session_id, "user_id": user_id})
        if not session:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session

    async def delete_session(self, user_id: str, session_id: str) -> None:
        deleted = await self.store.delete_rows(self.table, {"id": session_id, "user_id": user_id})
        if not deleted:
            raise SessionNotFoundError(f"Session {session_id} not found")
        logger.info("Session deleted", user_id=user_id, session_id=session_id)

    async def export_session(self, user_id: str, session_id: str, export_format: str) -> SessionExport:
        """Caller's session rendered as json, txt or csv"""
        _check_export_format(export_format)
        session = await self.get_session(user_id, session_id)
        export = render_session_export(session, export_format)
        logger.info("Session exported", user_id=user_id, session_id=session_id, format=export.media_type)
        return export


# Global instance
sales_assistant = SalesAssistant()
