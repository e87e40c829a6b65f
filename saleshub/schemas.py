"""
Request and response models
Pydantic schemas for the sales assistant API
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class SalesAssistantRequest(BaseModel):
    prospect_type: str = Field(..., min_length=1)
    prospect_data: Dict[str, Any]
    sales_stage: Optional[str] = None
    conversation_transcript: Optional[str] = None
    historical_performance: Optional[Dict[str, Any]] = None
    deal_context: Optional[str] = None
    competitive_situation: Optional[str] = None

    @field_validator("prospect_type")
    @classmethod
    def strip_prospect_type(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("prospect_type must not be blank")
        return v


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool


class DeleteSessionResult(BaseModel):
    message: str
    session_id: str
