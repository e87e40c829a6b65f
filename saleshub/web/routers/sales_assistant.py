"""
Sales Assistant Router - analysis endpoint, session history and export
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response
import structlog

from ...analysis.errors import InvalidArgument
from ...schemas import DeleteSessionResult, Pagination, SalesAssistantRequest
from ...services.sales_assistant import (
    AIServiceUnavailableError,
    SalesAssistant,
    SessionNotFoundError,
    UnsupportedExportFormatError,
    sales_assistant,
)
from ...store.supabase_client import AuthenticationError, SupabaseError, supabase_client

logger = structlog.get_logger("saleshub.web.sales_assistant")

router = APIRouter(prefix="/api/sales-assistant", tags=["sales-assistant"])


async def get_current_user(authorization: str = Header(None)) -> Dict[str, Any]:
    """Resolve the Supabase user from the Bearer token"""
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    token = authorization.replace("Bearer ", "", 1).strip()
    try:
        return await supabase_client.get_user(token)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except SupabaseError as e:
        logger.error(f"Token verification failed: {e}")
        raise HTTPException(status_code=503, detail="Authentication service unavailable")


def get_sales_assistant() -> SalesAssistant:
    return sales_assistant


@router.post("")
async def run_sales_assistant(
    body: SalesAssistantRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    assistant: SalesAssistant = Depends(get_sales_assistant)
) -> Dict[str, Any]:
    """Score the lead, classify the stage, price and forecast, then persist"""
    try:
        return await assistant.analyze(body, user["id"])
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AIServiceUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except SupabaseError as e:
        logger.error(f"Failed to save sales assistant session: {e}", user_id=user["id"])
        raise HTTPException(status_code=500, detail="Failed to save sales assistant session")


@router.get("/sessions")
async def list_sessions(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: Dict[str, Any] = Depends(get_current_user),
    assistant: SalesAssistant = Depends(get_sales_assistant)
) -> Dict[str, Any]:
    """Caller's stored sessions, newest first"""
    try:
        results, total = await assistant.list_sessions(user["id"], limit=limit, offset=offset)
    except SupabaseError as e:
        raise HTTPException(status_code=500, detail=f"Database fetch failed: {e}")

    pagination = Pagination(
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + limit < total
    )
    return {"data": {"results": results, "pagination": pagination.model_dump()}}


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    assistant: SalesAssistant = Depends(get_sales_assistant)
) -> Dict[str, Any]:
    try:
        session = await assistant.get_session(user["id"], session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SupabaseError as e:
        raise HTTPException(status_code=500, detail=f"Database fetch failed: {e}")
    return {"data": session}


@router.delete("/sessions/{session_id}")
async def delete_session(
    session_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    assistant: SalesAssistant = Depends(get_sales_assistant)
) -> Dict[str, Any]:
    try:
        await assistant.delete_session(user["id"], session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SupabaseError as e:
        raise HTTPException(status_code=500, detail=f"Database delete failed: {e}")

    result = DeleteSessionResult(message="Session deleted successfully", session_id=session_id)
    return {"data": result.model_dump()}


@router.get("/sessions/{session_id}/export")
async def export_session(
    session_id: str,
    format: str = Query("json"),
    user: Dict[str, Any] = Depends(get_current_user),
    assistant: SalesAssistant = Depends(get_sales_assistant)
) -> Response:
    """Download the caller's session as json, txt or csv"""
    try:
        export = await assistant.export_session(user["id"], session_id, format)
    except UnsupportedExportFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SupabaseError as e:
        raise HTTPException(status_code=500, detail=f"Database fetch failed: {e}")

    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'}
    )
