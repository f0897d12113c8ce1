# /eduguide/routers/suggestions_router.py

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from ..core.deps import require_teacher
from ..db.models.user_model import User as UserModel
from ..models.suggestion_model import SuggestionRequest, SuggestionResponse, GatewayStatus
from ..services import suggestion_service
from ..services.gemini_service import GeminiGateway, SuggestionGatewayError, get_gemini_gateway

router = APIRouter()


@router.post(
    "/suggest",
    response_model=SuggestionResponse,
    summary="Generate Teaching Suggestions",
    description="Builds a prompt from the submitted student snapshot and returns the AI-generated suggestion text.",
    responses={
        401: {"description": "The Gemini API key is missing or invalid"},
        429: {"description": "The Gemini API quota is exhausted"},
        502: {"description": "The Gemini API call failed"},
        504: {"description": "The Gemini API did not respond in time"},
    },
)
async def suggest(
    request: SuggestionRequest,
    current_teacher: UserModel = Depends(require_teacher),
    gateway: GeminiGateway = Depends(get_gemini_gateway),
):
    try:
        return await suggestion_service.get_teaching_suggestion(request, gateway)
    except SuggestionGatewayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/status", response_model=GatewayStatus, summary="Check Gemini Availability")
async def get_status(gateway: GeminiGateway = Depends(get_gemini_gateway)):
    """Reports whether the configured credential works. Returns 503 when it does not."""
    gateway_status = await gateway.check_status()
    if not gateway_status.available:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=gateway_status.model_dump())
    return gateway_status
