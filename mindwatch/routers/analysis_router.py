from fastapi import APIRouter, Depends

from mindwatch.models.analysis import (
    AnalyzeTextRequest, EmotionAnalysis, SuggestionContext, SuggestionsResponse,
    WeeklySummaryInput, WeeklySummaryResponse
)
from mindwatch.routers.auth_dependency import get_current_user_id
from mindwatch.services.ai_service import analyze_emotion, generate_suggestions, weekly_summary
from mindwatch.services.model_gateway import ModelGateway, get_gateway

router = APIRouter(
    prefix="/analysis",
    tags=["Analysis"],
    dependencies=[Depends(get_current_user_id)]
)


@router.post("/emotion", response_model=EmotionAnalysis)
async def analyze_text(
    request: AnalyzeTextRequest,
    gateway: ModelGateway = Depends(get_gateway),
):
    return await analyze_emotion(request.text, gateway=gateway)


@router.post("/suggestions", response_model=SuggestionsResponse)
async def suggest(
    context: SuggestionContext,
    gateway: ModelGateway = Depends(get_gateway),
):
    suggestions = await generate_suggestions(context, gateway=gateway)
    return SuggestionsResponse(suggestions=suggestions)


@router.post("/weekly-summary", response_model=WeeklySummaryResponse)
async def summarize_week(
    request: WeeklySummaryInput,
    gateway: ModelGateway = Depends(get_gateway),
):
    summary = await weekly_summary(request.mood_scores, request.journal_themes, gateway=gateway)
    return WeeklySummaryResponse(summary=summary)
