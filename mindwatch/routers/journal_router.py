from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List
from datetime import date, datetime, timedelta
from bson import ObjectId
from pymongo.collection import Collection

from mindwatch.db.database import get_journal_collection
from mindwatch.models.analysis import AnalyzeTextRequest, EmotionAnalysis, WeeklySummaryResponse
from mindwatch.models.journal import JournalEntryResponse, NewEntryRequest
from mindwatch.routers.auth_dependency import get_current_user_id
from mindwatch.services.ai_service import analyze_emotion, weekly_summary
from mindwatch.services.model_gateway import ModelGateway, get_gateway

ID_INVALID_MESSAGE = "Invalid entry id"
NOT_FOUND_MESSAGE = "Journal entry not found"

router = APIRouter(
    prefix="/journal",
    tags=["Journal"],
    dependencies=[Depends(get_current_user_id)]
)


@router.post("/new", response_model=JournalEntryResponse)
async def create_new_entry(
    request: NewEntryRequest,
    user_id: str = Depends(get_current_user_id),
    collection: Collection = Depends(get_journal_collection),
    gateway: ModelGateway = Depends(get_gateway),
):
    analysis_result = await analyze_emotion(request.content, gateway=gateway)

    new_entry_data = {
        "user_id": user_id,
        "timestamp": request.timestamp,
        "content": request.content,
        "mood_score": request.mood_score,
        "analysis": analysis_result.model_dump(by_alias=True),
    }
    result = collection.insert_one(new_entry_data)
    return collection.find_one({"_id": result.inserted_id})


@router.get("/history", response_model=List[JournalEntryResponse])
async def get_journal_history(
    year: int = Query(..., ge=1, le=9998, description="Year, e.g. 2025"),
    month: int = Query(..., ge=1, le=12, description="Month, 1-12"),
    user_id: str = Depends(get_current_user_id),
    collection: Collection = Depends(get_journal_collection),
):
    start_date = datetime(year, month, 1)
    if month == 12:
        end_date = datetime(year + 1, 1, 1)
    else:
        end_date = datetime(year, month + 1, 1)

    cursor = collection.find({
        "user_id": user_id,
        "timestamp": {"$gte": start_date, "$lt": end_date}
    }).sort("timestamp", -1)
    return list(cursor)


@router.get("/weekly-summary", response_model=WeeklySummaryResponse)
async def get_weekly_summary(
    start_date: date = Query(..., description="First day of the week"),
    user_id: str = Depends(get_current_user_id),
    collection: Collection = Depends(get_journal_collection),
    gateway: ModelGateway = Depends(get_gateway),
):
    query_start = datetime.combine(start_date, datetime.min.time())
    query_end = query_start + timedelta(days=7)

    cursor = collection.find({
        "user_id": user_id,
        "timestamp": {"$gte": query_start, "$lt": query_end}
    }).sort("timestamp", 1)
    entries = list(cursor)

    mood_scores = [e["mood_score"] for e in entries if e.get("mood_score") is not None]
    journal_themes = []
    for entry in entries:
        for theme in (entry.get("analysis") or {}).get("themes", []):
            if theme not in journal_themes:
                journal_themes.append(theme)

    summary = await weekly_summary(mood_scores, journal_themes, gateway=gateway)
    return WeeklySummaryResponse(summary=summary)


@router.get("/{entry_id}", response_model=JournalEntryResponse)
async def get_single_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    collection: Collection = Depends(get_journal_collection),
):
    if not ObjectId.is_valid(entry_id):
        raise HTTPException(status_code=400, detail=ID_INVALID_MESSAGE)

    entry = collection.find_one({"_id": ObjectId(entry_id), "user_id": user_id})
    if entry:
        return entry
    raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    collection: Collection = Depends(get_journal_collection),
):
    if not ObjectId.is_valid(entry_id):
        raise HTTPException(status_code=400, detail=ID_INVALID_MESSAGE)

    result = collection.delete_one({"_id": ObjectId(entry_id), "user_id": user_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    return None


@router.post("/analyze", response_model=EmotionAnalysis)
async def analyze_journal_only(
    request: AnalyzeTextRequest,
    gateway: ModelGateway = Depends(get_gateway),
):
    return await analyze_emotion(request.text, gateway=gateway)
