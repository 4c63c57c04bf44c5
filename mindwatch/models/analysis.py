from pydantic import BaseModel, Field, ConfigDict, StringConstraints
from typing import Annotated, List, Literal, Optional

DominantEmotion = Literal[
    "happy", "sad", "anxious", "calm", "angry",
    "excited", "stressed", "neutral", "overwhelmed", "hopeful",
]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# 3 to 5 coping strategies, never empty
SuggestionList = Annotated[List[NonEmptyStr], Field(min_length=3, max_length=5)]


class EmotionAnalysis(BaseModel):
    dominant_emotion: DominantEmotion = Field(alias="dominantEmotion")
    sentiment_score: float = Field(alias="sentimentScore", ge=-1.0, le=1.0)
    stress_level: int = Field(alias="stressLevel", ge=0, le=10)
    emotions: List[str]
    themes: List[str]
    insights: str
    suggestions: SuggestionList
    crisis_signals: bool = Field(alias="crisisSignals")

    model_config = ConfigDict(populate_by_name=True)


class SuggestionContext(BaseModel):
    emotion: Optional[str] = None
    score: Optional[float] = None
    triggers: Optional[List[str]] = None
    notes: Optional[str] = None


class WeeklySummaryInput(BaseModel):
    mood_scores: List[float] = Field(default_factory=list, alias="moodScores")
    journal_themes: List[str] = Field(default_factory=list, alias="journalThemes")

    model_config = ConfigDict(populate_by_name=True)


# Request / response bodies for the analysis router
class AnalyzeTextRequest(BaseModel):
    text: str = Field(..., min_length=1)


class SuggestionsResponse(BaseModel):
    suggestions: List[str]


class WeeklySummaryResponse(BaseModel):
    summary: str
