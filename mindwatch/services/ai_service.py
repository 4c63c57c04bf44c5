import logging
from typing import List, Optional, Sequence

from mindwatch.models.analysis import EmotionAnalysis, SuggestionContext
from mindwatch.models.chat import ConversationTurn
from mindwatch.services import fallbacks
from mindwatch.services.exceptions import ModelUnavailable, ServiceUnavailable
from mindwatch.services.extractor import (
    EMOTION_ANALYSIS_SHAPE, SUGGESTION_LIST_SHAPE, extract
)
from mindwatch.services.model_gateway import ModelGateway, get_gateway
from mindwatch.services.prompt_builder import (
    EMOTION_ANALYSIS, SUGGESTIONS, THERAPY_REPLY, WEEKLY_SUMMARY, build_prompt
)

logger = logging.getLogger(__name__)

EMPTY_REPLY_PROMPT = "I'm here for you. Could you tell me more about how you're feeling?"


async def _complete(gateway: Optional[ModelGateway], prompt) -> Optional[str]:
    """Run one model call. None means the model was unreachable."""
    gateway = gateway or get_gateway()
    try:
        return await gateway.complete(prompt)
    except ModelUnavailable:
        return None


async def therapy_reply(
    history: Sequence[ConversationTurn],
    latest_message: str,
    gateway: Optional[ModelGateway] = None,
) -> str:
    """Conversational reply. Fails loudly: a made-up therapeutic reply is never substituted."""
    prompt = build_prompt(THERAPY_REPLY, history, latest_message)
    reply = await _complete(gateway, prompt)
    if reply is None:
        raise ServiceUnavailable()

    reply = reply.strip()
    if not reply:
        return EMPTY_REPLY_PROMPT
    return reply


async def analyze_emotion(text: str, gateway: Optional[ModelGateway] = None) -> EmotionAnalysis:
    prompt = build_prompt(EMOTION_ANALYSIS, text)
    raw = await _complete(gateway, prompt)
    if raw is None:
        return fallbacks.default_emotion_analysis()

    extraction = extract(raw, EMOTION_ANALYSIS_SHAPE)
    if not extraction.ok:
        logger.info("Emotion analysis fell back to default: %s", extraction.failure.value)
        return fallbacks.default_emotion_analysis()
    return extraction.value


async def generate_suggestions(
    context: SuggestionContext,
    gateway: Optional[ModelGateway] = None,
) -> List[str]:
    prompt = build_prompt(SUGGESTIONS, context)
    raw = await _complete(gateway, prompt)
    if raw is None:
        return fallbacks.default_suggestions(context.emotion)

    extraction = extract(raw, SUGGESTION_LIST_SHAPE)
    if not extraction.ok:
        logger.info("Suggestion generation fell back to default: %s", extraction.failure.value)
        return fallbacks.default_suggestions(context.emotion)
    return extraction.value


async def weekly_summary(
    mood_scores: Sequence[float],
    journal_themes: Sequence[str],
    gateway: Optional[ModelGateway] = None,
) -> str:
    prompt = build_prompt(WEEKLY_SUMMARY, mood_scores, journal_themes)
    summary = await _complete(gateway, prompt)
    if summary is None or not summary.strip():
        return fallbacks.default_weekly_summary()
    return summary.strip()
