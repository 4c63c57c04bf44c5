from typing import List, Optional

from mindwatch.models.analysis import EmotionAnalysis

DEFAULT_WEEKLY_SUMMARY = "Great job staying consistent with your mental health journey this week!"

GENERIC_SUGGESTIONS = ["Practice mindful breathing", "Take a short walk", "Drink water and rest"]

SUGGESTIONS_BY_EMOTION = {
    "stressed": [
        "Try box breathing: inhale 4s, hold 4s, exhale 4s, hold 4s",
        "Write about what's causing stress",
        "Take a 5-minute break from screens",
    ],
    "anxious": [
        "Ground yourself: name 5 things you see, 4 you touch, 3 you hear",
        "Progressive muscle relaxation for 10 minutes",
        "Call a trusted friend",
    ],
    "sad": [
        "Gentle movement like a slow walk",
        "Listen to uplifting music",
        "Reach out to someone you care about",
    ],
    "angry": [
        "Try physical exercise to release tension",
        "Journaling your feelings without filter",
        "Practice 4-7-8 breathing technique",
    ],
}


def default_emotion_analysis() -> EmotionAnalysis:
    return EmotionAnalysis(
        dominant_emotion="neutral",
        sentiment_score=0.0,
        stress_level=3,
        emotions=["neutral"],
        themes=[],
        insights="Your message reflects a neutral emotional state. Take a moment to check in with yourself.",
        suggestions=[
            "Take 5 deep breaths to center yourself",
            "Write down 3 things you're grateful for today",
            "Take a 10-minute walk outside",
        ],
        crisis_signals=False,
    )


def default_suggestions(emotion: Optional[str] = None) -> List[str]:
    key = (emotion or "").strip().lower()
    return list(SUGGESTIONS_BY_EMOTION.get(key, GENERIC_SUGGESTIONS))


def default_weekly_summary() -> str:
    return DEFAULT_WEEKLY_SUMMARY
