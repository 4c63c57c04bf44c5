import pytest

from mindwatch.services import fallbacks


def test_default_emotion_analysis_is_neutral():
    analysis = fallbacks.default_emotion_analysis()
    assert analysis.dominant_emotion == "neutral"
    assert analysis.sentiment_score == 0
    assert analysis.stress_level == 3
    assert analysis.crisis_signals is False
    assert len(analysis.suggestions) == 3


def test_default_emotion_analysis_is_a_fresh_value():
    first = fallbacks.default_emotion_analysis()
    first.suggestions.append("changed")
    assert len(fallbacks.default_emotion_analysis().suggestions) == 3


@pytest.mark.parametrize("emotion", ["stressed", "anxious", "sad", "angry"])
def test_tailored_suggestions(emotion):
    suggestions = fallbacks.default_suggestions(emotion)
    assert suggestions == fallbacks.SUGGESTIONS_BY_EMOTION[emotion]
    assert len(suggestions) == 3


def test_anxious_suggestions_are_grounding():
    assert fallbacks.default_suggestions(" Anxious ")[0].startswith("Ground yourself")


@pytest.mark.parametrize("emotion", [None, "", "happy", "bored"])
def test_generic_suggestions(emotion):
    assert fallbacks.default_suggestions(emotion) == fallbacks.GENERIC_SUGGESTIONS


def test_default_suggestions_returns_a_copy():
    fallbacks.default_suggestions("sad").clear()
    assert len(fallbacks.default_suggestions("sad")) == 3


def test_default_weekly_summary():
    assert fallbacks.default_weekly_summary() == fallbacks.DEFAULT_WEEKLY_SUMMARY
