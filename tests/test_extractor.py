import json

import pytest

from mindwatch.models.analysis import EmotionAnalysis
from mindwatch.services.extractor import (
    EMOTION_ANALYSIS_SHAPE, SUGGESTION_LIST_SHAPE, ExtractionFailure, extract, find_span
)


def test_valid_json_round_trips(valid_analysis):
    result = extract(json.dumps(valid_analysis), EMOTION_ANALYSIS_SHAPE)
    assert result.ok
    assert result.value == EmotionAnalysis.model_validate(valid_analysis)

    again = extract(json.dumps(result.value.model_dump(by_alias=True)), EMOTION_ANALYSIS_SHAPE)
    assert again.value == result.value


def test_object_inside_code_fence_and_prose(valid_analysis):
    raw = "Sure! Here is the analysis:\n```json\n" + json.dumps(valid_analysis, indent=2) + "\n```\nTake care."
    result = extract(raw, EMOTION_ANALYSIS_SHAPE)
    assert result.ok
    assert result.value.dominant_emotion == "sad"
    assert result.value.stress_level == 7
    assert result.value.crisis_signals is False


def test_array_inside_prose():
    raw = 'Here you go: ["Breathe slowly", "Stretch for five minutes", "Drink a glass of water"] Hope it helps!'
    result = extract(raw, SUGGESTION_LIST_SHAPE)
    assert result.ok
    assert result.value == ["Breathe slowly", "Stretch for five minutes", "Drink a glass of water"]


def test_unterminated_object_fails():
    result = extract('{"dominantEmotion":"sad"', EMOTION_ANALYSIS_SHAPE)
    assert not result.ok
    assert result.value is None
    assert result.failure == ExtractionFailure.NO_SPAN


def test_truncated_object_with_closing_brace_in_prose_fails():
    result = extract('{"dominantEmotion":"sad", "sentimentScore": -0.5 and then }', EMOTION_ANALYSIS_SHAPE)
    assert result.failure == ExtractionFailure.INVALID_JSON
    assert result.value is None


@pytest.mark.parametrize("raw", [None, "", "I could not analyze that, sorry."])
def test_no_span(raw):
    assert extract(raw, EMOTION_ANALYSIS_SHAPE).failure == ExtractionFailure.NO_SPAN
    assert extract(raw, SUGGESTION_LIST_SHAPE).failure == ExtractionFailure.NO_SPAN


def test_missing_field_is_not_partially_returned(valid_analysis):
    del valid_analysis["themes"]
    result = extract(json.dumps(valid_analysis), EMOTION_ANALYSIS_SHAPE)
    assert result.failure == ExtractionFailure.SHAPE_MISMATCH
    assert result.value is None


@pytest.mark.parametrize("field, value", [
    ("sentimentScore", 1.5),
    ("sentimentScore", -1.01),
    ("sentimentScore", "0.2"),
    ("stressLevel", 11),
    ("stressLevel", -1),
    ("stressLevel", 6.5),
    ("stressLevel", "7"),
    ("dominantEmotion", "melancholic"),
    ("crisisSignals", "false"),
    ("suggestions", ["only one"]),
    ("suggestions", ["a", "b", "   "]),
    ("emotions", "sad"),
])
def test_out_of_range_or_wrong_type_fails(valid_analysis, field, value):
    valid_analysis[field] = value
    result = extract(json.dumps(valid_analysis), EMOTION_ANALYSIS_SHAPE)
    assert result.failure == ExtractionFailure.SHAPE_MISMATCH


def test_range_boundaries_accepted(valid_analysis):
    valid_analysis["sentimentScore"] = -1
    valid_analysis["stressLevel"] = 10
    result = extract(json.dumps(valid_analysis), EMOTION_ANALYSIS_SHAPE)
    assert result.ok
    assert result.value.sentiment_score == -1.0
    assert result.value.stress_level == 10


def test_nan_is_rejected(valid_analysis):
    raw = json.dumps(valid_analysis).replace("-0.6", "NaN")
    assert extract(raw, EMOTION_ANALYSIS_SHAPE).failure == ExtractionFailure.INVALID_JSON


def test_extra_keys_are_ignored(valid_analysis):
    valid_analysis["confidence"] = 0.9
    assert extract(json.dumps(valid_analysis), EMOTION_ANALYSIS_SHAPE).ok


@pytest.mark.parametrize("raw", [
    '["one", "two"]',
    '["one", "two", "three", "four", "five", "six"]',
    '["one", "", "three"]',
    '["one", 2, "three"]',
    '[]',
])
def test_bad_suggestion_arrays_fail(raw):
    assert extract(raw, SUGGESTION_LIST_SHAPE).failure == ExtractionFailure.SHAPE_MISMATCH


def test_array_wanted_but_object_given():
    assert extract('{"suggestions": "none"}', SUGGESTION_LIST_SHAPE).failure == ExtractionFailure.NO_SPAN


def test_span_is_greedy_first_to_last():
    raw = 'prefix {"a": 1} middle {"b": 2} suffix'
    assert find_span(raw, "{", "}") == '{"a": 1} middle {"b": 2}'
    assert find_span("} before {", "{", "}") is None
