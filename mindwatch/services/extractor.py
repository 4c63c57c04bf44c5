"""
Recover a validated JSON value from free-form model output.

The span heuristic is deliberately simple: from the first opening bracket of
the wanted kind to the *last* closing bracket of the same kind. It is not a
nesting-aware JSON-in-text parser, so stray brackets in prose around the
payload can widen the span and make the parse fail. A failed parse only ever
costs a fallback, never a malformed value.
"""
import enum
import json
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from mindwatch.models.analysis import EmotionAnalysis, SuggestionList

T = TypeVar("T")


class ExtractionFailure(str, enum.Enum):
    NO_SPAN = "no_span"
    INVALID_JSON = "invalid_json"
    SHAPE_MISMATCH = "shape_mismatch"


@dataclass(frozen=True)
class Shape(Generic[T]):
    name: str
    opening: str
    closing: str
    adapter: TypeAdapter


@dataclass(frozen=True)
class Extraction(Generic[T]):
    value: Optional[T] = None
    failure: Optional[ExtractionFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


EMOTION_ANALYSIS_SHAPE = Shape("emotion_analysis", "{", "}", TypeAdapter(EmotionAnalysis))
SUGGESTION_LIST_SHAPE = Shape("suggestion_list", "[", "]", TypeAdapter(SuggestionList))


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def find_span(raw_text: str, opening: str, closing: str) -> Optional[str]:
    start = raw_text.find(opening)
    end = raw_text.rfind(closing)
    if start == -1 or end < start:
        return None
    return raw_text[start:end + 1]


def extract(raw_text: Optional[str], shape: Shape) -> Extraction:
    """Return the validated value embedded in `raw_text`, or a failure kind. Never raises."""
    span = find_span(raw_text or "", shape.opening, shape.closing)
    if span is None:
        return Extraction(failure=ExtractionFailure.NO_SPAN)

    try:
        parsed: Any = json.loads(span, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return Extraction(failure=ExtractionFailure.INVALID_JSON)

    try:
        # strict: "7" is not a stress level and "true" is not a crisis flag
        value = shape.adapter.validate_python(parsed, strict=True)
    except ValidationError:
        return Extraction(failure=ExtractionFailure.SHAPE_MISMATCH)

    return Extraction(value=value)
