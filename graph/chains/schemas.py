"""
Strict decoding of the scorer's JSON reply.

The reply must be (or contain) a JSON array of objects. The array shape is
validated strictly; individual field values are coerced and clamped into
range rather than rejected, since out-of-range values are not errors.
"""

import json
import math
import re
import sys
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from config import REASONING_MAX_CHARS
from core.models import ModelScore

_ARRAY = re.compile(r"\[[\s\S]*\]")


def _as_number(value: Any) -> Optional[float]:
    """Numeric value of *value*, or None for bools, non-numbers and NaN."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        try:
            number = float(value)
        except OverflowError:
            # Integers beyond float range saturate to the matching infinity
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


class ScoreRecord(BaseModel):
    """One element of the scorer's reply array."""

    model_config = ConfigDict(extra="ignore")

    index: Optional[int] = None
    sentiment_score: int = 0
    confidence: float = 0.0
    reasoning_summary: str = ""

    @field_validator("index", mode="before")
    @classmethod
    def _finite_index(cls, v: Any) -> Optional[int]:
        # Only real finite numbers count; anything else falls back to batch position
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        if isinstance(v, float):
            if not math.isfinite(v):
                return None
            v = int(v)
        return v if abs(v) <= sys.maxsize else None

    @field_validator("sentiment_score", mode="before")
    @classmethod
    def _clamp_score(cls, v: Any) -> int:
        number = _as_number(v)
        if number is None:
            return 0
        if math.isinf(number):
            return 100 if number > 0 else -100
        return max(-100, min(100, int(number)))

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, v: Any) -> float:
        number = _as_number(v)
        if number is None:
            return 0.0
        return max(0.0, min(1.0, number))

    @field_validator("reasoning_summary", mode="before")
    @classmethod
    def _truncate_reasoning(cls, v: Any) -> str:
        return ("" if v is None else str(v))[:REASONING_MAX_CHARS]

    def to_model_score(self) -> ModelScore:
        return ModelScore(
            score=self.sentiment_score,
            confidence=self.confidence,
            reasoning=self.reasoning_summary,
        )


_RECORDS = TypeAdapter(List[ScoreRecord])


@dataclass(frozen=True)
class DecodeOutcome:
    """Result of decoding a scorer reply: records on success, error otherwise."""

    records: Optional[List[ScoreRecord]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def extract_json_array(text: str) -> str:
    """Bracketed array substring of *text*, or *text* itself if there is none."""
    match = _ARRAY.search(text or "")
    return match.group(0) if match else (text or "")


def decode_scores(text: str) -> DecodeOutcome:
    """Decode the scorer reply into validated ScoreRecords."""
    candidate = extract_json_array(text)
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, over-long integer literals and pathological nesting
        return DecodeOutcome(error=f"Model reply is not valid JSON: {e}")

    if not isinstance(parsed, list):
        return DecodeOutcome(error="Model did not return an array.")

    try:
        records = _RECORDS.validate_python(parsed)
    except ValidationError as e:
        return DecodeOutcome(error=f"Model reply failed validation: {e.error_count()} error(s)")
    return DecodeOutcome(records=records)
