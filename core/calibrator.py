"""
Pseudo-calibration of scorer output.

Fuses probability-like signals (score intensity, model confidence, source
trust, event weight and an optional short-term price move) into a single
rule confidence by weighted pooling in log-odds space, and dampens raw
scores by that confidence.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from core.classifier import EventCategory, SourceTier

SOURCE_TRUST: Dict[str, float] = {
    SourceTier.WIRE.value: 0.80,
    SourceTier.MAJOR_PRESS.value: 0.75,
    SourceTier.REGIONAL_PRESS.value: 0.65,
    SourceTier.FINANCIAL_PORTAL.value: 0.60,
    SourceTier.COMPANY.value: 0.55,
    SourceTier.BLOG.value: 0.50,
    SourceTier.UNKNOWN.value: 0.50,
}
DEFAULT_SOURCE_TRUST = 0.50

EVENT_WEIGHT: Dict[str, float] = {
    EventCategory.MA.value: 0.75,
    EventCategory.FDA.value: 0.75,
    EventCategory.REGULATORY.value: 0.75,
    EventCategory.LAWSUIT.value: 0.75,
    EventCategory.EARNINGS.value: 0.68,
    EventCategory.GUIDANCE.value: 0.68,
    EventCategory.PARTNERSHIP.value: 0.62,
    EventCategory.OTHER.value: 0.55,
}
DEFAULT_EVENT_WEIGHT = 0.55

_EPS = 1e-6


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def clamp_score(score: Union[int, float]) -> int:
    """Truncate toward zero and clamp to [-100, 100]."""
    return max(-100, min(100, int(score)))


def sigmoid(z: float) -> float:
    # Split on sign so large |z| never overflows math.exp
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    ez = math.exp(z)
    return ez / (1.0 + ez)


def logit(p: float) -> float:
    return math.log(p / (1.0 - p))


def source_trust(source: Union[SourceTier, str, None]) -> float:
    key = source.value if isinstance(source, SourceTier) else source
    return SOURCE_TRUST.get(key, DEFAULT_SOURCE_TRUST)


def event_weight(event: Union[EventCategory, str, None]) -> float:
    key = event.value if isinstance(event, EventCategory) else event
    return EVENT_WEIGHT.get(key, DEFAULT_EVENT_WEIGHT)


def round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def dampen(score: Union[int, float], confidence_rule: float) -> int:
    """Shrink |score| toward zero by (1 - confidence); never flips the sign.

    ``sign(score) * round(|score| * (0.5 + confidence/2))`` with halves
    rounded away from zero on the magnitude.
    """
    raw = clamp_score(score)
    if raw == 0:
        return 0
    magnitude = round_half_away(abs(raw) * (0.5 + clamp01(confidence_rule) / 2.0))
    return magnitude if raw > 0 else -magnitude


@dataclass(frozen=True)
class CalibrationWeights:
    """Shape and pooling weights for each signal."""

    k: float = 4.0          # steepness of the intensity curve
    s0: float = 0.5         # intensity midpoint (half-scale)
    intensity: float = 1.0
    model: float = 1.0
    source: float = 0.7
    event: float = 0.8
    price: float = 0.5
    r0: float = 0.02        # return scale for the price signal


@dataclass(frozen=True)
class CalibrationResult:
    confidence_rule: float
    score_pseudo: int
    components: Dict[str, float] = field(default_factory=dict)


def pseudo_calibrate(
    sentiment_score: Union[int, float],
    confidence_model: Optional[float],
    source: Union[SourceTier, str, None],
    event: Union[EventCategory, str, None],
    short_return_abs: Optional[float] = None,
    weights: CalibrationWeights = CalibrationWeights(),
) -> CalibrationResult:
    """Compute the rule confidence and dampened score for one scorer result.

    Deterministic: identical inputs always produce identical output.
    """
    score = clamp_score(sentiment_score)
    mag = abs(score) / 100.0

    components: Dict[str, float] = {
        "p_intensity": clamp01(sigmoid(weights.k * (mag - weights.s0))),
        "p_model": clamp01(confidence_model if confidence_model is not None else 0.5),
        "p_source": clamp01(source_trust(source)),
        "p_event": clamp01(event_weight(event)),
    }
    parts: List[Tuple[float, float]] = [
        (components["p_intensity"], weights.intensity),
        (components["p_model"], weights.model),
        (components["p_source"], weights.source),
        (components["p_event"], weights.event),
    ]

    if short_return_abs is not None:
        r = abs(short_return_abs)
        components["p_price"] = clamp01(0.5 + 0.5 * math.tanh(r / weights.r0))
        parts.append((components["p_price"], weights.price))

    num = 0.0
    den = 0.0
    for p, w in parts:
        pp = min(1.0 - _EPS, max(_EPS, p))
        num += w * logit(pp)
        den += w

    confidence_rule = clamp01(sigmoid(num / max(den, _EPS)))
    return CalibrationResult(
        confidence_rule=confidence_rule,
        score_pseudo=dampen(score, confidence_rule),
        components=components,
    )
