"""Core domain logic: records, classifiers, calibration, circuit state, alerts and I/O collaborators."""

from .models import Article, Insight, ScoredInsight, ArticleRollup, WorkUnit, ModelScore, CircuitState
from .classifier import SourceTier, EventCategory, classify_source, classify_event
from .calibrator import pseudo_calibrate, dampen
from .circuit_breaker import CircuitBreaker
from .alerts import AlertThresholds, classify_article, select_alerts

__all__ = [
    "Article",
    "Insight",
    "ScoredInsight",
    "ArticleRollup",
    "WorkUnit",
    "ModelScore",
    "CircuitState",
    "SourceTier",
    "EventCategory",
    "classify_source",
    "classify_event",
    "pseudo_calibrate",
    "dampen",
    "CircuitBreaker",
    "AlertThresholds",
    "classify_article",
    "select_alerts",
]
