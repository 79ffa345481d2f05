"""
Batched insight scoring against the external language model.

Work units are scored in sequential batches. Each batch is one prompt; the
reply is strictly decoded and reassembled by the echoed ``index``. Failures
never leave a unit unscored: every unit gets either a real score or a labeled
neutral fallback.
"""

import logging
from typing import List, Optional, Sequence

from langchain_core.runnables import Runnable

from config import SCORE_BATCH_SIZE, SCORING_FALLBACK_CONFIDENCE
from core.circuit_breaker import CircuitBreaker
from core.models import ModelScore, WorkUnit
from graph.chains.schemas import ScoreRecord, decode_scores
from graph.context import InsightBatchContextBuilder
from graph.context.base import ContextBuilder
from graph.orchestrator import ChainOrchestrator, ErrorKind

logger = logging.getLogger(__name__)

FALLBACK_MODEL_ERROR = "Model error; defaulted to neutral."
FALLBACK_QUOTA = "Scoring quota exhausted; defaulted to neutral."
FALLBACK_CIRCUIT_OPEN = "Scoring disabled until quota reset; defaulted to neutral."
FALLBACK_MISSING = "No score returned for this insight; defaulted to neutral."


class ScoringClient:
    """Scores work units in bounded batches with retry and a persisted circuit breaker."""

    def __init__(
        self,
        chain: Runnable,
        breaker: CircuitBreaker,
        batch_size: int = SCORE_BATCH_SIZE,
        orchestrator: Optional[ChainOrchestrator] = None,
        context_builder: Optional[ContextBuilder] = None,
        fallback_confidence: float = SCORING_FALLBACK_CONFIDENCE,
    ):
        """
        Parameters:
            chain: Runnable taking {"insights": <prompt body>} and returning the reply text
            breaker: Circuit breaker consulted before every batch
            batch_size: Maximum work units per prompt
            orchestrator: Retrying invoker (defaults to the configured retry policy)
            context_builder: Renders a batch into the prompt body
            fallback_confidence: Model confidence reported on neutral fallbacks
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.chain = chain
        self.breaker = breaker
        self.batch_size = batch_size
        self.orchestrator = orchestrator or ChainOrchestrator()
        self.context_builder = context_builder or InsightBatchContextBuilder()
        self.fallback_confidence = fallback_confidence

    # ── Fallbacks ────────────────────────────────────────────────────────────

    def _fallback_score(self, reasoning: str) -> ModelScore:
        return ModelScore(score=0, confidence=self.fallback_confidence, reasoning=reasoning, fallback=True)

    def fallback(self, batch: Sequence[WorkUnit], reasoning: str) -> List[ModelScore]:
        """Neutral result for every unit of *batch*."""
        return [self._fallback_score(reasoning) for _ in batch]

    # ── Single batch ─────────────────────────────────────────────────────────

    def score_batch(self, batch: Sequence[WorkUnit]) -> List[ModelScore]:
        """Score one batch; the result is aligned by position with *batch*."""
        if not batch:
            return []

        inputs = {"insights": self.context_builder.build(batch)}
        outcome = self.orchestrator.invoke_with_retry("insight_scoring", self.chain, inputs)

        if not outcome.ok:
            if outcome.kind is ErrorKind.QUOTA:
                self.breaker.trip(f"{type(outcome.error).__name__}: {outcome.error}"[:300])
                return self.fallback(batch, FALLBACK_QUOTA)
            return self.fallback(batch, FALLBACK_MODEL_ERROR)

        reply = getattr(outcome.value, "content", outcome.value)
        decoded = decode_scores(str(reply))
        if not decoded.ok:
            logger.error("[SCORE] %s", decoded.error)
            return self.fallback(batch, FALLBACK_MODEL_ERROR)

        return self._reassemble(batch, decoded.records or [])

    def _reassemble(self, batch: Sequence[WorkUnit], records: List[ScoreRecord]) -> List[ModelScore]:
        """Place each record at its echoed index (batch position when missing or out of range)."""
        slots: List[Optional[ModelScore]] = [None] * len(batch)
        for position, record in enumerate(records):
            slot = record.index
            if slot is None or not 0 <= slot < len(batch):
                slot = position
            if slot >= len(batch):
                logger.warning("[SCORE] Dropping extra record at position %d (batch of %d)", position, len(batch))
                continue
            if slots[slot] is not None:
                logger.warning("[SCORE] Duplicate record for index %d; keeping the first", slot)
                continue
            slots[slot] = record.to_model_score()

        missing = sum(1 for s in slots if s is None)
        if missing:
            logger.warning("[SCORE] %d of %d insight(s) missing from reply; defaulted to neutral", missing, len(batch))
        return [s if s is not None else self._fallback_score(FALLBACK_MISSING) for s in slots]

    # ── Full run ─────────────────────────────────────────────────────────────

    def score_units(self, units: Sequence[WorkUnit]) -> List[ModelScore]:
        """Score all *units* in sequential batches, aligned by position with *units*.

        The circuit breaker is re-read before every batch, so a quota trip in
        one batch short-circuits every later batch of the same run.
        """
        results: List[ModelScore] = []
        for start in range(0, len(units), self.batch_size):
            batch = units[start : start + self.batch_size]
            end = start + len(batch) - 1

            if self.breaker.is_open():
                logger.info("[SCORE] Circuit open – skipping units %d ~ %d", start, end)
                results.extend(self.fallback(batch, FALLBACK_CIRCUIT_OPEN))
                continue

            results.extend(self.score_batch(batch))
            logger.info("[SCORE] Scored units %d ~ %d", start, end)
        return results
