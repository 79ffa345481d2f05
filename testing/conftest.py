"""
Shared fixtures for the scoring pipeline tests.

Nothing here touches the network: the scorer is a scripted RunnableLambda,
the circuit state lives in memory and backoff sleeps are recorded, not slept.

Usage:
    pytest testing -v
"""

import json
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

import pytest

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from langchain_core.runnables import RunnableLambda

from core.circuit_breaker import CircuitBreaker
from core.models import Article, Insight, WorkUnit
from core.state import InMemoryStateStore
from graph.orchestrator import ChainOrchestrator, RetryPolicy
from graph.scoring_client import ScoringClient

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
RESET_HOUR = 7

_BLOCK = re.compile(r"--- INSIGHT (\d+) ---")


class FixedClock:
    """Settable clock for the circuit breaker."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeScorer:
    """Scripted stand-in for the scoring chain.

    Each reply is a string, an exception to raise, or a callable taking the
    prompt body and returning a string. Replies are consumed in order; the last
    one repeats.
    """

    def __init__(self, *replies):
        assert replies, "FakeScorer needs at least one reply"
        self.replies = list(replies)
        self.prompts: List[str] = []

    def __call__(self, inputs: dict) -> str:
        prompt = inputs["insights"]
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def runnable(self) -> RunnableLambda:
        return RunnableLambda(lambda inputs: self(inputs))


def block_count(prompt: str) -> int:
    return len(_BLOCK.findall(prompt))


def echo_scores(score: int = 50, confidence: float = 0.8) -> Callable[[str], str]:
    """Reply builder scoring every insight block of the prompt the same way."""

    def reply(prompt: str) -> str:
        return json.dumps([
            {"index": int(i), "sentiment_score": score, "confidence": confidence,
             "reasoning_summary": f"insight {i}"}
            for i in _BLOCK.findall(prompt)
        ])

    return reply


def make_units(n: int, article_index: int = 0) -> List[WorkUnit]:
    return [
        WorkUnit(
            article_index=article_index,
            insight_index=i,
            text=f"[ACME] positive: reason {i}",
            sentiment="positive",
            ticker="ACME",
            title=f"Headline {i}",
            published_utc="2026-10-19T11:00:00+00:00",
        )
        for i in range(n)
    ]


def make_article(
    insights: Optional[List[Insight]] = None,
    url: str = "https://www.reuters.com/markets/acme-earnings",
    title: str = "Acme beats earnings estimates",
    **kwargs,
) -> Article:
    return Article(
        url=url,
        title=title,
        description=kwargs.pop("description", "Acme Corp reported quarterly results."),
        published_utc=kwargs.pop("published_utc", datetime(2026, 10, 19, 11, 0, tzinfo=timezone.utc)),
        tickers=kwargs.pop("tickers", ["ACME"]),
        keywords=kwargs.pop("keywords", []),
        insights=insights or [],
        **kwargs,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def breaker(store, clock) -> CircuitBreaker:
    return CircuitBreaker(store, reset_hour_utc=RESET_HOUR, clock=clock)


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def retry_policy() -> RetryPolicy:
    return RetryPolicy(max_retries=4, base_delay=2.0, max_delay=15.0)


@pytest.fixture
def make_client(breaker, sleeps, retry_policy):
    """Factory building a ScoringClient around a FakeScorer."""

    def _make(scorer: FakeScorer, batch_size: int = 20) -> ScoringClient:
        return ScoringClient(
            chain=scorer.runnable(),
            breaker=breaker,
            batch_size=batch_size,
            orchestrator=ChainOrchestrator(retry_policy=retry_policy, sleep=sleeps.append),
            fallback_confidence=0.3,
        )

    return _make
