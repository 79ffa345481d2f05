"""
Orchestration layer for LLM chain execution with bounded retry.

Failures are classified into transient / quota / model errors, and the retry
policy is a plain function of (attempt, error kind) so it can be tested on its
own. Retries run in an iterative loop with exponential backoff; nothing here
recurses.
"""

import logging
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from langchain_core.runnables import Runnable

from config import (
    SCORING_BACKOFF_BASE_SECONDS,
    SCORING_BACKOFF_MAX_SECONDS,
    SCORING_MAX_RETRIES,
)

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    TRANSIENT = "transient"  # 5xx / timeout / unavailable – retry with backoff
    QUOTA = "quota"          # 429 / quota / rate exceeded – never retry
    MODEL = "model"          # anything else – fall back immediately


_QUOTA_PATTERN = re.compile(
    r"(\b429\b|quota|rate[\s_-]?limit|rate exceeded|too many requests|resource[\s_-]?exhausted)",
    re.IGNORECASE,
)
_TRANSIENT_PATTERN = re.compile(
    r"(\b5\d\d\b|timeout|timed out|temporar|unavailable|overloaded|deadline exceeded|connection (reset|error|aborted))",
    re.IGNORECASE,
)


def _status_code(exc: BaseException) -> Optional[int]:
    status = getattr(exc, "status_code", None)
    if status is None:
        status = getattr(getattr(exc, "response", None), "status_code", None)
    return status if isinstance(status, int) else None


def classify_error(exc: BaseException) -> ErrorKind:
    """Classify a scorer exception by HTTP status when present, else by message."""
    status = _status_code(exc)
    if status == 429:
        return ErrorKind.QUOTA
    if status is not None and 500 <= status < 600:
        return ErrorKind.TRANSIENT
    if isinstance(exc, TimeoutError):
        return ErrorKind.TRANSIENT

    message = f"{type(exc).__name__}: {exc}"
    if _QUOTA_PATTERN.search(message):
        return ErrorKind.QUOTA
    if _TRANSIENT_PATTERN.search(message):
        return ErrorKind.TRANSIENT
    return ErrorKind.MODEL


@dataclass(frozen=True)
class RetryDecision:
    retry: bool
    delay: float = 0.0


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff for transient failures only."""

    max_retries: int = SCORING_MAX_RETRIES
    base_delay: float = SCORING_BACKOFF_BASE_SECONDS
    max_delay: float = SCORING_BACKOFF_MAX_SECONDS

    def backoff(self, attempt: int) -> float:
        """Delay before retrying after failed attempt number *attempt* (0-based)."""
        return min(self.max_delay, self.base_delay * (2 ** attempt))

    def decide(self, attempt: int, kind: ErrorKind) -> RetryDecision:
        if kind is ErrorKind.TRANSIENT and attempt < self.max_retries:
            return RetryDecision(retry=True, delay=self.backoff(attempt))
        return RetryDecision(retry=False)


@dataclass
class ChainOutcome:
    """Result of one retried chain invocation."""

    value: Any = None
    error: Optional[BaseException] = None
    kind: Optional[ErrorKind] = None
    attempts: int = 0
    waited: float = 0.0  # total backoff slept, in seconds

    @property
    def ok(self) -> bool:
        return self.error is None


class ChainOrchestrator:
    """
    Runs LangChain runnables with classified, bounded retries.

    Calls are strictly sequential: one invocation (and its backoff sleeps)
    finishes before the caller can start the next.
    """

    def __init__(
        self,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Parameters:
            retry_policy: Policy deciding whether and when to retry
            sleep: Sleep function used for backoff (injectable for tests)
        """
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep

    def invoke_with_retry(self, name: str, chain: Runnable, inputs: Dict[str, Any]) -> ChainOutcome:
        """
        Invoke *chain* until it succeeds or the retry policy gives up.

        Parameters:
            name: Label used in log lines
            chain: Runnable to invoke
            inputs: Input dict for the chain

        Returns:
            ChainOutcome with the value on success, or the last error and its kind
        """
        attempt = 0
        waited = 0.0
        while True:
            try:
                value = chain.invoke(inputs)
            except Exception as e:
                kind = classify_error(e)
                decision = self.retry_policy.decide(attempt, kind)
                if not decision.retry:
                    logger.error("[ORCHESTRATOR] %s: ✗ %s error after %d attempt(s) - %s: %s",
                                 name, kind.value, attempt + 1, type(e).__name__, e)
                    return ChainOutcome(error=e, kind=kind, attempts=attempt + 1, waited=waited)
                logger.warning("[ORCHESTRATOR] %s: retry in %.1fs (attempt %d) :: %s",
                               name, decision.delay, attempt + 1, e)
                self._sleep(decision.delay)
                waited += decision.delay
                attempt += 1
                continue

            logger.debug("[ORCHESTRATOR] %s: ✓ Success (attempt %d)", name, attempt + 1)
            return ChainOutcome(value=value, attempts=attempt + 1, waited=waited)
