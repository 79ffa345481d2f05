"""
Chain configurations for the scoring pipeline.

Defines the system prompt, input template and model settings for each chain
in a data-driven format, enabling prompt changes without code modification.
"""

from dataclasses import dataclass
from typing import List

from config import LLM_MODEL, LLM_TEMPERATURE, LLM_TIMEOUT_SECONDS


@dataclass
class ChainConfig:
    """Configuration for building an LLM chain."""

    name: str  # Chain identifier (e.g., "insight_scoring")
    system_prompt: str  # System message for the chain
    human_prompt_template: str  # Human message template with {variables}
    input_variables: List[str]  # Expected input variable names
    llm_model: str = LLM_MODEL  # LLM model to use
    temperature: float = LLM_TEMPERATURE  # LLM temperature
    timeout: float = LLM_TIMEOUT_SECONDS  # Per-call timeout in seconds


# Braces are doubled because the prompt is a template
_SCORING_SYSTEM = """You are a financial sentiment analyzer.
For EACH insight, assign a sentiment score from -100 (extremely negative) to +100 (extremely positive), 0 is neutral.
Each insight is an analyst claim about one ticker, taken from a news article, with an upstream base sentiment.
Consider tone, language intensity, and potential market impact (lawsuits, FDA/M&A, earnings, guidance, partnerships, layoffs, accounting issues).
Return ONLY a valid JSON array. No extra text.

Rules:
- "sentiment_score": integer in [-100, 100]
- "confidence": float in [0, 1] with two decimals
- "reasoning_summary": <= 25 words; concise and specific
- "index": the number of the INSIGHT block you are scoring
- If info is insufficient, use score 0 and confidence <= 0.40

Output JSON schema:
[
  {{ "index": <number>, "sentiment_score": <int>, "confidence": <float>, "reasoning_summary": "<string>" }},
  ...
]"""

INSIGHT_SCORING_CONFIG = ChainConfig(
    name="insight_scoring",
    system_prompt=_SCORING_SYSTEM,
    human_prompt_template="{insights}\n\nReturn the JSON array now.",
    input_variables=["insights"],
)

# Registry of all chain configurations
CHAIN_CONFIGS = {
    "insight_scoring": INSIGHT_SCORING_CONFIG,
}
