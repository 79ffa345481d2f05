from .factory import ChainFactory
from .config import CHAIN_CONFIGS, INSIGHT_SCORING_CONFIG, ChainConfig
from .schemas import DecodeOutcome, ScoreRecord, decode_scores, extract_json_array

__all__ = [
    "ChainFactory",
    "ChainConfig",
    "CHAIN_CONFIGS",
    "INSIGHT_SCORING_CONFIG",
    "DecodeOutcome",
    "ScoreRecord",
    "decode_scores",
    "extract_json_array",
]
