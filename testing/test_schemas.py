"""
Tests for strict decoding of the scorer reply.

Usage:
    pytest testing/test_schemas.py -v
"""

import json

from graph.chains.schemas import decode_scores, extract_json_array


def _one(record: dict):
    outcome = decode_scores(json.dumps([record]))
    assert outcome.ok, outcome.error
    return outcome.records[0]


# ── Shape ────────────────────────────────────────────────────────────────────


class TestReplyShape:

    def test_plain_array(self):
        outcome = decode_scores('[{"index": 0, "sentiment_score": 42, "confidence": 0.8, "reasoning_summary": "ok"}]')
        assert outcome.ok
        record = outcome.records[0]
        assert (record.index, record.sentiment_score, record.confidence, record.reasoning_summary) == (0, 42, 0.8, "ok")

    def test_array_wrapped_in_prose_and_fences(self):
        text = 'Here you go:\n```json\n[{"index": 1, "sentiment_score": -30, "confidence": 0.6}]\n```\nDone.'
        outcome = decode_scores(text)
        assert outcome.ok
        assert outcome.records[0].sentiment_score == -30

    def test_empty_array(self):
        outcome = decode_scores("[]")
        assert outcome.ok
        assert outcome.records == []

    def test_object_is_not_an_array(self):
        outcome = decode_scores('{"index": 0, "sentiment_score": 10}')
        assert not outcome.ok
        assert "array" in outcome.error

    def test_not_json(self):
        outcome = decode_scores("I cannot score these insights.")
        assert not outcome.ok

    def test_elements_must_be_objects(self):
        assert not decode_scores("[1, 2, 3]").ok
        assert not decode_scores('[{"index": 0}, "oops"]').ok

    def test_extract_json_array(self):
        assert extract_json_array('noise [1, 2] noise') == "[1, 2]"
        assert extract_json_array("no brackets") == "no brackets"
        assert extract_json_array(None) == ""


# ── Field coercion ───────────────────────────────────────────────────────────


class TestFieldCoercion:

    def test_out_of_range_values_are_clamped(self):
        record = _one({"index": 0, "sentiment_score": 250, "confidence": 1.7, "reasoning_summary": "x" * 400})
        assert record.sentiment_score == 100
        assert record.confidence == 1.0
        assert len(record.reasoning_summary) == 300

        record = _one({"index": 0, "sentiment_score": -300, "confidence": -2})
        assert record.sentiment_score == -100
        assert record.confidence == 0.0

    def test_scores_truncate_toward_zero(self):
        assert _one({"sentiment_score": 12.7}).sentiment_score == 12
        assert _one({"sentiment_score": -12.7}).sentiment_score == -12
        assert _one({"sentiment_score": "37.9"}).sentiment_score == 37

    def test_invalid_values_become_neutral(self):
        record = _one({"sentiment_score": "very bullish", "confidence": "high", "reasoning_summary": None})
        assert record.sentiment_score == 0
        assert record.confidence == 0.0
        assert record.reasoning_summary == ""

    def test_missing_fields_default(self):
        record = _one({})
        assert record.index is None
        assert record.sentiment_score == 0
        assert record.confidence == 0.0

    def test_index_must_be_a_finite_number(self):
        assert _one({"index": 2}).index == 2
        assert _one({"index": 1.0}).index == 1
        assert _one({"index": "1"}).index is None
        assert _one({"index": True}).index is None
        assert decode_scores('[{"index": NaN, "confidence": NaN}]').records[0].index is None

    def test_nan_confidence_is_zero(self):
        assert decode_scores('[{"confidence": NaN}]').records[0].confidence == 0.0

    def test_to_model_score(self):
        score = _one({"index": 0, "sentiment_score": 55, "confidence": 0.7, "reasoning_summary": "beat"}).to_model_score()
        assert (score.score, score.confidence, score.reasoning, score.fallback) == (55, 0.7, "beat", False)


# ── Oversized numbers ────────────────────────────────────────────────────────


class TestOversizedNumbers:

    def test_huge_integer_score_saturates(self):
        outcome = decode_scores('[{"index": 0, "sentiment_score": 1' + "0" * 400 + ', "confidence": 0.5}]')
        assert outcome.ok, outcome.error
        assert outcome.records[0].sentiment_score == 100

        outcome = decode_scores('[{"index": 0, "sentiment_score": -1' + "0" * 400 + "}]")
        assert outcome.records[0].sentiment_score == -100

    def test_huge_integer_confidence_clamps(self):
        outcome = decode_scores('[{"confidence": 9' + "9" * 400 + "}]")
        assert outcome.records[0].confidence == 1.0

    def test_huge_index_falls_back_to_position(self):
        outcome = decode_scores('[{"index": 1' + "0" * 400 + ', "sentiment_score": 20}]')
        assert outcome.ok, outcome.error
        assert outcome.records[0].index is None

        assert _one({"index": 1e300}).index is None

    def test_over_long_integer_literal_is_not_a_crash(self):
        # Recent interpreters refuse to parse integers past the digit limit
        outcome = decode_scores('[{"index": 0, "sentiment_score": 1' + "0" * 5000 + "}]")
        assert not outcome.ok or outcome.records[0].sentiment_score == 100

    def test_pathological_nesting_is_a_decode_error(self):
        outcome = decode_scores("[" * 100000 + "]" * 100000)
        assert not outcome.ok
