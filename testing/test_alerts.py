"""
Tests for alert candidate selection and the alert summary text.

Usage:
    pytest testing/test_alerts.py -v
"""

from conftest import make_article
from core.alerts import AlertSelection, AlertThresholds, classify_article, select_alerts
from core.models import ScoredInsight
from graph.context import AlertSummaryBuilder, format_alert_summary
from graph.context.formatters import format_no_alerts

THRESHOLDS = AlertThresholds(score=60, model_confidence=0.75, rule_confidence=0.70)


def _article(score, model=0.8, rule=0.75, sentiment="positive", title="Acme beats earnings estimates", url=None):
    article = make_article(title=title, url=url or f"https://www.reuters.com/{title.replace(' ', '-').lower()}")
    article.sentiment_insights = [
        ScoredInsight(
            index=0,
            ticker="ACME",
            sentiment=sentiment,
            score=score,
            confidence_model=model,
            confidence_rule=rule,
            reasoning="",
        )
    ]
    return article


# ── Candidate tests ──────────────────────────────────────────────────────────


class TestClassifyArticle:

    def test_clears_all_thresholds(self):
        flags = classify_article(_article(65, model=0.8, rule=0.75), THRESHOLDS)
        assert flags.bullish is True
        assert flags.bearish is False

    def test_rule_confidence_below_threshold(self):
        assert classify_article(_article(65, model=0.8, rule=0.65), THRESHOLDS).bullish is False

    def test_model_confidence_below_threshold(self):
        assert classify_article(_article(65, model=0.7, rule=0.75), THRESHOLDS).bullish is False

    def test_thresholds_are_inclusive(self):
        assert classify_article(_article(60, model=0.75, rule=0.70), THRESHOLDS).bullish is True
        assert classify_article(_article(-60, model=0.75, rule=0.70, sentiment="negative"), THRESHOLDS).bearish is True

    def test_bearish_mirror(self):
        flags = classify_article(_article(-80, sentiment="negative"), THRESHOLDS)
        assert flags.bearish is True
        assert flags.bullish is False

    def test_neutral_insights_never_alert(self):
        assert classify_article(_article(90, model=0.9, rule=0.9, sentiment="neutral"), THRESHOLDS).bullish is False

    def test_article_can_be_both(self):
        article = _article(70)
        article.sentiment_insights.append(
            ScoredInsight(1, "GLBX", "negative", -75, 0.9, 0.8, "")
        )
        flags = classify_article(article, THRESHOLDS)
        assert flags.bullish and flags.bearish

    def test_unscored_article(self):
        flags = classify_article(make_article(), THRESHOLDS)
        assert not flags.bullish and not flags.bearish


# ── Selection ────────────────────────────────────────────────────────────────


class TestSelectAlerts:

    def test_first_n_in_original_order(self):
        articles = [_article(61, title=f"Story {i}") for i in range(3)] + [_article(99, title="Strongest")]
        selection = select_alerts(articles, THRESHOLDS, limit=2)

        assert [a.title for a in selection.bullish] == ["Story 0", "Story 1"]
        assert selection.bearish == []

    def test_non_candidates_are_skipped(self):
        articles = [_article(10), _article(-70, sentiment="negative", title="Acme sued"), _article(75)]
        selection = select_alerts(articles, THRESHOLDS, limit=5)

        assert selection.bullish == [articles[2]]
        assert selection.bearish == [articles[1]]


# ── Summary text ─────────────────────────────────────────────────────────────


class TestAlertSummary:

    def test_summary_lists_both_directions(self):
        bull = _article(65, title="Acme beats earnings estimates")
        bear = _article(-72, model=0.9, rule=0.8, sentiment="negative", title="Globex recalls product")
        text = AlertSummaryBuilder(THRESHOLDS, limit=5).build(AlertSelection(bullish=[bull], bearish=[bear]))

        assert "📈 Strong bullish (1)" in text
        assert "📉 Strong bearish (1)" in text
        assert "• Acme beats earnings estimates [ACME] score +65 | model 0.80 | rule 0.75" in text
        assert "score -72 | model 0.90 | rule 0.80" in text
        assert bull.url in text

    def test_empty_direction_reads_none(self):
        text = AlertSummaryBuilder(THRESHOLDS).build(AlertSelection(bullish=[_article(65)]))
        assert "📉 Strong bearish (0)\n(none)" in text

    def test_no_alerts(self):
        assert AlertSummaryBuilder(THRESHOLDS).build(AlertSelection()) == format_no_alerts()

    def test_long_titles_are_truncated(self):
        article = _article(65, title="A" * 200, url="https://www.reuters.com/long")
        text = AlertSummaryBuilder(THRESHOLDS).build(AlertSelection(bullish=[article]))
        assert ("A" * 89 + "…") in text
        assert ("A" * 90) not in text

    def test_format_alert_summary_caps_each_direction(self):
        bulls = [_article(65 + i, title=f"Bull {i}") for i in range(4)]
        text = format_alert_summary(bulls, [], THRESHOLDS, limit=2)

        assert "📈 Strong bullish (2)" in text
        assert "Bull 1" in text
        assert "Bull 2" not in text
