"""
Tests for the source-tier and event-category classifiers.

Usage:
    pytest testing/test_classifier.py -v
"""

import pytest

from core.classifier import EventCategory, SourceTier, classify_event, classify_source, get_domain


# ── Source tiers ─────────────────────────────────────────────────────────────


class TestClassifySource:

    @pytest.mark.parametrize(
        "url, tier",
        [
            ("https://www.prnewswire.com/news-releases/acme-123.html", SourceTier.WIRE),
            ("https://www.globenewswire.com/news-release/2026/10/19/acme", SourceTier.WIRE),
            ("https://www.reuters.com/markets/acme-earnings", SourceTier.MAJOR_PRESS),
            ("https://www.cnbc.com/2026/10/19/acme.html", SourceTier.MAJOR_PRESS),
            ("https://finance.yahoo.com/news/acme-123.html", SourceTier.FINANCIAL_PORTAL),
            ("https://www.benzinga.com/news/26/10/acme", SourceTier.FINANCIAL_PORTAL),
            ("https://www.bizjournals.com/sanjose/news/acme", SourceTier.REGIONAL_PRESS),
            ("https://someone.substack.com/p/acme-thesis", SourceTier.BLOG),
            ("https://ir.acme.com/news/q3", SourceTier.COMPANY),
            ("https://investors.acme.com/press", SourceTier.COMPANY),
            ("https://example.org/acme", SourceTier.UNKNOWN),
        ],
    )
    def test_known_outlets(self, url, tier):
        assert classify_source(url) is tier

    def test_missing_or_unparseable_url_is_unknown(self):
        assert classify_source(None) is SourceTier.UNKNOWN
        assert classify_source("") is SourceTier.UNKNOWN
        assert classify_source("not a url") is SourceTier.UNKNOWN

    def test_hostname_is_lowercased(self):
        assert get_domain("https://WWW.Reuters.COM/x") == "www.reuters.com"
        assert classify_source("https://WWW.Reuters.COM/x") is SourceTier.MAJOR_PRESS

    def test_tier_values_are_plain_strings(self):
        assert SourceTier.MAJOR_PRESS == "major_press"


# ── Event categories ─────────────────────────────────────────────────────────


class TestClassifyEvent:

    @pytest.mark.parametrize(
        "keywords, text, category",
        [
            (["merger"], "", EventCategory.MA),
            ([], "Acme explores M&A options", EventCategory.MA),
            ([], "FDA approval for Acme's lead drug", EventCategory.FDA),
            ([], "Class action lawsuit filed against Acme", EventCategory.LAWSUIT),
            ([], "Acme posts Q3 results", EventCategory.EARNINGS),
            ([], "Acme raises outlook", EventCategory.GUIDANCE),
            ([], "Acme signs partnership with Globex", EventCategory.PARTNERSHIP),
            ([], "Antitrust probe widens", EventCategory.REGULATORY),
            ([], "Acme names new CEO", EventCategory.OTHER),
        ],
    )
    def test_categories(self, keywords, text, category):
        assert classify_event(keywords, text) is category

    def test_first_match_wins(self):
        # Both M&A and lawsuit vocabulary; M&A is checked first
        assert classify_event([], "Shareholder lawsuit over the merger") is EventCategory.MA

    def test_keywords_and_text_are_combined(self):
        assert classify_event(["Earnings"], "Acme news") is EventCategory.EARNINGS

    def test_nothing_to_classify(self):
        assert classify_event(None, None) is EventCategory.OTHER
