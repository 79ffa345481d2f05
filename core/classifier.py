"""
Rule-based classifiers feeding the calibrator.

• ``classify_source``  – article URL → SourceTier (how much to trust the outlet)
• ``classify_event``   – keywords + text → EventCategory (how market-moving the news is)

Both are heuristic regex families; anything unmatched falls back to
``SourceTier.UNKNOWN`` / ``EventCategory.OTHER``.
"""

import re
from enum import Enum
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlparse


class SourceTier(str, Enum):
    WIRE = "wire"
    MAJOR_PRESS = "major_press"
    REGIONAL_PRESS = "regional_press"
    FINANCIAL_PORTAL = "financial_portal"
    COMPANY = "company"
    BLOG = "blog"
    UNKNOWN = "unknown"


class EventCategory(str, Enum):
    MA = "ma"
    FDA = "fda"
    LAWSUIT = "lawsuit"
    EARNINGS = "earnings"
    GUIDANCE = "guidance"
    PARTNERSHIP = "partnership"
    REGULATORY = "regulatory"
    OTHER = "other"


# ── Source tiers (matched against the hostname, first hit wins) ─────────────
_SOURCE_PATTERNS: List[Tuple[SourceTier, re.Pattern]] = [
    (SourceTier.WIRE, re.compile(r"(prnewswire|businesswire|globenewswire|nasdaq\.com|newsfile|accesswire)")),
    (SourceTier.MAJOR_PRESS, re.compile(r"(reuters|bloomberg|wsj|ft\.com|apnews|cnbc|marketwatch|forbes)")),
    (SourceTier.FINANCIAL_PORTAL, re.compile(
        r"(finance\.yahoo|seekingalpha|fool\.com|benzinga|zacks|investing\.com|marketbeat|tipranks|investorplace|thestreet)"
    )),
    (SourceTier.REGIONAL_PRESS, re.compile(r"(bizjournals|latimes|chicagotribune|bostonglobe|sfchronicle|dallasnews|startribune)")),
    (SourceTier.BLOG, re.compile(r"(medium\.com|substack|wordpress|blogspot|reddit\.com|stocktwits)")),
    (SourceTier.COMPANY, re.compile(r"(\.corp\.|\.ir\.|^ir\.|^investors?\.)")),
]

# ── Event categories (matched against keywords + text, first hit wins) ─────
_EVENT_PATTERNS: List[Tuple[EventCategory, re.Pattern]] = [
    (EventCategory.MA, re.compile(r"(\bm&a\b|\b(acquisition|merger|buyout|takeover)\b)")),
    (EventCategory.FDA, re.compile(r"\b(fda|pdufa|phase\s*(1|2|3)|trial|ind|approval|clearance)\b")),
    (EventCategory.LAWSUIT, re.compile(r"\b(class action|securities lawsuit|lawsuit|litigation)\b")),
    (EventCategory.EARNINGS, re.compile(r"\b(earnings|q\d|eps|revenue|results)\b")),
    (EventCategory.GUIDANCE, re.compile(r"\b(guidance|outlook|raise guidance|lower guidance)\b")),
    (EventCategory.PARTNERSHIP, re.compile(r"\b(partnership|collaboration|contract|deal)\b")),
    (EventCategory.REGULATORY, re.compile(r"\b(regulator|regulatory|sec|doj|antitrust|cfius|fine|penalty)\b")),
]


def get_domain(url: Optional[str]) -> str:
    """Lowercased hostname of *url*, or "" when it cannot be parsed."""
    if not url:
        return ""
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def classify_source(url: Optional[str]) -> SourceTier:
    """Map an article URL to its source trust tier."""
    host = get_domain(url)
    if not host:
        return SourceTier.UNKNOWN
    for tier, pattern in _SOURCE_PATTERNS:
        if pattern.search(host):
            return tier
    return SourceTier.UNKNOWN


def classify_event(keywords: Optional[Iterable[str]], text: Optional[str]) -> EventCategory:
    """Map article keywords and free text to an event category."""
    joined = " ".join(str(k) for k in (keywords or [])).lower()
    haystack = f"{joined} {str(text or '').lower()}"
    for category, pattern in _EVENT_PATTERNS:
        if pattern.search(haystack):
            return category
    return EventCategory.OTHER
