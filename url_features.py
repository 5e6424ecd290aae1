# url_features.py
# URL feature extraction for phishing detection

import logging
import math
import re
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Dict
from urllib.parse import urlsplit

logger = logging.getLogger("url_features")

SUSPECT_KEYWORDS = (
    "login", "verify", "secure", "account", "update", "confirm",
    "banking", "paypal", "ebay", "amazon", "signin", "password",
)

_IPV4_RE = re.compile(r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}", re.ASCII)

# dataclass field -> key used in JSON responses and stored history
WIRE_NAMES = {
    "length": "length",
    "has_ip": "hasIP",
    "has_at_symbol": "hasAtSymbol",
    "dot_count": "dotCount",
    "slash_count": "slashCount",
    "has_https": "hasHttps",
    "subdomain_count": "subdomainCount",
    "has_suspicious_keywords": "hasSuspiciousKeywords",
    "entropy_score": "entropyScore",
}


@dataclass(frozen=True)
class URLFeatures:
    length: int
    has_ip: bool
    has_at_symbol: bool
    dot_count: int
    slash_count: int
    has_https: bool
    subdomain_count: int
    has_suspicious_keywords: bool
    entropy_score: float

    def as_dict(self) -> Dict:
        """Features keyed by their wire names (hasIP, dotCount, ...)."""
        return {WIRE_NAMES[k]: v for k, v in asdict(self).items()}


def shannon_entropy(s: str) -> float:
    """Calculate Shannon entropy (base 2) of a string."""
    if not s:
        return 0.0
    n = len(s)
    ent = 0.0
    for count in Counter(s).values():
        p = count / n
        ent -= p * math.log2(p)
    return ent


def _subdomain_count(url: str) -> int:
    """Hostname labels beyond the registrable pair, 0 when the URL does not parse."""
    try:
        parsed = urlsplit(url)
        host = parsed.hostname
        # non-numeric or out-of-range ports make the URL invalid
        parsed.port
    except ValueError:
        logger.debug("could not parse hostname from %r", url)
        return 0
    if not parsed.scheme or not host:
        return 0
    return max(0, len(host.split(".")) - 2)


def extract_url_features(url: str) -> URLFeatures:
    """Return the feature vector for a URL string, taken as given (no trimming/lowercasing)."""
    url_lower = url.lower()
    return URLFeatures(
        length=len(url),
        has_ip=bool(_IPV4_RE.search(url)),
        has_at_symbol="@" in url,
        dot_count=url.count("."),
        slash_count=url.count("/"),
        has_https=url.startswith("https://"),
        subdomain_count=_subdomain_count(url),
        has_suspicious_keywords=any(kw in url_lower for kw in SUSPECT_KEYWORDS),
        entropy_score=shannon_entropy(url),
    )
