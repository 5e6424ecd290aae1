# email_features.py
# Email feature extraction for spam detection

import re
from dataclasses import asdict, dataclass
from typing import Dict

URGENT_WORDS = (
    "urgent", "immediate", "action required", "act now", "limited time",
    "expires", "hurry", "quick", "fast", "now", "today only",
)

MONEY_WORDS = (
    "free", "cash", "money", "prize", "winner", "congratulations",
    "claim", "reward", "discount", "50%", "100%", "$$$", "million",
    "billion", "inheritance", "lottery", "credit card",
)

ATTACHMENT_KEYWORDS = (
    "invoice", "receipt", "document", "file attached", "see attachment",
    "open attachment", "download", "click here",
)

SUSPICIOUS_SENDER_PATTERNS = (
    re.compile(r"noreply", re.IGNORECASE),
    re.compile(r"no-reply", re.IGNORECASE),
    re.compile(r"admin@", re.IGNORECASE),
    re.compile(r"support@", re.IGNORECASE),
    re.compile(r"info@", re.IGNORECASE),
    re.compile(r"[0-9]{5,}"),
)

_LINK_RE = re.compile(r"https?://", re.IGNORECASE)
_ALL_CAPS_RE = re.compile(r"\b[A-Z]{3,}\b", re.ASCII)
_LETTER_RE = re.compile(r"[a-zA-Z]")
_UPPER_RE = re.compile(r"[A-Z]")

WIRE_NAMES = {
    "subject_length": "subjectLength",
    "content_length": "contentLength",
    "has_urgent_words": "hasUrgentWords",
    "has_money_words": "hasMoneyWords",
    "has_link_count": "hasLinkCount",
    "has_all_caps": "hasAllCaps",
    "has_exclamation_count": "hasExclamationCount",
    "has_suspicious_sender": "hasSuspiciousSender",
    "has_attachment_keywords": "hasAttachmentKeywords",
    "capital_ratio": "capitalRatio",
}


@dataclass(frozen=True)
class EmailFeatures:
    subject_length: int
    content_length: int
    has_urgent_words: bool
    has_money_words: bool
    has_link_count: int
    has_all_caps: bool
    has_exclamation_count: int
    has_suspicious_sender: bool
    has_attachment_keywords: bool
    capital_ratio: float

    def as_dict(self) -> Dict:
        return {WIRE_NAMES[k]: v for k, v in asdict(self).items()}


def _contains_any(text: str, words) -> bool:
    return any(w in text for w in words)


def _capital_ratio(text: str) -> float:
    letters = _LETTER_RE.findall(text)
    if not letters:
        return 0.0
    capitals = _UPPER_RE.findall(text)
    return len(capitals) / len(letters)


def extract_email_features(subject: str, content: str, sender: str) -> EmailFeatures:
    """Return the feature vector for an email.

    Keyword tests run on ``subject + " " + content`` lower-cased; links are
    counted in ``content`` only. Empty strings are valid input.
    """
    joined = subject + " " + content
    full_text = joined.lower()

    return EmailFeatures(
        subject_length=len(subject),
        content_length=len(content),
        has_urgent_words=_contains_any(full_text, URGENT_WORDS),
        has_money_words=_contains_any(full_text, MONEY_WORDS),
        has_link_count=len(_LINK_RE.findall(content)),
        has_all_caps=len(_ALL_CAPS_RE.findall(joined)) > 2,
        has_exclamation_count=full_text.count("!"),
        has_suspicious_sender=any(p.search(sender) for p in SUSPICIOUS_SENDER_PATTERNS),
        has_attachment_keywords=_contains_any(full_text, ATTACHMENT_KEYWORDS),
        # no separator here: only letters are counted
        capital_ratio=_capital_ratio(subject + content),
    )
