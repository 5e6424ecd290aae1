"""Programmatic API entrypoint for the phishing/spam detection tool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from email_features import EmailFeatures, extract_email_features
from heuristic_scorer import Verdict, score_email, score_url
from url_features import URLFeatures, extract_url_features

URL_PHISHING_MESSAGE = "Warning: This URL appears to be a phishing attempt"
URL_SAFE_MESSAGE = "Safe: This URL appears to be safe"
EMAIL_SPAM_MESSAGE = "Warning: This email appears to be spam"
EMAIL_SAFE_MESSAGE = "Safe: This email appears to be legitimate"


class ValidationError(ValueError):
    """Raised when a request payload is missing required fields."""


@dataclass(frozen=True)
class URLClassification:
    url: str
    is_phishing: bool
    confidence: float
    features: URLFeatures
    verdict: Verdict

    def to_response(self) -> Dict:
        return url_response(self.url, self.is_phishing, self.confidence,
                            self.features.as_dict(), self.verdict.reasons)


@dataclass(frozen=True)
class EmailClassification:
    subject: str
    sender: str
    is_spam: bool
    confidence: float
    features: EmailFeatures
    verdict: Verdict

    def to_response(self) -> Dict:
        return email_response(self.subject, self.sender, self.is_spam, self.confidence,
                              self.features.as_dict(), self.verdict.reasons)


def url_response(url: str, is_phishing: bool, confidence: float, features: Dict,
                 reasons=()) -> Dict:
    """JSON envelope for a URL verdict; the only place confidence is rounded."""
    return {
        "url": url,
        "isPhishing": is_phishing,
        "confidence": round(confidence, 2),
        "features": features,
        "reasons": list(reasons),
        "message": URL_PHISHING_MESSAGE if is_phishing else URL_SAFE_MESSAGE,
    }


def email_response(subject: str, sender: str, is_spam: bool, confidence: float,
                   features: Dict, reasons=()) -> Dict:
    return {
        "subject": subject,
        "sender": sender,
        "isSpam": is_spam,
        "confidence": round(confidence, 2),
        "features": features,
        "reasons": list(reasons),
        "message": EMAIL_SPAM_MESSAGE if is_spam else EMAIL_SAFE_MESSAGE,
    }


def normalize_url(raw_url: str) -> str:
    """Trim and lower-case a URL the way the request handlers do before classifying."""
    return raw_url.strip().lower()


def validate_url_payload(payload: Optional[Dict]) -> str:
    """Return the URL from a request body or raise ValidationError."""
    url = payload.get("url") if isinstance(payload, dict) else None
    if not url or not isinstance(url, str) or not url.strip():
        raise ValidationError("Valid URL required")
    return url


def validate_email_payload(payload: Optional[Dict]) -> Dict[str, str]:
    """Return subject/content/sender from a request body or raise ValidationError."""
    if not isinstance(payload, dict):
        raise ValidationError("Subject, content, and sender are required")
    fields = {}
    for key in ("subject", "content", "sender"):
        value = payload.get(key)
        if not value or not isinstance(value, str):
            raise ValidationError("Subject, content, and sender are required")
        fields[key] = value
    return fields


def classify_url(raw_url: str) -> URLClassification:
    """Extract features and score a URL exactly as given."""
    features = extract_url_features(raw_url)
    verdict = score_url(features)
    return URLClassification(
        url=raw_url,
        is_phishing=verdict.is_malicious,
        confidence=verdict.confidence,
        features=features,
        verdict=verdict,
    )


def classify_email(subject: str, content: str, sender: str) -> EmailClassification:
    """Extract features and score an email exactly as given."""
    features = extract_email_features(subject, content, sender)
    verdict = score_email(features)
    return EmailClassification(
        subject=subject,
        sender=sender,
        is_spam=verdict.is_malicious,
        confidence=verdict.confidence,
        features=features,
        verdict=verdict,
    )
