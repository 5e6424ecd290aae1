# heuristic_scorer.py
# Rule-based scorers converting URL / email features into a risk verdict

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from email_features import EmailFeatures
from url_features import URLFeatures

PHISHING_THRESHOLD = 0.5
SPAM_THRESHOLD = 0.45


@dataclass(frozen=True)
class Rule:
    name: str
    weight: int
    predicate: Callable
    reason: str
    # rules sharing a group are tiers: the first match wins, the largest weight counts toward max
    group: Optional[str] = None


@dataclass(frozen=True)
class Verdict:
    is_malicious: bool
    confidence: float
    risk_score: int
    max_score: int
    normalized_score: float
    reasons: Tuple[str, ...] = ()


URL_RULES: Tuple[Rule, ...] = (
    Rule("has_ip", 15, lambda f: f.has_ip,
         "URL contains an IP address"),
    Rule("has_at_symbol", 10, lambda f: f.has_at_symbol,
         "URL contains an '@' symbol"),
    Rule("no_https", 8, lambda f: not f.has_https,
         "URL does not use HTTPS"),
    Rule("long_url", 12, lambda f: f.length > 75,
         "Unusually long URL"),
    Rule("many_subdomains", 10, lambda f: f.subdomain_count > 2,
         "Many subdomains in host"),
    Rule("many_dots", 8, lambda f: f.dot_count > 4,
         "Many dots in URL"),
    Rule("many_slashes", 7, lambda f: f.slash_count > 6,
         "Deeply nested path"),
    Rule("suspicious_keywords", 15, lambda f: f.has_suspicious_keywords,
         "Suspicious keywords in URL"),
    Rule("high_entropy", 15, lambda f: f.entropy_score > 4.5,
         "High character entropy (looks random/auto-generated)"),
)

EMAIL_RULES: Tuple[Rule, ...] = (
    Rule("urgent_words", 15, lambda f: f.has_urgent_words,
         "Urgent language"),
    Rule("money_words", 18, lambda f: f.has_money_words,
         "Money/prize language"),
    Rule("many_links", 12, lambda f: f.has_link_count > 3,
         "More than three links in body", group="links"),
    Rule("several_links", 6, lambda f: 1 < f.has_link_count <= 3,
         "Several links in body", group="links"),
    Rule("all_caps", 10, lambda f: f.has_all_caps,
         "Several ALL-CAPS words"),
    Rule("exclamations", 8, lambda f: f.has_exclamation_count > 2,
         "Excessive exclamation marks"),
    Rule("suspicious_sender", 12, lambda f: f.has_suspicious_sender,
         "Sender address looks automated or generated"),
    Rule("attachment_keywords", 10, lambda f: f.has_attachment_keywords,
         "Attachment/download bait"),
    Rule("capital_ratio", 10, lambda f: f.capital_ratio > 0.3,
         "High proportion of capital letters"),
    Rule("long_subject", 5, lambda f: f.subject_length > 100,
         "Unusually long subject"),
)


def max_score(rules: Sequence[Rule]) -> int:
    """Highest reachable risk score for a rule table."""
    total = 0
    group_max = {}
    for rule in rules:
        if rule.group is None:
            total += rule.weight
        else:
            group_max[rule.group] = max(group_max.get(rule.group, 0), rule.weight)
    return total + sum(group_max.values())


def evaluate(rules: Sequence[Rule], features, threshold: float) -> Verdict:
    """Add up the weights of matching rules and turn the sum into a verdict."""
    risk = 0
    reasons = []
    fired_groups = set()
    for rule in rules:
        if rule.group is not None and rule.group in fired_groups:
            continue
        if rule.predicate(features):
            risk += rule.weight
            reasons.append(rule.reason)
            if rule.group is not None:
                fired_groups.add(rule.group)

    ceiling = max_score(rules)
    normalized = risk / ceiling
    malicious = normalized > threshold
    return Verdict(
        is_malicious=malicious,
        confidence=normalized if malicious else 1 - normalized,
        risk_score=risk,
        max_score=ceiling,
        normalized_score=normalized,
        reasons=tuple(reasons),
    )


def score_url(features: URLFeatures) -> Verdict:
    return evaluate(URL_RULES, features, PHISHING_THRESHOLD)


def score_email(features: EmailFeatures) -> Verdict:
    return evaluate(EMAIL_RULES, features, SPAM_THRESHOLD)
