"""Content moderation for review comments.

``moderate_review_content`` scores a comment with a handful of keyword and
formatting heuristics. It is pure and deterministic: the same comment always
produces the same result. ``should_auto_reject`` and
``should_require_manual_review`` turn a result into a decision; callers check
them in that order and approve the review when neither applies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

SPAM_KEYWORDS = (
    "viagra",
    "casino",
    "lottery",
    "winner",
    "congratulations",
    "click here",
    "free money",
    "make money fast",
    "work from home",
    "buy now",
    "limited time",
    "act now",
    "urgent",
    "guaranteed",
)

INAPPROPRIATE_KEYWORDS = (
    "hate",
    "racist",
    "discrimination",
    "violence",
    "threat",
)

REPETITION_PATTERNS = (
    re.compile(r"([^\n\r\u2028\u2029])\1{4,}"),  # same character 5+ times, line breaks excluded
    re.compile(r"([A-Za-z0-9_]+)\s+\1\s+\1", re.IGNORECASE),  # same ASCII word 3 times in a row
)
CAPITAL_LETTER_RE = re.compile(r"[A-Z]")
PUNCTUATION_RUN_RE = re.compile(r"[!?]{2,}")

SPAM_KEYWORD_SCORE = 20
INAPPROPRIATE_KEYWORD_SCORE = 30
REPETITION_SCORE = 15
CAPITALS_SCORE = 10
PUNCTUATION_SCORE = 10
LENGTH_SCORE = 5

SPAM_THRESHOLD = 25
INAPPROPRIATE_THRESHOLD = 30


@dataclass
class ModerationResult:
    is_spam: bool = False
    is_inappropriate: bool = False
    confidence: float = 0.0
    reasons: list[str] = field(default_factory=list)


def _matched_keywords(text: str, keywords: tuple[str, ...]) -> list[str]:
    return [keyword for keyword in keywords if keyword in text]


def moderate_review_content(comment: str) -> ModerationResult:
    """Score ``comment`` for spam and inappropriate content."""

    result = ModerationResult()
    lowered = comment.lower()
    spam_score = 0
    inappropriate_score = 0

    spam_matches = _matched_keywords(lowered, SPAM_KEYWORDS)
    if spam_matches:
        spam_score += len(spam_matches) * SPAM_KEYWORD_SCORE
        result.reasons.append(f"Contains spam keywords: {', '.join(spam_matches)}")

    inappropriate_matches = _matched_keywords(lowered, INAPPROPRIATE_KEYWORDS)
    if inappropriate_matches:
        inappropriate_score += len(inappropriate_matches) * INAPPROPRIATE_KEYWORD_SCORE
        result.reasons.append(f"Contains inappropriate content: {', '.join(inappropriate_matches)}")

    if any(pattern.search(comment) for pattern in REPETITION_PATTERNS):
        spam_score += REPETITION_SCORE
        result.reasons.append("Contains excessive repetition")

    capitals_ratio = len(CAPITAL_LETTER_RE.findall(comment)) / len(comment) if comment else 0.0
    if capitals_ratio > 0.7 and len(comment) > 20:
        spam_score += CAPITALS_SCORE
        result.reasons.append("Excessive use of capital letters")

    if len(PUNCTUATION_RUN_RE.findall(comment)) > 3:
        spam_score += PUNCTUATION_SCORE
        result.reasons.append("Excessive punctuation")

    if len(comment.strip()) < 10:
        spam_score += LENGTH_SCORE
        result.reasons.append("Comment too short")
    elif len(comment) > 800:
        spam_score += LENGTH_SCORE
        result.reasons.append("Comment unusually long")

    result.is_spam = spam_score >= SPAM_THRESHOLD
    result.is_inappropriate = inappropriate_score >= INAPPROPRIATE_THRESHOLD
    result.confidence = min(max(spam_score + inappropriate_score, 0), 100) / 100
    return result


def should_auto_reject(result: ModerationResult) -> bool:
    return result.is_inappropriate or (result.is_spam and result.confidence > 0.8)


def should_require_manual_review(result: ModerationResult) -> bool:
    return (result.is_spam and result.confidence > 0.5) or (
        result.confidence > 0.3 and len(result.reasons) > 2
    )
