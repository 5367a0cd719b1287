"""Reduce findings to a numeric score and a risk level."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Finding, Result, Severity

RISK_LOW = "LOW"
RISK_MEDIUM = "MEDIUM"
RISK_HIGH = "HIGH"
RISK_CRITICAL = "CRITICAL"

_CRITICAL_PENALTY = 40
_HIGH_PENALTY = 25
_MEDIUM_PENALTY = 10
_LOW_PENALTY = 3
_HTTPS_BONUS = 5


def calculate(result: Result, findings: Iterable[Finding] | None) -> tuple[int, str]:
    """Return the score, clamped to 0..100, and its risk level."""
    penalties = {
        Severity.CRITICAL: _CRITICAL_PENALTY,
        Severity.HIGH: _HIGH_PENALTY,
        Severity.MEDIUM: _MEDIUM_PENALTY,
        Severity.LOW: _LOW_PENALTY,
    }
    score = 100 - sum(penalties.get(f.severity, 0) for f in findings or ())
    if result.http.used_https:
        score += _HTTPS_BONUS
    score = max(0, min(100, score))
    return score, classify(score)


def classify(score: int) -> str:
    if score >= 80:
        return RISK_LOW
    if score >= 60:
        return RISK_MEDIUM
    if score >= 40:
        return RISK_HIGH
    return RISK_CRITICAL