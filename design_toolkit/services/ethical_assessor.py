"""
Ethical Assessor

Folds per-question flags into a single EthicalAssessment.

Scoring:
    ethical_score          = clamp(100 - Σ weight(flag.severity), 0, 100)
    threshold_met          = ethical_score >= pass_threshold
    proceed_recommendation = threshold_met AND no high-severity flag
    can_proceed            = proceed_recommendation (overridable after review)
    ai_appropriateness_score = clamp(100 - Σ weight over appropriateness flags, 0, 100)
    overall_readiness_score  = mean(ethical_score, ai_appropriateness_score)

A single high-severity flag vetoes the recommendation even when the numeric
score clears the threshold; severity class and aggregate score are read as
independent risk signals.

Usage:
    from design_toolkit.services.ethical_assessor import EthicalAssessor, ScoringPolicy

    result = EthicalAssessor.assess(flags)
    strict = EthicalAssessor.assess(flags, ScoringPolicy(pass_threshold=85))
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Iterable, Mapping

from design_toolkit.core.exceptions import ConfigError
from design_toolkit.models.ethics import (
    AIRecommendation,
    EthicalAssessment,
    FlagCategory,
    QuestionFlag,
    Severity,
)

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════════════
# Policy
# ═════════════════════════════════════════════════════════════════════════════

DEFAULT_WEIGHTS: dict[Severity, float] = {
    Severity.LOW: 2,
    Severity.MEDIUM: 6,
    Severity.HIGH: 15,
}
DEFAULT_PASS_THRESHOLD = 70

MAX_SCORE = 100
MIN_SCORE = 0

# Score band cut-offs (inclusive lower bounds)
BAND_HIGH_MIN = 70
BAND_MEDIUM_MIN = 50

# Appropriateness tier cut-offs (inclusive lower bounds)
AI_HIGHLY_APPROPRIATE_MIN = 85
AI_APPROPRIATE_MIN = BAND_HIGH_MIN
AI_QUESTIONABLE_MIN = BAND_MEDIUM_MIN


@dataclass(frozen=True)
class ScoringPolicy:
    """Severity weights plus the pass bar. Defaults are a configurable baseline.

    ``weights`` may be given as a mapping; it is stored as ``(Severity, weight)``
    pairs in severity order so the policy is hashable.
    """

    weights: tuple[tuple[Severity, float], ...] = tuple(DEFAULT_WEIGHTS.items())
    pass_threshold: float = DEFAULT_PASS_THRESHOLD

    def __post_init__(self):
        pairs = self.weights.items() if hasattr(self.weights, "items") else self.weights
        # Plain-string keys from config are normalised to Severity members
        normalised = {_severity_key(s): w for s, w in pairs}
        object.__setattr__(
            self, "weights", tuple((s, normalised[s]) for s in Severity if s in normalised),
        )

    @property
    def weight_map(self) -> dict[Severity, float]:
        return dict(self.weights)

    def weight(self, severity: Severity | str) -> float:
        try:
            return self.weight_map[Severity(severity)]
        except (KeyError, ValueError):
            raise ConfigError(
                f"No weight configured for severity {severity!r}",
                details={"severity": getattr(severity, "value", severity)},
            ) from None

    def validate(self) -> ScoringPolicy:
        """Raise ConfigError unless the threshold and every weight are usable."""
        threshold = self.pass_threshold
        if not _is_finite_number(threshold) or not MIN_SCORE <= threshold <= MAX_SCORE:
            raise ConfigError(
                f"pass_threshold must be a number within {MIN_SCORE}-{MAX_SCORE}",
                details={"pass_threshold": threshold},
            )

        weights = self.weight_map
        missing = [s.value for s in Severity if s not in weights]
        if missing:
            raise ConfigError(
                f"Missing weight(s) for severity: {', '.join(missing)}",
                details={"missing": missing},
            )

        bad = {s.value: w for s, w in self.weights if not _is_finite_number(w) or w < 0}
        if bad:
            raise ConfigError("Severity weights must be finite non-negative numbers", details=bad)
        return self

    def with_overrides(
        self,
        *,
        pass_threshold: float | None = None,
        weights: Mapping[Severity | str, float] | None = None,
    ) -> ScoringPolicy:
        merged = self.weight_map
        merged.update({_severity_key(s): w for s, w in (weights or {}).items()})
        return ScoringPolicy(
            weights=merged,
            pass_threshold=self.pass_threshold if pass_threshold is None else pass_threshold,
        )

    def to_dict(self) -> dict:
        return {
            "weights": {s.value: w for s, w in self.weights},
            "pass_threshold": self.pass_threshold,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ScoringPolicy:
        """Build a policy from plain config; omitted values keep their defaults."""
        raw_weights = data.get("weights") or {}
        threshold = data.get("pass_threshold", data.get("passThreshold"))
        return cls().with_overrides(pass_threshold=threshold, weights=raw_weights)


def _is_finite_number(value) -> bool:
    # bool is a Real; NaN and inf slip past range comparisons
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _severity_key(severity: Severity | str) -> Severity:
    try:
        return Severity(severity)
    except ValueError:
        raise ConfigError(
            f"Unknown severity {severity!r} in policy weights",
            details={"severity": severity},
        ) from None


DEFAULT_POLICY = ScoringPolicy()


# ═════════════════════════════════════════════════════════════════════════════
# Text templates
# ═════════════════════════════════════════════════════════════════════════════

_REMEDIATION_TEMPLATES: dict[Severity, str] = {
    Severity.HIGH: "Resolve before proceeding ({key}): {issue}",
    Severity.MEDIUM: "Address ({key}): {issue}",
    Severity.LOW: "Review ({key}): {issue}",
}


def remediation_for(flag: QuestionFlag) -> str:
    return _REMEDIATION_TEMPLATES[flag.severity].format(key=flag.question_key, issue=flag.issue)


def build_summary(score: float, flag_count: int, high_count: int,
                  threshold_met: bool, pass_threshold: float) -> str:
    """One-line deterministic summary of the assessment."""
    text = f"Ethical score {score:g}/{MAX_SCORE} with {flag_count} flagged issue(s)"
    if high_count:
        text += f", {high_count} high severity"
    if threshold_met:
        text += f"; meets the pass threshold of {pass_threshold:g}."
    else:
        text += f"; below the pass threshold of {pass_threshold:g}."
    return text


def score_band(score: float) -> str:
    """
    Band an ethical score for display.
      70-100 → high
      50-69  → medium
      0-49   → low
    """
    if score >= BAND_HIGH_MIN:
        return "high"
    elif score >= BAND_MEDIUM_MIN:
        return "medium"
    return "low"


def ai_recommendation_for(score: float) -> AIRecommendation:
    """
    Tier an appropriateness score.
      85-100 → highly_appropriate
      70-84  → appropriate
      50-69  → questionable
      0-49   → not_appropriate
    """
    if score >= AI_HIGHLY_APPROPRIATE_MIN:
        return AIRecommendation.HIGHLY_APPROPRIATE
    elif score >= AI_APPROPRIATE_MIN:
        return AIRecommendation.APPROPRIATE
    elif score >= AI_QUESTIONABLE_MIN:
        return AIRecommendation.QUESTIONABLE
    return AIRecommendation.NOT_APPROPRIATE


def build_appropriateness_summary(score: float, flag_count: int,
                                  recommendation: AIRecommendation) -> str:
    label = recommendation.value.replace("_", " ")
    return (f"AI appropriateness {score:g}/{MAX_SCORE} with {flag_count}"
            f" appropriateness issue(s); rated {label}.")


def _clamped_score(flags: Iterable[QuestionFlag], policy: ScoringPolicy) -> float:
    penalty = sum(policy.weight(f.severity) for f in flags)
    return max(MIN_SCORE, min(MAX_SCORE, MAX_SCORE - penalty))


# ═════════════════════════════════════════════════════════════════════════════
# Public API
# ═════════════════════════════════════════════════════════════════════════════

class EthicalAssessor:
    """Pure aggregation of question flags into an assessment."""

    @staticmethod
    def assess(
        flags: Iterable[QuestionFlag | Mapping[str, Any]],
        policy: ScoringPolicy | Mapping[str, Any] | None = None,
    ) -> EthicalAssessment:
        """Score ``flags`` under ``policy`` (DEFAULT_POLICY when omitted).

        Raises:
            ConfigError: threshold outside 0-100 or a negative/missing weight.
        """
        if policy is None:
            policy = DEFAULT_POLICY
        elif not isinstance(policy, ScoringPolicy):
            policy = ScoringPolicy.from_dict(policy)
        policy.validate()

        flags = tuple(
            f if isinstance(f, QuestionFlag) else QuestionFlag.from_dict(f) for f in flags
        )
        score = _clamped_score(flags, policy)

        high_count = sum(1 for f in flags if f.severity == Severity.HIGH)
        threshold_met = score >= policy.pass_threshold
        proceed = threshold_met and high_count == 0

        recommendations: list[str] = []
        seen_issues: set[str] = set()
        for flag in flags:
            if flag.issue in seen_issues:
                continue
            seen_issues.add(flag.issue)
            recommendations.append(remediation_for(flag))

        # Appropriateness flags also count towards ethical_score above
        appropriateness_flags = [f for f in flags if f.category == FlagCategory.APPROPRIATENESS]
        ai_score = _clamped_score(appropriateness_flags, policy)
        ai_recommendation = ai_recommendation_for(ai_score)

        logger.debug("Ethical assessment: score=%s flags=%d high=%d threshold=%s proceed=%s",
                     score, len(flags), high_count, policy.pass_threshold, proceed,
                     extra={"ethical_score": score})

        return EthicalAssessment(
            ethical_score=score,
            proceed_recommendation=proceed,
            summary=build_summary(score, len(flags), high_count,
                                  threshold_met, policy.pass_threshold),
            actionable_recommendations=tuple(recommendations),
            question_flags=flags,
            threshold_met=threshold_met,
            can_proceed=proceed,
            ai_appropriateness_score=ai_score,
            ai_appropriateness_summary=build_appropriateness_summary(
                ai_score, len(appropriateness_flags), ai_recommendation),
            ai_recommendation=ai_recommendation,
            overall_readiness_score=(score + ai_score) / 2,
        )

    @staticmethod
    def override_can_proceed(
        assessment: EthicalAssessment,
        allowed: bool = True,
        reviewer: str | None = None,
    ) -> EthicalAssessment:
        """Return a copy with ``can_proceed`` forced after manual review.

        ``proceed_recommendation`` keeps the computed value.
        """
        logger.info("can_proceed overridden to %s by %s (computed recommendation=%s)",
                    allowed, reviewer or "unknown reviewer", assessment.proceed_recommendation,
                    extra={"event_type": "can_proceed_override"})
        return assessment.with_can_proceed(allowed)


assess = EthicalAssessor.assess
