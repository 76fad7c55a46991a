"""
Design Toolkit
Ethics domain models.

Models:
    - EthicalConsideration: advisory item shown before a project starts
    - QuestionFlag: one risk issue detected on one answered question
    - EthicalAssessment: aggregate score / recommendation over all flags
    - AIRecommendation: tier derived from the appropriateness score
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from design_toolkit.core.exceptions import ValidationError


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FlagCategory(str, Enum):
    ETHICAL = "ethical"
    APPROPRIATENESS = "appropriateness"


class AIRecommendation(str, Enum):
    HIGHLY_APPROPRIATE = "highly_appropriate"
    APPROPRIATE = "appropriate"
    QUESTIONABLE = "questionable"
    NOT_APPROPRIATE = "not_appropriate"


def _coerce(enum_cls, value, field_name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(
            f"Invalid {field_name} {value!r}",
            details={field_name: value, "allowed": [e.value for e in enum_cls]},
        ) from None


# ═════════════════════════════════════════════════════════════════════════════
# Ethical considerations
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EthicalConsideration:
    """Advisory item loaded from the knowledge base.

    ``acknowledged`` reflects the value at load time only. The live value is
    owned by an acknowledgement store (see services.acknowledgements).
    """

    id: str
    title: str
    description: str
    category: str
    priority: Priority
    why_important: str = ""
    actionable_steps: tuple[str, ...] = ()
    beneficiary_impact: str | None = None
    source_filename: str | None = None
    source_url: str | None = None
    source_page: str | None = None
    acknowledged: bool = False

    def __post_init__(self):
        object.__setattr__(self, "priority", _coerce(Priority, self.priority, "priority"))
        object.__setattr__(self, "actionable_steps", tuple(self.actionable_steps))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority.value,
            "why_important": self.why_important,
            "actionable_steps": list(self.actionable_steps),
            "beneficiary_impact": self.beneficiary_impact,
            "source_filename": self.source_filename,
            "source_url": self.source_url,
            "source_page": self.source_page,
            "acknowledged": self.acknowledged,
        }

    @classmethod
    def from_dict(cls, data: dict) -> EthicalConsideration:
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            category=data.get("category", ""),
            priority=data.get("priority", Priority.MEDIUM.value),
            why_important=data.get("why_important", ""),
            actionable_steps=tuple(data.get("actionable_steps") or ()),
            beneficiary_impact=data.get("beneficiary_impact"),
            source_filename=data.get("source_filename"),
            source_url=data.get("source_url"),
            source_page=data.get("source_page"),
            acknowledged=bool(data.get("acknowledged", False)),
        )


# ═════════════════════════════════════════════════════════════════════════════
# Flags & assessment
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class QuestionFlag:
    """Single risk issue raised against one question."""

    question_key: str
    issue: str
    severity: Severity
    category: FlagCategory = FlagCategory.ETHICAL

    def __post_init__(self):
        object.__setattr__(self, "severity", _coerce(Severity, self.severity, "severity"))
        object.__setattr__(self, "category", _coerce(FlagCategory, self.category, "category"))

    def to_dict(self) -> dict:
        return {
            "question_key": self.question_key,
            "issue": self.issue,
            "severity": self.severity.value,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuestionFlag:
        return cls(
            question_key=data["question_key"],
            issue=data.get("issue", ""),
            severity=data["severity"],
            category=data.get("category", FlagCategory.ETHICAL.value),
        )


@dataclass(frozen=True)
class EthicalAssessment:
    """Aggregate ethical assessment. Pure output value, never stored."""

    ethical_score: float
    proceed_recommendation: bool
    summary: str
    actionable_recommendations: tuple[str, ...] = field(default_factory=tuple)
    question_flags: tuple[QuestionFlag, ...] = field(default_factory=tuple)
    threshold_met: bool = False
    can_proceed: bool = False
    ai_appropriateness_score: float = 100
    ai_appropriateness_summary: str = ""
    ai_recommendation: AIRecommendation = AIRecommendation.HIGHLY_APPROPRIATE
    overall_readiness_score: float = 100

    def __post_init__(self):
        object.__setattr__(self, "ai_recommendation",
                           _coerce(AIRecommendation, self.ai_recommendation, "ai_recommendation"))

    @property
    def high_severity_flags(self) -> list[QuestionFlag]:
        return [f for f in self.question_flags if f.severity == Severity.HIGH]

    def flags_by_category(self, category: FlagCategory | str) -> list[QuestionFlag]:
        category = _coerce(FlagCategory, category, "category")
        return [f for f in self.question_flags if f.category == category]

    def with_can_proceed(self, allowed: bool) -> EthicalAssessment:
        return replace(self, can_proceed=allowed)

    def to_dict(self) -> dict:
        return {
            "ethical_score": self.ethical_score,
            "proceed_recommendation": self.proceed_recommendation,
            "summary": self.summary,
            "actionable_recommendations": list(self.actionable_recommendations),
            "question_flags": [f.to_dict() for f in self.question_flags],
            "threshold_met": self.threshold_met,
            "can_proceed": self.can_proceed,
            "ai_appropriateness_score": self.ai_appropriateness_score,
            "ai_appropriateness_summary": self.ai_appropriateness_summary,
            "ai_recommendation": self.ai_recommendation.value,
            "overall_readiness_score": self.overall_readiness_score,
        }
