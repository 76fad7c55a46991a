"""
Design Toolkit domain models.

All records are frozen dataclasses owned by the caller; evaluators return
new values instead of mutating these.
"""

from design_toolkit.models.ethics import (  # noqa: F401
    AIRecommendation,
    EthicalAssessment,
    EthicalConsideration,
    FlagCategory,
    Priority,
    QuestionFlag,
    Severity,
)
from design_toolkit.models.guidance import GuidanceSource, Question  # noqa: F401
from design_toolkit.models.phase import (  # noqa: F401
    DEFAULT_PHASES,
    PHASE_ORDER,
    PHASE_STATUSES,
    Phase,
    PhaseStatus,
)
