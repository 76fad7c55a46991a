"""
Design Toolkit
Phase-gating and ethical-assessment core for the guided project-design workflow.

Usage:
    from design_toolkit import PhaseGate, GuidanceResolver, EthicalAssessor

    PhaseGate.is_unlocked(phases, 1)
    GuidanceResolver.resolve("potential_harm", "ai_ethics", pool)
    EthicalAssessor.assess(flags)

    cfg = setup()                          # once, at application startup
"""

from design_toolkit.core.exceptions import (  # noqa: F401
    ConfigError,
    NotFoundError,
    PhaseIndexError,
    TransitionError,
    ValidationError,
)
from design_toolkit.config import get_config
from design_toolkit.models import (  # noqa: F401
    AIRecommendation,
    EthicalAssessment,
    EthicalConsideration,
    GuidanceSource,
    Phase,
    PhaseStatus,
    Question,
    QuestionFlag,
    Severity,
)
from design_toolkit.services import (  # noqa: F401
    DEFAULT_POLICY,
    EthicalAssessor,
    GuidanceResolver,
    PhaseGate,
    ScoringPolicy,
)
from design_toolkit.utils.logging_config import configure_logging  # noqa: F401

__version__ = "1.0.0"


def setup(config_name=None):
    """
    Resolve configuration and install logging for an embedding application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        The resolved Config instance.
    """
    cfg = get_config(config_name)
    configure_logging(cfg)
    return cfg
