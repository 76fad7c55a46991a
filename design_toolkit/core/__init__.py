from design_toolkit.core.exceptions import (
    ConfigError,
    NotFoundError,
    PhaseIndexError,
    TransitionError,
    ValidationError,
)

__all__ = [
    "ConfigError",
    "NotFoundError",
    "PhaseIndexError",
    "TransitionError",
    "ValidationError",
]
