"""
Exception hierarchy for the design toolkit core.

Every evaluator raises one of these types at the point of misuse. Callers
(presentation or data-fetching layers) register handlers against these
types once instead of importing ad-hoc classes from individual services.

Usage:
    from design_toolkit.core.exceptions import ConfigError, PhaseIndexError

    raise PhaseIndexError(index=4, length=4)
    raise ConfigError("pass_threshold out of range", details={"pass_threshold": 150})
"""


class PhaseIndexError(IndexError):
    """Raised when a phase index falls outside ``[0, len(phases))``.

    An invalid index is a programming error, not a data condition, so it is
    never clamped. Negative indices are rejected rather than counted from
    the end of the sequence.

    Args:
        index: The index that was requested.
        length: Number of phases in the sequence that was gated.
    """

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        if length == 0:
            msg = f"phase index {index} out of range (no phases)"
        else:
            msg = f"phase index {index} out of range [0, {length})"
        super().__init__(msg)


class ConfigError(ValueError):
    """Raised when a scoring policy or toolkit setting is invalid.

    Args:
        message: Human-readable explanation of what failed.
        details: Offending fields mapped to the rejected values.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class ValidationError(ValueError):
    """Raised when a record handed in by the loader violates a model invariant.

    Distinct from ConfigError: the data itself is malformed (e.g.
    completed_steps > total_steps), not the evaluator settings.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class NotFoundError(LookupError):
    """Raised when a phase or consideration id is not present in the input.

    Args:
        resource: Entity name (e.g. "Phase", "EthicalConsideration").
        resource_id: The id that was looked up.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id!r}"
        msg += " not found"
        super().__init__(msg)


class TransitionError(Exception):
    """Raised when a phase status or progress change is not allowed.

    Args:
        phase_id: Phase being moved.
        current: Status before the move.
        target: Status that was requested.
        reason: Optional extra explanation.
    """

    def __init__(self, phase_id: str, current: str, target: str, reason: str | None = None):
        msg = f"Cannot move phase '{phase_id}' from '{current}' to '{target}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.phase_id = phase_id
        self.current_status = current
        self.target_status = target
        self.reason = reason
