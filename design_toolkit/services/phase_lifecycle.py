"""
Phase Lifecycle

Derives phase progress/status from completed steps and advances the
workflow when a phase is finished. All functions return new Phase values;
inputs are never modified.

Status transitions (PHASE_TRANSITIONS):
    not-started → in-progress | completed
    in-progress → completed
    completed   → (terminal)

Progress is monotone: a recorded step count that would lower progress is
rejected with TransitionError.

Usage:
    from design_toolkit.services.phase_lifecycle import record_progress, complete_phase

    phase = record_progress(phase, completed_steps=3)
    phases = complete_phase(phases, "reflection")
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from design_toolkit.core.exceptions import TransitionError, ValidationError
from design_toolkit.models.phase import Phase, PhaseStatus
from design_toolkit.services.phase_gate import PhaseGate

logger = logging.getLogger(__name__)


PHASE_TRANSITIONS: dict[PhaseStatus, set[PhaseStatus]] = {
    PhaseStatus.NOT_STARTED: {
        PhaseStatus.NOT_STARTED, PhaseStatus.IN_PROGRESS, PhaseStatus.COMPLETED,
    },
    PhaseStatus.IN_PROGRESS: {PhaseStatus.IN_PROGRESS, PhaseStatus.COMPLETED},
    PhaseStatus.COMPLETED: {PhaseStatus.COMPLETED},
}


def progress_for(completed: int, total: int) -> int:
    """Percentage of completed steps, rounded half up."""
    if total <= 0:
        return 0
    # Half-up rounding; round() would send 12.5 to 12
    return int(completed * 100 / total + 0.5)


def status_for(progress: int) -> PhaseStatus:
    if progress == 0:
        return PhaseStatus.NOT_STARTED
    if progress == 100:
        return PhaseStatus.COMPLETED
    return PhaseStatus.IN_PROGRESS


def validate_transition(phase: Phase, target: PhaseStatus) -> dict:
    """
    Check whether ``phase`` may move to ``target``.

    Returns:
        {"valid": bool, "from": str, "to": str, "reason": str|None}
    """
    allowed = PHASE_TRANSITIONS[phase.status]
    if target not in allowed:
        return {"valid": False, "from": phase.status.value, "to": target.value,
                "reason": f"'{phase.status.value}' cannot move to '{target.value}'"}
    return {"valid": True, "from": phase.status.value, "to": target.value, "reason": None}


def _transition(phase: Phase, target: PhaseStatus) -> None:
    result = validate_transition(phase, target)
    if not result["valid"]:
        raise TransitionError(phase.id, result["from"], result["to"], result["reason"])


def record_progress(phase: Phase, completed_steps: int) -> Phase:
    """Return ``phase`` with progress and status derived from ``completed_steps``.

    An in-progress phase with zero steps done stays in-progress; only a
    phase that has never started reports not-started.

    Raises:
        ValidationError: completed_steps outside [0, total_steps].
        TransitionError: progress would decrease or status move backwards.
    """
    if not 0 <= completed_steps <= phase.total_steps:
        raise ValidationError(
            f"completed_steps must be within 0-{phase.total_steps} for phase '{phase.id}'",
            details={"completed_steps": completed_steps, "total_steps": phase.total_steps},
        )

    progress = progress_for(completed_steps, phase.total_steps)
    if progress < phase.progress:
        raise TransitionError(
            phase.id, phase.status.value, phase.status.value,
            f"progress cannot decrease ({phase.progress} -> {progress})",
        )

    target = status_for(progress)
    if target == PhaseStatus.NOT_STARTED and phase.status == PhaseStatus.IN_PROGRESS:
        target = PhaseStatus.IN_PROGRESS
    _transition(phase, target)

    if target == PhaseStatus.COMPLETED:
        # 99.5% rounds up to 100; a completed phase has every step done
        completed_steps = phase.total_steps

    updated = replace(phase, progress=progress, status=target, completed_steps=completed_steps)
    logger.debug("Phase %s progress %s -> %s (%s/%s steps, %s)",
                 phase.id, phase.progress, progress, completed_steps,
                 phase.total_steps, target.value)
    return updated


def start_phase(phase: Phase) -> Phase:
    """Move a not-started phase to in-progress; other states are returned unchanged."""
    if phase.status != PhaseStatus.NOT_STARTED:
        return phase
    return replace(phase, status=PhaseStatus.IN_PROGRESS)


def with_total_steps(phase: Phase, total_steps: int) -> Phase:
    """Resize a phase when the loader reports a different step count.

    Progress is recomputed from the existing completed count; the resize is
    rejected when that would lower progress.
    """
    if total_steps < phase.completed_steps:
        raise ValidationError(
            f"Phase '{phase.id}' already has {phase.completed_steps} completed steps",
            details={"total_steps": total_steps, "completed_steps": phase.completed_steps},
        )
    if phase.is_completed:
        return replace(phase, total_steps=total_steps, completed_steps=total_steps)

    return record_progress(replace(phase, total_steps=total_steps), phase.completed_steps)


def complete_phase(phases: Sequence[Phase], phase_id: str) -> tuple[Phase, ...]:
    """Mark ``phase_id`` completed and start the phase that follows it.

    Raises:
        NotFoundError: phase_id not in ``phases``.
        TransitionError: the phase is still locked behind an incomplete predecessor.
    """
    index = PhaseGate.index_of(phases, phase_id)
    if not PhaseGate.is_unlocked(phases, index):
        raise TransitionError(
            phase_id, phases[index].status.value, PhaseStatus.COMPLETED.value,
            f"locked until '{PhaseGate.locked_reason(phases, index)}' is completed",
        )

    current = phases[index]
    _transition(current, PhaseStatus.COMPLETED)
    updated = list(phases)
    updated[index] = replace(
        current,
        status=PhaseStatus.COMPLETED,
        progress=100,
        completed_steps=current.total_steps,
    )
    if index + 1 < len(updated):
        updated[index + 1] = start_phase(updated[index + 1])

    logger.info("Phase %s completed (%d/%d phases done)",
                phase_id, sum(1 for p in updated if p.is_completed), len(updated),
                extra={"phase_id": phase_id, "event_type": "phase_completed"})
    return tuple(updated)
