"""
Phase Gate

Decides which workflow phase is accessible. A phase is unlocked when it is
the first phase or when every phase before it is completed. The gate only
reads ``status``; status changes happen in phase_lifecycle.

Usage:
    from design_toolkit.services.phase_gate import PhaseGate

    PhaseGate.is_unlocked(phases, 2)      # -> False until phases 0-1 complete
    PhaseGate.current_index(phases)       # -> index of the active phase
"""

from __future__ import annotations

import logging
from typing import Sequence

from design_toolkit.core.exceptions import NotFoundError, PhaseIndexError
from design_toolkit.models.phase import Phase

logger = logging.getLogger(__name__)


def _check_index(phases: Sequence[Phase], index: int) -> None:
    if not 0 <= index < len(phases):
        raise PhaseIndexError(index=index, length=len(phases))


def _first_incomplete_before(phases: Sequence[Phase], index: int) -> int | None:
    for i in range(index):
        if not phases[i].is_completed:
            return i
    return None


class PhaseGate:
    """Read-only gating rules over an ordered phase sequence."""

    @staticmethod
    def is_unlocked(phases: Sequence[Phase], index: int) -> bool:
        """Return True when the phase at ``index`` may be entered.

        Raises:
            PhaseIndexError: index outside ``[0, len(phases))``.
        """
        _check_index(phases, index)
        if index == 0:
            return True
        blocker = _first_incomplete_before(phases, index)
        if blocker is not None:
            logger.debug("Phase %s locked by incomplete phase %s",
                         phases[index].id, phases[blocker].id)
            return False
        return True

    @staticmethod
    def locked_reason(phases: Sequence[Phase], index: int) -> str | None:
        """Name of the first incomplete predecessor, or None when unlocked."""
        _check_index(phases, index)
        blocker = _first_incomplete_before(phases, index)
        if blocker is None:
            return None
        return phases[blocker].name

    @staticmethod
    def unlocked_indices(phases: Sequence[Phase]) -> list[int]:
        """All indices whose gate is open, in order."""
        unlocked = []
        for i in range(len(phases)):
            if not PhaseGate.is_unlocked(phases, i):
                break
            unlocked.append(i)
        return unlocked

    @staticmethod
    def current_index(phases: Sequence[Phase]) -> int | None:
        """Index of the first phase that is not completed, if any."""
        for i, phase in enumerate(phases):
            if not phase.is_completed:
                return i
        return None

    @staticmethod
    def index_of(phases: Sequence[Phase], phase_id: str) -> int:
        for i, phase in enumerate(phases):
            if phase.id == phase_id:
                return i
        raise NotFoundError(resource="Phase", resource_id=phase_id)

    @staticmethod
    def is_unlocked_by_id(phases: Sequence[Phase], phase_id: str) -> bool:
        return PhaseGate.is_unlocked(phases, PhaseGate.index_of(phases, phase_id))

    @staticmethod
    def all_completed(phases: Sequence[Phase]) -> bool:
        return all(p.is_completed for p in phases)


is_unlocked = PhaseGate.is_unlocked
