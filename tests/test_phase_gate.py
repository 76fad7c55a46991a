"""
PhaseGate: unlock rule, index errors, convenience queries.
"""

import pytest

from design_toolkit.core.exceptions import NotFoundError, PhaseIndexError
from design_toolkit.models import PhaseStatus
from design_toolkit.services.phase_gate import PhaseGate, is_unlocked


# ═══════════════════════════════════════════════════════════════════════════
# 1 · Unlock rule
# ═══════════════════════════════════════════════════════════════════════════

class TestIsUnlocked:

    def test_first_phase_always_unlocked(self, phases):
        assert is_unlocked(phases, 0) is True

    def test_first_phase_unlocked_when_not_started(self, make_phase):
        assert is_unlocked([make_phase("only")], 0) is True

    def test_second_phase_locked_until_first_completed(self, phases):
        assert is_unlocked(phases, 1) is False

    def test_unlocked_when_all_previous_completed(self, make_phase):
        seq = [
            make_phase("a", PhaseStatus.COMPLETED),
            make_phase("b", PhaseStatus.COMPLETED),
            make_phase("c", PhaseStatus.IN_PROGRESS, done=1, progress=25),
        ]
        assert is_unlocked(seq, 2) is True

    def test_gap_in_chain_locks_later_phases(self, make_phase):
        """A completed phase after an incomplete one does not unlock anything."""
        seq = [
            make_phase("a", PhaseStatus.IN_PROGRESS, done=1, progress=25),
            make_phase("b", PhaseStatus.COMPLETED),
            make_phase("c"),
        ]
        assert is_unlocked(seq, 1) is False
        assert is_unlocked(seq, 2) is False

    def test_monotone(self, make_phase):
        """If phase i is unlocked, every earlier phase is unlocked too."""
        seq = [
            make_phase("a", PhaseStatus.COMPLETED),
            make_phase("b", PhaseStatus.COMPLETED),
            make_phase("c"),
            make_phase("d"),
        ]
        results = [is_unlocked(seq, i) for i in range(len(seq))]
        assert results == [True, True, True, False]
        for i, unlocked in enumerate(results):
            if unlocked:
                assert all(results[:i])

    def test_does_not_modify_input(self, phases):
        before = [p.to_dict() for p in phases]
        PhaseGate.is_unlocked(phases, 3)
        assert [p.to_dict() for p in phases] == before


# ═══════════════════════════════════════════════════════════════════════════
# 2 · Index errors
# ═══════════════════════════════════════════════════════════════════════════

class TestIndexErrors:

    def test_index_past_end(self, phases):
        with pytest.raises(IndexError):
            is_unlocked(phases, len(phases))

    def test_negative_index_not_wrapped(self, phases):
        """-1 is rejected rather than meaning "last phase"."""
        with pytest.raises(PhaseIndexError) as exc:
            is_unlocked(phases, -1)
        assert exc.value.index == -1
        assert exc.value.length == 4

    def test_empty_sequence(self):
        with pytest.raises(IndexError):
            is_unlocked([], 0)

    def test_locked_reason_checks_index(self, phases):
        with pytest.raises(PhaseIndexError):
            PhaseGate.locked_reason(phases, 10)


# ═══════════════════════════════════════════════════════════════════════════
# 3 · Convenience queries
# ═══════════════════════════════════════════════════════════════════════════

class TestGateQueries:

    def test_locked_reason_names_blocker(self, phases):
        assert PhaseGate.locked_reason(phases, 2) == "Reflection"

    def test_locked_reason_none_when_open(self, phases):
        assert PhaseGate.locked_reason(phases, 0) is None

    def test_unlocked_indices(self, make_phase):
        seq = [make_phase("a", PhaseStatus.COMPLETED), make_phase("b"), make_phase("c")]
        assert PhaseGate.unlocked_indices(seq) == [0, 1]

    def test_unlocked_indices_empty(self):
        assert PhaseGate.unlocked_indices([]) == []

    def test_current_index(self, make_phase):
        seq = [make_phase("a", PhaseStatus.COMPLETED), make_phase("b"), make_phase("c")]
        assert PhaseGate.current_index(seq) == 1

    def test_current_index_none_when_all_done(self, make_phase):
        seq = [make_phase("a", PhaseStatus.COMPLETED)]
        assert PhaseGate.current_index(seq) is None

    def test_is_unlocked_by_id(self, phases):
        assert PhaseGate.is_unlocked_by_id(phases, "reflection") is True
        assert PhaseGate.is_unlocked_by_id(phases, "evaluation") is False

    def test_unknown_id(self, phases):
        with pytest.raises(NotFoundError):
            PhaseGate.is_unlocked_by_id(phases, "deployment")

    def test_all_completed(self, make_phase, phases):
        assert PhaseGate.all_completed(phases) is False
        assert PhaseGate.all_completed([make_phase("a", PhaseStatus.COMPLETED)]) is True
        assert PhaseGate.all_completed([]) is True
