"""
Acknowledgement store and the read-only queries over it.
"""

import threading

import pytest

from design_toolkit.core.exceptions import NotFoundError
from design_toolkit.services.acknowledgements import (
    InMemoryAcknowledgementStore,
    acknowledge_many,
    all_required_acknowledged,
    pending,
    with_acknowledgement,
)


# ═══════════════════════════════════════════════════════════════════════════
# 1 · Store
# ═══════════════════════════════════════════════════════════════════════════

class TestInMemoryStore:

    def test_seeded_from_considerations(self, considerations):
        store = InMemoryAcknowledgementStore.from_considerations(considerations)
        assert store.acknowledged_ids() == frozenset({"ec-3"})

    def test_acknowledge_and_revoke(self):
        store = InMemoryAcknowledgementStore()
        store.acknowledge("ec-1")
        assert store.is_acknowledged("ec-1") is True
        store.revoke("ec-1")
        assert store.is_acknowledged("ec-1") is False

    def test_revoke_unknown_is_noop(self):
        store = InMemoryAcknowledgementStore(["ec-1"])
        store.revoke("ec-9")
        assert store.acknowledged_ids() == frozenset({"ec-1"})

    def test_acknowledged_ids_is_snapshot(self):
        store = InMemoryAcknowledgementStore()
        snapshot = store.acknowledged_ids()
        store.acknowledge("ec-1")
        assert snapshot == frozenset()

    def test_acknowledge_logs_consideration_id(self, caplog):
        store = InMemoryAcknowledgementStore()
        with caplog.at_level("INFO", logger="design_toolkit.services.acknowledgements"):
            store.acknowledge("ec-2")
        assert caplog.records[-1].consideration_id == "ec-2"

    def test_concurrent_acknowledge(self):
        store = InMemoryAcknowledgementStore()
        threads = [
            threading.Thread(target=store.acknowledge, args=(f"ec-{i}",))
            for i in range(50)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(store.acknowledged_ids()) == 50


# ═══════════════════════════════════════════════════════════════════════════
# 2 · Bulk acknowledgement
# ═══════════════════════════════════════════════════════════════════════════

class TestAcknowledgeMany:

    def test_acknowledges_all(self, considerations):
        store = InMemoryAcknowledgementStore()
        acknowledge_many(store, considerations, ["ec-1", "ec-2"])
        assert store.acknowledged_ids() == frozenset({"ec-1", "ec-2"})

    def test_unknown_id_rejected_before_any_write(self, considerations):
        store = InMemoryAcknowledgementStore()
        with pytest.raises(NotFoundError) as exc:
            acknowledge_many(store, considerations, ["ec-1", "ec-404"])
        assert exc.value.resource_id == "ec-404"
        assert store.acknowledged_ids() == frozenset()


# ═══════════════════════════════════════════════════════════════════════════
# 3 · Queries
# ═══════════════════════════════════════════════════════════════════════════

class TestQueries:

    def test_pending_in_input_order(self, considerations):
        store = InMemoryAcknowledgementStore.from_considerations(considerations)
        assert [c.id for c in pending(considerations, store)] == ["ec-1", "ec-2"]

    def test_required_means_high_priority_only(self, considerations):
        store = InMemoryAcknowledgementStore()
        assert all_required_acknowledged(considerations, store) is False
        store.acknowledge("ec-1")
        assert all_required_acknowledged(considerations, store) is True

    def test_required_with_no_high_priority(self, considerations):
        store = InMemoryAcknowledgementStore()
        assert all_required_acknowledged(considerations[1:], store) is True

    def test_with_acknowledgement_reflects_store(self, considerations):
        store = InMemoryAcknowledgementStore(["ec-2"])
        refreshed = with_acknowledgement(considerations, store)
        assert [c.acknowledged for c in refreshed] == [False, True, False]
        assert considerations[2].acknowledged is True
