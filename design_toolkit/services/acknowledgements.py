"""
Ethical-consideration acknowledgements.

``acknowledged`` is the only mutable fact in the domain. It is owned by an
external store keyed by consideration id; the evaluators here only read it.

Provides:
    - AcknowledgementStore: protocol any backing store satisfies
    - InMemoryAcknowledgementStore: process-local reference store
    - pending / all_required_acknowledged / with_acknowledgement: read-only queries
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Iterable, Protocol, Sequence

from design_toolkit.core.exceptions import NotFoundError
from design_toolkit.models.ethics import EthicalConsideration, Priority

logger = logging.getLogger(__name__)


class AcknowledgementStore(Protocol):
    def is_acknowledged(self, consideration_id: str) -> bool: ...

    def acknowledge(self, consideration_id: str) -> None: ...

    def revoke(self, consideration_id: str) -> None: ...

    def acknowledged_ids(self) -> frozenset[str]: ...


class InMemoryAcknowledgementStore:
    """Set-backed store; safe to share between threads."""

    def __init__(self, acknowledged: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._ids: set[str] = set(acknowledged)

    @classmethod
    def from_considerations(
        cls, considerations: Iterable[EthicalConsideration],
    ) -> InMemoryAcknowledgementStore:
        """Seed the store from the flags the considerations were loaded with."""
        return cls(c.id for c in considerations if c.acknowledged)

    def is_acknowledged(self, consideration_id: str) -> bool:
        with self._lock:
            return consideration_id in self._ids

    def acknowledge(self, consideration_id: str) -> None:
        with self._lock:
            self._ids.add(consideration_id)
        logger.info("Ethical consideration %s acknowledged", consideration_id,
                    extra={"consideration_id": consideration_id})

    def revoke(self, consideration_id: str) -> None:
        with self._lock:
            self._ids.discard(consideration_id)
        logger.info("Ethical consideration %s acknowledgement revoked", consideration_id,
                    extra={"consideration_id": consideration_id})

    def acknowledged_ids(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._ids)


# ── Bulk acknowledgement ─────────────────────────────────────────────────

def acknowledge_many(
    store: AcknowledgementStore,
    considerations: Sequence[EthicalConsideration],
    consideration_ids: Iterable[str],
) -> None:
    """Acknowledge several items at once; unknown ids are rejected before any write."""
    known = {c.id for c in considerations}
    ids = list(consideration_ids)
    unknown = [i for i in ids if i not in known]
    if unknown:
        raise NotFoundError(resource="EthicalConsideration", resource_id=unknown[0])
    for consideration_id in ids:
        store.acknowledge(consideration_id)


# ── Read-only queries ────────────────────────────────────────────────────

def pending(
    considerations: Iterable[EthicalConsideration],
    store: AcknowledgementStore,
) -> list[EthicalConsideration]:
    """Considerations not yet acknowledged, in input order."""
    return [c for c in considerations if not store.is_acknowledged(c.id)]


def all_required_acknowledged(
    considerations: Iterable[EthicalConsideration],
    store: AcknowledgementStore,
) -> bool:
    """True when every high-priority consideration is acknowledged."""
    return all(
        store.is_acknowledged(c.id)
        for c in considerations
        if c.priority == Priority.HIGH
    )


def with_acknowledgement(
    considerations: Iterable[EthicalConsideration],
    store: AcknowledgementStore,
) -> list[EthicalConsideration]:
    """Copies whose ``acknowledged`` flag reflects the store."""
    return [replace(c, acknowledged=store.is_acknowledged(c.id)) for c in considerations]
