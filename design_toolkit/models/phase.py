"""
Design Toolkit
Phase domain model.

Models:
    - PhaseStatus: not-started / in-progress / completed
    - Phase: one ordered stage of the project workflow

Phases are loaded by the data-fetching layer and handed to the gate as an
ordered sequence; the order is the gating chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from design_toolkit.core.exceptions import ValidationError


class PhaseStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# ── Constants ────────────────────────────────────────────────────────────────

PHASE_STATUSES = {s.value for s in PhaseStatus}

# Workflow order used when no explicit sequence is supplied
PHASE_ORDER = ("reflection", "scoping", "development", "evaluation")


@dataclass(frozen=True)
class Phase:
    """A single workflow phase.

    Invariants checked on construction:
      * 0 <= completed_steps <= total_steps
      * 0 <= progress <= 100
      * status == completed  ->  progress == 100
    """

    id: str
    name: str
    status: PhaseStatus = PhaseStatus.NOT_STARTED
    progress: int = 0
    total_steps: int = 0
    completed_steps: int = 0

    def __post_init__(self):
        if not isinstance(self.status, PhaseStatus):
            try:
                object.__setattr__(self, "status", PhaseStatus(self.status))
            except ValueError:
                raise ValidationError(
                    f"Phase '{self.id}' has unknown status {self.status!r}",
                    details={"status": self.status, "allowed": sorted(PHASE_STATUSES)},
                ) from None
        if self.total_steps < 0 or self.completed_steps < 0:
            raise ValidationError(
                f"Phase '{self.id}' step counts must be non-negative",
                details={"total_steps": self.total_steps,
                         "completed_steps": self.completed_steps},
            )
        if self.completed_steps > self.total_steps:
            raise ValidationError(
                f"Phase '{self.id}' has more completed steps than total"
                f" ({self.completed_steps} > {self.total_steps})",
                details={"total_steps": self.total_steps,
                         "completed_steps": self.completed_steps},
            )
        if not 0 <= self.progress <= 100:
            raise ValidationError(
                f"Phase '{self.id}' progress must be within 0-100",
                details={"progress": self.progress},
            )
        if self.status == PhaseStatus.COMPLETED and self.progress != 100:
            raise ValidationError(
                f"Phase '{self.id}' is completed but progress is {self.progress}",
                details={"status": self.status.value, "progress": self.progress},
            )

    @property
    def is_completed(self) -> bool:
        return self.status == PhaseStatus.COMPLETED

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "progress": self.progress,
            "total_steps": self.total_steps,
            "completed_steps": self.completed_steps,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Phase:
        """Build a Phase from a loader payload (camelCase or snake_case keys)."""
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            status=data.get("status", PhaseStatus.NOT_STARTED.value),
            progress=int(data.get("progress", 0)),
            total_steps=int(data.get("total_steps", data.get("totalSteps", 0))),
            completed_steps=int(data.get("completed_steps", data.get("completedSteps", 0))),
        )


DEFAULT_PHASES: tuple[Phase, ...] = (
    Phase(id="reflection", name="Reflection", status=PhaseStatus.IN_PROGRESS, total_steps=7),
    Phase(id="scoping", name="Scoping", total_steps=5),
    Phase(id="development", name="Development", total_steps=6),
    Phase(id="evaluation", name="Evaluation", total_steps=4),
)
