"""
Reflection-phase helpers.

Turns the backend's ``{key: text}`` question mapping into Question records
and derives reflection-phase progress from the user's answers.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from design_toolkit.models.guidance import Question
from design_toolkit.models.phase import Phase
from design_toolkit.services.phase_lifecycle import record_progress, with_total_steps

logger = logging.getLogger(__name__)


# Used when the backend has no question set for the project
FALLBACK_REFLECTION_QUESTIONS: tuple[Question, ...] = (
    Question(id="1", text="What problem are you trying to solve with your project?",
             key="problem_definition"),
    Question(id="2", text="Who are the primary users or beneficiaries of your solution?",
             key="target_beneficiaries"),
    Question(id="3", text="What potential harm could this AI system cause?",
             key="potential_harm"),
    Question(id="4", text="What data do you have access to for this project?",
             key="data_availability"),
)


def questions_from_mapping(mapping: Mapping[str, str] | None) -> list[Question]:
    """Backend ``{key: text}`` → questions numbered "1", "2", ... in mapping order.

    An empty or missing mapping yields the fallback question set.
    """
    if not mapping:
        logger.debug("No reflection questions supplied, using fallback set")
        return list(FALLBACK_REFLECTION_QUESTIONS)
    return [
        Question(id=str(i), text=text, key=key)
        for i, (key, text) in enumerate(mapping.items(), start=1)
    ]


def count_answered(questions: Sequence[Question], answers: Mapping[str, str | None]) -> int:
    """Number of questions with a non-blank answer."""
    return sum(1 for q in questions if (answers.get(q.key) or "").strip())


def reflection_progress(
    phase: Phase,
    questions: Sequence[Question],
    answers: Mapping[str, str | None],
) -> Phase:
    """Reflection phase sized to the question set, with progress from the answers.

    Clearing an answer does not lower recorded progress; the phase is
    returned unchanged in that case.
    """
    if phase.total_steps != len(questions):
        phase = with_total_steps(phase, len(questions))
    answered = count_answered(questions, answers)
    if answered < phase.completed_steps:
        logger.debug("Reflection answers dropped to %d, keeping %d recorded",
                     answered, phase.completed_steps)
        return phase
    return record_progress(phase, answered)


def question_title(questions: Sequence[Question], key: str) -> str:
    """Question text for ``key``; the key itself when the question is unknown."""
    for q in questions:
        if q.key == key:
            return q.text
    return key
