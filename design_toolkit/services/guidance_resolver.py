"""
Guidance Resolver

Selects the guidance sources that apply to a reflection question.

Match rule: a source applies when its ``guidance_area`` equals the question
key OR its ``domain_context`` equals the question's domain context.

Ranking (stable):
  1. guidance_area matches before domain_context-only matches
  2. newest ``updated`` first; undated sources after dated ones
  3. original pool order

Resolution is pure: the same inputs always give the same ordered list, and
questions are annotated by building new Question values.

Usage:
    from design_toolkit.services.guidance_resolver import GuidanceResolver

    sources = GuidanceResolver.resolve("potential_harm", "ai_ethics", pool)
    questions = GuidanceResolver.annotate(questions, "ai_ethics", pool)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Sequence

from design_toolkit.config import get_config
from design_toolkit.models.guidance import GuidanceSource, Question

logger = logging.getLogger(__name__)

# Match ranks, lower sorts first
_RANK_AREA = 0
_RANK_DOMAIN = 1


def _match_rank(source: GuidanceSource, question_key: str, domain_context: str | None) -> int | None:
    if source.guidance_area == question_key:
        return _RANK_AREA
    if domain_context and source.domain_context == domain_context:
        return _RANK_DOMAIN
    return None


def _sort_key(entry: tuple[int, int, GuidanceSource]):
    rank, position, source = entry
    updated = source.updated_at
    # Dated before undated, then newest first
    if updated is None:
        return (rank, 1, 0.0, position)
    return (rank, 0, -updated.timestamp(), position)


class GuidanceResolver:
    """Pure selection of guidance for questions."""

    @staticmethod
    def resolve(
        question_key: str,
        question_domain_context: str | None,
        pool: Iterable[GuidanceSource],
    ) -> list[GuidanceSource]:
        """Return the sources in ``pool`` relevant to one question, best first.

        An empty result is a valid outcome, not an error.
        """
        matches = []
        for position, source in enumerate(pool):
            rank = _match_rank(source, question_key, question_domain_context)
            if rank is not None:
                matches.append((rank, position, source))

        matches.sort(key=_sort_key)
        logger.debug("Resolved %d guidance source(s) for question %s",
                     len(matches), question_key,
                     extra={"question_key": question_key})
        return [source for _, _, source in matches]

    @staticmethod
    def annotate(
        questions: Sequence[Question],
        question_domain_context: str | None,
        pool: Iterable[GuidanceSource],
    ) -> list[Question]:
        """Return copies of ``questions`` with freshly resolved guidance."""
        snapshot = tuple(pool)
        return [
            replace(q, guidance_sources=tuple(
                GuidanceResolver.resolve(q.key, question_domain_context, snapshot)
            ))
            for q in questions
        ]


resolve = GuidanceResolver.resolve


def guidance_card(source: GuidanceSource, cfg=None) -> dict:
    """Display-ready projection of one source for the presentation layer.

    Excerpt length and storage base URL come from ``cfg`` (a Config instance,
    resolved from APP_ENV when omitted).
    """
    if cfg is None:
        cfg = get_config()
    return {
        "source_id": source.source_id,
        "title": source.document_title,
        "page": source.page,
        "domain_context": source.domain_context,
        "url": source.source_url(cfg.GUIDANCE_STORAGE_BASE_URL),
        "excerpt": source.excerpt(cfg.GUIDANCE_EXCERPT_LENGTH),
        "updated": source.updated,
    }
