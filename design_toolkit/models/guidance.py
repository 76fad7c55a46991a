"""
Design Toolkit
Guidance and question models.

Models:
    - GuidanceSource: a provenance-tagged reference document excerpt
    - Question: a reflection question; its guidance list is derived
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

DEFAULT_EXCERPT_LENGTH = 300

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def parse_updated(value: str | None) -> datetime | None:
    """Parse an ISO-8601 ``updated`` stamp; unparseable values count as absent."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Ignoring unparseable guidance timestamp %r", value)
        return None
    # Naive stamps are treated as UTC so they compare with aware ones
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class GuidanceSource:
    """One guidance document excerpt as returned by the knowledge base."""

    content: str
    source_id: str
    filename: str
    bucket: str
    folder: str
    domain: str
    source_location: str
    guidance_area: str
    domain_context: str
    page: str | None = None
    updated: str | None = None
    size: int | None = None

    @property
    def updated_at(self) -> datetime | None:
        return parse_updated(self.updated)

    @property
    def document_title(self) -> str:
        """Readable title derived from the filename."""
        if not self.filename:
            return "Guidance Document"
        stem = _EXTENSION_RE.sub("", self.filename)
        words = re.sub(r"[_-]", " ", stem).split(" ")
        return " ".join(w[:1].upper() + w[1:].lower() for w in words)

    def source_url(self, base_url: str) -> str:
        if not self.filename or not self.source_location:
            return ""
        return f"{base_url.rstrip('/')}/{self.source_location}/{self.filename}"

    def excerpt(self, limit: int = DEFAULT_EXCERPT_LENGTH) -> str:
        if len(self.content) <= limit:
            return self.content
        return self.content[:limit] + "..."

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "source_id": self.source_id,
            "filename": self.filename,
            "bucket": self.bucket,
            "folder": self.folder,
            "domain": self.domain,
            "source_location": self.source_location,
            "page": self.page,
            "updated": self.updated,
            "size": self.size,
            "guidance_area": self.guidance_area,
            "domain_context": self.domain_context,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GuidanceSource:
        return cls(
            content=data.get("content", ""),
            source_id=data.get("source_id", ""),
            filename=data.get("filename", ""),
            bucket=data.get("bucket", ""),
            folder=data.get("folder", ""),
            domain=data.get("domain", ""),
            source_location=data.get("source_location", ""),
            guidance_area=data.get("guidance_area", ""),
            domain_context=data.get("domain_context", ""),
            page=data.get("page"),
            updated=data.get("updated"),
            size=data.get("size"),
        )


@dataclass(frozen=True)
class Question:
    """A reflection question.

    ``guidance_sources`` is filled in by the guidance resolver and is never
    the authoritative copy; recompute it instead of editing it.
    """

    id: str
    text: str
    key: str
    guidance_sources: tuple[GuidanceSource, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "key": self.key,
            "guidance_sources": [s.to_dict() for s in self.guidance_sources],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        raw_sources = data.get("guidance_sources", data.get("guidanceSources")) or []
        return cls(
            id=str(data["id"]),
            text=data.get("text", ""),
            key=data["key"],
            guidance_sources=tuple(GuidanceSource.from_dict(s) for s in raw_sources),
        )
