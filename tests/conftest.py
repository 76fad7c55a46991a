"""
Shared pytest fixtures for the design toolkit test suite.

Provides:
    - make_phase / phases: Phase builders and a four-phase workflow
    - make_source / guidance_pool: GuidanceSource builders and a mixed pool
    - considerations: high/medium/low EthicalConsideration set
    - testing_config: TestingConfig instance
"""

import pytest

from design_toolkit.config import TestingConfig
from design_toolkit.models import (
    EthicalConsideration,
    GuidanceSource,
    Phase,
    PhaseStatus,
)


# ── Phase fixtures ───────────────────────────────────────────────────────


def _phase(pid, status=PhaseStatus.NOT_STARTED, total=4, done=None, progress=None):
    if done is None:
        done = total if status == PhaseStatus.COMPLETED else 0
    if progress is None:
        progress = 100 if status == PhaseStatus.COMPLETED else 0
    return Phase(id=pid, name=pid.title(), status=status, progress=progress,
                 total_steps=total, completed_steps=done)


@pytest.fixture
def make_phase():
    """Factory: make_phase("scoping", PhaseStatus.COMPLETED, total=5)."""
    return _phase


@pytest.fixture
def phases():
    """Reflection in progress, the rest not started."""
    return (
        _phase("reflection", PhaseStatus.IN_PROGRESS, total=4, done=2, progress=50),
        _phase("scoping", total=5),
        _phase("development", total=6),
        _phase("evaluation", total=4),
    )


# ── Guidance fixtures ────────────────────────────────────────────────────


def _source(sid, area="other_area", domain="humanitarian_context", updated=None, **kw):
    return GuidanceSource(
        content=kw.get("content", f"Guidance text for {sid}"),
        source_id=sid,
        filename=kw.get("filename", f"{sid}_guide.pdf"),
        bucket=kw.get("bucket", "guidance-bucket"),
        folder=kw.get("folder", "ethics"),
        domain=kw.get("domain_name", domain),
        source_location=kw.get("source_location", "guidance-bucket/ethics"),
        guidance_area=area,
        domain_context=domain,
        page=kw.get("page"),
        updated=updated,
        size=kw.get("size"),
    )


@pytest.fixture
def make_source():
    """Factory: make_source("s1", area="potential_harm", domain="ai_ethics")."""
    return _source


@pytest.fixture
def guidance_pool():
    """Pool mixing area matches, domain matches and unrelated sources."""
    return [
        _source("domain-old", domain="ai_ethics", updated="2023-01-10"),
        _source("unrelated", area="data_availability", domain="ai_technical"),
        _source("area-undated", area="potential_harm", domain="ai_technical"),
        _source("area-new", area="potential_harm", domain="humanitarian_context",
                updated="2024-06-01T12:00:00Z"),
        _source("domain-new", domain="ai_ethics", updated="2024-02-01"),
        _source("area-old", area="potential_harm", domain="ai_ethics", updated="2022-05-05"),
    ]


# ── Ethics fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def considerations():
    """One consideration per priority; the low one loaded as acknowledged."""
    return [
        EthicalConsideration(id="ec-1", title="Protect beneficiary data",
                             description="", category="data_protection", priority="high"),
        EthicalConsideration(id="ec-2", title="Check for bias",
                             description="", category="bias_fairness", priority="medium"),
        EthicalConsideration(id="ec-3", title="Explain decisions",
                             description="", category="transparency", priority="low",
                             acknowledged=True),
    ]


@pytest.fixture
def testing_config():
    return TestingConfig()
