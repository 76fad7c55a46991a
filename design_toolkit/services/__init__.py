from design_toolkit.services.ethical_assessor import (  # noqa: F401
    DEFAULT_POLICY,
    EthicalAssessor,
    ScoringPolicy,
    score_band,
)
from design_toolkit.services.guidance_resolver import GuidanceResolver  # noqa: F401
from design_toolkit.services.phase_gate import PhaseGate  # noqa: F401
