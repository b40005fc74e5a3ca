"""GNC (Guidance, Navigation, Control) module for landing vehicles.

Navigation is perfect (guidance reads the truth state) and control is a
direct throttle command, so only guidance lives here for now.

Example:
    >>> from hoverslam.gnc import SuicideBurnGuidance
    >>>
    >>> guidance = SuicideBurnGuidance(target_landing_throttle=0.9, stationary_throttle=0.4)
    >>> command, gs = guidance.compute(state, guidance.initial_state())
"""

from hoverslam.gnc.guidance import (
    BurnPhase,
    GuidanceCommand,
    GuidanceState,
    SuicideBurnGuidance,
)

__all__ = [
    "BurnPhase",
    "GuidanceCommand",
    "GuidanceState",
    "SuicideBurnGuidance",
]
