"""Guidance laws for landing vehicles.

Provides guidance algorithms that turn the current vehicle state into a
throttle and attitude command.
"""

from hoverslam.gnc.guidance.suicide_burn import (
    BurnEstimate,
    BurnPhase,
    GuidanceCommand,
    GuidanceState,
    SuicideBurnGuidance,
    estimate_burn,
)

__all__ = [
    "BurnEstimate",
    "BurnPhase",
    "GuidanceCommand",
    "GuidanceState",
    "SuicideBurnGuidance",
    "estimate_burn",
]
