"""Suicide burn (hover slam) landing guidance.

Ignites the engine as late as possible while still arresting the descent
at ground contact, then modulates throttle to null vertical velocity at
touchdown.

The ignition point comes from a closed-form estimate instead of an
iterative burn-altitude search. Each step the guidance computes:

    a_max  = T_max / m
    t_gnd  = y / -vy                              (time to ground if coasting)
    t_land = -vy / (a_max * k)                    (time to stop at throttle k)
    d_land = -vy * t_land + 0.5 * (a_max * k) * t_land^2
    u      = ((d_land - (-vy * t_gnd)) / (0.5 * t_gnd^2)) / a_max

where k is the target landing throttle. The burn starts once u >= k. While
burning, the commanded throttle is u clamped to [stationary, 1]; the
engine cannot run below the stationary throttle without shutting down.

Phases:
1. IDLE: descending with the engine off (includes the initial coast)
2. BURNING: landing burn in progress; the burn is never cut short, even
   if the ignition condition clears, to avoid throttle chatter
3. ENDED: the vehicle started climbing. Guidance gives up for the rest of
   the flight and the engine stays off

Example:
    >>> from hoverslam.gnc.guidance import SuicideBurnGuidance
    >>>
    >>> guidance = SuicideBurnGuidance(target_landing_throttle=0.9)
    >>> gs = guidance.initial_state()
    >>> command, gs = guidance.compute(state, gs)
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import NamedTuple

from beartype import beartype

from hoverslam.dynamics.state import VehicleState
from hoverslam.errors import InvalidConfigError

logger = logging.getLogger(__name__)


class BurnPhase(IntEnum):
    """Landing guidance phases."""
    IDLE = 0      # Engine off, waiting for the ignition condition
    BURNING = 1   # Landing burn in progress
    ENDED = 2     # Ascent detected, guidance aborted


class BurnEstimate(NamedTuple):
    """Closed-form landing burn estimate for the current state.

    Attributes:
        max_acceleration: Engine acceleration at full throttle [m/s^2]
        time_to_ground: Time to reach the ground without burning [s]
        landing_time: Time to stop at the target landing throttle [s]
        landing_displacement: Distance covered while stopping [m]
        target_throttle: Throttle needed to stop exactly at the ground [-]
        landing_burn_condition: True once the burn should be lit
        degenerate: True when the vehicle is not descending fast enough
            for the estimate to be defined
    """
    max_acceleration: float
    time_to_ground: float
    landing_time: float
    landing_displacement: float
    target_throttle: float
    landing_burn_condition: bool
    degenerate: bool = False


class GuidanceCommand(NamedTuple):
    """Output from landing guidance."""
    throttle: float
    attitude_angle: float = 0.0
    phase: BurnPhase = BurnPhase.IDLE
    estimate: BurnEstimate | None = None


@beartype
@dataclass(frozen=True, slots=True)
class GuidanceState:
    """Persistent guidance state for one flight.

    Attributes:
        phase: Current guidance phase
        burn_start_time: Simulated time the landing burn was lit [s]
    """
    phase: BurnPhase = BurnPhase.IDLE
    burn_start_time: float | None = None

    @property
    def burn_started(self) -> bool:
        """Whether the landing burn has been lit during this flight."""
        return self.burn_start_time is not None

    @property
    def burn_ended(self) -> bool:
        """Whether guidance has been aborted for this flight."""
        return self.phase == BurnPhase.ENDED


@beartype
def estimate_burn(
    state: VehicleState,
    target_landing_throttle: float,
    descent_epsilon: float = 1e-6,
) -> BurnEstimate:
    """Estimate the landing burn from the current state.

    When the vehicle is level or climbing (vertical velocity at or above
    -descent_epsilon), or already on the ground, time to ground is not
    defined. The estimate is then flagged degenerate with an infinite time
    to ground, zero target throttle and the burn condition off.

    Args:
        state: Current vehicle state
        target_landing_throttle: Throttle fraction used to time ignition
        descent_epsilon: Smallest descent rate the estimate divides by [m/s]

    Returns:
        BurnEstimate for this state
    """
    max_acceleration = state.max_thrust / state.mass

    if state.y_velocity >= -descent_epsilon or state.y <= 0:
        return BurnEstimate(
            max_acceleration=max_acceleration,
            time_to_ground=math.inf,
            landing_time=0.0,
            landing_displacement=0.0,
            target_throttle=0.0,
            landing_burn_condition=False,
            degenerate=True,
        )

    descent_rate = -state.y_velocity
    landing_acceleration = max_acceleration * target_landing_throttle

    time_to_ground = state.y / descent_rate
    landing_time = descent_rate / landing_acceleration
    landing_displacement = (
        descent_rate * landing_time + 0.5 * landing_acceleration * landing_time * landing_time
    )
    target_throttle = (
        (landing_displacement - descent_rate * time_to_ground)
        / (0.5 * time_to_ground * time_to_ground)
    ) / max_acceleration

    return BurnEstimate(
        max_acceleration=max_acceleration,
        time_to_ground=time_to_ground,
        landing_time=landing_time,
        landing_displacement=landing_displacement,
        target_throttle=target_throttle,
        landing_burn_condition=target_throttle >= target_landing_throttle,
    )


@beartype
@dataclass(frozen=True, slots=True)
class SuicideBurnGuidance:
    """Closed-form suicide burn guidance.

    The guidance object only holds tuning; per-flight memory lives in the
    GuidanceState passed in and returned by compute(), so one instance
    can drive any number of independent flights.

    Attributes:
        target_landing_throttle: Throttle fraction used to time ignition.
            Higher is more fuel efficient but leaves less margin.
        stationary_throttle: Lowest throttle the engine can hold while lit
        descent_epsilon: Descent rate below which the burn estimate is
            treated as undefined [m/s]
    """
    target_landing_throttle: float | int = 0.9
    stationary_throttle: float | int = 0.4
    descent_epsilon: float | int = 1e-6

    def __post_init__(self) -> None:
        """Validate tuning."""
        for name in ("target_landing_throttle", "stationary_throttle", "descent_epsilon"):
            object.__setattr__(self, name, float(getattr(self, name)))
        if not 0.0 < self.target_landing_throttle <= 1.0:
            raise InvalidConfigError(
                f"target_landing_throttle must be within (0, 1], got {self.target_landing_throttle}"
            )
        if not 0.0 <= self.stationary_throttle <= 1.0:
            raise InvalidConfigError(
                f"stationary_throttle must be within [0, 1], got {self.stationary_throttle}"
            )
        if not self.descent_epsilon >= 0.0:
            raise InvalidConfigError(f"descent_epsilon must be >= 0, got {self.descent_epsilon}")

    def initial_state(self) -> GuidanceState:
        """Guidance state for the start of a new flight."""
        return GuidanceState()

    def _burn_throttle(self, estimate: BurnEstimate) -> float:
        return max(self.stationary_throttle, min(estimate.target_throttle, 1.0))

    def compute(
        self,
        state: VehicleState,
        guidance_state: GuidanceState,
    ) -> tuple[GuidanceCommand, GuidanceState]:
        """Compute the throttle command for the current state.

        Rules are checked in priority order: impact, ascent, aborted,
        ignition condition, burn in progress, idle.

        Args:
            state: Current (pre-step) vehicle state
            guidance_state: Guidance state from the previous step

        Returns:
            Tuple of (command, updated guidance state)
        """
        gs = guidance_state

        if state.has_impacted:
            return GuidanceCommand(throttle=0.0, phase=gs.phase), gs

        if state.y_velocity > 0:
            if gs.phase != BurnPhase.ENDED:
                logger.info(
                    "Ascent detected at t=%.2f s (vy=%.3f m/s), landing guidance ended",
                    state.time, state.y_velocity,
                )
                gs = replace(gs, phase=BurnPhase.ENDED)
            return GuidanceCommand(throttle=0.0, phase=gs.phase), gs

        if gs.phase == BurnPhase.ENDED:
            return GuidanceCommand(throttle=0.0, phase=gs.phase), gs

        estimate = estimate_burn(state, self.target_landing_throttle, self.descent_epsilon)

        if estimate.landing_burn_condition:
            if gs.phase == BurnPhase.IDLE:
                logger.info(
                    "Landing burn ignition at t=%.2f s, altitude %.1f m, vy=%.1f m/s",
                    state.time, state.y, state.y_velocity,
                )
                gs = replace(gs, phase=BurnPhase.BURNING, burn_start_time=state.time)
            throttle = self._burn_throttle(estimate)
        elif gs.phase == BurnPhase.BURNING:
            throttle = self._burn_throttle(estimate)
        else:
            throttle = 0.0

        return GuidanceCommand(throttle=throttle, phase=gs.phase, estimate=estimate), gs
