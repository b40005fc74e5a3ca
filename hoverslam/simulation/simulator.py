"""Step-driven landing simulation.

Composes guidance and integration into one step and provides a driver
that picks the step size and records the flight.

Architecture:
    Each step is strictly sequential:
    - guidance.compute(state, guidance_state) -> throttle command
    - integrate_step(state, throttle, angle, dt) -> new state
    The command is consumed by the same step's integration; nothing is
    buffered between steps.

Step size:
    - Fixed-rate ("accurate") mode steps 1 / simulation_frequency seconds
    - Realtime mode steps 1 / frame_rate seconds, where the frame rate
      comes from the wall clock between calls
    - Either way, a frame rate below min_frame_rate pauses the simulation
      (zero-length step) instead of taking one huge step

Example:
    >>> from hoverslam.simulation import Simulator
    >>>
    >>> sim = Simulator(vehicle)
    >>> result = sim.run()
    >>> print(result.outcome())
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum

from beartype import beartype

from hoverslam.dynamics.integrator import integrate_step, validate_step
from hoverslam.dynamics.state import VehicleState
from hoverslam.errors import InvalidConfigError
from hoverslam.gnc.guidance.suicide_burn import GuidanceState, SuicideBurnGuidance
from hoverslam.simulation.flight_log import FlightLog

logger = logging.getLogger(__name__)

DEFAULT_GUIDANCE = SuicideBurnGuidance()

# =============================================================================
# Landing Classification
# =============================================================================


class LandingOutcome(Enum):
    """Result of a flight."""
    IN_FLIGHT = "in_flight"
    LANDED = "landed"
    CRASHED = "crashed"


@beartype
def classify_landing(
    state: VehicleState,
    landing_pad_radius: float = 40.0,
    max_safe_velocity: float = 10.0,
) -> LandingOutcome:
    """Classify a flight from its impact snapshot.

    Args:
        state: Vehicle state
        landing_pad_radius: Half-width of the landing pad around x=0 [m]
        max_safe_velocity: Largest vertical touchdown speed that counts
            as a landing [m/s]

    Returns:
        IN_FLIGHT before impact, LANDED if the touchdown was slow enough
        and on the pad, CRASHED otherwise
    """
    if not state.has_impacted:
        return LandingOutcome.IN_FLIGHT
    if abs(state.impact_velocity) < max_safe_velocity and abs(state.impact_x) <= landing_pad_radius:
        return LandingOutcome.LANDED
    return LandingOutcome.CRASHED


# =============================================================================
# Single Step
# =============================================================================


@beartype
def step(
    vehicle: VehicleState,
    guidance_state: GuidanceState,
    dt: float,
    guidance: SuicideBurnGuidance | None = None,
) -> tuple[VehicleState, GuidanceState]:
    """Run guidance then integration for one time step.

    Args:
        vehicle: Current vehicle state
        guidance_state: Current guidance state
        dt: Time step [s]
        guidance: Guidance law to run (default tuning when None)

    Returns:
        Tuple of (new vehicle state, new guidance state). A zero time step
        returns both inputs unchanged.

    Raises:
        InvalidStepError: If dt is negative or not finite. Nothing is
            evaluated in that case.
    """
    validate_step(dt)
    if dt == 0:
        return vehicle, guidance_state

    guidance = guidance or DEFAULT_GUIDANCE
    command, new_guidance_state = guidance.compute(vehicle, guidance_state)
    new_vehicle = integrate_step(vehicle, command.throttle, command.attitude_angle, dt)
    return new_vehicle, new_guidance_state


# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class SimConfig:
    """Simulation driver configuration.

    Attributes:
        realtime: Step with the wall-clock frame time instead of a fixed rate
        simulation_frequency: Steps per simulated second in fixed-rate mode [Hz]
        min_frame_rate: Frame rate below which steps are paused [Hz]
        max_time: Simulated time after which run() gives up [s]
        record_log: Whether to keep a flight log
    """
    realtime: bool = False
    simulation_frequency: float | int = 100.0
    min_frame_rate: float | int = 1.0
    max_time: float | int = 600.0
    record_log: bool = True

    def __post_init__(self) -> None:
        """Validate driver settings."""
        for name in ("simulation_frequency", "min_frame_rate", "max_time"):
            object.__setattr__(self, name, float(getattr(self, name)))
        if not self.simulation_frequency > 0:
            raise InvalidConfigError(
                f"simulation_frequency must be > 0, got {self.simulation_frequency}"
            )
        if self.min_frame_rate < 0:
            raise InvalidConfigError(f"min_frame_rate must be >= 0, got {self.min_frame_rate}")
        if not self.max_time > 0:
            raise InvalidConfigError(f"max_time must be > 0, got {self.max_time}")


# =============================================================================
# Simulator
# =============================================================================


@beartype
@dataclass
class SimulationResult:
    """Results from a completed simulation."""
    final_state: VehicleState
    guidance_state: GuidanceState
    log: FlightLog

    def outcome(
        self,
        landing_pad_radius: float = 40.0,
        max_safe_velocity: float = 10.0,
    ) -> LandingOutcome:
        """Classify the flight."""
        return classify_landing(self.final_state, landing_pad_radius, max_safe_velocity)

    @property
    def burn_start_time(self) -> float | None:
        """Time the landing burn was lit, or None if it never was [s]."""
        return self.guidance_state.burn_start_time

    def to_dataframe(self):
        """Flight log as a Polars DataFrame."""
        return self.log.to_dataframe()


@beartype
@dataclass
class Simulator:
    """Step-driven landing simulator.

    Holds the current vehicle and guidance state and advances them one
    step at a time. Set ``guidance`` to None for an uncontrolled vehicle
    whose throttle stays at zero.

    Example:
        >>> sim = Simulator(vehicle, config=SimConfig(simulation_frequency=200.0))
        >>> while not sim.vehicle.has_impacted:
        ...     sim.step()
    """
    vehicle: VehicleState
    guidance: SuicideBurnGuidance | None = field(default_factory=SuicideBurnGuidance)
    config: SimConfig = field(default_factory=SimConfig)
    guidance_state: GuidanceState = field(default_factory=GuidanceState)

    # Internal
    _log: FlightLog = field(default_factory=FlightLog, init=False, repr=False)
    _last_wall_time: float | None = field(default=None, init=False, repr=False)
    _last_interval: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        """Record the starting state."""
        if self.config.record_log:
            self._log.append(self.vehicle)

    def step_interval(self, frame_rate: float | None = None) -> float:
        """Choose the time step for the next step.

        Args:
            frame_rate: Current frame rate [Hz]. In realtime mode it is
                measured from the wall clock when not given; the first
                measured frame has no reference and counts as paused.

        Returns:
            Time step [s]
        """
        if frame_rate is None and self.config.realtime:
            now = time.perf_counter()
            if self._last_wall_time is not None and now > self._last_wall_time:
                frame_rate = 1.0 / (now - self._last_wall_time)
            else:
                frame_rate = 0.0
            self._last_wall_time = now

        if frame_rate is not None and (frame_rate <= 0 or frame_rate < self.config.min_frame_rate):
            return 0.0
        if self.config.realtime:
            return 1.0 / frame_rate
        return 1.0 / self.config.simulation_frequency

    def step(self, dt: float | None = None) -> VehicleState:
        """Advance the simulation by one step.

        Does nothing once the vehicle has impacted.

        Args:
            dt: Time step [s]. Chosen by step_interval() when omitted.

        Returns:
            Vehicle state after the step
        """
        if self.vehicle.has_impacted:
            return self.vehicle

        if dt is None:
            dt = self.step_interval()

        if self.guidance is None:
            self.vehicle = integrate_step(self.vehicle, 0.0, 0.0, dt)
        else:
            self.vehicle, self.guidance_state = step(
                self.vehicle, self.guidance_state, dt, self.guidance
            )
        self._last_interval = dt

        if dt > 0:
            if self.config.record_log:
                self._log.append(self.vehicle)
            if self.vehicle.has_impacted:
                logger.info(
                    "Impact at t=%.2f s: vy=%.2f m/s, x=%.2f m, fuel left %.2f kg",
                    self.vehicle.impact_time,
                    self.vehicle.impact_velocity,
                    self.vehicle.impact_x,
                    self.vehicle.fuel_remaining,
                )

        return self.vehicle

    def run(self) -> SimulationResult:
        """Step until impact or until max_time has elapsed.

        In realtime mode the loop sleeps one nominal frame between steps so
        simulated time tracks the wall clock.

        Returns:
            SimulationResult for the flight
        """
        logger.debug(
            "Simulation run started: realtime=%s, frequency=%.1f Hz, max_time=%.1f s",
            self.config.realtime, self.config.simulation_frequency, self.config.max_time,
        )
        frame_period = 1.0 / self.config.simulation_frequency

        while not self.vehicle.has_impacted and self.vehicle.time < self.config.max_time:
            if self.config.realtime:
                time.sleep(frame_period)
            self.step()

        if not self.vehicle.has_impacted:
            logger.warning("Simulation time limit reached: %.1f s", self.config.max_time)

        return SimulationResult(
            final_state=self.vehicle,
            guidance_state=self.guidance_state,
            log=self.get_log(),
        )

    def get_log(self) -> FlightLog:
        """Get a copy of the recorded flight log."""
        return FlightLog(states=list(self._log.states))

    @property
    def time(self) -> float:
        """Current simulation time [s]."""
        return self.vehicle.time

    @property
    def last_interval(self) -> float:
        """Time step used by the most recent step [s]."""
        return self._last_interval
