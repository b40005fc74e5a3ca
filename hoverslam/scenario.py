"""Landing scenarios and one-call landing simulation.

A Scenario gathers every tunable of a landing attempt (vehicle, guidance,
air, starting conditions and success criteria) into one frozen struct that
can be saved to and loaded from JSON.

Example:
    >>> from hoverslam.scenario import Scenario, simulate_landing
    >>>
    >>> scenario = Scenario(max_thrust=50000.0, y=3000.0)
    >>> result = simulate_landing(scenario)
    >>> print(result.outcome, result.impact_velocity)
    >>> scenario.save("heavy.json")
"""

import json
import logging
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from beartype import beartype

from hoverslam.dynamics.state import (
    InitialConditions,
    VehicleConfig,
    VehicleState,
    create_vehicle,
)
from hoverslam.environment.config import EnvironmentConfig
from hoverslam.errors import InvalidConfigError
from hoverslam.gnc.guidance.suicide_burn import SuicideBurnGuidance
from hoverslam.simulation.simulator import (
    LandingOutcome,
    SimConfig,
    SimulationResult,
    Simulator,
)

logger = logging.getLogger(__name__)


@beartype
@dataclass(frozen=True, slots=True)
class Scenario:
    """Complete description of one landing attempt.

    Defaults reproduce the classic hover slam demo: a 200 kg rocket
    dropped from 4 km at 500 m/s straight down.

    Attributes:
        max_thrust: Engine thrust at full throttle [N]
        wet_mass: Initial mass including fuel [kg]
        dry_mass: Mass with no fuel left [kg]
        fuel_flow: Fuel consumption at full throttle [kg/s]
        target_landing_throttle: Throttle fraction used to time ignition [-]
        stationary_throttle: Lowest throttle while the engine is lit [-]
        x_surface_area: Reference area for horizontal drag [m^2]
        y_surface_area: Reference area for vertical drag [m^2]
        x_drag_coefficient: Horizontal drag coefficient [-]
        y_drag_coefficient: Vertical drag coefficient [-]
        sea_level_pressure: Air pressure at the ground [hPa]
        temperature: Air temperature [deg C]
        x: Starting horizontal offset from the pad [m]
        y: Starting altitude [m]
        x_velocity: Starting horizontal velocity [m/s]
        y_velocity: Starting vertical velocity [m/s]
        landing_pad_radius: Half-width of the landing pad [m]
        max_safe_velocity: Largest touchdown speed that counts as landed [m/s]
        simulation_frequency: Integration steps per simulated second [Hz]
    """
    # Vehicle
    max_thrust: float | int = 40000.0
    wet_mass: float | int = 200.0
    dry_mass: float | int = 10.0
    fuel_flow: float | int = 10.0

    # Guidance
    target_landing_throttle: float | int = 0.9
    stationary_throttle: float | int = 0.4

    # Aerodynamics
    x_surface_area: float | int = 1.0
    y_surface_area: float | int = 1.0
    x_drag_coefficient: float | int = 0.8
    y_drag_coefficient: float | int = 0.8

    # Air
    sea_level_pressure: float | int = 1013.25
    temperature: float | int = 15.0

    # Starting conditions
    x: float | int = 0.0
    y: float | int = 4000.0
    x_velocity: float | int = 0.0
    y_velocity: float | int = -500.0

    # Success criteria
    landing_pad_radius: float | int = 40.0
    max_safe_velocity: float | int = 10.0

    simulation_frequency: float | int = 100.0

    def __post_init__(self) -> None:
        """Validate by building every derived config once."""
        for f in fields(self):
            object.__setattr__(self, f.name, float(getattr(self, f.name)))
        self.vehicle_config()
        self.initial_conditions()
        self.environment()
        self.guidance()
        self.sim_config()
        if not self.landing_pad_radius >= 0:
            raise InvalidConfigError(
                f"landing_pad_radius must be >= 0, got {self.landing_pad_radius}"
            )
        if not self.max_safe_velocity > 0:
            raise InvalidConfigError(
                f"max_safe_velocity must be > 0, got {self.max_safe_velocity}"
            )

    # -------------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------------

    def vehicle_config(self) -> VehicleConfig:
        return VehicleConfig(
            max_thrust=self.max_thrust,
            wet_mass=self.wet_mass,
            dry_mass=self.dry_mass,
            fuel_flow=self.fuel_flow,
            x_surface_area=self.x_surface_area,
            y_surface_area=self.y_surface_area,
            x_drag_coefficient=self.x_drag_coefficient,
            y_drag_coefficient=self.y_drag_coefficient,
        )

    def initial_conditions(self) -> InitialConditions:
        return InitialConditions(
            x=self.x,
            y=self.y,
            x_velocity=self.x_velocity,
            y_velocity=self.y_velocity,
        )

    def environment(self) -> EnvironmentConfig:
        return EnvironmentConfig(
            sea_level_pressure=self.sea_level_pressure,
            temperature=self.temperature,
        )

    def guidance(self) -> SuicideBurnGuidance:
        return SuicideBurnGuidance(
            target_landing_throttle=self.target_landing_throttle,
            stationary_throttle=self.stationary_throttle,
        )

    def sim_config(self, max_time: float = 600.0, record_log: bool = True) -> SimConfig:
        return SimConfig(
            simulation_frequency=self.simulation_frequency,
            max_time=max_time,
            record_log=record_log,
        )

    def create_vehicle(self) -> VehicleState:
        """Fully fuelled vehicle at the starting conditions."""
        return create_vehicle(self.vehicle_config(), self.initial_conditions(), self.environment())

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scenario":
        """Build a scenario from a (possibly partial) mapping.

        Missing keys keep their defaults. Values are converted to float so
        JSON integers such as ``"y": 4000`` are accepted.

        Raises:
            InvalidConfigError: On unknown keys or non-numeric values
        """
        valid = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - valid)
        if unknown:
            raise InvalidConfigError(
                f"Unknown scenario parameter(s) {unknown}. Valid parameters: {sorted(valid)}"
            )

        params = {}
        for key, value in data.items():
            if isinstance(value, bool):
                raise InvalidConfigError(f"{key} must be a number, got {value!r}")
            try:
                params[key] = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidConfigError(f"{key} must be a number, got {value!r}") from e
        return cls(**params)

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "Scenario":
        """Deserialize from JSON string."""
        data = json.loads(json_str)
        if not isinstance(data, dict):
            raise InvalidConfigError("scenario JSON must be an object")
        return cls.from_dict(data)

    def save(self, path: str | Path) -> Path:
        """Save the scenario as JSON.

        Returns:
            Path written
        """
        path = Path(path)
        with open(path, "w") as f:
            f.write(self.to_json())
        return path

    @classmethod
    def load(cls, path: str | Path) -> "Scenario":
        """Load a scenario saved with save()."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Scenario not found at {path}")
        with open(path) as f:
            return cls.from_json(f.read())


# =============================================================================
# One-call Simulation
# =============================================================================


@beartype
@dataclass(frozen=True)
class LandingResult:
    """Summary of one simulated landing attempt.

    Impact fields are None when the vehicle never reached the ground
    within the time limit.
    """
    outcome: LandingOutcome
    impact_velocity: float | None
    impact_x: float | None
    impact_time: float | None
    impact_mass: float | None
    fuel_spent: float
    burn_start_time: float | None
    simulation: SimulationResult

    @property
    def landed(self) -> bool:
        return self.outcome == LandingOutcome.LANDED

    def metrics(self) -> dict[str, float]:
        """Numeric metrics for tabulation; missing values become NaN."""
        values = {
            "impact_velocity": self.impact_velocity,
            "impact_x": self.impact_x,
            "impact_time": self.impact_time,
            "impact_mass": self.impact_mass,
            "fuel_spent": self.fuel_spent,
            "burn_start_time": self.burn_start_time,
        }
        metrics = {k: math.nan if v is None else float(v) for k, v in values.items()}
        metrics["landed"] = 1.0 if self.landed else 0.0
        return metrics


@beartype
def simulate_landing(
    scenario: Scenario,
    max_time: float = 600.0,
    record_log: bool = True,
) -> LandingResult:
    """Fly a scenario with suicide burn guidance until impact.

    Args:
        scenario: Landing scenario
        max_time: Simulated time limit [s]
        record_log: Whether to keep the per-step flight log

    Returns:
        LandingResult for the attempt
    """
    sim = Simulator(
        vehicle=scenario.create_vehicle(),
        guidance=scenario.guidance(),
        config=scenario.sim_config(max_time=max_time, record_log=record_log),
    )
    result = sim.run()
    final = result.final_state

    outcome = result.outcome(scenario.landing_pad_radius, scenario.max_safe_velocity)
    logger.debug("Scenario finished: %s", outcome.value)

    return LandingResult(
        outcome=outcome,
        impact_velocity=final.impact_velocity,
        impact_x=final.impact_x,
        impact_time=final.impact_time,
        impact_mass=final.impact_mass,
        fuel_spent=final.fuel_spent,
        burn_start_time=result.burn_start_time,
        simulation=result,
    )
