"""Planar point-mass state for a landing rocket.

The vehicle is a point mass moving in a vertical plane:
- x: horizontal position [m], positive to the right of the landing pad
- y: altitude above the flat ground plane [m], positive up
- Velocities follow the same axes

The engine fires along a single thrust-vector angle measured from vertical,
in degrees. The state is an immutable snapshot: every integration step
returns a new VehicleState, which keeps independent runs (Monte Carlo
sweeps, replays) free of shared mutable data.

Invariants maintained by the integrator:
- dry_mass <= mass <= wet_mass
- y >= 0 after every step, and y == 0 implies has_impacted
- after impact both velocities and the throttle stay at zero
- the impact snapshot fields are written once, on the impact step
"""

import math
from dataclasses import dataclass, field
from typing import NamedTuple

from beartype import beartype

from hoverslam.environment.atmosphere import Atmosphere
from hoverslam.environment.config import EnvironmentConfig
from hoverslam.errors import InvalidConfigError

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass(frozen=True, slots=True)
class VehicleConfig:
    """Immutable vehicle parameters.

    Attributes:
        max_thrust: Engine thrust at full throttle [N]
        wet_mass: Initial mass including fuel [kg]
        dry_mass: Mass with no fuel left [kg]
        fuel_flow: Fuel consumption at full throttle [kg/s]
        x_surface_area: Reference area for horizontal drag [m^2]
        y_surface_area: Reference area for vertical drag [m^2]
        x_drag_coefficient: Horizontal drag coefficient [-]
        y_drag_coefficient: Vertical drag coefficient [-]
    """
    max_thrust: float | int = 40000.0
    wet_mass: float | int = 200.0
    dry_mass: float | int = 10.0
    fuel_flow: float | int = 10.0
    x_surface_area: float | int = 1.0
    y_surface_area: float | int = 1.0
    x_drag_coefficient: float | int = 0.8
    y_drag_coefficient: float | int = 0.8

    def __post_init__(self) -> None:
        """Validate vehicle parameters."""
        for f in (
            "max_thrust", "wet_mass", "dry_mass", "fuel_flow",
            "x_surface_area", "y_surface_area", "x_drag_coefficient", "y_drag_coefficient",
        ):
            value = float(getattr(self, f))
            if not math.isfinite(value):
                raise InvalidConfigError(f"{f} must be finite, got {value}")
            object.__setattr__(self, f, value)

        if self.max_thrust <= 0:
            raise InvalidConfigError(f"max_thrust must be > 0, got {self.max_thrust}")
        if self.dry_mass <= 0:
            raise InvalidConfigError(f"dry_mass must be > 0, got {self.dry_mass}")
        if self.dry_mass > self.wet_mass:
            raise InvalidConfigError(
                f"dry_mass ({self.dry_mass}) cannot exceed wet_mass ({self.wet_mass})"
            )
        if self.fuel_flow < 0:
            raise InvalidConfigError(f"fuel_flow must be >= 0, got {self.fuel_flow}")
        if self.x_surface_area < 0 or self.y_surface_area < 0:
            raise InvalidConfigError("surface areas must be >= 0")
        if self.x_drag_coefficient < 0 or self.y_drag_coefficient < 0:
            raise InvalidConfigError("drag coefficients must be >= 0")

    @property
    def fuel_mass(self) -> float:
        """Loaded fuel [kg]."""
        return self.wet_mass - self.dry_mass

    @property
    def burn_time(self) -> float:
        """Time to empty the tanks at full throttle [s]."""
        if self.fuel_flow == 0:
            return math.inf
        return self.fuel_mass / self.fuel_flow


@beartype
@dataclass(frozen=True, slots=True)
class InitialConditions:
    """Starting position and velocity of the descent.

    Attributes:
        x: Horizontal offset from the landing pad centre [m]
        y: Altitude [m]
        x_velocity: Horizontal velocity [m/s]
        y_velocity: Vertical velocity [m/s] (negative is descending)
    """
    x: float | int = 0.0
    y: float | int = 4000.0
    x_velocity: float | int = 0.0
    y_velocity: float | int = -500.0

    def __post_init__(self) -> None:
        """Validate starting conditions."""
        for f in ("x", "y", "x_velocity", "y_velocity"):
            value = float(getattr(self, f))
            if not math.isfinite(value):
                raise InvalidConfigError(f"{f} must be finite, got {value}")
            object.__setattr__(self, f, value)
        if self.y <= 0:
            raise InvalidConfigError(f"starting altitude must be > 0, got {self.y}")


# =============================================================================
# Diagnostics
# =============================================================================


class ForceBreakdown(NamedTuple):
    """Forces and accelerations acting on the vehicle for one step.

    All forces in newtons, accelerations in m/s^2, pressure in hPa,
    density in kg/m^3.
    """
    x_engine_force: float
    y_engine_force: float
    x_drag_force: float
    y_drag_force: float
    gravity_force: float
    x_force: float
    y_force: float
    x_acceleration: float
    y_acceleration: float
    air_pressure: float
    air_density: float

    @classmethod
    def zero(cls) -> "ForceBreakdown":
        """Breakdown before any force has been evaluated."""
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


# =============================================================================
# State Classes
# =============================================================================


@beartype
@dataclass(frozen=True)
class VehicleState:
    """Kinematic and propulsion state of one landing rocket.

    Attributes:
        config: Vehicle parameters (immutable)
        environment: Planet and air constants (immutable)
        x: Horizontal position [m]
        y: Altitude [m]
        x_velocity: Horizontal velocity [m/s]
        y_velocity: Vertical velocity [m/s]
        mass: Current mass [kg]
        throttle: Throttle applied on the step that produced this state [0-1]
        attitude_angle: Thrust-vector angle from vertical [deg]
        time: Simulated time [s]
        has_impacted: True once the vehicle has reached the ground
        impact_time: Time of impact [s]
        impact_velocity: Vertical velocity at impact [m/s]
        impact_mass: Mass at impact [kg]
        impact_x: Horizontal position at impact [m]
        min_y: Lowest altitude seen so far [m]
        air_pressure: Air pressure at the last evaluated altitude [hPa]
        air_density: Air density at the last evaluated altitude [kg/m^3]
        forces: Force breakdown from the last step
    """
    config: VehicleConfig
    environment: EnvironmentConfig
    x: float
    y: float
    x_velocity: float
    y_velocity: float
    mass: float
    throttle: float = 0.0
    attitude_angle: float = 0.0
    time: float = 0.0
    has_impacted: bool = False
    impact_time: float | None = None
    impact_velocity: float | None = None
    impact_mass: float | None = None
    impact_x: float | None = None
    min_y: float = math.inf
    air_pressure: float = 0.0
    air_density: float = 0.0
    forces: ForceBreakdown = field(default_factory=ForceBreakdown.zero)

    @property
    def max_thrust(self) -> float:
        """Engine thrust at full throttle [N]."""
        return self.config.max_thrust

    @property
    def wet_mass(self) -> float:
        """Initial mass including fuel [kg]."""
        return self.config.wet_mass

    @property
    def dry_mass(self) -> float:
        """Mass with empty tanks [kg]."""
        return self.config.dry_mass

    @property
    def fuel_flow(self) -> float:
        """Fuel consumption at full throttle [kg/s]."""
        return self.config.fuel_flow

    @property
    def fuel_remaining(self) -> float:
        """Fuel left in the tanks [kg]."""
        return self.mass - self.config.dry_mass

    @property
    def fuel_spent(self) -> float:
        """Fuel burned since the start of the flight [kg]."""
        return self.config.wet_mass - self.mass

    @property
    def has_fuel(self) -> bool:
        """Whether the engine can still produce thrust."""
        return self.mass > self.config.dry_mass

    @property
    def speed(self) -> float:
        """Speed magnitude [m/s]."""
        return math.hypot(self.x_velocity, self.y_velocity)

    @property
    def altitude(self) -> float:
        """Altitude above the ground plane [m]."""
        return self.y


@beartype
def create_vehicle(
    config: VehicleConfig,
    initial: InitialConditions | None = None,
    environment: EnvironmentConfig | None = None,
) -> VehicleState:
    """Create a fully fuelled vehicle at its starting conditions.

    Configuration is validated when the config objects are built; passing
    them here is what ties one vehicle to one environment for the run.

    Args:
        config: Vehicle parameters
        initial: Starting position and velocity
        environment: Planet and air constants (defaults to Earth)

    Returns:
        VehicleState at t=0 with mass equal to wet mass

    Raises:
        InvalidConfigError: If any of the configuration is physically invalid
    """
    initial = initial or InitialConditions()
    environment = environment or EnvironmentConfig()

    atm = Atmosphere(environment).at_altitude(initial.y)

    return VehicleState(
        config=config,
        environment=environment,
        x=initial.x,
        y=initial.y,
        x_velocity=initial.x_velocity,
        y_velocity=initial.y_velocity,
        mass=config.wet_mass,
        air_pressure=atm.pressure,
        air_density=atm.density,
    )
