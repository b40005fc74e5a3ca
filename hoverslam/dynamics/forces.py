"""Force model for the planar landing vehicle.

Combines engine thrust, aerodynamic drag and gravity into net forces and
accelerations on both axes. Everything here is a pure function of the
current state and command; nothing is mutated.

Sign conventions:
- Drag always opposes the velocity on its axis. A velocity of exactly zero
  produces exactly zero drag.
- The thrust-vector angle is measured from vertical in degrees; positive
  angles push the vehicle towards +x.
- Thrust drops to zero once the tanks are empty, whatever the throttle.
"""

import math

from beartype import beartype
from numba import njit

from hoverslam.dynamics.state import ForceBreakdown, VehicleState
from hoverslam.environment.atmosphere import Atmosphere
from hoverslam.environment.gravity import Gravity

# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _drag_magnitude(
    drag_coefficient: float,
    density: float,
    velocity: float,
    reference_area: float,
) -> float:
    """Drag force magnitude, 0.5 * Cd * rho * v^2 * A."""
    return 0.5 * drag_coefficient * density * velocity * velocity * reference_area


# =============================================================================
# Force Components
# =============================================================================


@beartype
def drag_force(
    drag_coefficient: float,
    density: float,
    velocity: float,
    reference_area: float,
) -> float:
    """Signed drag force on one axis.

    Args:
        drag_coefficient: Drag coefficient [-]
        density: Air density [kg/m^3]
        velocity: Velocity along the axis [m/s]
        reference_area: Reference area normal to the axis [m^2]

    Returns:
        Drag force [N], opposite in sign to velocity
    """
    if velocity == 0.0:
        return 0.0
    magnitude = _drag_magnitude(drag_coefficient, density, velocity, reference_area)
    return -magnitude if velocity > 0.0 else magnitude


@beartype
def engine_force(
    state: VehicleState,
    throttle: float,
    attitude_angle: float,
) -> tuple[float, float]:
    """Engine force split into (horizontal, vertical) components [N]."""
    if not state.has_fuel:
        return 0.0, 0.0
    thrust = state.max_thrust * throttle
    angle = math.radians(attitude_angle)
    return thrust * math.sin(angle), thrust * math.cos(angle)


# =============================================================================
# Force Model
# =============================================================================


@beartype
def compute_forces(
    state: VehicleState,
    throttle: float,
    attitude_angle: float = 0.0,
) -> ForceBreakdown:
    """Evaluate all forces acting on the vehicle.

    Args:
        state: Current vehicle state
        throttle: Commanded throttle [0-1]
        attitude_angle: Thrust-vector angle from vertical [deg]

    Returns:
        ForceBreakdown with per-axis forces, accelerations and the air
        conditions they were computed with
    """
    cfg = state.config
    atm = Atmosphere(state.environment).at_altitude(state.y)
    g = Gravity(state.environment).acceleration(state.y)

    x_engine, y_engine = engine_force(state, throttle, attitude_angle)
    x_drag = drag_force(cfg.x_drag_coefficient, atm.density, state.x_velocity, cfg.x_surface_area)
    y_drag = drag_force(cfg.y_drag_coefficient, atm.density, state.y_velocity, cfg.y_surface_area)
    gravity = -g * state.mass

    x_force = x_engine + x_drag
    y_force = y_engine + y_drag + gravity

    return ForceBreakdown(
        x_engine_force=x_engine,
        y_engine_force=y_engine,
        x_drag_force=x_drag,
        y_drag_force=y_drag,
        gravity_force=gravity,
        x_force=x_force,
        y_force=y_force,
        x_acceleration=x_force / state.mass,
        y_acceleration=y_force / state.mass,
        air_pressure=atm.pressure,
        air_density=atm.density,
    )
