"""Fixed-step integrator for the landing vehicle.

Each step:
1. Advances time and evaluates forces on the pre-step state
2. Updates velocity, then position using the updated velocity:
       v += a*dt
       p += v*dt + 0.5*a*dt^2
   Guidance decisions are sensitive to how integration error accumulates,
   so this exact scheme is kept rather than swapped for RK4.
3. Burns fuel, never below the dry mass
4. Detects ground contact and pins the vehicle to the ground

Steps are all-or-nothing: the time step and command are validated before
anything is computed, and the input state is never modified.
"""

import math
from dataclasses import replace

from beartype import beartype

from hoverslam.dynamics.forces import compute_forces
from hoverslam.dynamics.state import VehicleState
from hoverslam.errors import InvalidStepError


@beartype
def validate_step(dt: float, throttle: float = 0.0, attitude_angle: float = 0.0) -> None:
    """Raise InvalidStepError for a time step or command that cannot be applied."""
    if not math.isfinite(dt) or dt < 0:
        raise InvalidStepError(f"time step must be finite and >= 0, got {dt}")
    if not 0.0 <= throttle <= 1.0:
        raise InvalidStepError(f"throttle must be within [0, 1], got {throttle}")
    if not math.isfinite(attitude_angle):
        raise InvalidStepError(f"attitude angle must be finite, got {attitude_angle}")


@beartype
def integrate_step(
    state: VehicleState,
    throttle: float,
    attitude_angle: float,
    dt: float,
) -> VehicleState:
    """Advance the vehicle by one time step.

    Args:
        state: Current vehicle state
        throttle: Throttle command for this step [0-1]
        attitude_angle: Thrust-vector angle from vertical [deg]
        dt: Time step [s]

    Returns:
        New state after the step. A zero time step returns ``state`` itself.

    Raises:
        InvalidStepError: If dt is negative or not finite, or the throttle
            is outside [0, 1]
    """
    validate_step(dt, throttle, attitude_angle)
    if dt == 0:
        return state

    if state.has_impacted:
        throttle = 0.0

    time = state.time + dt
    forces = compute_forces(state, throttle, attitude_angle)

    x_velocity = state.x_velocity + forces.x_acceleration * dt
    x = state.x + x_velocity * dt + 0.5 * forces.x_acceleration * dt * dt

    y_velocity = state.y_velocity + forces.y_acceleration * dt
    y = state.y + y_velocity * dt + 0.5 * forces.y_acceleration * dt * dt

    if state.mass <= state.dry_mass:
        mass = state.dry_mass
    else:
        mass = max(state.dry_mass, state.mass - state.fuel_flow * throttle * dt)

    min_y = min(state.min_y, y)

    has_impacted = state.has_impacted
    impact = {}
    if y <= 0:
        if not has_impacted:
            has_impacted = True
            impact = {
                "impact_time": time,
                "impact_velocity": y_velocity,
                "impact_mass": mass,
                "impact_x": x,
            }
        y = 0.0
        y_velocity = 0.0
        x_velocity = 0.0
        throttle = 0.0

    return replace(
        state,
        x=x,
        y=y,
        x_velocity=x_velocity,
        y_velocity=y_velocity,
        mass=mass,
        throttle=throttle,
        attitude_angle=attitude_angle,
        time=time,
        has_impacted=has_impacted,
        min_y=min_y,
        air_pressure=forces.air_pressure,
        air_density=forces.air_density,
        forces=forces,
        **impact,
    )
