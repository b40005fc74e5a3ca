"""Dynamics module for planar descent simulation.

This module provides the vehicle state, the force model and the
fixed-step integrator that advances the state in time.

Example:
    >>> from hoverslam.dynamics import VehicleConfig, InitialConditions, create_vehicle, integrate_step
    >>>
    >>> state = create_vehicle(VehicleConfig(), InitialConditions(y=4000.0, y_velocity=-500.0))
    >>> state = integrate_step(state, throttle=0.0, attitude_angle=0.0, dt=0.01)
"""

from hoverslam.dynamics.forces import (
    compute_forces,
    drag_force,
    engine_force,
)
from hoverslam.dynamics.integrator import (
    integrate_step,
    validate_step,
)
from hoverslam.dynamics.state import (
    ForceBreakdown,
    InitialConditions,
    VehicleConfig,
    VehicleState,
    create_vehicle,
)

__all__ = [
    # State
    "VehicleConfig",
    "InitialConditions",
    "VehicleState",
    "ForceBreakdown",
    "create_vehicle",
    # Forces
    "compute_forces",
    "drag_force",
    "engine_force",
    # Integration
    "integrate_step",
    "validate_step",
]
