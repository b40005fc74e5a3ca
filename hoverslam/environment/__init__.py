"""Environment models for descent simulation.

Provides the isothermal atmosphere and inverse-square gravity used by the
force model, plus the immutable planet/air configuration they share.

Example:
    >>> from hoverslam.environment import Atmosphere, Gravity
    >>>
    >>> atm = Atmosphere()
    >>> rho = atm.density(1000.0)  # kg/m^3
    >>>
    >>> grav = Gravity()
    >>> g = grav.acceleration(1000.0)  # m/s^2
"""

from hoverslam.environment.atmosphere import (
    Atmosphere,
    AtmosphereResult,
    density_from_pressure,
    pressure_at_altitude,
)
from hoverslam.environment.config import EnvironmentConfig
from hoverslam.environment.gravity import (
    MIN_RADIUS,
    Gravity,
    gravity_at_altitude,
)

__all__ = [
    "Atmosphere",
    "AtmosphereResult",
    "EnvironmentConfig",
    "Gravity",
    "MIN_RADIUS",
    "density_from_pressure",
    "gravity_at_altitude",
    "pressure_at_altitude",
]
