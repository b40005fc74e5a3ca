"""Inverse-square gravity for a flat-ground descent simulation.

The vehicle is treated as a point mass above a spherical planet, so only
the magnitude of gravity matters and it depends on altitude alone.
Core functions are numba-compiled for performance.

Near and below the planet centre the inverse-square law diverges. The
distance from the centre is clamped to MIN_RADIUS, which keeps the model
finite for any altitude a caller may pass in.

Example:
    >>> from hoverslam.environment import Gravity
    >>>
    >>> grav = Gravity()
    >>> g = grav.acceleration(4000.0)  # m/s^2
"""

from beartype import beartype
from numba import njit

from hoverslam.environment.config import (
    EARTH_MASS,
    EARTH_RADIUS,
    GRAVITATIONAL_CONSTANT,
    EnvironmentConfig,
)

# =============================================================================
# Constants
# =============================================================================

MIN_RADIUS: float = 1e3  # Smallest distance from the planet centre [m]


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _inverse_square_gravity(
    altitude: float,
    planet_mass: float,
    planet_radius: float,
    gravitational_constant: float,
) -> float:
    """g = G*M / (R + h)^2 with the radius clamped away from the centre."""
    r = planet_radius + altitude
    if r < MIN_RADIUS:
        r = MIN_RADIUS
    return gravitational_constant * planet_mass / (r * r)


# =============================================================================
# Gravity Class
# =============================================================================


@beartype
class Gravity:
    """Gravity magnitude as a function of altitude for a configured planet.

    Example:
        >>> grav = Gravity(EnvironmentConfig(planet_radius=3389500.0, planet_mass=6.4171e23))
        >>> grav.surface_gravity  # Mars, ~3.7 m/s^2
    """

    def __init__(self, environment: EnvironmentConfig | None = None) -> None:
        """Initialize gravity model.

        Args:
            environment: Planet constants (defaults to Earth)
        """
        self.environment = environment or EnvironmentConfig()

    def acceleration(self, altitude: float) -> float:
        """Get gravitational acceleration magnitude at altitude.

        Args:
            altitude: Height above the ground plane [m]

        Returns:
            Gravity magnitude [m/s^2], always positive
        """
        env = self.environment
        return _inverse_square_gravity(
            altitude,
            env.planet_mass,
            env.planet_radius,
            env.gravitational_constant,
        )

    @property
    def surface_gravity(self) -> float:
        """Gravity at altitude 0 [m/s^2]."""
        return self.acceleration(0.0)


# =============================================================================
# Convenience Functions
# =============================================================================


@beartype
def gravity_at_altitude(
    altitude: float,
    planet_mass: float = EARTH_MASS,
    planet_radius: float = EARTH_RADIUS,
    gravitational_constant: float = GRAVITATIONAL_CONSTANT,
) -> float:
    """Get gravity magnitude at altitude above the surface.

    Args:
        altitude: Altitude above the surface [m]
        planet_mass: Mass of the central body [kg]
        planet_radius: Radius of the central body [m]
        gravitational_constant: Newton's G

    Returns:
        Gravity magnitude [m/s^2]
    """
    return _inverse_square_gravity(altitude, planet_mass, planet_radius, gravitational_constant)
