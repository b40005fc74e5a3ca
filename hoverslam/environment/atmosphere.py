"""Isothermal barometric atmosphere.

The atmosphere below a landing rocket is modelled as a single isothermal
layer. Pressure falls off exponentially with altitude:

    P = P0 * exp(-g0 * M * h / (R * T))

where g0 is gravity at altitude 0, M the molar mass of air, R the universal
gas constant and T the (constant) absolute temperature. Density follows
from the ideal gas law with the specific gas constant of dry air.

Pressures are in hectopascals, matching the usual weather-station input.

Example:
    >>> from hoverslam.environment import Atmosphere
    >>>
    >>> atm = Atmosphere()
    >>> result = atm.at_altitude(4000.0)
    >>> print(f"Pressure: {result.pressure:.1f} hPa")
    >>> print(f"Density: {result.density:.3f} kg/m^3")
"""

import math
from dataclasses import dataclass

from beartype import beartype
from numba import njit

from hoverslam.environment.config import (
    ABSOLUTE_ZERO_C,
    MOLAR_MASS_AIR,
    R_AIR,
    R_UNIVERSAL,
    SURFACE_GRAVITY,
    EnvironmentConfig,
)
from hoverslam.environment.gravity import Gravity

# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _barometric_pressure(
    sea_level_pressure: float,
    temperature_k: float,
    altitude: float,
    g0: float,
    molar_mass: float,
    gas_constant: float,
) -> float:
    """Isothermal barometric formula."""
    return sea_level_pressure * math.exp(-g0 * molar_mass * altitude / (gas_constant * temperature_k))


@njit(cache=True, fastmath=True)
def _ideal_gas_density(pressure_hpa: float, temperature_k: float, specific_gas_constant: float) -> float:
    """Ideal gas density from pressure in hPa."""
    return pressure_hpa * 100.0 / (specific_gas_constant * temperature_k)


# =============================================================================
# Result Classes
# =============================================================================


@beartype
@dataclass(frozen=True)
class AtmosphereResult:
    """Atmospheric conditions at a given altitude.

    Attributes:
        altitude: Altitude [m]
        pressure: Static pressure [hPa]
        density: Air density [kg/m^3]
        temperature: Static temperature [deg C]
    """
    altitude: float
    pressure: float
    density: float
    temperature: float


# =============================================================================
# Atmosphere Model
# =============================================================================


@beartype
class Atmosphere:
    """Isothermal atmosphere for a configured environment.

    The reference gravity g0 is evaluated once, at altitude 0, from the
    same planet constants the gravity model uses.

    Example:
        >>> atm = Atmosphere(EnvironmentConfig(temperature=-10.0))
        >>> rho = atm.density(1000.0)
    """

    def __init__(self, environment: EnvironmentConfig | None = None) -> None:
        """Initialize atmosphere model.

        Args:
            environment: Air and planet constants (defaults to Earth at 15 C)
        """
        self.environment = environment or EnvironmentConfig()
        self._g0 = Gravity(self.environment).surface_gravity

    def pressure(self, altitude: float) -> float:
        """Get pressure at altitude.

        Args:
            altitude: Altitude [m]

        Returns:
            Pressure [hPa]
        """
        env = self.environment
        return _barometric_pressure(
            env.sea_level_pressure,
            env.temperature_kelvin,
            altitude,
            self._g0,
            env.molar_mass,
            env.universal_gas_constant,
        )

    def density(self, altitude: float) -> float:
        """Get density at altitude.

        Args:
            altitude: Altitude [m]

        Returns:
            Density [kg/m^3]
        """
        env = self.environment
        return _ideal_gas_density(self.pressure(altitude), env.temperature_kelvin, env.specific_gas_constant)

    def at_altitude(self, altitude: float) -> AtmosphereResult:
        """Get all atmospheric properties at altitude."""
        p = self.pressure(altitude)
        env = self.environment
        return AtmosphereResult(
            altitude=altitude,
            pressure=p,
            density=_ideal_gas_density(p, env.temperature_kelvin, env.specific_gas_constant),
            temperature=env.temperature,
        )


# =============================================================================
# Convenience Functions
# =============================================================================


@beartype
def pressure_at_altitude(
    sea_level_pressure: float,
    temperature: float,
    altitude: float,
    g0: float = SURFACE_GRAVITY,
    molar_mass: float = MOLAR_MASS_AIR,
    gas_constant: float = R_UNIVERSAL,
) -> float:
    """Barometric pressure at altitude.

    Args:
        sea_level_pressure: Pressure at altitude 0 [hPa]
        temperature: Air temperature [deg C]
        altitude: Altitude [m]
        g0: Gravity at altitude 0 [m/s^2]
        molar_mass: Molar mass of air [kg/mol]
        gas_constant: Universal gas constant [J/(mol*K)]

    Returns:
        Pressure [hPa]
    """
    return _barometric_pressure(
        sea_level_pressure, temperature - ABSOLUTE_ZERO_C, altitude, g0, molar_mass, gas_constant
    )


@beartype
def density_from_pressure(
    pressure: float,
    temperature: float,
    specific_gas_constant: float = R_AIR,
) -> float:
    """Ideal gas air density.

    Args:
        pressure: Static pressure [hPa]
        temperature: Air temperature [deg C]
        specific_gas_constant: Specific gas constant [J/(kg*K)]

    Returns:
        Density [kg/m^3]
    """
    return _ideal_gas_density(pressure, temperature - ABSOLUTE_ZERO_C, specific_gas_constant)
