"""Planet and air constants shared by the atmosphere and gravity models.

An EnvironmentConfig is fixed for the duration of a run. Changing any of
these values means building a new vehicle state.

Example:
    >>> from hoverslam.environment import EnvironmentConfig
    >>>
    >>> earth = EnvironmentConfig()
    >>> hot_day = EnvironmentConfig(temperature=35.0)
"""

import math
from dataclasses import dataclass

from beartype import beartype

from hoverslam.errors import InvalidConfigError

# =============================================================================
# Constants
# =============================================================================

ABSOLUTE_ZERO_C = -273.15  # [deg C]

# Sea level conditions
SEA_LEVEL_PRESSURE = 1013.25  # [hPa]
SEA_LEVEL_TEMPERATURE = 15.0  # [deg C]

# Earth parameters
EARTH_MASS = 5.9722e24  # [kg]
EARTH_RADIUS = 6378500.0  # [m]
GRAVITATIONAL_CONSTANT = 6.67408e-11  # [m^3/(kg*s^2)]

# Air
MOLAR_MASS_AIR = 0.0289644  # [kg/mol]
R_UNIVERSAL = 8.31432  # [J/(mol*K)]
R_AIR = 287.058  # Specific gas constant for dry air [J/(kg*K)]

# Gravity at the surface of the default planet [m/s^2]
SURFACE_GRAVITY = GRAVITATIONAL_CONSTANT * EARTH_MASS / EARTH_RADIUS**2


# =============================================================================
# Environment Configuration
# =============================================================================


@beartype
@dataclass(frozen=True, slots=True)
class EnvironmentConfig:
    """Immutable environment for one simulation run.

    Attributes:
        sea_level_pressure: Air pressure at altitude 0 [hPa]
        temperature: Air temperature, assumed constant with altitude [deg C]
        planet_mass: Mass of the central body [kg]
        planet_radius: Radius of the central body [m]
        gravitational_constant: Newton's G [m^3/(kg*s^2)]
        molar_mass: Molar mass of air [kg/mol]
        universal_gas_constant: Universal gas constant [J/(mol*K)]
        specific_gas_constant: Specific gas constant of air [J/(kg*K)]
    """

    sea_level_pressure: float | int = SEA_LEVEL_PRESSURE
    temperature: float | int = SEA_LEVEL_TEMPERATURE
    planet_mass: float | int = EARTH_MASS
    planet_radius: float | int = EARTH_RADIUS
    gravitational_constant: float | int = GRAVITATIONAL_CONSTANT
    molar_mass: float | int = MOLAR_MASS_AIR
    universal_gas_constant: float | int = R_UNIVERSAL
    specific_gas_constant: float | int = R_AIR

    def __post_init__(self) -> None:
        """Reject environments the atmosphere and gravity models cannot evaluate."""
        for name in (
            "sea_level_pressure",
            "temperature",
            "planet_mass",
            "planet_radius",
            "gravitational_constant",
            "molar_mass",
            "universal_gas_constant",
            "specific_gas_constant",
        ):
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise InvalidConfigError(f"{name} must be finite, got {value}")
            object.__setattr__(self, name, value)

        if self.temperature <= ABSOLUTE_ZERO_C:
            raise InvalidConfigError(
                f"temperature must be above absolute zero ({ABSOLUTE_ZERO_C} C), got {self.temperature}"
            )
        if self.sea_level_pressure < 0:
            raise InvalidConfigError(f"sea_level_pressure must be >= 0, got {self.sea_level_pressure}")
        if self.planet_mass <= 0:
            raise InvalidConfigError(f"planet_mass must be > 0, got {self.planet_mass}")
        if self.planet_radius <= 0:
            raise InvalidConfigError(f"planet_radius must be > 0, got {self.planet_radius}")
        if self.gravitational_constant <= 0:
            raise InvalidConfigError(
                f"gravitational_constant must be > 0, got {self.gravitational_constant}"
            )
        if self.molar_mass <= 0:
            raise InvalidConfigError(f"molar_mass must be > 0, got {self.molar_mass}")
        if self.universal_gas_constant <= 0 or self.specific_gas_constant <= 0:
            raise InvalidConfigError("gas constants must be > 0")

    @property
    def temperature_kelvin(self) -> float:
        """Air temperature [K]."""
        return self.temperature - ABSOLUTE_ZERO_C

    @property
    def gravitational_parameter(self) -> float:
        """G * M of the central body [m^3/s^2]."""
        return self.gravitational_constant * self.planet_mass
