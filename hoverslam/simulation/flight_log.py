"""Per-step flight log with DataFrame and CSV export.

One row is recorded per simulation step. The columns match the flight log
the interactive simulator has always downloaded, so existing spreadsheets
keep working.

Example:
    >>> log = FlightLog()
    >>> log.append(state)
    >>> log.to_csv(default_log_name())
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import numpy as np
import polars as pl
from beartype import beartype
from numpy.typing import NDArray

from hoverslam.dynamics.state import VehicleState

LOG_COLUMNS = [
    "Time",
    "Altitude",
    "Horizontal Position",
    "Vertical Velocity",
    "Horizontal Velocity",
    "Throttle",
    "Mass",
    "Fuel left",
    "Air Pressure",
    "Rotation",
]


@beartype
def default_log_name(when: datetime | None = None) -> str:
    """File name for a flight log, e.g. ``FlightLog - 18-10-2026 1405.csv``."""
    when = when or datetime.now()
    return f"FlightLog - {when.day}-{when.month}-{when.year} {when.hour}{when.minute:02d}.csv"


@beartype
@dataclass
class FlightLog:
    """Recorded vehicle states, one per simulation step."""
    states: list[VehicleState] = field(default_factory=list)

    def append(self, state: VehicleState) -> None:
        """Record a state."""
        self.states.append(state)

    def __len__(self) -> int:
        return len(self.states)

    def _column(self, attr: str) -> NDArray[np.float64]:
        return np.array([getattr(s, attr) for s in self.states], dtype=np.float64)

    @property
    def time(self) -> NDArray[np.float64]:
        """Time array [s]."""
        return self._column("time")

    @property
    def x(self) -> NDArray[np.float64]:
        """Horizontal position history [m]."""
        return self._column("x")

    @property
    def altitude(self) -> NDArray[np.float64]:
        """Altitude history [m]."""
        return self._column("y")

    @property
    def x_velocity(self) -> NDArray[np.float64]:
        """Horizontal velocity history [m/s]."""
        return self._column("x_velocity")

    @property
    def y_velocity(self) -> NDArray[np.float64]:
        """Vertical velocity history [m/s]."""
        return self._column("y_velocity")

    @property
    def throttle(self) -> NDArray[np.float64]:
        """Throttle history [0-1]."""
        return self._column("throttle")

    @property
    def mass(self) -> NDArray[np.float64]:
        """Mass history [kg]."""
        return self._column("mass")

    @property
    def fuel_left(self) -> NDArray[np.float64]:
        """Fuel remaining history [kg]."""
        return self._column("fuel_remaining")

    @property
    def air_pressure(self) -> NDArray[np.float64]:
        """Air pressure history [hPa]."""
        return self._column("air_pressure")

    @property
    def attitude_angle(self) -> NDArray[np.float64]:
        """Thrust-vector angle history [deg]."""
        return self._column("attitude_angle")

    def to_dataframe(self) -> pl.DataFrame:
        """Convert to Polars DataFrame with the flight log columns."""
        values = [
            self.time,
            self.altitude,
            self.x,
            self.y_velocity,
            self.x_velocity,
            self.throttle,
            self.mass,
            self.fuel_left,
            self.air_pressure,
            self.attitude_angle,
        ]
        return pl.DataFrame(dict(zip(LOG_COLUMNS, values)))

    def to_csv(self, path: str | Path) -> None:
        """Export the log to a CSV file.

        Args:
            path: Output file path
        """
        self.to_dataframe().write_csv(path)
