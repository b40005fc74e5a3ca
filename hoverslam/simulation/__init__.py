"""Simulation module for landing flights.

Provides the single-step composition of guidance and integration, the
step-driven simulator, the flight log and the telemetry panel.

Example:
    >>> from hoverslam.simulation import Simulator, SimConfig
    >>>
    >>> sim = Simulator(vehicle, config=SimConfig(simulation_frequency=100.0))
    >>> result = sim.run()
    >>> result.log.to_csv("flight.csv")
"""

from hoverslam.simulation.flight_log import LOG_COLUMNS, FlightLog, default_log_name
from hoverslam.simulation.simulator import (
    LandingOutcome,
    SimConfig,
    SimulationResult,
    Simulator,
    classify_landing,
    step,
)
from hoverslam.simulation.telemetry import format_telemetry

__all__ = [
    "FlightLog",
    "LOG_COLUMNS",
    "LandingOutcome",
    "SimConfig",
    "SimulationResult",
    "Simulator",
    "classify_landing",
    "default_log_name",
    "format_telemetry",
    "step",
]
