"""Hoverslam - Suicide burn landing simulation.

This package simulates a rocket falling through an atmosphere and landing
with a single, as-late-as-possible engine burn (a "hover slam"). It
provides the planar point-mass dynamics, the closed-form burn guidance,
a step-driven simulator and Monte Carlo dispersion tools.

Example:
    >>> from hoverslam import Scenario, simulate_landing
    >>>
    >>> result = simulate_landing(Scenario(y=4000.0, y_velocity=-500.0))
    >>> print(f"{result.outcome.value}: {result.impact_velocity:.2f} m/s")
"""

__version__ = "0.1.0"

# Dispersion analysis
from hoverslam.analysis import (
    DispersionAnalysis,
    DispersionResults,
    Distribution,
    MetricStats,
    Normal,
    Triangular,
    Uniform,
)

# Vehicle dynamics
from hoverslam.dynamics import (
    ForceBreakdown,
    InitialConditions,
    VehicleConfig,
    VehicleState,
    compute_forces,
    create_vehicle,
    integrate_step,
)

# Planet and air
from hoverslam.environment import Atmosphere, EnvironmentConfig, Gravity
from hoverslam.errors import HoverslamError, InvalidConfigError, InvalidStepError

# Guidance
from hoverslam.gnc import BurnPhase, GuidanceCommand, GuidanceState, SuicideBurnGuidance

# Plotting
from hoverslam.plotting import (
    plot_flight_dashboard,
    plot_touchdown_dispersion,
    plot_trajectory,
)

# Scenarios
from hoverslam.scenario import LandingResult, Scenario, simulate_landing

# Simulation
from hoverslam.simulation import (
    FlightLog,
    LandingOutcome,
    SimConfig,
    SimulationResult,
    Simulator,
    classify_landing,
    default_log_name,
    format_telemetry,
    step,
)

__all__ = [
    "__version__",
    # Analysis
    "DispersionAnalysis",
    "DispersionResults",
    "Distribution",
    "MetricStats",
    "Normal",
    "Triangular",
    "Uniform",
    # Dynamics
    "ForceBreakdown",
    "InitialConditions",
    "VehicleConfig",
    "VehicleState",
    "compute_forces",
    "create_vehicle",
    "integrate_step",
    # Environment
    "Atmosphere",
    "EnvironmentConfig",
    "Gravity",
    # Errors
    "HoverslamError",
    "InvalidConfigError",
    "InvalidStepError",
    # Guidance
    "BurnPhase",
    "GuidanceCommand",
    "GuidanceState",
    "SuicideBurnGuidance",
    # Plotting
    "plot_flight_dashboard",
    "plot_touchdown_dispersion",
    "plot_trajectory",
    # Scenario
    "LandingResult",
    "Scenario",
    "simulate_landing",
    # Simulation
    "FlightLog",
    "LandingOutcome",
    "SimConfig",
    "SimulationResult",
    "Simulator",
    "classify_landing",
    "default_log_name",
    "format_telemetry",
    "step",
]
