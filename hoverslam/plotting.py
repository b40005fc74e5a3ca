"""Visualization module for landing flights.

Provides plotting functions for:
- Descent trajectory with the landing pad
- Flight dashboard (altitude, velocity, throttle, mass over time)
- Dispersion scatter of touchdown points

All plots use matplotlib with a consistent, professional style.
"""

import matplotlib.pyplot as plt
import numpy as np
from beartype import beartype
from matplotlib.figure import Figure

from hoverslam.analysis import DispersionResults
from hoverslam.simulation.simulator import LandingOutcome, SimulationResult

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "primary": "#2E86AB",  # Steel blue
    "secondary": "#A23B72",  # Berry
    "accent": "#F18F01",  # Orange
    "ground": "#454545",  # Dark gray
    "pad": "#3BB273",  # Green
    "crash": "#C73E1D",  # Red
    "grid": "#CCCCCC",  # Grid lines
    "text": "#333333",  # Text color
}

DEFAULT_FIGSIZE = (12.0, 6.0)


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
            "font.size": 11,
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "axes.linewidth": 1.2,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "xtick.color": COLORS["text"],
            "ytick.color": COLORS["text"],
            "legend.fontsize": 10,
            "grid.alpha": 0.5,
        }
    )


def _burn_start_index(result: SimulationResult) -> int | None:
    throttle = result.log.throttle
    lit = np.nonzero(throttle > 0)[0]
    return int(lit[0]) if len(lit) else None


# =============================================================================
# Trajectory
# =============================================================================


@beartype
def plot_trajectory(
    result: SimulationResult,
    landing_pad_radius: float = 40.0,
    figsize: tuple[float, float] = (8.0, 8.0),
) -> Figure:
    """Plot the descent path in the x-y plane.

    Args:
        result: Simulation result with a recorded flight log
        landing_pad_radius: Half-width of the landing pad [m]
        figsize: Figure size

    Returns:
        matplotlib Figure
    """
    _setup_style()

    log = result.log
    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(log.x, log.altitude, color=COLORS["primary"], linewidth=2, label="Trajectory")

    ignition = _burn_start_index(result)
    if ignition is not None:
        ax.plot(
            log.x[ignition:], log.altitude[ignition:],
            color=COLORS["accent"], linewidth=2.5, label="Landing burn",
        )
        ax.plot(log.x[ignition], log.altitude[ignition], "o", color=COLORS["accent"])

    ax.axhline(y=0, color=COLORS["ground"], linewidth=1.5)
    ax.plot(
        [-landing_pad_radius, landing_pad_radius], [0, 0],
        color=COLORS["pad"], linewidth=6, solid_capstyle="butt", label="Landing pad",
    )

    final = result.final_state
    if final.has_impacted:
        landed = result.outcome(landing_pad_radius=landing_pad_radius) == LandingOutcome.LANDED
        ax.plot(
            final.impact_x, 0, "v", markersize=10,
            color=COLORS["pad"] if landed else COLORS["crash"],
            label=f"Impact ({final.impact_velocity:.1f} m/s)",
        )

    span = max(float(np.max(np.abs(log.x))), landing_pad_radius) * 1.5
    ax.set_xlim(-span, span)
    ax.set_ylim(bottom=-0.02 * max(float(np.max(log.altitude)), 1.0))
    ax.set_xlabel("Horizontal Position (m)")
    ax.set_ylabel("Altitude (m)")
    ax.set_title("Descent Trajectory")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")

    fig.tight_layout()
    return fig


# =============================================================================
# Dashboard
# =============================================================================


@beartype
def plot_flight_dashboard(
    result: SimulationResult,
    figsize: tuple[float, float] = (14.0, 9.0),
) -> Figure:
    """Create a dashboard of the flight time histories.

    Includes altitude, vertical velocity, throttle and mass over time,
    with the landing burn ignition marked on each panel.

    Args:
        result: Simulation result with a recorded flight log
        figsize: Figure size

    Returns:
        matplotlib Figure
    """
    _setup_style()

    log = result.log
    t = log.time
    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    (ax_alt, ax_vel), (ax_thr, ax_mass) = axes

    ax_alt.plot(t, log.altitude, color=COLORS["primary"], linewidth=2)
    ax_alt.set_ylabel("Altitude (m)")
    ax_alt.set_title("Altitude")

    ax_vel.plot(t, log.y_velocity, color=COLORS["secondary"], linewidth=2)
    ax_vel.axhline(y=0, color=COLORS["grid"], linewidth=1)
    ax_vel.set_ylabel("Vertical Velocity (m/s)")
    ax_vel.set_title("Vertical Velocity")

    ax_thr.plot(t, log.throttle * 100, color=COLORS["accent"], linewidth=2)
    ax_thr.set_ylim(-5, 105)
    ax_thr.set_ylabel("Throttle (%)")
    ax_thr.set_title("Throttle")

    ax_mass.plot(t, log.mass, color=COLORS["ground"], linewidth=2)
    ax_mass.axhline(
        y=result.final_state.dry_mass, color=COLORS["crash"], linestyle="--", alpha=0.7,
        label="Dry mass",
    )
    ax_mass.set_ylabel("Mass (kg)")
    ax_mass.set_title("Mass")
    ax_mass.legend(loc="upper right")

    burn_start = result.burn_start_time
    for ax in axes.flat:
        if burn_start is not None:
            ax.axvline(x=burn_start, color=COLORS["accent"], linestyle=":", alpha=0.8)
        ax.grid(True, alpha=0.3)
    for ax in axes[1]:
        ax.set_xlabel("Time (s)")

    final = result.final_state
    if final.has_impacted:
        title = (
            f"Impact at {final.impact_time:.2f} s, {final.impact_velocity:.2f} m/s, "
            f"{final.fuel_remaining:.1f} kg fuel left"
        )
    else:
        title = f"In flight at {final.time:.2f} s"
    fig.suptitle(title, fontsize=16, fontweight="bold", y=0.98)
    fig.tight_layout(rect=[0, 0, 1, 0.95])

    return fig


# =============================================================================
# Dispersion
# =============================================================================


@beartype
def plot_touchdown_dispersion(
    results: DispersionResults,
    max_safe_velocity: float = 10.0,
    landing_pad_radius: float = 40.0,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Scatter of touchdown offset against impact velocity.

    Args:
        results: Dispersion analysis results
        max_safe_velocity: Safe touchdown speed limit [m/s]
        landing_pad_radius: Half-width of the landing pad [m]
        figsize: Figure size

    Returns:
        matplotlib Figure
    """
    _setup_style()

    x = results.metrics["impact_x"]
    v = results.metrics["impact_velocity"]
    landed = results.metrics["landed"] == 1.0

    fig, ax = plt.subplots(figsize=figsize)
    ax.axvspan(-landing_pad_radius, landing_pad_radius, color=COLORS["pad"], alpha=0.1)
    ax.axhline(y=-max_safe_velocity, color=COLORS["crash"], linestyle="--", alpha=0.7)
    ax.scatter(x[landed], v[landed], color=COLORS["pad"], s=18, label="Landed")
    ax.scatter(x[~landed], v[~landed], color=COLORS["crash"], s=18, label="Crashed")

    ax.set_xlabel("Touchdown Offset (m)")
    ax.set_ylabel("Impact Velocity (m/s)")
    ax.set_title(
        f"Touchdown Dispersion (n={results.n_samples}, "
        f"P(land)={results.probability_of_landing():.2f})"
    )
    ax.grid(True, alpha=0.3)
    ax.legend(loc="lower right")

    fig.tight_layout()
    return fig
