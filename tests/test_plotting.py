"""Smoke tests for plotting functions."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from hoverslam.analysis import DispersionAnalysis, Normal  # noqa: E402
from hoverslam.plotting import (  # noqa: E402
    plot_flight_dashboard,
    plot_touchdown_dispersion,
    plot_trajectory,
)
from hoverslam.scenario import Scenario, simulate_landing  # noqa: E402


@pytest.fixture(scope="module")
def landing():
    return simulate_landing(Scenario(y=300.0, y_velocity=-60.0))


class TestPlots:
    """Plots build without errors and return figures."""

    def test_trajectory(self, landing):
        fig = plot_trajectory(landing.simulation, 40.0)
        assert isinstance(fig, Figure)
        plt.close(fig)

    def test_trajectory_without_burn(self):
        result = simulate_landing(Scenario(y=300.0, y_velocity=-60.0), max_time=0.5)
        fig = plot_trajectory(result.simulation)
        assert isinstance(fig, Figure)
        plt.close(fig)

    def test_dashboard(self, landing):
        fig = plot_flight_dashboard(landing.simulation)
        assert isinstance(fig, Figure)
        assert len(fig.axes) == 4
        plt.close(fig)

    def test_touchdown_dispersion(self):
        results = DispersionAnalysis(
            base=Scenario(y=200.0, y_velocity=-50.0),
            distributions={"max_thrust": Normal(40000.0, 500.0)},
            seed=0,
        ).run(n_samples=3)
        fig = plot_touchdown_dispersion(results)
        assert isinstance(fig, Figure)
        plt.close(fig)

    def test_save(self, landing, tmp_path):
        fig = plot_flight_dashboard(landing.simulation)
        path = tmp_path / "dashboard.png"
        fig.savefig(path)
        assert path.exists()
        plt.close(fig)
