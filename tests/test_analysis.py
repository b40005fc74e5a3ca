"""Unit tests for Monte Carlo dispersion analysis."""

import numpy as np
import polars as pl
import pytest
from numpy.testing import assert_allclose

from hoverslam.analysis import (
    METRICS,
    DispersionAnalysis,
    Normal,
    Triangular,
    Uniform,
)
from hoverslam.errors import InvalidConfigError
from hoverslam.scenario import Scenario

# Short drops keep each sample quick
BASE = Scenario(y=300.0, y_velocity=-60.0)


@pytest.fixture(scope="module")
def results():
    analysis = DispersionAnalysis(
        base=BASE,
        distributions={
            "max_thrust": Normal(40000.0, 1000.0),
            "temperature": Uniform(0.0, 30.0),
        },
        seed=1,
    )
    return analysis.run(n_samples=8)


# =============================================================================
# Distribution Tests
# =============================================================================


class TestDistributions:
    """Test distribution sampling."""

    def test_normal(self):
        samples = Normal(10.0, 2.0).sample(5000, np.random.default_rng(0))
        assert_allclose(samples.mean(), 10.0, atol=0.1)
        assert_allclose(samples.std(), 2.0, rtol=0.05)

    def test_uniform_bounds(self):
        samples = Uniform(-550.0, -450.0).sample(1000, np.random.default_rng(0))
        assert samples.min() >= -550.0
        assert samples.max() < -450.0

    def test_triangular_bounds(self):
        samples = Triangular(0.7, 0.8, 0.9).sample(1000, np.random.default_rng(0))
        assert samples.min() >= 0.7
        assert samples.max() <= 0.9

    @pytest.mark.parametrize(
        "build",
        [
            lambda: Normal(0.0, -1.0),
            lambda: Uniform(2.0, 1.0),
            lambda: Triangular(0.0, 2.0, 1.0),
            lambda: Triangular(1.0, 1.0, 1.0),
        ],
    )
    def test_invalid_parameters_rejected(self, build):
        with pytest.raises(InvalidConfigError):
            build()


# =============================================================================
# Dispersion Analysis Tests
# =============================================================================


class TestDispersionAnalysis:
    """Test running a dispersion study."""

    def test_unknown_parameter_rejected(self):
        with pytest.raises(ValueError, match="not_a_field"):
            DispersionAnalysis(base=BASE, distributions={"not_a_field": Normal(0.0, 1.0)})

    def test_sample_count(self, results):
        assert results.n_samples == 8
        assert len(results.outputs) == 8
        for name in METRICS:
            assert len(results.metrics[name]) == 8

    def test_samples_applied(self, results):
        thrusts = [s.max_thrust for s in results.scenarios]
        assert_allclose(thrusts, results.samples["max_thrust"])

    def test_nominal_dispersion_lands(self, results):
        assert results.probability_of_landing() == 1.0
        assert results.probability_of_success() == 1.0
        assert abs(results.mean("impact_velocity")) < 10.0

    def test_reproducible(self):
        def run():
            return DispersionAnalysis(
                base=BASE, distributions={"y_velocity": Uniform(-70.0, -50.0)}, seed=7
            ).run(n_samples=3)

        a, b = run(), run()
        assert_allclose(a.samples["y_velocity"], b.samples["y_velocity"])
        assert_allclose(a.metrics["impact_time"], b.metrics["impact_time"])

    def test_invalid_samples_marked_infeasible(self):
        """Samples that break the scenario are recorded, not raised."""
        analysis = DispersionAnalysis(
            base=BASE,
            distributions={"dry_mass": Uniform(500.0, 600.0)},  # heavier than wet mass
            seed=0,
        )
        results = analysis.run(n_samples=3)

        assert results.outputs == [None, None, None]
        assert not results.constraints_passed.any()
        assert results.probability_of_landing() == 0.0
        assert np.isnan(results.metrics["impact_velocity"]).all()
        assert results.n_failed == 3
        assert results.describe("impact_velocity").count == 0
        assert "3 not simulated" in results.summary()

    def test_constraints(self):
        analysis = DispersionAnalysis(
            base=BASE,
            distributions={"max_thrust": Uniform(39000.0, 41000.0)},
            constraints=[lambda r: r.fuel_spent < 0.0],
            seed=3,
        )
        results = analysis.run(n_samples=2)
        assert results.probability_of_success() == 0.0
        assert results.probability_of_landing() == 1.0


# =============================================================================
# Results Tests
# =============================================================================


class TestDispersionResults:
    """Test result statistics and export."""

    def test_statistics(self, results):
        values = results.metrics["fuel_spent"]
        assert_allclose(results.mean("fuel_spent"), np.mean(values))
        assert_allclose(results.std("fuel_spent"), np.std(values))
        assert_allclose(results.percentile("fuel_spent", 50.0), np.median(values))

    def test_confidence_interval(self, results):
        low, high = results.confidence_interval("impact_time")
        assert low <= results.mean("impact_time") <= high

    def test_confidence_level_out_of_range(self, results):
        with pytest.raises(ValueError):
            results.confidence_interval("impact_time", level=1.0)

    def test_describe(self, results):
        stats = results.describe("impact_mass")
        values = results.metrics["impact_mass"]
        assert stats.count == 8
        assert_allclose(stats.median, np.median(values))
        assert stats.low <= stats.median <= stats.high
        assert values.min() <= stats.low
        assert stats.high <= values.max()

    def test_landed_only(self, results):
        assert_allclose(
            results.values("fuel_spent", landed_only=True), results.metrics["fuel_spent"]
        )

    def test_unknown_metric(self, results):
        with pytest.raises(ValueError, match="apogee"):
            results.mean("apogee")

    def test_summary(self, results):
        text = results.summary()
        assert "Samples: 8" in text
        assert "impact_velocity" in text
        assert "Landed: 100.0%" in text

    def test_to_dataframe(self, results):
        df = results.to_dataframe()
        assert isinstance(df, pl.DataFrame)
        assert len(df) == 8
        assert {"max_thrust", "temperature", "impact_velocity", "landed", "feasible"} <= set(df.columns)

    def test_to_csv(self, results, tmp_path):
        path = tmp_path / "dispersion.csv"
        results.to_csv(path)
        assert len(pl.read_csv(path)) == 8
