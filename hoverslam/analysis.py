"""Monte Carlo dispersion analysis for landing scenarios.

Samples scenario parameters from distributions, flies every sample with
suicide burn guidance and collects landing metrics. Parameters are looked
up on the Scenario dataclass by name, so any scenario field can be
dispersed without extra wiring.

Example:
    >>> from hoverslam.analysis import DispersionAnalysis, Normal, Uniform
    >>> from hoverslam.scenario import Scenario
    >>>
    >>> analysis = DispersionAnalysis(
    ...     base=Scenario(),
    ...     distributions={
    ...         "max_thrust": Normal(40000, 1000),
    ...         "y_velocity": Uniform(-550, -450),
    ...     },
    ...     seed=42,
    ... )
    >>> results = analysis.run(n_samples=200)
    >>> print(f"P(land) = {results.probability_of_landing():.2f}")
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, NamedTuple

import numpy as np
import polars as pl
from beartype import beartype
from numpy.typing import NDArray
from tqdm import tqdm

from hoverslam.errors import InvalidConfigError
from hoverslam.scenario import LandingResult, Scenario, simulate_landing

logger = logging.getLogger(__name__)

METRICS = [
    "impact_velocity",
    "impact_x",
    "impact_time",
    "impact_mass",
    "fuel_spent",
    "burn_start_time",
    "landed",
]


# =============================================================================
# Distributions
# =============================================================================


@beartype
@dataclass(frozen=True, slots=True)
class Distribution:
    """Base class for probability distributions in dispersion analysis."""

    pass


@beartype
@dataclass(frozen=True, slots=True)
class Normal(Distribution):
    """Normal (Gaussian) distribution.

    Args:
        mean: Distribution mean
        std: Standard deviation
    """

    mean: float | int
    std: float | int

    def __post_init__(self) -> None:
        if self.std < 0:
            raise InvalidConfigError(f"std must be >= 0, got {self.std}")

    def sample(self, n: int, rng: np.random.Generator) -> NDArray[np.float64]:
        """Generate n samples from the distribution."""
        return rng.normal(self.mean, self.std, n)


@beartype
@dataclass(frozen=True, slots=True)
class Uniform(Distribution):
    """Uniform distribution over [low, high)."""

    low: float | int
    high: float | int

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise InvalidConfigError(f"low ({self.low}) cannot exceed high ({self.high})")

    def sample(self, n: int, rng: np.random.Generator) -> NDArray[np.float64]:
        """Generate n samples from the distribution."""
        return rng.uniform(self.low, self.high, n)


@beartype
@dataclass(frozen=True, slots=True)
class Triangular(Distribution):
    """Triangular distribution.

    Args:
        low: Lower bound
        mode: Most likely value
        high: Upper bound
    """

    low: float | int
    mode: float | int
    high: float | int

    def __post_init__(self) -> None:
        if not (self.low <= self.mode <= self.high and self.low < self.high):
            raise InvalidConfigError(
                f"need low <= mode <= high with low < high, got ({self.low}, {self.mode}, {self.high})"
            )

    def sample(self, n: int, rng: np.random.Generator) -> NDArray[np.float64]:
        """Generate n samples from the distribution."""
        return rng.triangular(self.low, self.mode, self.high, n)


# =============================================================================
# Dispersion Analysis
# =============================================================================


@beartype
class DispersionAnalysis:
    """Monte Carlo dispersion of a landing scenario.

    Every sample is an independent flight: scenarios and vehicle states are
    immutable, so samples share nothing.
    """

    def __init__(
        self,
        base: Scenario,
        distributions: dict[str, Distribution],
        constraints: list[Callable[[LandingResult], bool]] | None = None,
        seed: int | None = None,
        max_time: float = 600.0,
    ) -> None:
        """Initialize dispersion analysis.

        Args:
            base: Nominal scenario
            distributions: Dict mapping scenario field names to distributions
            constraints: Extra pass/fail checks on each landing result
            seed: Random seed for reproducibility
            max_time: Simulated time limit per flight [s]
        """
        self.base = base
        self.distributions = distributions
        self.constraints = constraints or []
        self.max_time = max_time
        self.rng = np.random.default_rng(seed)

        self._validate_parameters()

    def _validate_parameters(self) -> None:
        """Validate that all dispersed parameters exist."""
        valid_fields = [f.name for f in fields(self.base)]

        for param_name in self.distributions:
            if param_name not in valid_fields:
                raise ValueError(
                    f"Parameter '{param_name}' not found in {type(self.base).__name__}. "
                    f"Valid fields: {valid_fields}"
                )

    def run(self, n_samples: int = 1000, progress: bool = False) -> "DispersionResults":
        """Run the Monte Carlo dispersion.

        Args:
            n_samples: Number of Monte Carlo samples
            progress: If True, show progress indicator

        Returns:
            DispersionResults with statistics and samples
        """
        samples: dict[str, NDArray[np.float64]] = {}
        for param_name, dist in self.distributions.items():
            samples[param_name] = dist.sample(n_samples, self.rng)

        scenarios: list[Scenario | None] = []
        outputs: list[LandingResult | None] = []
        metrics: dict[str, list[float]] = {name: [] for name in METRICS}
        passed: list[bool] = []

        iterator: Any = range(n_samples)
        if progress:
            iterator = tqdm(range(n_samples), desc="Sampling")

        for i in iterator:
            sampled = {name: float(values[i]) for name, values in samples.items()}

            # Sampled values can make the scenario itself invalid
            try:
                scenario = replace(self.base, **sampled)
                output = simulate_landing(scenario, max_time=self.max_time, record_log=False)
            except Exception as e:
                logger.debug("Sample %d failed: %s", i, e)
                scenario = None
                output = None

            scenarios.append(scenario)
            outputs.append(output)

            if output is not None:
                for name, value in output.metrics().items():
                    metrics[name].append(value)
                passed.append(all(constraint(output) for constraint in self.constraints))
            else:
                for name in METRICS:
                    metrics[name].append(np.nan)
                passed.append(False)

        n_failed = sum(o is None for o in outputs)
        if n_failed:
            logger.warning("%d of %d samples could not be simulated", n_failed, n_samples)

        return DispersionResults(
            scenarios=scenarios,
            outputs=outputs,
            metrics={name: np.array(values, dtype=np.float64) for name, values in metrics.items()},
            samples=samples,
            constraints_passed=np.array(passed, dtype=np.bool_),
            n_samples=n_samples,
        )


# =============================================================================
# Results
# =============================================================================


class MetricStats(NamedTuple):
    """Spread of one landing metric over the simulated samples.

    ``low`` and ``high`` bound the central 95% of the samples.
    """
    count: int
    mean: float
    std: float
    low: float
    median: float
    high: float


@beartype
@dataclass
class DispersionResults:
    """Results from a dispersion analysis.

    Samples that could not be simulated have NaN metrics and never pass
    the constraints. Statistics skip them.
    """

    scenarios: list[Scenario | None]
    outputs: list[LandingResult | None]
    metrics: dict[str, NDArray[np.float64]]
    samples: dict[str, NDArray[np.float64]]
    constraints_passed: NDArray[np.bool_]
    n_samples: int

    @property
    def n_failed(self) -> int:
        """Samples whose scenario could not be built or flown."""
        return sum(output is None for output in self.outputs)

    def values(self, metric: str, landed_only: bool = False) -> NDArray[np.float64]:
        """Metric values of the simulated samples.

        Args:
            metric: One of METRICS
            landed_only: Keep only the samples that landed safely

        Raises:
            ValueError: If the metric is not recorded
        """
        if metric not in self.metrics:
            raise ValueError(f"Unknown metric '{metric}'. Recorded metrics: {list(self.metrics)}")

        column = self.metrics[metric]
        keep = np.isfinite(column)
        if landed_only:
            keep &= self.metrics["landed"] == 1.0
        return column[keep]

    def mean(self, metric: str, landed_only: bool = False) -> float:
        return self.describe(metric, landed_only).mean

    def std(self, metric: str, landed_only: bool = False) -> float:
        return self.describe(metric, landed_only).std

    def percentile(self, metric: str, q: float | int, landed_only: bool = False) -> float:
        """Value below which q percent of the metric's samples fall."""
        values = self.values(metric, landed_only)
        if values.size == 0:
            return float("nan")
        return float(np.percentile(values, q))

    def confidence_interval(
        self, metric: str, level: float = 0.95, landed_only: bool = False
    ) -> tuple[float, float]:
        """Bounds of the central ``level`` fraction of a metric's samples."""
        if not 0.0 < level < 1.0:
            raise ValueError(f"level must be within (0, 1), got {level}")
        tail = (1.0 - level) / 2.0 * 100.0
        return (
            self.percentile(metric, tail, landed_only),
            self.percentile(metric, 100.0 - tail, landed_only),
        )

    def describe(self, metric: str, landed_only: bool = False) -> MetricStats:
        """Count, moments and central 95% range of a metric."""
        values = self.values(metric, landed_only)
        if values.size == 0:
            nan = float("nan")
            return MetricStats(0, nan, nan, nan, nan, nan)
        low, median, high = np.percentile(values, [2.5, 50.0, 97.5])
        return MetricStats(
            count=int(values.size),
            mean=float(values.mean()),
            std=float(values.std()),
            low=float(low),
            median=float(median),
            high=float(high),
        )

    def probability_of_landing(self) -> float:
        """Fraction of all samples that landed safely on the pad."""
        return float(np.mean(np.nan_to_num(self.metrics["landed"], nan=0.0)))

    def probability_of_success(self) -> float:
        """Fraction of samples that passed all constraints."""
        return float(np.mean(self.constraints_passed))

    def summary(self, metrics: list[str] | None = None) -> str:
        """Plain-text table of landing rates and metric spreads."""
        lines = [
            f"Samples: {self.n_samples} ({self.n_failed} not simulated)",
            f"Landed: {self.probability_of_landing():.1%}",
            f"Passed constraints: {self.probability_of_success():.1%}",
            "",
            f"{'':<16}{'n':>5}{'mean':>11}{'std':>11}{'median':>11}   central 95%",
        ]
        for metric in metrics or [m for m in METRICS if m != "landed"]:
            s = self.describe(metric)
            lines.append(
                f"{metric:<16}{s.count:>5}{s.mean:>11.4g}{s.std:>11.4g}{s.median:>11.4g}"
                f"   {s.low:.4g} .. {s.high:.4g}"
            )
        return "\n".join(lines)

    def to_dataframe(self) -> pl.DataFrame:
        """One row per sample: sampled inputs, metrics and the constraint flag."""
        return pl.DataFrame({**self.samples, **self.metrics, "feasible": self.constraints_passed})

    def to_csv(self, path: str | Path) -> None:
        self.to_dataframe().write_csv(path)
