#!/usr/bin/env python
"""Monte Carlo dispersion study of the hover slam landing.

Disperses thrust, entry velocity, air temperature and drag coefficient
around the demo scenario and reports how often the vehicle still lands.
"""

import logging
from pathlib import Path

from hoverslam import DispersionAnalysis, Normal, Scenario, Triangular, Uniform
from hoverslam.plotting import plot_touchdown_dispersion

N_SAMPLES = 20


def main() -> None:
    """Run the dispersion study example."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("HOVER SLAM DISPERSION STUDY")
    print("=" * 60)

    base = Scenario()

    analysis = DispersionAnalysis(
        base=base,
        distributions={
            "max_thrust": Normal(40000.0, 1500.0),
            "y_velocity": Uniform(-550.0, -450.0),
            "temperature": Normal(15.0, 10.0),
            "y_drag_coefficient": Triangular(0.7, 0.8, 0.9),
        },
        constraints=[lambda r: r.fuel_spent < 0.8 * (base.wet_mass - base.dry_mass)],
        seed=42,
    )

    print(f"\nFlying {N_SAMPLES} dispersed landings...")
    results = analysis.run(n_samples=N_SAMPLES, progress=True)

    print()
    print(results.summary(["impact_velocity", "fuel_spent", "burn_start_time"]))

    output_dir = Path("outputs/dispersion_study")
    output_dir.mkdir(parents=True, exist_ok=True)

    results.to_csv(output_dir / "dispersion.csv")
    fig = plot_touchdown_dispersion(results, base.max_safe_velocity, base.landing_pad_radius)
    fig.savefig(output_dir / "touchdown.png", dpi=150, bbox_inches="tight")
    print(f"\nResults saved: {output_dir}/")


if __name__ == "__main__":
    main()
