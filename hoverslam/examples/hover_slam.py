#!/usr/bin/env python
"""Hover slam landing example.

This example flies the classic demo scenario: a 200 kg rocket dropped from
4 km at 500 m/s straight down, landed with a single suicide burn.

1. Build the scenario and vehicle
2. Step the simulator, printing telemetry every few simulated seconds
3. Classify the landing
4. Save the flight log and plots
"""

import logging
from pathlib import Path

from hoverslam import (
    Scenario,
    SimConfig,
    Simulator,
    default_log_name,
    format_telemetry,
    plot_flight_dashboard,
    plot_trajectory,
)

TELEMETRY_PERIOD = 5.0  # s


def main() -> None:
    """Run the hover slam example."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("HOVER SLAM LANDING")
    print("=" * 60)

    # =========================================================================
    # 1. Scenario
    # =========================================================================
    scenario = Scenario()

    print("\n1. Scenario:")
    print(f"   Start altitude:  {scenario.y:.0f} m")
    print(f"   Start velocity:  {scenario.y_velocity:.0f} m/s")
    print(f"   Thrust:          {scenario.max_thrust/1000:.1f} kN")
    print(f"   Wet / dry mass:  {scenario.wet_mass:.0f} / {scenario.dry_mass:.0f} kg")

    # =========================================================================
    # 2. Fly
    # =========================================================================
    print("\n2. Flying...")

    sim = Simulator(
        vehicle=scenario.create_vehicle(),
        guidance=scenario.guidance(),
        config=SimConfig(simulation_frequency=scenario.simulation_frequency),
    )

    next_report = 0.0
    while not sim.vehicle.has_impacted and sim.time < 600.0:
        sim.step()
        if sim.time >= next_report:
            print()
            print(format_telemetry(sim.vehicle, sim.last_interval))
            next_report += TELEMETRY_PERIOD

    result = sim.run()

    # =========================================================================
    # 3. Results
    # =========================================================================
    print("\n3. Touchdown:")
    print(format_telemetry(result.final_state))

    outcome = result.outcome(scenario.landing_pad_radius, scenario.max_safe_velocity)
    print(f"\n   Outcome: {outcome.value.upper()}")
    if result.burn_start_time is not None:
        print(f"   Burn lit at t = {result.burn_start_time:.2f} s")

    # =========================================================================
    # 4. Save
    # =========================================================================
    print("\n4. Saving results...")

    output_dir = Path("outputs/hover_slam")
    output_dir.mkdir(parents=True, exist_ok=True)

    log_path = output_dir / default_log_name()
    result.log.to_csv(log_path)
    print(f"   Flight log saved: {log_path}")

    fig = plot_trajectory(result, scenario.landing_pad_radius)
    fig.savefig(output_dir / "trajectory.png", dpi=150, bbox_inches="tight")
    fig = plot_flight_dashboard(result)
    fig.savefig(output_dir / "dashboard.png", dpi=150, bbox_inches="tight")
    print(f"   Plots saved: {output_dir}/")

    scenario.save(output_dir / "scenario.json")

    print("\n" + "=" * 60)
    print("SIMULATION COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
