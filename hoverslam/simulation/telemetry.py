"""Plain-text telemetry panel for a vehicle state."""

from beartype import beartype

from hoverslam.dynamics.state import VehicleState

_LABEL_WIDTH = 22


def _line(label: str, value: float, unit: str, decimals: int = 2) -> str:
    return f"{label + ':':<{_LABEL_WIDTH}}{value:>14,.{decimals}f} {unit}"


@beartype
def format_telemetry(state: VehicleState, interval: float | None = None) -> str:
    """Format the telemetry panel for a state.

    Args:
        state: Vehicle state to describe
        interval: Time step used for the last step [s], shown when given

    Returns:
        Multi-line telemetry text. Impact details are appended once the
        vehicle has reached the ground.
    """
    forces = state.forces
    lines = []
    if interval is not None:
        lines.append(_line("Simulation interval", interval, "s", 4))
    lines += [
        _line("Mission time", state.time, "s", 3),
        _line("Mass", state.mass, "kg"),
        _line("Altitude", state.y, "m"),
        _line("Vertical Velocity", state.y_velocity, "m/s"),
        _line("Air Pressure", state.air_pressure, "hPa", 3),
        _line("Fuel left", state.fuel_remaining, "kg"),
        "",
        _line("Engine force", forces.y_engine_force, "N"),
        _line("Air Resistance force", forces.y_drag_force, "N"),
        _line("Gravity force", forces.gravity_force, "N"),
        _line("Y Acceleration", forces.y_acceleration, "m/s/s"),
        _line("Throttle", state.throttle * 100, "%"),
    ]

    if state.has_impacted:
        lines += [
            "",
            _line("Impact time", state.impact_time, "s"),
            _line("Impact velocity", state.impact_velocity, "m/s"),
            _line("Impact velocity", state.impact_velocity * 3.6, "km/h"),
            _line("Fuel spent", state.fuel_spent, "kg"),
        ]
        if state.impact_x == 0:
            lines.append(f"{'Landing offset:':<{_LABEL_WIDTH}}{'SPOT ON!':>14}")
        else:
            lines.append(_line("Landing offset", abs(state.impact_x), "m", 3))

    return "\n".join(lines)
