"""Unit tests for vehicle configuration and state creation."""

import math
from dataclasses import FrozenInstanceError

import pytest
from numpy.testing import assert_allclose

from hoverslam.dynamics import InitialConditions, VehicleConfig, create_vehicle, integrate_step
from hoverslam.environment import Atmosphere, EnvironmentConfig
from hoverslam.errors import InvalidConfigError

# =============================================================================
# Vehicle Configuration Tests
# =============================================================================


class TestVehicleConfig:
    """Test vehicle parameter validation."""

    def test_defaults(self):
        cfg = VehicleConfig()
        assert cfg.max_thrust == 40000.0
        assert cfg.wet_mass == 200.0
        assert cfg.dry_mass == 10.0
        assert cfg.fuel_mass == 190.0
        assert_allclose(cfg.burn_time, 19.0)

    def test_dry_heavier_than_wet_rejected(self):
        with pytest.raises(InvalidConfigError):
            VehicleConfig(wet_mass=10.0, dry_mass=200.0)

    def test_dry_equal_to_wet_allowed(self):
        cfg = VehicleConfig(wet_mass=10.0, dry_mass=10.0)
        assert cfg.fuel_mass == 0.0

    def test_negative_fuel_flow_rejected(self):
        with pytest.raises(InvalidConfigError):
            VehicleConfig(fuel_flow=-1.0)

    def test_zero_fuel_flow_has_infinite_burn_time(self):
        assert VehicleConfig(fuel_flow=0.0).burn_time == math.inf

    @pytest.mark.parametrize("thrust", [0.0, -100.0])
    def test_non_positive_thrust_rejected(self, thrust):
        with pytest.raises(InvalidConfigError):
            VehicleConfig(max_thrust=thrust)

    def test_non_positive_dry_mass_rejected(self):
        with pytest.raises(InvalidConfigError):
            VehicleConfig(dry_mass=0.0)

    @pytest.mark.parametrize(
        "field",
        ["x_surface_area", "y_surface_area", "x_drag_coefficient", "y_drag_coefficient"],
    )
    def test_negative_aero_rejected(self, field):
        with pytest.raises(InvalidConfigError):
            VehicleConfig(**{field: -0.1})

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidConfigError):
            VehicleConfig(max_thrust=math.inf)

    def test_integer_values_accepted(self):
        cfg = VehicleConfig(max_thrust=40000, wet_mass=200, dry_mass=10, fuel_flow=10)
        assert cfg == VehicleConfig()
        assert isinstance(cfg.max_thrust, float)
        assert isinstance(cfg.fuel_mass, float)

    def test_frozen(self):
        cfg = VehicleConfig()
        with pytest.raises(FrozenInstanceError):
            cfg.max_thrust = 1.0


class TestInitialConditions:
    """Test starting condition validation."""

    def test_negative_altitude_rejected(self):
        with pytest.raises(InvalidConfigError):
            InitialConditions(y=-1.0)

    def test_ground_start_rejected(self):
        with pytest.raises(InvalidConfigError, match="starting altitude must be > 0"):
            InitialConditions(y=0.0, y_velocity=0.0)

    def test_integer_values_stored_as_float(self):
        ic = InitialConditions(x=0, y=3000, x_velocity=5, y_velocity=-400)
        assert ic == InitialConditions(x=0.0, y=3000.0, x_velocity=5.0, y_velocity=-400.0)
        assert all(isinstance(v, float) for v in (ic.x, ic.y, ic.x_velocity, ic.y_velocity))

    def test_non_finite_velocity_rejected(self):
        with pytest.raises(InvalidConfigError):
            InitialConditions(y_velocity=math.nan)


# =============================================================================
# Vehicle State Tests
# =============================================================================


class TestCreateVehicle:
    """Test initial vehicle state."""

    def test_starts_fully_fuelled(self):
        state = create_vehicle(VehicleConfig())
        assert state.mass == 200.0
        assert state.fuel_remaining == 190.0
        assert state.fuel_spent == 0.0
        assert state.has_fuel

    def test_initial_conditions_applied(self):
        state = create_vehicle(
            VehicleConfig(),
            InitialConditions(x=5.0, y=1000.0, x_velocity=2.0, y_velocity=-50.0),
        )
        assert (state.x, state.y) == (5.0, 1000.0)
        assert (state.x_velocity, state.y_velocity) == (2.0, -50.0)
        assert state.altitude == 1000.0
        assert_allclose(state.speed, math.hypot(2.0, -50.0))

    def test_starts_in_flight(self):
        state = create_vehicle(VehicleConfig())
        assert state.time == 0.0
        assert state.throttle == 0.0
        assert not state.has_impacted
        assert state.impact_time is None
        assert state.impact_velocity is None
        assert state.impact_mass is None
        assert state.impact_x is None

    def test_initial_air_conditions(self):
        env = EnvironmentConfig(temperature=0.0)
        state = create_vehicle(VehicleConfig(), InitialConditions(y=4000.0), env)
        atm = Atmosphere(env)
        assert_allclose(state.air_pressure, atm.pressure(4000.0))
        assert_allclose(state.air_density, atm.density(4000.0))

    def test_dry_vehicle_has_no_fuel(self):
        state = create_vehicle(VehicleConfig(wet_mass=10.0, dry_mass=10.0))
        assert not state.has_fuel

    def test_integer_config_flies(self):
        state = create_vehicle(
            VehicleConfig(max_thrust=40000, wet_mass=200, dry_mass=10),
            InitialConditions(y=1000, y_velocity=-50),
            EnvironmentConfig(temperature=15),
        )
        assert state.mass == 200.0
        assert state.y == 1000.0

        state = integrate_step(state, 0.5, 0.0, 0.01)
        assert_allclose(state.fuel_spent, 0.05)
