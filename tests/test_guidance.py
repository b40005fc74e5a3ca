"""Unit tests for suicide burn guidance."""

import logging
import math

import pytest
from numpy.testing import assert_allclose

from hoverslam.dynamics import InitialConditions, VehicleConfig, create_vehicle, integrate_step
from hoverslam.errors import InvalidConfigError
from hoverslam.gnc.guidance import (
    BurnPhase,
    GuidanceState,
    SuicideBurnGuidance,
    estimate_burn,
)


def make_state(y, y_velocity, **config):
    return create_vehicle(VehicleConfig(**config), InitialConditions(y=y, y_velocity=y_velocity))


# =============================================================================
# Burn Estimate Tests
# =============================================================================


class TestEstimateBurn:
    """Test the closed-form burn estimate."""

    def test_matches_closed_form(self):
        state = make_state(100.0, -50.0)
        est = estimate_burn(state, 0.9)

        a_max = 40000.0 / 200.0
        t_gnd = 100.0 / 50.0
        t_land = 50.0 / (a_max * 0.9)
        d_land = 50.0 * t_land + 0.5 * (a_max * 0.9) * t_land**2
        u = ((d_land - 50.0 * t_gnd) / (0.5 * t_gnd**2)) / a_max

        assert_allclose(est.max_acceleration, a_max)
        assert_allclose(est.time_to_ground, t_gnd)
        assert_allclose(est.landing_time, t_land)
        assert_allclose(est.landing_displacement, d_land)
        assert_allclose(est.target_throttle, u)
        assert not est.landing_burn_condition
        assert not est.degenerate

    def test_condition_near_ground(self):
        est = estimate_burn(make_state(20.0, -64.0), 0.9)
        assert est.target_throttle > 0.9
        assert est.landing_burn_condition

    def test_no_condition_high_up(self):
        est = estimate_burn(make_state(4000.0, -500.0), 0.9)
        assert est.target_throttle < 0.0
        assert not est.landing_burn_condition

    @pytest.mark.parametrize("y_velocity", [0.0, -1e-9, 5.0])
    def test_degenerate_when_not_descending(self, y_velocity):
        est = estimate_burn(make_state(100.0, y_velocity), 0.9)
        assert est.degenerate
        assert est.time_to_ground == math.inf
        assert est.target_throttle == 0.0
        assert not est.landing_burn_condition

    def test_degenerate_on_ground(self):
        state = make_state(0.1, -10.0)
        while not state.has_impacted:
            state = integrate_step(state, 0.0, 0.0, 0.01)

        est = estimate_burn(state, 0.9)
        assert est.degenerate
        assert not est.landing_burn_condition


# =============================================================================
# Guidance Configuration Tests
# =============================================================================


class TestGuidanceConfig:
    """Test guidance tuning validation."""

    def test_defaults(self):
        g = SuicideBurnGuidance()
        assert g.target_landing_throttle == 0.9
        assert g.stationary_throttle == 0.4

    def test_integer_throttles_accepted(self):
        g = SuicideBurnGuidance(target_landing_throttle=1, stationary_throttle=0)
        assert g.target_landing_throttle == 1.0
        assert isinstance(g.stationary_throttle, float)

    @pytest.mark.parametrize("value", [0.0, 1.5, -0.2])
    def test_target_throttle_out_of_range(self, value):
        with pytest.raises(InvalidConfigError):
            SuicideBurnGuidance(target_landing_throttle=value)

    @pytest.mark.parametrize("value", [-0.1, 1.1])
    def test_stationary_throttle_out_of_range(self, value):
        with pytest.raises(InvalidConfigError):
            SuicideBurnGuidance(stationary_throttle=value)

    def test_initial_state(self):
        gs = SuicideBurnGuidance().initial_state()
        assert gs.phase == BurnPhase.IDLE
        assert not gs.burn_started
        assert not gs.burn_ended
        assert gs.burn_start_time is None


# =============================================================================
# Guidance Rule Tests
# =============================================================================


class TestGuidanceRules:
    """Test each guidance rule in priority order."""

    guidance = SuicideBurnGuidance()

    def test_idle_high_up(self):
        cmd, gs = self.guidance.compute(make_state(4000.0, -500.0), GuidanceState())
        assert cmd.throttle == 0.0
        assert gs.phase == BurnPhase.IDLE

    def test_ignition(self):
        state = make_state(20.0, -64.0)
        cmd, gs = self.guidance.compute(state, GuidanceState())

        assert gs.phase == BurnPhase.BURNING
        assert gs.burn_started
        assert gs.burn_start_time == state.time
        assert cmd.phase == BurnPhase.BURNING
        # Estimate above 1 is clamped to full throttle
        assert cmd.estimate.target_throttle > 1.0
        assert cmd.throttle == 1.0

    def test_burn_continues_without_condition(self):
        """Once lit, the burn is not cut when the condition clears."""
        burning = GuidanceState(phase=BurnPhase.BURNING, burn_start_time=3.0)
        cmd, gs = self.guidance.compute(make_state(4000.0, -50.0), burning)

        assert gs.phase == BurnPhase.BURNING
        assert gs.burn_start_time == 3.0
        assert cmd.throttle == 0.4

    def test_burn_start_time_not_overwritten(self):
        burning = GuidanceState(phase=BurnPhase.BURNING, burn_start_time=3.0)
        _, gs = self.guidance.compute(make_state(20.0, -64.0), burning)
        assert gs.burn_start_time == 3.0

    def test_throttle_within_limits(self):
        burning = GuidanceState(phase=BurnPhase.BURNING, burn_start_time=0.0)
        for y, vy in [(5.0, -60.0), (50.0, -30.0), (500.0, -5.0), (10.0, -20.0)]:
            cmd, _ = self.guidance.compute(make_state(y, vy), burning)
            assert 0.4 <= cmd.throttle <= 1.0

    def test_ascent_ends_guidance(self):
        cmd, gs = self.guidance.compute(make_state(100.0, 1.0), GuidanceState())
        assert cmd.throttle == 0.0
        assert gs.phase == BurnPhase.ENDED
        assert gs.burn_ended

    def test_ascent_abort_idempotent(self):
        state = make_state(100.0, 2.0)
        _, gs1 = self.guidance.compute(state, GuidanceState(BurnPhase.BURNING, 1.0))
        cmd, gs2 = self.guidance.compute(state, gs1)

        assert cmd.throttle == 0.0
        assert gs2 == gs1
        assert gs2.burn_start_time == 1.0

    def test_ended_stays_ended_when_descending_again(self):
        ended = GuidanceState(phase=BurnPhase.ENDED, burn_start_time=1.0)
        cmd, gs = self.guidance.compute(make_state(20.0, -64.0), ended)
        assert cmd.throttle == 0.0
        assert gs.phase == BurnPhase.ENDED

    def test_impacted_commands_zero(self):
        state = make_state(0.1, -50.0)
        while not state.has_impacted:
            state = integrate_step(state, 0.0, 0.0, 0.01)

        burning = GuidanceState(phase=BurnPhase.BURNING, burn_start_time=0.0)
        cmd, gs = self.guidance.compute(state, burning)
        assert cmd.throttle == 0.0
        assert gs == burning

    def test_does_not_mutate_state(self):
        gs = GuidanceState()
        self.guidance.compute(make_state(20.0, -64.0), gs)
        assert gs.phase == BurnPhase.IDLE
        assert gs.burn_start_time is None


# =============================================================================
# Logging Tests
# =============================================================================


class TestGuidanceLogging:
    """Guidance events are logged."""

    def test_ignition_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="hoverslam")
        SuicideBurnGuidance().compute(make_state(20.0, -64.0), GuidanceState())
        assert "ignition" in caplog.text

    def test_ascent_logged_once(self, caplog):
        caplog.set_level(logging.INFO, logger="hoverslam")
        guidance = SuicideBurnGuidance()
        state = make_state(100.0, 1.0)
        _, gs = guidance.compute(state, GuidanceState())
        guidance.compute(state, gs)
        assert caplog.text.count("Ascent detected") == 1
