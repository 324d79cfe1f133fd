"""Tests for the compound (single-casing) two-stage mode."""

import math

import pytest

from compeff_pro.core.fluids import get_fluid
from compeff_pro.cycle.common import PressureMode, operating_point
from compeff_pro.cycle.two_stage_single import (
    TwoStageSingleInput,
    optimal_intermediate_pressure,
    solve_two_stage_single,
)
from compeff_pro.utils.validation import CalculationError


def _inputs(**overrides) -> TwoStageSingleInput:
    base = dict(fluid="R717", T_evap=-35.0, T_cond=35.0, flow_m3h=500.0)
    base.update(overrides)
    return TwoStageSingleInput(**base)


class TestIntermediatePressure:
    def test_geometric_mean_without_hp_volume(self):
        r = solve_two_stage_single(_inputs())
        assert r.P_mid_method == "geometric mean"
        assert r.P_mid == pytest.approx(math.sqrt(r.Pe * r.Pc))
        assert not r.warnings

    def test_manual(self):
        r = solve_two_stage_single(_inputs(pressure_mode=PressureMode.MANUAL, T_mid_sat=-5.0))
        assert r.P_mid_method == "manual"
        assert r.T_mid_sat == pytest.approx(268.15)

    def test_manual_requires_temperature(self):
        with pytest.raises(CalculationError):
            solve_two_stage_single(_inputs(pressure_mode=PressureMode.MANUAL))

    def test_volume_match(self):
        r = solve_two_stage_single(_inputs(disp_hp=200.0))
        assert r.P_mid_method == "volume match"
        assert r.Pe < r.P_mid < r.Pc

    def test_larger_hp_rotor_lowers_pressure(self):
        small = solve_two_stage_single(_inputs(disp_hp=150.0))
        large = solve_two_stage_single(_inputs(disp_hp=250.0))
        assert large.P_mid < small.P_mid

    def test_vi_ratio_sets_hp_volume(self):
        a = solve_two_stage_single(_inputs(disp_hp=200.0))
        b = solve_two_stage_single(_inputs(vi_ratio=2.5))
        assert b.P_mid == pytest.approx(a.P_mid, rel=1e-9)

    def test_model_lookup(self):
        a = solve_two_stage_single(_inputs(compressor_model="1610SLC-52", flow_m3h=367.0))
        b = solve_two_stage_single(_inputs(disp_hp=135.0, flow_m3h=367.0))
        assert a.P_mid == pytest.approx(b.P_mid)

    def test_unbracketed_search_returns_none(self):
        fluid = get_fluid("R717")
        op = operating_point(fluid, -35.0, 35.0, 5.0, 5.0)
        assert optimal_intermediate_pressure(fluid, op, 500.0, 5000.0, 0.8, 0.75) is None

    def test_unbracketed_search_warns(self):
        r = solve_two_stage_single(_inputs(disp_hp=5000.0))
        assert r.P_mid_method == "geometric mean"
        assert any("did not converge" in w for w in r.warnings)


class TestCompoundCycle:
    def test_energy_balance_adiabatic(self):
        r = solve_two_stage_single(_inputs())
        assert r.oil_load == 0.0
        assert r.condenser_duty == pytest.approx(r.cooling_capacity + r.shaft_power, rel=1e-6)

    def test_energy_balance_with_oil_cooling(self):
        r = solve_two_stage_single(_inputs(T_discharge_lp=40.0, T_discharge=80.0))
        assert r.oil_load_lp > 0
        assert r.oil_load_hp > 0
        total_in = r.cooling_capacity + r.shaft_power
        assert r.condenser_duty + r.oil_load == pytest.approx(total_in, rel=1e-6)
        assert r.T_discharge == pytest.approx(353.15)

    def test_injection_flow(self):
        r = solve_two_stage_single(_inputs())
        assert r.injection_flow > 0
        assert r.total_flow == pytest.approx(r.mass_flow + r.injection_flow)

    def test_subcooler_selection_balanced(self):
        r = solve_two_stage_single(_inputs())
        sub = r.subcooler
        assert sub.hot_duty == pytest.approx(sub.cold_duty, rel=1e-6)
        assert sub.hot_out.T_C == pytest.approx(r.T_mid_sat - 273.15 + 5.0, abs=0.01)
        assert sub.hot_in.T_C > sub.hot_out.T_C

    def test_slhx(self):
        plain = solve_two_stage_single(_inputs())
        slhx = solve_two_stage_single(_inputs(slhx=True, slhx_effectiveness=0.5))
        assert slhx.slhx_duty > 0
        assert {"1'", "5'"} <= {p.name for p in slhx.state_points}
        assert slhx.condenser_duty == pytest.approx(slhx.cooling_capacity + slhx.shaft_power, rel=1e-6)
        assert slhx.mass_flow < plain.mass_flow

    def test_auto_efficiency(self):
        r = solve_two_stage_single(_inputs(auto_efficiency=True))
        assert r.eta_s_lp == pytest.approx(r.eta_s_hp)

    def test_summary(self):
        r = solve_two_stage_single(_inputs())
        rows = {name: value for name, value, _ in r.summary_rows()}
        assert rows["Total shaft power"] == pytest.approx(r.shaft_power / 1e3)
        assert r.cop_cooling == pytest.approx(r.cooling_capacity / r.shaft_power)


class TestValidation:
    def test_zero_flow(self):
        with pytest.raises(CalculationError):
            solve_two_stage_single(_inputs(flow_m3h=0.0))

    def test_slhx_effectiveness(self):
        with pytest.raises(CalculationError):
            solve_two_stage_single(_inputs(slhx=True, slhx_effectiveness=1.5))

    def test_unknown_model(self):
        with pytest.raises(CalculationError):
            solve_two_stage_single(_inputs(compressor_model="nope"))
