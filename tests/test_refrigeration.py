"""Tests for the single-stage refrigeration compressor mode."""

import pytest

from compeff_pro.cycle.common import EfficiencyBasis, FlowMode, PressureMode
from compeff_pro.cycle.components.economizer import EconomizerType
from compeff_pro.cycle.refrigeration import MAIN_PATH, RefrigerationInput, solve_refrigeration
from compeff_pro.utils.validation import CalculationError


def _inputs(**overrides) -> RefrigerationInput:
    base = dict(fluid="R717", T_evap=-10.0, T_cond=35.0, superheat=5.0, subcooling=3.0, T_discharge=70.0,
                flow_m3h=500.0, eta_v=0.85, eta_s=0.70)
    base.update(overrides)
    return RefrigerationInput(**base)


class TestBasicCycle:
    def test_positive_performance(self):
        r = solve_refrigeration(_inputs())
        assert r.cooling_capacity > 0
        assert r.shaft_power > 0
        assert 1.0 < r.cop_cooling < 10.0
        assert r.cop_heating == pytest.approx(r.cop_cooling + r.shaft_power / r.input_power)

    def test_energy_balance(self):
        r = solve_refrigeration(_inputs())
        assert r.heating_capacity == pytest.approx(r.cooling_capacity + r.shaft_power, rel=1e-6)
        assert r.heating_capacity == pytest.approx(r.condenser_duty + r.oil_load)

    def test_mass_flow_from_swept_volume(self):
        r = solve_refrigeration(_inputs())
        assert r.volume_flow_actual == pytest.approx(500.0 * 0.85)
        r2 = solve_refrigeration(_inputs(flow_m3h=1000.0))
        assert r2.mass_flow == pytest.approx(2 * r.mass_flow)

    def test_rpm_flow_mode(self):
        # 500 m³/h at 2900 rpm
        disp = 500.0 / 60.0 / 2900.0 * 1e6
        a = solve_refrigeration(_inputs())
        b = solve_refrigeration(_inputs(flow_mode=FlowMode.RPM, rpm=2900.0, displacement_cm3=disp))
        assert b.mass_flow == pytest.approx(a.mass_flow)

    def test_discharge_estimate_kept(self):
        r = solve_refrigeration(_inputs())
        assert r.T_discharge == pytest.approx(343.15)
        assert r.oil_load > 0
        assert not r.discharge_corrected

    def test_hot_estimate_corrected(self):
        r = solve_refrigeration(_inputs(T_discharge=250.0))
        assert r.discharge_corrected
        assert r.oil_load == 0.0
        assert r.warnings

    def test_efficiency_basis(self):
        shaft = solve_refrigeration(_inputs(motor_efficiency=0.9))
        inp = solve_refrigeration(_inputs(motor_efficiency=0.9, efficiency_basis=EfficiencyBasis.INPUT))
        assert shaft.input_power == pytest.approx(shaft.shaft_power / 0.9)
        assert inp.input_power == pytest.approx(inp.ideal_power / 0.70)
        assert inp.eta_total == pytest.approx(0.70)
        assert inp.input_power < shaft.input_power

    def test_auto_efficiency(self):
        r = solve_refrigeration(_inputs(auto_efficiency=True, eta_v=0.0, eta_s=0.0))
        assert 0.6 <= r.eta_v <= 0.97
        assert 0.5 <= r.eta_s <= 0.82

    def test_state_points(self):
        r = solve_refrigeration(_inputs())
        names = [p.name for p in r.state_points]
        assert names == ["1", "2", "3", "4"]
        assert {p.name for p in r.ph_points} == set(MAIN_PATH) - {"5"}
        assert r.state_points[0].T_C == pytest.approx(-5.0)

    def test_summary_and_label(self):
        r = solve_refrigeration(_inputs())
        rows = dict((name, value) for name, value, _ in r.summary_rows())
        assert rows["Cooling capacity"] == pytest.approx(r.cooling_capacity / 1e3)
        assert r.history_label().startswith("R717 • ")


class TestEconomizer:
    def test_subcooler_gains_capacity(self):
        plain = solve_refrigeration(_inputs())
        eco = solve_refrigeration(_inputs(economizer=True, economizer_type=EconomizerType.SUBCOOLER))
        assert eco.injection_flow > 0
        assert eco.cooling_capacity > plain.cooling_capacity
        assert eco.economizer_gain_pct > 0
        assert plain.Pe < eco.economizer_pressure < plain.Pc

    def test_flash_tank_energy_balance(self):
        r = solve_refrigeration(_inputs(economizer=True, economizer_type=EconomizerType.FLASH_TANK))
        assert r.injection_flow > 0
        assert r.heating_capacity == pytest.approx(r.cooling_capacity + r.shaft_power, rel=1e-6)

    def test_economizer_points(self):
        r = solve_refrigeration(_inputs(economizer=True))
        assert {"5", "6", "7"} <= {p.name for p in r.state_points}

    def test_manual_pressure(self):
        r = solve_refrigeration(
            _inputs(economizer=True, economizer_pressure_mode=PressureMode.MANUAL, economizer_T_sat=10.0)
        )
        assert r.economizer_T_sat == pytest.approx(283.15)

    def test_manual_pressure_requires_temperature(self):
        with pytest.raises(CalculationError, match="saturation temperature"):
            solve_refrigeration(_inputs(economizer=True, economizer_pressure_mode=PressureMode.MANUAL))


class TestValidation:
    def test_inverted_temperatures(self):
        with pytest.raises(CalculationError):
            solve_refrigeration(_inputs(T_evap=40.0, T_cond=30.0))

    def test_discharge_below_condensing(self):
        with pytest.raises(CalculationError):
            solve_refrigeration(_inputs(T_discharge=30.0))

    def test_efficiency_out_of_range(self):
        with pytest.raises(CalculationError):
            solve_refrigeration(_inputs(eta_s=1.5))

    def test_zero_flow(self):
        with pytest.raises(CalculationError):
            solve_refrigeration(_inputs(flow_m3h=0.0))
