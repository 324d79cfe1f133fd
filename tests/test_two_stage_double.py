"""Tests for the two-compressor two-stage mode."""

import math

import pytest

from compeff_pro.core.fluids import get_fluid
from compeff_pro.cycle.common import PressureMode
from compeff_pro.cycle.components.economizer import EconomizerType
from compeff_pro.cycle.two_stage_double import TwoStageDoubleInput, solve_two_stage_double
from compeff_pro.utils.validation import CalculationError


def _inputs(**overrides) -> TwoStageDoubleInput:
    base = dict(fluid="R717", T_evap=-35.0, T_cond=35.0, flow_m3h_lp=500.0, flow_m3h_hp=200.0)
    base.update(overrides)
    return TwoStageDoubleInput(**base)


class TestBoosterCycle:
    def test_geometric_mean_pressure(self):
        r = solve_two_stage_double(_inputs())
        assert r.P_mid == pytest.approx(math.sqrt(r.Pe * r.Pc))

    def test_manual_pressure(self):
        r = solve_two_stage_double(_inputs(pressure_mode=PressureMode.MANUAL, T_mid_sat=-10.0))
        assert r.T_mid_sat == pytest.approx(263.15, abs=0.01)

    def test_energy_balance_without_economizers(self):
        r = solve_two_stage_double(_inputs())
        assert r.hp_flow == pytest.approx(r.mass_flow)
        assert r.condenser_duty == pytest.approx(r.cooling_capacity + r.shaft_power, rel=1e-6)
        assert not r.economizers

    def test_oil_cooled_stages(self):
        r = solve_two_stage_double(_inputs(T_discharge_lp=30.0, T_discharge=80.0))
        assert r.oil_load_lp > 0
        assert r.oil_load_hp > 0
        assert r.T_lp_discharge == pytest.approx(303.15)
        total = r.condenser_duty + r.oil_load
        assert total == pytest.approx(r.cooling_capacity + r.shaft_power, rel=1e-6)

    def test_hp_discharge_point_matches_oil_split(self):
        r = solve_two_stage_double(_inputs(ic_eco=True, T_discharge=80.0))
        points = {p.name: p for p in r.state_points}
        assert points["HP-2"].T_C == pytest.approx(r.T_discharge - 273.15, abs=0.01)
        assert points["HP-2"].T_C == pytest.approx(80.0, abs=0.01)
        total = r.condenser_duty + r.oil_load
        assert total == pytest.approx(r.cooling_capacity + r.shaft_power, rel=1e-6)

    def test_hp_capacity(self):
        r = solve_two_stage_double(_inputs(flow_m3h_hp=300.0))
        assert r.hp_utilisation < 1.0
        assert not any("undersized" in w for w in r.warnings)

    def test_undersized_hp_warns(self):
        r = solve_two_stage_double(_inputs(flow_m3h_hp=30.0))
        assert r.hp_utilisation > 1.0
        assert any("undersized" in w for w in r.warnings)

    def test_auto_efficiency(self):
        r = solve_two_stage_double(_inputs(auto_efficiency=True, eta_s_lp=0.0))
        assert r.eta_s_lp == pytest.approx(r.eta_s_hp)

    def test_state_points(self):
        r = solve_two_stage_double(_inputs())
        assert [p.name for p in r.state_points] == ["LP-1", "LP-2", "HP-1", "HP-2", "3", "4"]


class TestEconomizerPositions:
    def test_intercooler_flash_tank(self):
        plain = solve_two_stage_double(_inputs())
        r = solve_two_stage_double(_inputs(ic_eco=True, ic_eco_type=EconomizerType.FLASH_TANK))
        assert r.hp_flow > r.lp_flow
        assert r.cooling_capacity > plain.cooling_capacity
        assert r.condenser_duty == pytest.approx(r.cooling_capacity + r.shaft_power, rel=1e-6)
        assert r.economizers[0].position == "intercooler"

    def test_hp_subcooler(self):
        r = solve_two_stage_double(_inputs(hp_eco=True))
        eco = r.economizers[0]
        assert eco.kind == EconomizerType.SUBCOOLER
        assert eco.injection_flow > 0
        assert {"HP-5", "HP-6", "HP-7"} <= {p.name for p in r.state_points}

    def test_lp_economizer_adds_lp_flow(self):
        r = solve_two_stage_double(_inputs(lp_eco=True))
        assert r.lp_flow > r.mass_flow

    def test_lp_flash_injection_is_superheated(self):
        r = solve_two_stage_double(_inputs(lp_eco=True, lp_eco_type=EconomizerType.FLASH_TANK, lp_eco_superheat=10.0))
        eco = r.economizers[0]
        assert eco.position == "lp"
        fluid = get_fluid("R717")
        assert eco.h_injection == pytest.approx(fluid.enthalpy(r.T_mid_sat + 10.0, r.P_mid), rel=1e-6)
        assert eco.h_injection > fluid.saturated_enthalpy(r.T_mid_sat, 1.0)

    def test_intercooler_flash_injects_saturated_vapour(self):
        r = solve_two_stage_double(_inputs(ic_eco=True, ic_eco_type=EconomizerType.FLASH_TANK, ic_eco_superheat=10.0))
        eco = r.economizers[0]
        assert eco.h_injection == pytest.approx(get_fluid("R717").saturated_enthalpy(r.T_mid_sat, 1.0), rel=1e-6)

    def test_hp_economizer_feeds_evaporator(self):
        r = solve_two_stage_double(_inputs(ic_eco=True, hp_eco=True))
        by_position = {e.position: e for e in r.economizers}
        points = {p.name: p for p in r.state_points}
        assert points["4"].h_kJ == pytest.approx(by_position["hp"].h_liquid_out / 1e3)

    def test_intercooler_feeds_when_hp_off(self):
        r = solve_two_stage_double(_inputs(lp_eco=True, ic_eco=True))
        by_position = {e.position: e for e in r.economizers}
        points = {p.name: p for p in r.state_points}
        assert points["4"].h_kJ == pytest.approx(by_position["intercooler"].h_liquid_out / 1e3)

    def test_inactive_economizer_warns(self):
        r = solve_two_stage_double(_inputs(ic_eco=True, ic_eco_type=EconomizerType.SUBCOOLER, ic_eco_dt=60.0))
        assert not r.economizers
        assert any("Intercooler economizer inactive" in w for w in r.warnings)


class TestValidation:
    def test_hp_volume_required(self):
        with pytest.raises(CalculationError):
            solve_two_stage_double(_inputs(flow_m3h_hp=0.0))

    def test_manual_requires_temperature(self):
        with pytest.raises(CalculationError):
            solve_two_stage_double(_inputs(pressure_mode=PressureMode.MANUAL))

    def test_manual_outside_range(self):
        with pytest.raises(CalculationError):
            solve_two_stage_double(_inputs(pressure_mode=PressureMode.MANUAL, T_mid_sat=40.0))
