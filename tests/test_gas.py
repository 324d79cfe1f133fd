"""Tests for the oil-injected gas compression mode."""

import math

import pytest

from compeff_pro.cycle.common import EfficiencyBasis
from compeff_pro.cycle.gas import GasCompressionInput, GasEfficiencyType, solve_gas_compression
from compeff_pro.utils.validation import CalculationError


def _inputs(**overrides) -> GasCompressionInput:
    base = dict(fluid="Air", P_in=1.0, T_in=20.0, P_out=8.0, T_discharge=80.0, flow_m3h=100.0,
                eta_v=0.9, efficiency=0.7)
    base.update(overrides)
    return GasCompressionInput(**base)


class TestGasCompression:
    def test_isothermal_power(self):
        r = solve_gas_compression(_inputs())
        expected = r.mass_flow * r.gas_constant * 293.15 * math.log(8.0)
        assert r.isothermal_power == pytest.approx(expected)
        assert r.shaft_power == pytest.approx(expected / 0.7)
        assert r.eta_iso == pytest.approx(0.7)

    def test_isentropic_basis(self):
        r = solve_gas_compression(_inputs(efficiency_type=GasEfficiencyType.ISENTROPIC, efficiency=0.75))
        assert r.eta_s == pytest.approx(0.75)
        assert r.shaft_power == pytest.approx(r.isentropic_power / 0.75)
        # Isothermal work is the lower bound for compression
        assert r.eta_iso < r.eta_s

    def test_energy_split(self):
        r = solve_gas_compression(_inputs())
        assert r.gas_heat + r.oil_load == pytest.approx(r.shaft_power)
        assert r.oil_load > 0

    def test_input_basis(self):
        r = solve_gas_compression(_inputs(efficiency_basis=EfficiencyBasis.INPUT, motor_efficiency=0.9))
        assert r.input_power == pytest.approx(r.isothermal_power / 0.7)

    def test_input_basis_above_unity_warns(self):
        r = solve_gas_compression(
            _inputs(efficiency_basis=EfficiencyBasis.INPUT, motor_efficiency=0.5, efficiency=0.7)
        )
        assert any("exceeds 1" in w for w in r.warnings)

    def test_volume_flow(self):
        r = solve_gas_compression(_inputs())
        assert r.volume_flow_actual == pytest.approx(90.0)
        assert r.specific_power == pytest.approx((r.input_power / 1e3) / 1.5)

    def test_auto_efficiency(self):
        r = solve_gas_compression(_inputs(auto_efficiency=True))
        assert 0.0 < r.eta_iso < r.eta_s < 1.0

    def test_aftercooler(self):
        r = solve_gas_compression(_inputs(aftercooler=True, aftercooler_T_out=35.0, aftercooler_pressure_drop=0.2))
        assert r.P_delivery == pytest.approx(7.8e5)
        assert r.aftercooler_duty > 0
        assert [p.name for p in r.state_points] == ["1", "2", "3"]
        assert "Aftercooler duty" in [row[0] for row in r.summary_rows()]

    def test_aftercooler_hotter_than_discharge_warns(self):
        r = solve_gas_compression(_inputs(aftercooler=True, aftercooler_T_out=120.0))
        assert r.aftercooler_duty < 0
        assert r.warnings

    def test_label(self):
        r = solve_gas_compression(_inputs())
        assert r.history_label().startswith("Air • ")


class TestGasValidation:
    def test_outlet_below_inlet(self):
        with pytest.raises(CalculationError):
            solve_gas_compression(_inputs(P_out=0.5))

    def test_discharge_below_inlet(self):
        with pytest.raises(CalculationError):
            solve_gas_compression(_inputs(T_discharge=10.0))

    def test_negative_oil_load(self):
        with pytest.raises(CalculationError, match="Negative oil load"):
            solve_gas_compression(_inputs(T_discharge=350.0))

    def test_aftercooler_drop_too_large(self):
        with pytest.raises(CalculationError):
            solve_gas_compression(_inputs(aftercooler=True, aftercooler_pressure_drop=9.0))
