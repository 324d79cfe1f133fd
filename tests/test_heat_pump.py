"""Tests for the ammonia heat pump and its hot-water circuit."""

import pytest

from compeff_pro.core.polynomial import FlowModel
from compeff_pro.cycle.heat_pump import HeatPumpInput, solve_heat_pump
from compeff_pro.utils.validation import CalculationError

MASS_FLOW = [0.1] + [0.0] * 9  # kg/s, constant map
POWER = [60.0] + [0.0] * 9  # kW, constant map


def _polynomial(**overrides) -> HeatPumpInput:
    base = dict(flow_model=FlowModel.POLYNOMIAL, mass_flow_coeffs=MASS_FLOW, power_coeffs=POWER)
    base.update(overrides)
    return HeatPumpInput(**base)


class TestGeometryModel:
    def test_default_run(self):
        r = solve_heat_pump(HeatPumpInput())
        assert r.fluid == "R717"
        assert r.mass_flow > 0
        assert r.oil_load > 0
        assert r.T_discharge == pytest.approx(383.15)
        assert r.cop_heating == pytest.approx(r.cop_cooling + 1.0)
        assert not r.warnings

    def test_heating_balance(self):
        r = solve_heat_pump(HeatPumpInput())
        assert r.heating_capacity == pytest.approx(r.cooling_capacity + r.shaft_power, rel=1e-6)

    def test_balance_with_all_exchangers(self):
        r = solve_heat_pump(HeatPumpInput(subcooler=True, desuperheater=True))
        assert r.heating_capacity == pytest.approx(r.cooling_capacity + r.shaft_power, rel=1e-6)
        assert {x.name for x in r.water.exchangers} == {"subcooler", "oil_cooler", "condenser", "desuperheater"}

    def test_auto_efficiency(self):
        r = solve_heat_pump(HeatPumpInput(auto_efficiency=True, eta_s=0.0))
        assert 0 < r.eta_s < 1
        assert 0 < r.eta_v < 1

    def test_unreachable_discharge_is_corrected(self):
        r = solve_heat_pump(HeatPumpInput(T_discharge=300.0))
        assert r.discharge_corrected
        assert r.oil_load == 0.0
        assert any("not reachable" in w for w in r.warnings)


class TestWaterCircuit:
    def test_water_flow_from_duty(self):
        r = solve_heat_pump(HeatPumpInput())
        assert r.water.mass_flow == pytest.approx(r.heating_capacity / (4186.0 * 30.0), rel=1e-2)

    def test_series_temperatures(self):
        r = solve_heat_pump(HeatPumpInput(subcooler=True, desuperheater=True))
        names = [x.name for x in r.water.exchangers]
        assert names == ["subcooler", "oil_cooler", "condenser", "desuperheater"]
        temps = [x.T_water_in for x in r.water.exchangers]
        assert temps == sorted(temps)
        assert r.water.exchangers[0].T_water_in == pytest.approx(40.0)
        assert r.water.exchangers[-1].T_water_out == pytest.approx(70.0)

    def test_subcooler_outlet(self):
        r = solve_heat_pump(HeatPumpInput(subcooler=True))
        points = {p.name: p for p in r.state_points}
        assert points["3'"].T_C == pytest.approx(45.0, abs=0.1)
        assert r.exchanger_duty("subcooler") > 0

    def test_desuperheater_outlet(self):
        r = solve_heat_pump(HeatPumpInput(desuperheater=True, desuperheater_T_out=95.0))
        points = {p.name: p for p in r.state_points}
        assert points["2b"].T_C == pytest.approx(95.0, abs=0.1)
        assert r.exchanger_duty("desuperheater") > 0

    def test_desuperheater_outlet_out_of_range(self):
        r = solve_heat_pump(HeatPumpInput(desuperheater=True, desuperheater_T_out=60.0))
        assert r.exchanger_duty("desuperheater") == 0.0
        assert any("Desuperheater outlet" in w for w in r.warnings)

    def test_condenser_approach_violation(self):
        r = solve_heat_pump(HeatPumpInput(T_water_out=72.0))
        condenser = next(x for x in r.water.exchangers if x.name == "condenser")
        assert not condenser.approach_satisfied
        assert condenser.approach_actual == pytest.approx(3.0)
        assert any("Condenser: approach" in w for w in r.warnings)

    def test_disabled_exchanger_has_no_duty(self):
        r = solve_heat_pump(HeatPumpInput(oil_cooler=False))
        assert r.exchanger_duty("oil_cooler") == 0.0
        assert r.heating_capacity < r.cooling_capacity + r.shaft_power

    def test_ts_points(self):
        r = solve_heat_pump(HeatPumpInput())
        assert [p.name for p in r.ts_points] == [p.name for p in r.ph_points]


class TestPolynomialModel:
    def test_constant_map(self):
        r = solve_heat_pump(_polynomial())
        assert r.flow_model == FlowModel.POLYNOMIAL
        assert r.mass_flow == pytest.approx(0.1)
        assert r.shaft_power == pytest.approx(60e3)
        assert 0 < r.eta_s < 1

    def test_vsd_scales_flow_and_power(self):
        r = solve_heat_pump(_polynomial(vsd_enabled=True, rated_rpm=2900.0, current_rpm=1450.0))
        assert r.mass_flow == pytest.approx(0.05)
        assert r.shaft_power == pytest.approx(30e3)

    def test_missing_coefficients(self):
        with pytest.raises(CalculationError):
            solve_heat_pump(_polynomial(mass_flow_coeffs=[]))

    def test_model_given_as_string(self):
        r = solve_heat_pump(_polynomial(flow_model="polynomial"))
        assert r.flow_model == FlowModel.POLYNOMIAL
        assert r.mass_flow == pytest.approx(0.1)


class TestValidation:
    def test_discharge_below_condensing(self):
        with pytest.raises(CalculationError):
            solve_heat_pump(HeatPumpInput(T_discharge=60.0))

    def test_inverted_temperatures(self):
        with pytest.raises(CalculationError):
            solve_heat_pump(HeatPumpInput(T_evap=80.0))

    def test_unknown_flow_model(self):
        with pytest.raises(CalculationError, match="Unknown flow model"):
            solve_heat_pump(HeatPumpInput(flow_model="magic"))
