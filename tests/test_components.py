"""Tests for the cycle component models."""

import pytest

from compeff_pro.core.fluids import get_fluid
from compeff_pro.cycle.components.base import FluidState, StatePoint
from compeff_pro.cycle.components.compressor import CompressorStage, apply_oil_cooling
from compeff_pro.cycle.components.economizer import (
    EconomizerType,
    FlashTank,
    SubcoolerEconomizer,
    make_economizer,
    mix_enthalpy,
)
from compeff_pro.cycle.components.heat_exchanger import SuctionLineHeatExchanger, WaterCircuit, WaterExchanger
from compeff_pro.cycle.components.valve import ExpansionValve
from compeff_pro.utils.validation import CalculationError


@pytest.fixture(scope="module")
def r134a():
    return get_fluid("R134a")


def _suction(fluid, T_sat=263.15, superheat=5.0, m=0.5) -> FluidState:
    P = fluid.saturation_pressure(T_sat, 1.0)
    return FluidState.from_tp(fluid, T_sat + superheat, P, m)


def _liquid(fluid, T_sat=313.15, subcooling=5.0, m=0.5) -> FluidState:
    P = fluid.saturation_pressure(T_sat, 0.0)
    return FluidState.from_tp(fluid, T_sat - subcooling, P, m)


class TestFluidState:
    def test_defaults(self):
        s = FluidState()
        assert s.pressure == 0.0
        assert s.is_two_phase is False

    def test_two_phase(self):
        assert FluidState(quality=0.5).is_two_phase is True

    def test_display_units(self):
        s = FluidState(pressure=2e5, temperature=283.15, enthalpy=250e3)
        assert s.pressure_bar == pytest.approx(2.0)
        assert s.temperature_C == pytest.approx(10.0)
        assert s.enthalpy_kJ == pytest.approx(250.0)

    def test_to_point(self, r134a):
        point = _suction(r134a).to_point("1", "Suction")
        assert isinstance(point, StatePoint)
        assert point.T_C == pytest.approx(-5.0)
        assert point.as_dict()["name"] == "1"

    def test_with_flow(self, r134a):
        s = _suction(r134a, m=0.5)
        assert s.with_flow(2.0).mass_flow == 2.0
        assert s.with_flow(2.0).enthalpy == s.enthalpy


class TestCompressorStage:
    def test_compression(self, r134a):
        stage = CompressorStage(r134a, eta_s=0.7)
        inlet = _suction(r134a)
        Pc = r134a.saturation_pressure(313.15, 1.0)
        outlet = stage.compute(inlet, outlet_pressure=Pc)

        r = stage.result
        assert outlet.pressure == pytest.approx(Pc)
        assert r.shaft_power == pytest.approx(r.ideal_power / 0.7)
        assert outlet.enthalpy > r.h_isentropic
        assert stage.power() > 0
        assert stage.summary()["pressure_ratio"] == pytest.approx(r.pressure_ratio)

    def test_invalid_efficiency(self, r134a):
        with pytest.raises(CalculationError):
            CompressorStage(r134a, eta_s=1.2)

    def test_outlet_below_inlet(self, r134a):
        stage = CompressorStage(r134a)
        inlet = _suction(r134a)
        with pytest.raises(CalculationError):
            stage.compute(inlet, outlet_pressure=inlet.pressure * 0.5)

    def test_discharge_estimate_needs_compute(self, r134a):
        with pytest.raises(RuntimeError):
            CompressorStage(r134a).apply_discharge_estimate(350.0)

    def test_oil_cooling_balance(self, r134a):
        stage = CompressorStage(r134a, eta_s=0.7)
        inlet = _suction(r134a)
        Pc = r134a.saturation_pressure(313.15, 1.0)
        stage.compute(inlet, outlet_pressure=Pc)
        oil = stage.apply_discharge_estimate(318.15)

        r = stage.result
        h_out = r134a.enthalpy(318.15, Pc)
        expected = r.shaft_power - inlet.mass_flow * (h_out - inlet.enthalpy)
        assert oil.corrected is False
        assert oil.oil_load == pytest.approx(expected)
        assert stage.summary()["oil_load_W"] == pytest.approx(expected)

    def test_unreachable_estimate_falls_back_to_adiabatic(self, r134a):
        stage = CompressorStage(r134a, eta_s=0.7)
        inlet = _suction(r134a)
        Pc = r134a.saturation_pressure(313.15, 1.0)
        outlet = stage.compute(inlet, outlet_pressure=Pc)
        oil = stage.apply_discharge_estimate(450.0)

        assert oil.corrected is True
        assert oil.oil_load == 0.0
        assert oil.T_discharge == pytest.approx(outlet.temperature, abs=0.05)

    def test_no_estimate_is_adiabatic(self, r134a):
        inlet = _suction(r134a)
        Pc = r134a.saturation_pressure(313.15, 1.0)
        oil = apply_oil_cooling(r134a, Pc, inlet.mass_flow, inlet.mass_flow * inlet.enthalpy, 10e3)
        assert oil.oil_load == 0.0
        assert oil.h_discharge == pytest.approx(inlet.enthalpy + 10e3 / inlet.mass_flow)

    def test_zero_flow(self, r134a):
        with pytest.raises(CalculationError):
            apply_oil_cooling(r134a, 1e6, 0.0, 0.0, 1e3)


class TestValve:
    def test_isenthalpic(self, r134a):
        liquid = _liquid(r134a)
        Pe = r134a.saturation_pressure(263.15, 1.0)
        out = ExpansionValve(r134a).compute(liquid, outlet_pressure=Pe)
        assert out.enthalpy == pytest.approx(liquid.enthalpy)
        assert out.is_two_phase

    def test_cannot_throttle_upwards(self, r134a):
        liquid = _liquid(r134a)
        with pytest.raises(CalculationError):
            ExpansionValve(r134a).compute(liquid, outlet_pressure=liquid.pressure * 2)

    def test_no_power(self, r134a):
        assert ExpansionValve(r134a).power() == 0.0


class TestEconomizers:
    def test_mix_enthalpy(self):
        assert mix_enthalpy(1.0, 100.0, 3.0, 200.0) == pytest.approx(175.0)
        with pytest.raises(CalculationError):
            mix_enthalpy(0.0, 1.0, 0.0, 1.0)

    def test_flash_tank_mass_balance(self, r134a):
        liquid = _liquid(r134a, m=1.0)
        P_mid = r134a.saturation_pressure(283.15, 0.0)
        tank = FlashTank(r134a)
        out = tank.compute(liquid, pressure=P_mid)

        r = tank.result
        x = r.flash_quality
        assert 0 < x < 1
        assert r.injection_flow == pytest.approx(x / (1 - x))
        assert out.enthalpy == pytest.approx(r134a.saturated_enthalpy(r.T_saturation, 0.0))
        assert r.is_active

    def test_flash_tank_rejects_subcooled_inlet(self, r134a):
        # Liquid colder than the tank saturation does not flash
        liquid = _liquid(r134a, subcooling=40.0)
        P_mid = r134a.saturation_pressure(283.15, 0.0)
        with pytest.raises(CalculationError):
            FlashTank(r134a, strict=True).compute(liquid, pressure=P_mid)
        tank = FlashTank(r134a)
        tank.compute(liquid, pressure=P_mid)
        assert tank.result.injection_flow == 0.0

    def test_subcooler_energy_balance(self, r134a):
        liquid = _liquid(r134a, m=1.0)
        P_mid = r134a.saturation_pressure(283.15, 1.0)
        eco = SubcoolerEconomizer(r134a, injection_superheat=5.0, approach=5.0)
        out = eco.compute(liquid, pressure=P_mid)

        r = eco.result
        assert out.pressure == pytest.approx(liquid.pressure)
        assert out.temperature == pytest.approx(r.T_saturation + 5.0, abs=0.01)
        main = liquid.mass_flow * (liquid.enthalpy - out.enthalpy)
        side = r.injection_flow * (r.injection.enthalpy - r.h_throttled)
        assert main == pytest.approx(side)
        assert r.duty == pytest.approx(main)

    def test_factory(self, r134a):
        assert isinstance(make_economizer("flash_tank", r134a, "eco"), FlashTank)
        assert isinstance(make_economizer(EconomizerType.SUBCOOLER, r134a, "eco"), SubcoolerEconomizer)


class TestSuctionLineHX:
    def test_energy_balance(self, r134a):
        liquid = _liquid(r134a)
        vapour = _suction(r134a)
        hx = SuctionLineHeatExchanger(r134a, effectiveness=0.5)
        out = hx.compute(liquid, vapour_inlet=vapour)

        assert out.temperature < liquid.temperature
        assert hx.vapour_outlet.temperature > vapour.temperature
        dh_liq = liquid.enthalpy - out.enthalpy
        dh_vap = hx.vapour_outlet.enthalpy - vapour.enthalpy
        assert dh_liq == pytest.approx(dh_vap)

    def test_requires_vapour(self, r134a):
        with pytest.raises(ValueError):
            SuctionLineHeatExchanger(r134a).compute(_liquid(r134a))


class TestWaterCircuit:
    def _exchangers(self):
        return [
            WaterExchanger("condenser", enabled=True, approach=5.0, duty=80e3, reference_temperature=75.0),
            WaterExchanger("subcooler", enabled=True, approach=5.0, duty=10e3, reference_temperature=50.0),
            WaterExchanger("oil_cooler", enabled=True, approach=10.0, duty=10e3, reference_temperature=60.0),
            WaterExchanger("desuperheater", enabled=False, duty=5e3),
        ]

    def test_mass_flow_and_order(self):
        result = WaterCircuit(40.0, 70.0).solve(self._exchangers())
        assert result.total_duty == pytest.approx(100e3)
        assert result.mass_flow == pytest.approx(100e3 / (4186.0 * 30.0))
        assert [x.name for x in result.exchangers] == ["subcooler", "oil_cooler", "condenser"]

    def test_temperature_march(self):
        result = WaterCircuit(40.0, 70.0).solve(self._exchangers())
        sub, oil, cond = result.exchangers
        assert sub.T_water_out == pytest.approx(43.0)
        assert oil.T_water_in == pytest.approx(43.0)
        assert oil.T_water_out == pytest.approx(46.0)
        assert cond.T_water_out == pytest.approx(70.0)

    def test_approach_checks(self):
        result = WaterCircuit(40.0, 70.0).solve(self._exchangers())
        sub, oil, cond = result.exchangers
        assert sub.approach_satisfied
        assert oil.approach_actual == pytest.approx(60.0 - 43.0)
        assert cond.approach_actual == pytest.approx(5.0)
        assert not result.warnings

    def test_approach_violation_warns(self):
        exchangers = [WaterExchanger("condenser", enabled=True, approach=5.0, duty=50e3, reference_temperature=72.0)]
        result = WaterCircuit(40.0, 70.0).solve(exchangers)
        assert not result.exchangers[0].approach_satisfied
        assert any("Condenser" in w for w in result.warnings)

    def test_inverted_water_temperatures(self):
        exchangers = [WaterExchanger("condenser", enabled=True, duty=50e3, reference_temperature=80.0)]
        result = WaterCircuit(70.0, 40.0).solve(exchangers)
        assert result.mass_flow == 0.0
        assert result.warnings
