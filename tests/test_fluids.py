"""Tests for the CoolProp fluid wrapper and fluid catalogue."""

import pytest

from compeff_pro.core.fluids import (
    Fluid,
    FluidPropertyError,
    fluid_summary,
    get_fluid,
    get_fluid_info,
    list_fluids,
)


class TestFluid:
    def test_catalogue_name_maps_to_coolprop(self):
        fluid = get_fluid("R717")
        assert fluid.name == "Ammonia"

    def test_raw_coolprop_name(self):
        assert get_fluid("Nitrogen").name == "Nitrogen"

    def test_instances_are_cached(self):
        assert get_fluid("R717") is get_fluid("R717")
        assert get_fluid("R717") is not get_fluid("R134a")

    def test_unknown_fluid(self):
        with pytest.raises(FluidPropertyError):
            Fluid("NotAFluid")

    def test_saturation_round_trip(self):
        fluid = get_fluid("R134a")
        p = fluid.saturation_pressure(273.15)
        assert p == pytest.approx(2.93e5, rel=0.01)
        assert fluid.saturation_temperature(p, 1.0) == pytest.approx(273.15, abs=0.01)

    def test_latent_heat_positive(self):
        fluid = get_fluid("R717")
        h_l = fluid.saturated_enthalpy(253.15, 0.0)
        h_v = fluid.saturated_enthalpy(253.15, 1.0)
        assert h_v - h_l > 1.0e6

    def test_quality_single_phase(self):
        fluid = get_fluid("R134a")
        h = fluid.enthalpy(320.0, 3e5)
        assert fluid.quality(3e5, h) == -1.0

    def test_quality_two_phase(self):
        fluid = get_fluid("R134a")
        T = 273.15
        h = 0.5 * (fluid.saturated_enthalpy(T, 0.0) + fluid.saturated_enthalpy(T, 1.0))
        assert fluid.quality(fluid.saturation_pressure(T), h) == pytest.approx(0.5, abs=0.01)

    def test_gas_constant_air(self):
        assert get_fluid("Air").gas_constant == pytest.approx(287.0, rel=0.005)

    def test_props_bundle(self):
        props = get_fluid("Nitrogen").props_at_TP(300.0, 1e5)
        assert props["Q"] == -1.0
        assert props["rho"] == pytest.approx(1.123, rel=0.01)

    def test_property_failure_raises(self):
        with pytest.raises(FluidPropertyError):
            get_fluid("R134a").saturation_pressure(500.0)


class TestCatalogue:
    def test_list_all(self):
        names = list_fluids()
        assert "R717" in names
        assert "Air" in names

    def test_gas_mode_fluids(self):
        gases = list_fluids("m3")
        assert "Air" in gases
        assert "R134a" not in gases

    def test_heat_pump_offers_ammonia(self):
        assert "R717" in list_fluids("m7")

    def test_info_case_insensitive(self):
        assert get_fluid_info("r717")["formula"] == "NH3"

    def test_info_unknown(self):
        with pytest.raises(KeyError):
            get_fluid_info("R999")

    def test_summary(self):
        s = fluid_summary("R717")
        assert s["T_critical_C"] == pytest.approx(132.25, abs=0.5)
        assert s["P_critical_bar"] == pytest.approx(113.3, rel=0.01)
        assert s["T_boiling_C"] == pytest.approx(-33.3, abs=0.5)

