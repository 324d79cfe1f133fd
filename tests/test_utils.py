"""Tests for utility modules."""

import pytest

from compeff_pro.utils.units import (
    convert,
    get_unit_registry,
    power_from_si,
    pressure_from_si,
    pressure_to_si,
    temperature_from_si,
    temperature_to_si,
    to_bar,
    to_celsius,
    volume_flow_to_m3h,
    volume_flow_to_si,
)
from compeff_pro.utils.validation import (
    CalculationError,
    Severity,
    ValidationResult,
    validate_discharge_estimate,
    validate_efficiency,
    validate_positive,
    validate_range,
    validate_temperature_lift,
)


class TestUnits:
    def test_short_pretty_format(self):
        registry = get_unit_registry()
        assert registry.formatter.default_format == "~P"
        assert f"{registry.Quantity(3.0, 'bar')}" == "3.0 bar"

    def test_bar_to_pa(self):
        assert pressure_to_si(1.0, "bar") == pytest.approx(1e5)

    def test_psi_to_pa(self):
        assert pressure_to_si(14.696, "psi") == pytest.approx(101325, rel=1e-3)

    def test_celsius_to_kelvin(self):
        assert temperature_to_si(0.0, "degC") == pytest.approx(273.15)

    def test_kelvin_to_fahrenheit(self):
        assert temperature_from_si(273.15, "degF") == pytest.approx(32.0)

    def test_pa_to_bar(self):
        assert pressure_from_si(2.5e5, "bar") == pytest.approx(2.5)

    def test_cfm_to_si(self):
        assert volume_flow_to_si(1.0, "ft**3/min") == pytest.approx(4.719474e-4, rel=1e-5)

    def test_watts_to_kilowatts(self):
        assert power_from_si(1500.0, "kW") == pytest.approx(1.5)

    def test_fahrenheit_to_celsius(self):
        assert to_celsius(32.0, "degF") == pytest.approx(0.0)

    def test_celsius_passthrough(self):
        assert to_celsius(None, "degF") is None
        assert to_celsius(-10.0, "degC") == -10.0

    def test_kpa_to_bar(self):
        assert to_bar(100.0, "kPa") == pytest.approx(1.0)

    def test_litres_per_second_to_m3h(self):
        assert volume_flow_to_m3h(1.0, "L/s") == pytest.approx(3.6)

    def test_convert_volume_flow(self):
        assert convert(3600.0, "m**3/hour", "m**3/s") == pytest.approx(1.0)


class TestValidation:
    def test_positive(self):
        r = ValidationResult()
        validate_positive("flow_m3h", -1.0, r)
        assert not r.is_valid
        assert r.errors[0].parameter == "flow_m3h"

    def test_range_warning_keeps_valid(self):
        r = ValidationResult()
        validate_range("superheat", 60.0, 0.0, 50.0, r, severity=Severity.WARNING)
        assert r.is_valid
        assert r.has_warnings
        assert r.warning_texts()

    def test_efficiency_bounds(self):
        r = ValidationResult()
        validate_efficiency("eta_s", 1.0, r)
        assert r.is_valid
        validate_efficiency("eta_s", 0.0, r)
        assert not r.is_valid

    def test_temperature_lift(self):
        r = ValidationResult()
        validate_temperature_lift(40.0, 30.0, r)
        assert not r.is_valid
        assert "Condensing temperature" in r.errors[0].message

    def test_discharge_estimate(self):
        r = ValidationResult()
        validate_discharge_estimate(35.0, 40.0, r)
        assert not r.is_valid

    def test_raise_for_errors(self):
        r = ValidationResult()
        r.error("a", "first")
        r.error("b", "second")
        with pytest.raises(CalculationError, match="first; second"):
            r.raise_for_errors()

    def test_calculation_error_is_value_error(self):
        assert issubclass(CalculationError, ValueError)

    def test_merge(self):
        a = ValidationResult()
        b = ValidationResult()
        b.info("x", "note")
        a.merge(b)
        assert len(a.messages) == 1
        assert a.is_valid
