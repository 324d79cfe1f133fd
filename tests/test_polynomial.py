"""Tests for AHRI polynomials and the flow-model state."""

import pytest

from compeff_pro.core.polynomial import (
    N_COEFFS,
    FlowModel,
    PolynomialState,
    correction_factor,
    has_correction_data,
    poly10,
    poly_vsd,
)


class TestPoly10:
    def test_constant_term(self):
        assert poly10([2.5] + [0.0] * 9, -10.0, 40.0) == pytest.approx(2.5)

    def test_all_terms_at_unity(self):
        assert poly10(list(range(10)), 1.0, 1.0) == pytest.approx(45.0)

    def test_suction_only_terms(self):
        # D = 0 leaves C0 + C1·S + C3·S² + C6·S³
        assert poly10([1.0] * 10, 2.0, 0.0) == pytest.approx(15.0)

    def test_short_coefficient_list(self):
        assert poly10([1.0, 2.0], 0.0, 0.0) == 0.0


class TestCorrection:
    def test_empty_is_unity(self):
        assert correction_factor([], 0.5) == 1.0

    def test_power_series(self):
        assert correction_factor([1.0, 2.0, 3.0], 2.0) == pytest.approx(17.0)

    def test_has_correction_data(self):
        assert not has_correction_data([0.0, 0.0])
        assert has_correction_data([0.0, 1e-3])

    def test_linear_scaling_without_correction(self):
        base = [10.0] + [0.0] * 9
        assert poly_vsd(base, [0.0] * 4, 0.0, 0.0, 0.5) == pytest.approx(5.0)

    def test_correction_replaces_linear_scaling(self):
        base = [10.0] + [0.0] * 9
        assert poly_vsd(base, [0.2, 0.6], 0.0, 0.0, 0.5) == pytest.approx(5.0)
        assert poly_vsd(base, [1.0], 0.0, 0.0, 0.5) == pytest.approx(10.0)

    def test_zero_base(self):
        assert poly_vsd([0.0] * 10, [1.0], 0.0, 0.0, 2.0) == 0.0


class TestPolynomialState:
    def test_defaults(self):
        state = PolynomialState()
        assert state.mode == FlowModel.GEOMETRY
        assert len(state.mass_flow_coeffs) == N_COEFFS
        assert state.rpm_ratio == 1.0

    def test_set_mode_string(self):
        state = PolynomialState()
        assert state.set_mode("polynomial") is True
        assert state.mode == FlowModel.POLYNOMIAL

    def test_set_mode_invalid_keeps_current(self):
        state = PolynomialState()
        assert state.set_mode("magic") is False
        assert state.mode == FlowModel.GEOMETRY

    def test_update_coeffs_parses_and_truncates(self):
        state = PolynomialState()
        state.update_coeffs("mass_flow", ["1.5", "abc", None, "nan"] + ["1"] * 10)
        assert state.mass_flow_coeffs[:4] == [1.5, 0.0, 0.0, 0.0]
        assert len(state.mass_flow_coeffs) == N_COEFFS

    def test_correction_keeps_all(self):
        state = PolynomialState()
        state.update_coeffs("correction", [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11])
        assert len(state.correction_coeffs) == 11

    def test_vsd_ratio(self):
        state = PolynomialState()
        state.update_vsd(True, rated_rpm=3000.0, current_rpm=1500.0)
        assert state.rpm_ratio == pytest.approx(0.5)
        state.update_vsd(False)
        assert state.rpm_ratio == 1.0

    def test_mass_flow_and_power(self):
        state = PolynomialState()
        state.update_coeffs("mass_flow", [0.5] + [0.0] * 9)
        state.update_coeffs("power", [20.0, 0.0, 0.1] + [0.0] * 7)
        assert state.mass_flow(-10.0, 40.0) == pytest.approx(0.5)
        assert state.power(-10.0, 40.0) == pytest.approx(24.0)
