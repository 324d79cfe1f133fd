"""Tests for the empirical compressor efficiency correlations."""

import pytest

from compeff_pro.core.efficiency import (
    auto_efficiency_two_stage,
    empirical_efficiencies,
    isothermal_from_isentropic,
    screw_efficiency,
)


class TestEmpirical:
    def test_peak_at_optimum_ratio(self):
        est = empirical_efficiencies(3.8)
        assert est.eta_s == pytest.approx(0.78)
        assert est.eta_v == pytest.approx(0.914)

    def test_eta_s_falls_away_from_optimum(self):
        assert empirical_efficiencies(8.0).eta_s < empirical_efficiencies(3.8).eta_s
        assert empirical_efficiencies(1.5).eta_s < empirical_efficiencies(3.8).eta_s

    def test_eta_v_decreases_with_ratio(self):
        assert empirical_efficiencies(6.0).eta_v < empirical_efficiencies(2.0).eta_v

    def test_clamped_bands(self):
        est = empirical_efficiencies(40.0)
        assert est.eta_v >= 0.60
        assert est.eta_s >= 0.50

    def test_isothermal_below_isentropic(self):
        est = empirical_efficiencies(4.0)
        assert est.eta_iso < est.eta_s

    @pytest.mark.parametrize("pr", [1.0, 0.5])
    def test_invalid_ratio(self, pr):
        with pytest.raises(ValueError):
            empirical_efficiencies(pr)

    def test_isothermal_conversion_rejects_low_ratio(self):
        with pytest.raises(ValueError):
            isothermal_from_isentropic(0.7, 1.0)


class TestScrew:
    def test_matched_vi_is_best(self):
        # Vi = 3.6 gives an internal pressure ratio near 5.35
        matched = screw_efficiency(5.35 * 2.0, 2.0, vi=3.6)
        over = screw_efficiency(12.0 * 2.0, 2.0, vi=3.6)
        assert matched.eta_s > over.eta_s

    def test_economizer_penalty(self):
        plain = screw_efficiency(12.0, 3.0)
        eco = screw_efficiency(12.0, 3.0, economizer=True)
        assert eco.eta_s < plain.eta_s
        assert eco.eta_v < plain.eta_v

    def test_pressure_ratio_reported(self):
        assert screw_efficiency(12.0, 3.0).pressure_ratio == pytest.approx(4.0)

    def test_discharge_below_suction(self):
        with pytest.raises(ValueError):
            screw_efficiency(2.0, 3.0)

    def test_invalid_vi(self):
        with pytest.raises(ValueError):
            screw_efficiency(12.0, 3.0, vi=1.0)


class TestTwoStage:
    def test_stages_share_geometric_mean(self):
        lp, hp = auto_efficiency_two_stage("R717", -35.0, 35.0)
        # Geometric-mean intermediate pressure splits the ratio evenly
        assert lp.pressure_ratio == pytest.approx(hp.pressure_ratio, rel=1e-6)
        assert lp.eta_s == pytest.approx(hp.eta_s)
