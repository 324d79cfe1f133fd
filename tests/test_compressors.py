"""Tests for the screw compressor database."""

import pytest

from compeff_pro.core.compressors import (
    displacement_m3h_to_cm3,
    find_displacement_by_model_string,
    find_model,
    get_all_brands,
    get_displacement_by_model,
    get_filtered_brands,
    get_filtered_series_by_brand,
    get_model_detail,
    get_models_by_series,
    get_series_by_brand,
)


class TestLookup:
    def test_brands(self):
        brands = get_all_brands()
        assert "Bingshan" in brands
        assert "Mayekawa (MYCOM)" in brands

    def test_series(self):
        assert "LG" in get_series_by_brand("Bingshan")
        assert get_series_by_brand("Nobody") == []

    def test_models(self):
        models = get_models_by_series("Bingshan", "LG")
        assert models[0]["model"] == "LG12.5"
        assert get_models_by_series("Bingshan", "XX") == []

    def test_displacement(self):
        assert get_displacement_by_model("Bingshan", "LG", "LG12.5") == pytest.approx(276)
        assert get_displacement_by_model("Bingshan", "LG", "missing") is None

    def test_two_stage_detail(self):
        detail = get_model_detail("Mayekawa (MYCOM)", "LSC two-stage", "1610SLC-52")
        assert detail["disp_lp"] == pytest.approx(367)
        assert detail["disp_hp"] == pytest.approx(135)
        assert detail["vi_ratio"] == pytest.approx(2.7)

    def test_detail_is_a_copy(self):
        detail = get_model_detail("Bingshan", "LG", "LG12.5")
        detail["displacement"] = 0
        assert get_displacement_by_model("Bingshan", "LG", "LG12.5") == pytest.approx(276)

    def test_find_by_model_string(self):
        assert find_displacement_by_model_string("LG12.5") == pytest.approx(276)
        assert find_displacement_by_model_string("nope") is None

    def test_find_model(self):
        brand, series, detail = find_model("1610SLC-52")
        assert brand == "Mayekawa (MYCOM)"
        assert series == "LSC two-stage"
        assert detail["model"] == "1610SLC-52"

    def test_find_model_missing(self):
        with pytest.raises(KeyError, match="Available: .*1610SLC-52"):
            find_model("nope")


class TestFiltering:
    def test_single_stage_modes_offer_everything(self):
        assert get_filtered_brands("m2") == get_all_brands()

    def test_compound_mode_restricts_brands(self):
        assert set(get_filtered_brands("m5")) == {"Mayekawa (MYCOM)", "Hanbell"}

    def test_mayekawa_series_per_mode(self):
        assert get_filtered_series_by_brand("m2", "Mayekawa (MYCOM)") == ["N"]
        assert "LSC two-stage" in get_filtered_series_by_brand("m5", "Mayekawa (MYCOM)")

    def test_hanbell_two_stage(self):
        assert get_filtered_series_by_brand("m5", "Hanbell") == ["LT-S"]

    def test_carrier_levels(self):
        assert get_filtered_series_by_brand("m6", "Carrier", "ht") == ["06TU-G"]
        assert "06TU-G" not in get_filtered_series_by_brand("m6", "Carrier", "lt")

    def test_unfiltered_brand(self):
        assert get_filtered_series_by_brand("m2", "Bingshan") == get_series_by_brand("Bingshan")


class TestConversion:
    def test_m3h_to_cm3(self):
        # 174 m³/h at 2900 rpm is 1000 cm³/rev
        assert displacement_m3h_to_cm3(174.0, 2900.0) == pytest.approx(1000.0)

    def test_invalid_speed(self):
        with pytest.raises(ValueError):
            displacement_m3h_to_cm3(100.0, 0.0)
