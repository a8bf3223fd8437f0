"""
Unit tests for zoning_normalizer module
"""
import pytest

from src.sitelot.models.zoning import LayerAttributes
from src.sitelot.transformers.zoning_normalizer import (
    NORMALIZATION_RULES,
    as_finite_float,
    as_ratio,
    as_text,
    normalize_zoning,
)


def layers(**kwargs) -> LayerAttributes:
    return LayerAttributes(**kwargs)


class TestCoercers:
    """Tests for the value coercion helpers"""

    def test_as_text_strips(self):
        assert as_text("  R2 ") == "R2"

    def test_as_text_blank_is_none(self):
        assert as_text("   ") is None

    def test_as_text_stringifies_numbers(self):
        assert as_text(12) == "12"

    @pytest.mark.parametrize("value,expected", [
        (8.5, 8.5),
        ("9.5", 9.5),
        (" 12 ", 12.0),
        (-3, -3.0),
    ])
    def test_as_finite_float_valid(self, value, expected):
        assert as_finite_float(value) == expected

    @pytest.mark.parametrize("value", ["abc", "NaN", "inf", float("nan"), True, {"x": 1}, [1]])
    def test_as_finite_float_invalid(self, value):
        assert as_finite_float(value) is None

    @pytest.mark.parametrize("value,expected", [
        ("0.5:1", 0.5),
        ("1.3:1", 1.3),
        ("FSR 0.75", 0.75),
        (".6", 0.6),
        (2, 2.0),
        (0.45, 0.45),
    ])
    def test_as_ratio_valid(self, value, expected):
        assert as_ratio(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["N/A", "", ":", True, float("inf"), None])
    def test_as_ratio_invalid(self, value):
        assert as_ratio(value) is None


class TestNormalizeZoning:
    """Tests for normalize_zoning"""

    def test_zone_code_falls_back_to_sym_code(self):
        """SYM_CODE is used when ZONE_CODE is absent"""
        result = normalize_zoning(layers(zoning={"SYM_CODE": "R2"}))

        assert result.zone.code == "R2"

    def test_zone_code_prefers_zone_code(self):
        result = normalize_zoning(layers(zoning={"ZONE_CODE": "R3", "SYM_CODE": "R2"}))

        assert result.zone.code == "R3"

    def test_blank_value_is_skipped(self):
        result = normalize_zoning(layers(zoning={"ZONE_CODE": "  ", "SYM_CODE": "R2"}))

        assert result.zone.code == "R2"

    def test_zone_name_and_council(self):
        result = normalize_zoning(layers(zoning={
            "MAP_NAME": "Low Density Residential",
            "LGA_NAME": "Example Shire",
        }))

        assert result.zone.name == "Low Density Residential"
        assert result.council == "Example Shire"

    def test_fsr_text_ratio(self):
        """A ratio written as text is parsed to its leading number"""
        result = normalize_zoning(layers(fsr={"FSR": "0.5:1"}))

        assert result.controls.fsr == 0.5

    def test_fsr_numeric_used_directly(self):
        result = normalize_zoning(layers(fsr={"FSR_VALUE": 1.3, "FSR": "0.5:1"}))

        assert result.controls.fsr == 1.3

    def test_fsr_priority_reaches_lay_class(self):
        result = normalize_zoning(layers(fsr={"LAY_CLASS": "0.6:1"}))

        assert result.controls.fsr == pytest.approx(0.6)

    def test_unparseable_first_value_does_not_fall_through(self):
        """The first present value decides, even if it fails coercion"""
        result = normalize_zoning(layers(fsr={"FSR": "N/A", "SYM_CODE": "0.5:1"}))

        assert result.controls.fsr is None

    def test_height_alternates(self):
        assert normalize_zoning(layers(height={"MAX_B_H_M": 8.5})).controls.max_height_m == 8.5
        assert normalize_zoning(layers(height={"HOB_M": "9.5"})).controls.max_height_m == 9.5
        assert normalize_zoning(layers(height={"MAX_B_H": 12})).controls.max_height_m == 12.0

    def test_height_non_finite_is_none(self):
        result = normalize_zoning(layers(height={"MAX_B_H_M": "NaN"}))

        assert result.controls.max_height_m is None

    def test_negative_height_passes_through(self):
        result = normalize_zoning(layers(height={"MAX_B_H_M": -4}))

        assert result.controls.max_height_m == -4.0

    def test_min_lot_size(self):
        result = normalize_zoning(layers(lot_size={"LOTSIZE_MIN": "450"}))

        assert result.controls.min_lot_size_sqm == 450.0

    def test_min_lot_size_malformed(self):
        result = normalize_zoning(layers(lot_size={"LOTSIZE_MIN": {"value": 450}}))

        assert result.controls.min_lot_size_sqm is None

    def test_empty_layers(self):
        """No features on any layer gives an all-None summary"""
        result = normalize_zoning(layers())

        assert result.council is None
        assert result.zone.code is None
        assert result.zone.name is None
        assert result.controls.max_height_m is None
        assert result.controls.fsr is None
        assert result.controls.min_lot_size_sqm is None

    def test_deterministic(self):
        raw = layers(
            zoning={"ZONE_CODE": "R2", "LGA_NAME": "Example Shire"},
            height={"MAX_B_H_M": 8.5},
            fsr={"FSR": "0.5:1"},
            lot_size={"LOTSIZE_MIN": 450},
        )

        assert normalize_zoning(raw) == normalize_zoning(raw)

    def test_priority_lists_are_fixed(self):
        def fields(name):
            return [field for field, _ in NORMALIZATION_RULES[name].candidates]

        assert fields("zone_code") == ["ZONE_CODE", "SYM_CODE"]
        assert fields("max_height_m") == ["MAX_B_H_M", "HOB_M", "MAX_B_H"]
        assert fields("fsr") == ["FSR_VALUE", "FSR", "SYM_CODE", "LAY_CLASS"]
        assert fields("min_lot_size_sqm") == ["LOTSIZE_MIN"]

    def test_never_raises_on_odd_values(self):
        raw = layers(
            zoning={"ZONE_CODE": ["R2"], "LGA_NAME": 7},
            height={"MAX_B_H_M": object()},
            fsr={"FSR_VALUE": float("nan")},
            lot_size={"LOTSIZE_MIN": "1e999"},
        )

        result = normalize_zoning(raw)

        assert result.council == "7"
        assert result.controls.max_height_m is None
        assert result.controls.fsr is None
        assert result.controls.min_lot_size_sqm is None
