"""Tests for unit conversion."""

import itertools

import pytest

from swapi_graph.errors import ConversionError
from swapi_graph.units import (
    LengthUnit,
    MassUnit,
    convert,
    convert_between,
    parse_unit,
    to_canonical,
)


class TestConvert:
    """Conversion from canonical magnitudes."""

    def test_centimeters_to_meters(self):
        stored = to_canonical(172, LengthUnit.CENTIMETER)
        assert convert(stored, LengthUnit.METER) == 1.72
        assert convert(stored, LengthUnit.CENTIMETER) == 172.0

    def test_exact_definitions(self):
        assert convert(1609.344, LengthUnit.MILE) == 1.0
        assert convert(0.9144, LengthUnit.YARD) == 1.0
        assert convert(0.45359237, MassUnit.POUND) == 1.0
        assert convert(2500, MassUnit.METRIC_TON) == 2.5
        assert convert(1.5, MassUnit.GRAM) == 1500.0

    def test_feet_and_inches(self):
        assert convert(1.0, LengthUnit.FOOT) == pytest.approx(3.280839895)
        assert convert(1.0, LengthUnit.INCH) == pytest.approx(39.37007874)

    @pytest.mark.parametrize("unit", list(LengthUnit) + list(MassUnit))
    def test_round_trip(self, unit):
        for value in (0.0, 1.72, 77.0, 10465000.0, 0.003):
            assert to_canonical(convert(value, unit), unit) == pytest.approx(value, rel=1e-9)

    @pytest.mark.parametrize("family", [LengthUnit, MassUnit])
    def test_composition_matches_direct(self, family):
        value = 34.37
        for first, second in itertools.product(family, repeat=2):
            via = convert_between(convert(value, first), first, second)
            assert via == pytest.approx(convert(value, second), rel=1e-9)

    def test_rejects_unvalidated_units(self):
        with pytest.raises(ConversionError):
            convert(1.0, "METER")
        with pytest.raises(ConversionError):
            convert_between(1.0, LengthUnit.METER, MassUnit.GRAM)


class TestParseUnit:
    """Resolving unit names."""

    def test_names_and_members(self):
        assert parse_unit(LengthUnit, "METER") is LengthUnit.METER
        assert parse_unit(MassUnit, MassUnit.POUND) is MassUnit.POUND

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            parse_unit(LengthUnit, "FURLONG")

    def test_wrong_family(self):
        with pytest.raises(ValueError):
            parse_unit(LengthUnit, "GRAM")
        with pytest.raises(ValueError):
            parse_unit(MassUnit, LengthUnit.METER)
