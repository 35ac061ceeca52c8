"""Unit conversion for magnitude fields.

Lengths are stored in meters and masses in kilograms. Every other unit is
derived at read time from a fixed factor relative to the canonical unit.
Factors are exact rationals so that canonical -> X -> canonical reproduces
the stored value.
"""

from enum import Enum
from fractions import Fraction

from .errors import ConversionError


class LengthUnit(str, Enum):
    """Supported length units (canonical: METER)."""

    MILLIMETER = "MILLIMETER"
    CENTIMETER = "CENTIMETER"
    METER = "METER"
    KILOMETER = "KILOMETER"
    INCH = "INCH"
    FOOT = "FOOT"
    YARD = "YARD"
    MILE = "MILE"


class MassUnit(str, Enum):
    """Supported mass units (canonical: KILOGRAM)."""

    GRAM = "GRAM"
    KILOGRAM = "KILOGRAM"
    METRIC_TON = "METRIC_TON"
    POUND = "POUND"


# Size of one unit, expressed in the canonical unit of its family
FACTORS: dict[Enum, Fraction] = {
    LengthUnit.MILLIMETER: Fraction(1, 1000),
    LengthUnit.CENTIMETER: Fraction(1, 100),
    LengthUnit.METER: Fraction(1),
    LengthUnit.KILOMETER: Fraction(1000),
    LengthUnit.INCH: Fraction("0.0254"),
    LengthUnit.FOOT: Fraction("0.3048"),
    LengthUnit.YARD: Fraction("0.9144"),
    LengthUnit.MILE: Fraction("1609.344"),
    MassUnit.GRAM: Fraction(1, 1000),
    MassUnit.KILOGRAM: Fraction(1),
    MassUnit.METRIC_TON: Fraction(1000),
    MassUnit.POUND: Fraction("0.45359237"),
}

CANONICAL_UNITS = {
    LengthUnit: LengthUnit.METER,
    MassUnit: MassUnit.KILOGRAM,
}

UnitFamily = type[LengthUnit] | type[MassUnit]


def _factor(unit) -> Fraction:
    if not isinstance(unit, (LengthUnit, MassUnit)):
        raise ConversionError(f"Unsupported unit: {unit!r}")
    return FACTORS[unit]


def convert(value: float, unit: LengthUnit | MassUnit, family: UnitFamily | None = None) -> float:
    """Convert a canonical magnitude into ``unit``.

    Passing ``family`` asserts which family the magnitude belongs to.
    """
    if family is not None and not isinstance(unit, family):
        raise ConversionError(f"{unit!r} is not a {family.__name__}")
    return float(Fraction(value) / _factor(unit))


def to_canonical(value: float, unit: LengthUnit | MassUnit) -> float:
    """Convert a magnitude given in ``unit`` into the canonical unit."""
    return float(Fraction(value) * _factor(unit))


def convert_between(value: float, source: LengthUnit | MassUnit, target: LengthUnit | MassUnit) -> float:
    """Convert a magnitude from one unit to another of the same family."""
    if type(source) is not type(target):
        raise ConversionError(f"Cannot convert {source.value} to {target.value}")
    return float(Fraction(value) * _factor(source) / _factor(target))


def parse_unit(family: UnitFamily, value) -> LengthUnit | MassUnit:
    """Resolve a unit member of ``family`` from a member or its name.

    Raises:
        ValueError: If ``value`` names no unit of the family
    """
    if isinstance(value, family):
        return value
    if isinstance(value, str) and value in family.__members__:
        return family[value]
    raise ValueError(f"Unsupported {family.__name__}: {value!r}")
