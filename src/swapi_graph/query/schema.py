"""Field catalog: what can be selected on each entity kind."""

from dataclasses import dataclass
from enum import Enum

from pydantic.alias_generators import to_camel

from ..models.entities import MEASUREMENTS, MODELS, EntityKind
from ..models.relationships import RELATIONS, RelationDef
from ..units import LengthUnit, MassUnit


class FieldType(str, Enum):
    SCALAR = "scalar"
    MEASUREMENT = "measurement"
    RELATION = "relation"


@dataclass(frozen=True)
class FieldSpec:
    """A selectable field of one entity kind."""

    name: str
    field_type: FieldType
    attr: str | None = None  # model attribute for scalars and measurements
    default_unit: LengthUnit | MassUnit | None = None
    relation: RelationDef | None = None

    @property
    def arguments(self) -> frozenset[str]:
        if self.field_type is FieldType.MEASUREMENT:
            return frozenset({"unit"})
        return frozenset()

    @property
    def unit_family(self) -> type[LengthUnit] | type[MassUnit] | None:
        return type(self.default_unit) if self.default_unit is not None else None


def _build_fields(kind: EntityKind) -> dict[str, FieldSpec]:
    fields: dict[str, FieldSpec] = {}
    measurements = MEASUREMENTS.get(kind, {})

    for attr, info in MODELS[kind].model_fields.items():
        if attr == "kind":
            continue
        name = info.alias or to_camel(attr)
        if attr in measurements:
            fields[name] = FieldSpec(name, FieldType.MEASUREMENT, attr=attr, default_unit=measurements[attr])
        else:
            fields[name] = FieldSpec(name, FieldType.SCALAR, attr=attr)

    for name, rel in RELATIONS[kind].items():
        fields[name] = FieldSpec(name, FieldType.RELATION, relation=rel)

    return fields


SCHEMA: dict[EntityKind, dict[str, FieldSpec]] = {kind: _build_fields(kind) for kind in EntityKind}


@dataclass(frozen=True)
class RootField:
    """A top-level entry point of a text query document."""

    name: str
    kind: EntityKind
    many: bool

    @property
    def arguments(self) -> frozenset[str]:
        return frozenset({"filter"}) if self.many else frozenset({"id"})


ROOT_FIELDS: dict[str, RootField] = {
    root.name: root
    for root in (
        RootField("allFilms", EntityKind.FILM, True),
        RootField("allPeople", EntityKind.PERSON, True),
        RootField("allPlanets", EntityKind.PLANET, True),
        RootField("allSpecies", EntityKind.SPECIES, True),
        RootField("allStarships", EntityKind.STARSHIP, True),
        RootField("allVehicles", EntityKind.VEHICLE, True),
        RootField("film", EntityKind.FILM, False),
        RootField("person", EntityKind.PERSON, False),
        RootField("planet", EntityKind.PLANET, False),
        RootField("species", EntityKind.SPECIES, False),
        RootField("starship", EntityKind.STARSHIP, False),
        RootField("vehicle", EntityKind.VEHICLE, False),
    )
}
