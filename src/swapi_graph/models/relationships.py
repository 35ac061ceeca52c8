"""Relation table for the catalog graph."""

from dataclasses import dataclass

from .entities import EntityKind


@dataclass(frozen=True)
class RelationDef:
    """A named edge from one entity kind to another."""

    source: EntityKind
    name: str
    target: EntityKind
    many: bool = True
    inverse: str | None = None  # relation name on the target kind


@dataclass(frozen=True, order=True)
class EntityRef:
    """A non-owning reference to an entity: (kind, id)."""

    kind: EntityKind
    id: str


def _relations(*defs: RelationDef) -> dict[EntityKind, dict[str, RelationDef]]:
    table: dict[EntityKind, dict[str, RelationDef]] = {kind: {} for kind in EntityKind}
    for rel in defs:
        table[rel.source][rel.name] = rel
    return table


F, P, PL, SP, SH, V = (
    EntityKind.FILM,
    EntityKind.PERSON,
    EntityKind.PLANET,
    EntityKind.SPECIES,
    EntityKind.STARSHIP,
    EntityKind.VEHICLE,
)

RELATIONS: dict[EntityKind, dict[str, RelationDef]] = _relations(
    # Film
    RelationDef(F, "species", SP, inverse="films"),
    RelationDef(F, "starships", SH, inverse="films"),
    RelationDef(F, "vehicles", V, inverse="films"),
    RelationDef(F, "characters", P, inverse="films"),
    RelationDef(F, "planets", PL, inverse="films"),
    # Person
    RelationDef(P, "homeworld", PL, many=False, inverse="residents"),
    RelationDef(P, "films", F, inverse="characters"),
    RelationDef(P, "species", SP, inverse="characters"),
    RelationDef(P, "vehicles", V, inverse="pilots"),
    RelationDef(P, "starships", SH, inverse="pilots"),
    # Planet
    RelationDef(PL, "residents", P, inverse="homeworld"),
    RelationDef(PL, "films", F, inverse="planets"),
    # Species
    RelationDef(SP, "homeworld", PL, many=False),
    RelationDef(SP, "characters", P, inverse="species"),
    RelationDef(SP, "films", F, inverse="species"),
    # Starship
    RelationDef(SH, "films", F, inverse="starships"),
    RelationDef(SH, "pilots", P, inverse="starships"),
    # Vehicle
    RelationDef(V, "films", F, inverse="vehicles"),
    RelationDef(V, "pilots", P, inverse="vehicles"),
)


def get_relation(kind: EntityKind, name: str) -> RelationDef:
    """Look up a relation definition.

    Raises:
        KeyError: If ``kind`` has no relation called ``name``
    """
    try:
        return RELATIONS[kind][name]
    except KeyError:
        raise KeyError(f"{kind.value} has no relation '{name}'") from None
