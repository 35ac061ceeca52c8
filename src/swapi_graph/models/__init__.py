"""Data models for catalog entities."""

from swapi_graph.models.entities import (
    MEASUREMENTS,
    MODELS,
    Entity,
    EntityBase,
    EntityKind,
    Film,
    Person,
    Planet,
    Species,
    Starship,
    Vehicle,
)
from swapi_graph.models.relationships import RELATIONS, EntityRef, RelationDef, get_relation

__all__ = [
    "MEASUREMENTS",
    "MODELS",
    "RELATIONS",
    "Entity",
    "EntityBase",
    "EntityKind",
    "EntityRef",
    "Film",
    "Person",
    "Planet",
    "RelationDef",
    "Species",
    "Starship",
    "Vehicle",
    "get_relation",
]
