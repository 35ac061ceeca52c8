"""Entity models for the catalog.

Each kind is a flat record sharing ``id``/``createdAt``/``editedAt`` and
tagged with a ``kind`` discriminator. Relations are not stored on the
records; the repository keeps them as identifier edges.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..units import LengthUnit, MassUnit


class EntityKind(str, Enum):
    """The six kinds of catalog entity."""

    FILM = "Film"
    PERSON = "Person"
    PLANET = "Planet"
    SPECIES = "Species"
    STARSHIP = "Starship"
    VEHICLE = "Vehicle"


class EntityBase(BaseModel):
    """Fields shared by every entity kind."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    id: str
    created_at: datetime
    edited_at: datetime | None = None

    @field_validator("created_at", "edited_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _edited_after_created(self):
        if self.edited_at is not None and self.edited_at < self.created_at:
            raise ValueError("editedAt must not be earlier than createdAt")
        return self

    @property
    def display_name(self) -> str:
        """Name used by the name/title index."""
        return self.name


class Film(EntityBase):
    kind: Literal["Film"] = "Film"
    title: str
    episode_id: int
    opening_crawl: str
    director: str
    producers: list[str] = Field(default_factory=list)
    release_date: datetime

    @field_validator("release_date")
    @classmethod
    def _release_utc(cls, value: datetime) -> datetime:
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    @property
    def display_name(self) -> str:
        return self.title


class Person(EntityBase):
    kind: Literal["Person"] = "Person"
    name: str
    birth_year: str | None = None
    eye_color: str | None = None
    hair_color: str | None = None
    skin_color: str | None = None
    gender: str | None = None
    height: float | None = None  # meters
    mass: float | None = None  # kilograms


class Planet(EntityBase):
    kind: Literal["Planet"] = "Planet"
    name: str
    rotation_period: int | None = None
    orbital_period: int | None = None
    gravity: float | None = None
    population: float | None = None
    climates: list[str] = Field(default_factory=list)
    terrains: list[str] = Field(default_factory=list)
    surface_water: float | None = None
    diameter: float | None = None  # meters


class Species(EntityBase):
    kind: Literal["Species"] = "Species"
    name: str
    classification: str | None = None
    designation: str | None = None
    average_lifespan: int | None = None
    eye_colors: list[str] = Field(default_factory=list)
    hair_colors: list[str] = Field(default_factory=list)
    skin_colors: list[str] = Field(default_factory=list)
    language: str | None = None
    average_height: float | None = None  # meters


class Starship(EntityBase):
    kind: Literal["Starship"] = "Starship"
    name: str
    model: str | None = None
    starship_class: str | None = None
    manufacturers: list[str] = Field(default_factory=list)
    cost_in_credits: float | None = None
    crew: int | None = None
    passengers: int | None = None
    max_atmosphering_speed: int | None = None
    hyperdrive_rating: float | None = None
    mglt: int | None = Field(default=None, alias="MGLT")
    consumables: str | None = None
    cargo_capacity: float | None = None  # kilograms
    length: float | None = None  # meters


class Vehicle(EntityBase):
    kind: Literal["Vehicle"] = "Vehicle"
    name: str
    model: str | None = None
    vehicle_class: str | None = None
    manufacturers: list[str] = Field(default_factory=list)
    cost_in_credits: float | None = None
    crew: int | None = None
    passengers: int | None = None
    max_atmosphering_speed: int | None = None
    consumables: str | None = None
    cargo_capacity: float | None = None  # kilograms
    length: float | None = None  # meters


Entity = Annotated[
    Union[Film, Person, Planet, Species, Starship, Vehicle],
    Field(discriminator="kind"),
]

MODELS: dict[EntityKind, type[EntityBase]] = {
    EntityKind.FILM: Film,
    EntityKind.PERSON: Person,
    EntityKind.PLANET: Planet,
    EntityKind.SPECIES: Species,
    EntityKind.STARSHIP: Starship,
    EntityKind.VEHICLE: Vehicle,
}

# Magnitude-bearing attributes: kind -> attribute -> default unit.
# The default unit is also the unit seed files use for the value.
MEASUREMENTS: dict[EntityKind, dict[str, LengthUnit | MassUnit]] = {
    EntityKind.PERSON: {"height": LengthUnit.CENTIMETER, "mass": MassUnit.KILOGRAM},
    EntityKind.PLANET: {"diameter": LengthUnit.KILOMETER},
    EntityKind.SPECIES: {"average_height": LengthUnit.CENTIMETER},
    EntityKind.STARSHIP: {"cargo_capacity": MassUnit.KILOGRAM, "length": LengthUnit.METER},
    EntityKind.VEHICLE: {"cargo_capacity": MassUnit.KILOGRAM, "length": LengthUnit.METER},
}
