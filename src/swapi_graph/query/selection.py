"""Structured query requests.

A request names a root entity kind, an optional name/title filter (or a
single id), and a tree of field selections.
"""

from dataclasses import dataclass, field
from typing import Any

from ..models.entities import EntityKind


@dataclass
class FieldSelection:
    """One selected field, with arguments and (for relations) a nested selection."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    selections: list["FieldSelection"] | None = None
    alias: str | None = None

    @property
    def output_key(self) -> str:
        return self.alias or self.name


@dataclass
class Query:
    """A request for entities of one kind.

    ``filter`` matches names (titles for films) by substring; ``id`` looks up
    a single entity instead. ``alias`` names the result when several queries
    run as one document.
    """

    kind: EntityKind | str
    selections: list[FieldSelection]
    filter: Any = None
    id: Any = None
    alias: str | None = None


def select(name: str, *children: "FieldSelection | str", alias: str | None = None, **arguments) -> FieldSelection:
    """Shorthand for building selections in code.

    Strings are promoted to plain scalar selections:

        select("characters", "name", select("homeworld", "name"))
        select("height", unit="METER")
    """
    nested = [child if isinstance(child, FieldSelection) else FieldSelection(child) for child in children]
    return FieldSelection(name, arguments=arguments, selections=nested or None, alias=alias)
