"""Request validation.

Validation turns a ``Query`` into a ``QueryPlan`` without reading the
repository. Every measurement field in a plan carries an explicit unit,
either the one the caller asked for or the field's default.
"""

from dataclasses import dataclass
from typing import Iterable

from rapidfuzz import fuzz, process

from ..errors import QueryValidationError
from ..models.entities import EntityKind
from ..units import LengthUnit, MassUnit, parse_unit
from .schema import SCHEMA, FieldSpec, FieldType
from .selection import FieldSelection, Query


@dataclass(frozen=True)
class PlannedField:
    """A validated field selection."""

    key: str
    spec: FieldSpec
    unit: LengthUnit | MassUnit | None = None
    children: tuple["PlannedField", ...] = ()


@dataclass(frozen=True)
class QueryPlan:
    """A validated query, ready for execution."""

    key: str
    kind: EntityKind
    fields: tuple[PlannedField, ...]
    filter: str | None = None
    id: str | None = None

    @property
    def single(self) -> bool:
        return self.id is not None


def suggest(name: str, choices: Iterable[str]) -> str | None:
    """Return the closest known name to ``name``, if any is close enough."""
    match = process.extractOne(name, list(choices), scorer=fuzz.ratio, score_cutoff=60)
    return match[0] if match else None


def validate(query: Query) -> QueryPlan:
    """Validate a query and build its execution plan.

    Raises:
        QueryValidationError: On the first problem found, naming its path
    """
    kind = _root_kind(query.kind, query.alias)
    root = query.alias or kind.value

    if query.id is not None and query.filter is not None:
        raise QueryValidationError(root, "filter and id cannot be combined")
    if query.filter is not None and not isinstance(query.filter, str):
        raise QueryValidationError(root, f"filter must be a string, got {query.filter!r}")
    if query.id is not None and not isinstance(query.id, str):
        raise QueryValidationError(root, f"id must be a string, got {query.id!r}")

    fields = _plan_selections(kind, query.selections, root)
    return QueryPlan(key=root, kind=kind, fields=fields, filter=query.filter, id=query.id)


def _root_kind(kind: EntityKind | str, alias: str | None) -> EntityKind:
    if isinstance(kind, EntityKind):
        return kind
    names = [k.value for k in EntityKind]
    if isinstance(kind, str) and kind in names:
        return EntityKind(kind)
    raise QueryValidationError(
        alias or str(kind),
        f"unknown root kind {kind!r}",
        suggestion=suggest(str(kind), names),
    )


def _plan_selections(
    kind: EntityKind, selections: list[FieldSelection] | None, path: str
) -> tuple[PlannedField, ...]:
    if not selections:
        raise QueryValidationError(path, "selection must not be empty")

    planned: list[PlannedField] = []
    seen: set[str] = set()
    for selection in selections:
        field_path = f"{path}.{selection.output_key}"
        if selection.output_key in seen:
            raise QueryValidationError(field_path, "field selected twice; use an alias")
        seen.add(selection.output_key)
        planned.append(_plan_field(kind, selection, field_path))
    return tuple(planned)


def _plan_field(kind: EntityKind, selection: FieldSelection, path: str) -> PlannedField:
    fields = SCHEMA[kind]
    spec = fields.get(selection.name)
    if spec is None:
        raise QueryValidationError(
            path,
            f"{kind.value} has no field '{selection.name}'",
            suggestion=suggest(selection.name, fields),
        )

    for arg in selection.arguments:
        if arg not in spec.arguments:
            raise QueryValidationError(
                path,
                f"unknown argument '{arg}' on {kind.value}.{spec.name}",
                suggestion=suggest(arg, spec.arguments),
            )

    if spec.field_type is FieldType.RELATION:
        if not selection.selections:
            raise QueryValidationError(path, f"relation '{spec.name}' needs a nested selection")
        children = _plan_selections(spec.relation.target, selection.selections, path)
        return PlannedField(selection.output_key, spec, children=children)

    if selection.selections is not None:
        raise QueryValidationError(path, f"'{spec.name}' is a scalar and takes no nested selection")

    if spec.field_type is FieldType.MEASUREMENT:
        return PlannedField(selection.output_key, spec, unit=_unit(spec, selection, path))
    return PlannedField(selection.output_key, spec)


def _unit(spec: FieldSpec, selection: FieldSelection, path: str) -> LengthUnit | MassUnit:
    value = selection.arguments.get("unit")
    if value is None:
        return spec.default_unit
    family = spec.unit_family
    try:
        return parse_unit(family, value)
    except ValueError:
        raise QueryValidationError(
            path,
            f"unsupported {family.__name__} {value!r}; expected one of {', '.join(family.__members__)}",
        ) from None
