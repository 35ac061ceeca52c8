"""Bulk loading of seed JSON files into an EntityRepository."""

import json
import logging
import math
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from ..config import get_settings
from ..errors import SeedDataError
from ..models.entities import MEASUREMENTS, Entity, EntityKind
from ..models.relationships import RELATIONS, EntityRef
from ..units import to_canonical
from .store import EntityRepository

logger = logging.getLogger(__name__)


SEED_FILES: dict[EntityKind, str] = {
    EntityKind.FILM: "films.json",
    EntityKind.PERSON: "people.json",
    EntityKind.PLANET: "planets.json",
    EntityKind.SPECIES: "species.json",
    EntityKind.STARSHIP: "starships.json",
    EntityKind.VEHICLE: "vehicles.json",
}

# (source, relation, target ids) as listed in the seed records
RawEdges = list[tuple[EntityRef, str, list[str]]]

ENTITY_ADAPTER = TypeAdapter(Entity)


def load_repository(seed_dir: Path | None = None) -> EntityRepository:
    """Load every seed file into a new, frozen repository.

    Args:
        seed_dir: Directory containing the seed files (defaults to settings)

    Raises:
        SeedDataError: If a record is malformed or relations contradict each other
    """
    seed_dir = seed_dir or get_settings().seeds_dir
    records: dict[EntityKind, list[dict[str, Any]]] = {}
    for kind, filename in SEED_FILES.items():
        path = seed_dir / filename
        if not path.exists():
            logger.info("No %s seed file at %s", kind.value, path)
            records[kind] = []
            continue
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise SeedDataError(f"{path}: invalid JSON ({e})") from e
        if not isinstance(data, list):
            raise SeedDataError(f"{path}: expected a JSON array of records")
        records[kind] = data

    return build_repository(records)


def build_repository(records: dict[EntityKind, list[dict[str, Any]]]) -> EntityRepository:
    """Build a frozen repository from raw seed records, keyed by kind."""
    repo = EntityRepository()
    raw_edges: RawEdges = []

    for kind in EntityKind:
        for item in records.get(kind, []):
            entity, edges = _parse_record(kind, item)
            repo.add(entity)
            raw_edges.extend(edges)

    forward: list[tuple[EntityRef, str, EntityRef]] = []
    for source, relation, target_ids in raw_edges:
        target_kind = RELATIONS[source.kind][relation].target
        for target_id in target_ids:
            target = EntityRef(target_kind, target_id)
            repo.add_edge(source, relation, target)
            forward.append((source, relation, target))

    derived = 0
    for source, relation, target in forward:
        rel = RELATIONS[source.kind][relation]
        if rel.inverse is None:
            continue
        if target not in repo:
            logger.debug("Dangling %s edge %s -> %s", relation, source, target)
            continue
        if repo.add_edge(target, rel.inverse, source):
            derived += 1

    repo.freeze()
    logger.info("Loaded %s", ", ".join(f"{k}: {v}" for k, v in repo.stats.items()))
    logger.debug("Derived %d inverse edges", derived)
    return repo


def _parse_record(kind: EntityKind, item: Any):
    """Split one seed record into an entity model and its raw edges."""
    if not isinstance(item, dict):
        raise SeedDataError(f"{kind.value} record must be an object, got {type(item).__name__}")
    data = dict(item)

    relation_values = {}
    for name, rel in RELATIONS[kind].items():
        if name in data:
            relation_values[name] = _relation_ids(kind, data.pop(name), rel.many, name)

    for attr, unit in MEASUREMENTS.get(kind, {}).items():
        key = to_camel(attr) if to_camel(attr) in data else attr
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise SeedDataError(f"{kind.value}.{key} must be a finite number, got {value!r}")
        data[key] = to_canonical(value, unit)

    try:
        entity = ENTITY_ADAPTER.validate_python({**data, "kind": kind.value})
    except ValidationError as e:
        raise SeedDataError(f"Invalid {kind.value} record {data.get('id')!r}: {e}") from e

    source = EntityRef(kind, entity.id)
    edges = [(source, name, ids) for name, ids in relation_values.items()]
    return entity, edges


def _relation_ids(kind: EntityKind, value: Any, many: bool, name: str) -> list[str]:
    if value is None:
        return []
    if many:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise SeedDataError(f"{kind.value}.{name} must be a list of ids")
        return value
    if not isinstance(value, str):
        raise SeedDataError(f"{kind.value}.{name} must be an id or null")
    return [value]
