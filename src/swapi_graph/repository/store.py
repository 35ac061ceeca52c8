"""In-memory entity repository.

Entities are owned by the primary per-kind storage. Relations live in a
separate adjacency map keyed by ``(kind, id, relation)`` and point at
``EntityRef`` values, so the cyclic graph never forms object cycles.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock

from ..errors import SeedDataError
from ..models.entities import EntityBase, EntityKind
from ..models.relationships import RELATIONS, EntityRef


EdgeKey = tuple[EntityKind, str, str]


@dataclass
class EntityRepository:
    """Read-only (after load) store of every catalog entity.

    Populate with ``add`` and ``add_edge`` during the bulk load, then call
    ``freeze``. Reads are safe from any number of threads afterwards.
    """

    _entities: dict[EntityKind, dict[str, EntityBase]] = field(
        default_factory=lambda: {kind: {} for kind in EntityKind}
    )
    _edges: dict[EdgeKey, list[EntityRef]] = field(default_factory=lambda: defaultdict(list))

    # Lowercased name/title per kind, in load order, for substring search
    _name_index: dict[EntityKind, list[tuple[str, EntityBase]]] = field(
        default_factory=lambda: {kind: [] for kind in EntityKind}
    )
    _frozen: bool = False

    # Public read calls served, so callers can tell whether a code path
    # touched the repository at all. The lock only guards this counter.
    lookups: int = 0
    _lookups_lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Load phase
    # ------------------------------------------------------------------

    def add(self, entity: EntityBase) -> None:
        """Add an entity to primary storage and the name index."""
        self._check_writable()
        kind = EntityKind(entity.kind)
        if entity.id in self._entities[kind]:
            raise SeedDataError(f"Duplicate {kind.value} id: {entity.id}")
        self._entities[kind][entity.id] = entity
        self._name_index[kind].append((entity.display_name.lower(), entity))

    def add_edge(self, source: EntityRef, relation: str, target: EntityRef) -> bool:
        """Append an edge unless it is already present. Returns True if added.

        Raises:
            SeedDataError: If a single-valued relation would get a second target
        """
        self._check_writable()
        targets = self._edges[(source.kind, source.id, relation)]
        if targets and not RELATIONS[source.kind][relation].many and targets[0] != target:
            raise SeedDataError(
                f"{source.kind.value} {source.id} has conflicting {relation}: "
                f"{targets[0].id} and {target.id}"
            )
        if target in targets:
            return False
        targets.append(target)
        return True

    def freeze(self) -> None:
        """End the load phase; any further writes raise."""
        self._edges = dict(self._edges)
        self._frozen = True

    def _check_writable(self) -> None:
        if self._frozen:
            raise RuntimeError("Repository is read-only after load")

    # ------------------------------------------------------------------
    # Read interface
    # ------------------------------------------------------------------

    def __contains__(self, ref: EntityRef) -> bool:
        return ref.id in self._entities[ref.kind]

    def _touch(self) -> None:
        with self._lookups_lock:
            self.lookups += 1

    def get_by_id(self, kind: EntityKind, entity_id: str) -> EntityBase | None:
        """Get an entity by kind and id, or None if unknown."""
        self._touch()
        return self._entities[kind].get(entity_id)

    def get_all(self, kind: EntityKind) -> list[EntityBase]:
        """Get every entity of a kind, in load order."""
        self._touch()
        return list(self._entities[kind].values())

    def find_by_name(self, kind: EntityKind, substring: str | None = None) -> list[EntityBase]:
        """Find entities whose name (Film: title) contains ``substring``.

        Matching is case-insensitive. An empty or missing substring returns
        every entity of the kind. Results keep load order.
        """
        if not substring:
            return self.get_all(kind)
        self._touch()
        needle = substring.lower()
        return [entity for name, entity in self._name_index[kind] if needle in name]

    def edges(self, kind: EntityKind, entity_id: str, relation: str) -> list[EntityRef]:
        """Get the raw edge list for one relation of one entity."""
        self._touch()
        return list(self._edges.get((kind, entity_id, relation), ()))

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def stats(self) -> dict[str, int]:
        """Entity counts per kind plus the total edge count."""
        counts = {kind.value: len(items) for kind, items in self._entities.items()}
        counts["edges"] = sum(len(targets) for targets in self._edges.values())
        return counts

    def check_inverse_edges(self) -> list[str]:
        """Report edges whose declared inverse edge is missing.

        Returns:
            Human-readable problem descriptions (empty when consistent)
        """
        problems: list[str] = []
        for (kind, entity_id, relation), targets in self._edges.items():
            rel = RELATIONS[kind][relation]
            if rel.inverse is None:
                continue
            source = EntityRef(kind, entity_id)
            for target in targets:
                if target not in self:
                    continue  # dangling, not an inconsistency
                back = self._edges.get((target.kind, target.id, rel.inverse), ())
                if source not in back:
                    problems.append(
                        f"{kind.value} {entity_id}.{relation} -> {target.kind.value} {target.id}"
                        f" has no {rel.inverse} edge back"
                    )
        return problems
