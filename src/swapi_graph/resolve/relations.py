"""Relationship resolution over the identifier-based edge map."""

import logging

from ..models.entities import EntityBase, EntityKind
from ..models.relationships import get_relation
from ..repository.store import EntityRepository

logger = logging.getLogger(__name__)


class RelationshipResolver:
    """Resolves one relation of one entity at a time.

    The resolver never follows more than the single edge it is asked for,
    so traversal depth is bounded by whoever calls it.

    Usage:
        resolver = RelationshipResolver(repo)
        luke = repo.find_by_name(EntityKind.PERSON, "Luke")[0]
        tatooine = resolver.resolve(luke, "homeworld")
        films = resolver.resolve(luke, "films")
    """

    def __init__(self, repository: EntityRepository):
        self.repository = repository

    def resolve(self, entity: EntityBase, relation: str) -> EntityBase | list[EntityBase] | None:
        """Resolve ``relation`` on ``entity``.

        Returns:
            The related entity (or None) for single-valued relations, or the
            ordered list of related entities for collections. Targets missing
            from the repository are left out.

        Raises:
            KeyError: If the entity's kind has no such relation
        """
        kind = EntityKind(entity.kind)
        rel = get_relation(kind, relation)
        refs = self.repository.edges(kind, entity.id, relation)

        resolved: list[EntityBase] = []
        for ref in refs:
            target = self.repository.get_by_id(ref.kind, ref.id)
            if target is None:
                logger.debug("Dangling %s.%s edge from %s to %s", kind.value, relation, entity.id, ref.id)
                continue
            resolved.append(target)

        if rel.many:
            return resolved
        return resolved[0] if resolved else None
