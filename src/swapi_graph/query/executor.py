"""Query execution.

The executor walks a validated plan against the repository. It keeps no
per-query state, so one instance can serve concurrent queries.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from ..errors import QueryValidationError
from ..models.entities import EntityBase
from ..repository.store import EntityRepository
from ..resolve.relations import RelationshipResolver
from ..units import convert
from .parser import parse_document
from .schema import FieldType
from .selection import Query
from .validator import PlannedField, QueryPlan, validate

logger = logging.getLogger(__name__)


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as RFC3339 in UTC."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class QueryExecutor:
    """Executes structured queries or text documents against a repository.

    Usage:
        executor = QueryExecutor(load_repository())
        executor.execute(Query(EntityKind.PERSON, [select("name")], filter="Luke"))
        executor.execute_document('{ allPeople(filter: "Luke") { name } }')
    """

    def __init__(self, repository: EntityRepository, resolver: RelationshipResolver | None = None):
        self.repository = repository
        self.resolver = resolver or RelationshipResolver(repository)

    def execute(self, query: Query | QueryPlan) -> list[dict[str, Any]] | dict[str, Any] | None:
        """Execute one query.

        Returns:
            A list of result objects for filtered queries, or a single result
            object (None when the id is unknown) for id lookups.

        Raises:
            QueryValidationError: If the query is invalid; nothing is read
        """
        plan = query if isinstance(query, QueryPlan) else validate(query)
        return self._run(plan)

    def execute_document(self, document: str | list[Query]) -> dict[str, Any]:
        """Execute every root field of a document, keyed by alias or field name.

        All root fields are validated before any of them runs.
        """
        queries = parse_document(document) if isinstance(document, str) else document
        plans = [validate(query) for query in queries]

        keys: set[str] = set()
        for plan in plans:
            if plan.key in keys:
                raise QueryValidationError(plan.key, "root field selected twice; use an alias")
            keys.add(plan.key)

        return {plan.key: self._run(plan) for plan in plans}

    def _run(self, plan: QueryPlan) -> list[dict[str, Any]] | dict[str, Any] | None:
        logger.debug("Executing %s (%s, filter=%r, id=%r)", plan.key, plan.kind.value, plan.filter, plan.id)
        if plan.single:
            entity = self.repository.get_by_id(plan.kind, plan.id)
            return self._select(entity, plan.fields) if entity is not None else None

        candidates = self.repository.find_by_name(plan.kind, plan.filter)
        return [self._select(entity, plan.fields) for entity in candidates]

    def _select(self, entity: EntityBase, fields: tuple[PlannedField, ...]) -> dict[str, Any]:
        return {planned.key: self._value(entity, planned) for planned in fields}

    def _value(self, entity: EntityBase, planned: PlannedField) -> Any:
        spec = planned.spec

        if spec.field_type is FieldType.RELATION:
            related = self.resolver.resolve(entity, spec.relation.name)
            if isinstance(related, list):
                return [self._select(target, planned.children) for target in related]
            return self._select(related, planned.children) if related is not None else None

        value = getattr(entity, spec.attr)
        if value is None:
            return None
        if spec.field_type is FieldType.MEASUREMENT:
            return convert(value, planned.unit, spec.unit_family)
        if isinstance(value, datetime):
            return format_timestamp(value)
        if isinstance(value, list):
            return list(value)
        return value
