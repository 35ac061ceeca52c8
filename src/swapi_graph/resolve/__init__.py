"""Relationship resolution."""

from swapi_graph.resolve.relations import RelationshipResolver

__all__ = ["RelationshipResolver"]
