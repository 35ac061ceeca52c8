"""Entity storage and seed loading."""

from swapi_graph.repository.loader import build_repository, load_repository
from swapi_graph.repository.store import EntityRepository

__all__ = ["EntityRepository", "build_repository", "load_repository"]
