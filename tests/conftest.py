"""Shared fixtures."""

import json
from pathlib import Path

import pytest

from swapi_graph.query import QueryExecutor
from swapi_graph.repository import load_repository

SAMPLE_SEEDS = Path(__file__).parent.parent / "data" / "seeds"


@pytest.fixture
def sample_repo():
    """The sample catalog shipped in data/seeds."""
    return load_repository(SAMPLE_SEEDS)


@pytest.fixture
def executor(sample_repo):
    return QueryExecutor(sample_repo)


@pytest.fixture
def record():
    """Build a minimal seed record with timestamps filled in."""

    def _record(entity_id: str, **fields):
        return {"id": entity_id, "createdAt": "2014-12-10T12:00:00Z", **fields}

    return _record


@pytest.fixture
def write_seeds(tmp_path):
    """Write seed files into a temp directory: write_seeds(people=[...], planets=[...])."""

    def _write(**files):
        seeds_dir = tmp_path / "seeds"
        seeds_dir.mkdir(exist_ok=True)
        for name, items in files.items():
            (seeds_dir / f"{name}.json").write_text(json.dumps(items))
        return seeds_dir

    return _write
