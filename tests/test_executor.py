"""Tests for query validation and execution."""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from swapi_graph.errors import ConversionError, QueryValidationError
from swapi_graph.models import EntityKind
from swapi_graph.query import (
    FieldSelection,
    PlannedField,
    Query,
    QueryExecutor,
    QueryPlan,
    SCHEMA,
    select,
    validate,
)
from swapi_graph.units import LengthUnit, MassUnit


def people(*selections, filter=None):
    return Query(EntityKind.PERSON, list(selections), filter=filter)


def keys_match(result, selections):
    """Check that a result node has exactly the selected keys, recursively."""
    assert list(result) == [s.output_key for s in selections]
    for s in selections:
        value = result[s.output_key]
        if s.selections and value is not None:
            for item in value if isinstance(value, list) else [value]:
                keys_match(item, s.selections)


class TestScenarios:
    """End-to-end behaviour on the sample catalog."""

    def test_luke_height_in_meters(self, executor):
        result = executor.execute(people(select("name"), select("height", unit="METER"), filter="Luke"))
        assert result == [{"name": "Luke Skywalker", "height": 1.72}]

    def test_null_homeworld_in_nested_selection(self, executor):
        query = Query(
            EntityKind.FILM,
            [select("characters", "name", select("homeworld", "name"))],
            filter="Empire",
        )
        [film] = executor.execute(query)
        yoda = next(c for c in film["characters"] if c["name"] == "Yoda")
        assert "homeworld" in yoda
        assert yoda["homeworld"] is None

        luke = film["characters"][0]
        assert luke == {"name": "Luke Skywalker", "homeworld": {"name": "Tatooine"}}

    def test_unknown_unit_rejected_without_repository_access(self, sample_repo):
        executor = QueryExecutor(sample_repo)
        query = Query(EntityKind.PLANET, [select("diameter", unit="FURLONG")])

        with pytest.raises(QueryValidationError) as exc_info:
            executor.execute(query)

        assert exc_info.value.path == "Planet.diameter"
        assert "FURLONG" in str(exc_info.value)
        assert sample_repo.lookups == 0


class TestUnits:
    """Measurement fields and their defaults."""

    def test_default_units(self, executor):
        [luke] = executor.execute(people(select("height"), select("mass"), filter="Luke"))
        assert luke == {"height": 172.0, "mass": 77.0}

        [tatooine] = executor.execute(Query(EntityKind.PLANET, [select("diameter")], filter="Tatooine"))
        assert tatooine == {"diameter": 10465.0}

        [falcon] = executor.execute(
            Query(EntityKind.STARSHIP, [select("length"), select("cargoCapacity")], filter="Falcon")
        )
        assert falcon == {"length": 34.37, "cargoCapacity": 100000.0}

    def test_defaults_made_explicit_in_plan(self):
        plan = validate(Query(EntityKind.SPECIES, [select("averageHeight")]))
        assert plan.fields[0].unit is LengthUnit.CENTIMETER

    def test_aliases_with_different_units(self, executor):
        query = people(
            select("height", alias="cm"),
            select("height", alias="inches", unit=LengthUnit.INCH),
            select("mass", alias="pounds", unit="POUND"),
            filter="Leia",
        )
        [leia] = executor.execute(query)
        assert leia["cm"] == 150.0
        assert leia["inches"] == pytest.approx(59.05511811)
        assert leia["pounds"] == pytest.approx(108.0265085)

    def test_null_measurement(self, executor):
        [droid] = executor.execute(Query(EntityKind.SPECIES, [select("averageHeight", unit="METER")], filter="Droid"))
        assert droid == {"averageHeight": None}

    def test_unvalidated_unit_is_fatal(self, executor):
        spec = SCHEMA[EntityKind.PERSON]["height"]
        plan = QueryPlan("bad", EntityKind.PERSON, (PlannedField("height", spec, unit=MassUnit.GRAM),))
        with pytest.raises(ConversionError):
            executor.execute(plan)


class TestScalars:
    """Plain scalar fields."""

    def test_timestamps_are_rfc3339(self, executor):
        [luke] = executor.execute(people(select("createdAt"), select("editedAt"), filter="Luke"))
        assert luke["createdAt"] == "2014-12-09T13:50:51.644000Z"
        assert luke["editedAt"] == "2014-12-20T21:17:56.891000Z"

        [film] = executor.execute(Query(EntityKind.FILM, [select("releaseDate")], filter="Hope"))
        assert film["releaseDate"] == "1977-05-25T00:00:00Z"

    def test_lists_and_nulls(self, executor):
        [threepio] = executor.execute(people(select("hairColor"), select("gender"), select("id"), filter="C-3PO"))
        assert threepio == {"hairColor": None, "gender": None, "id": "people:2"}

        [film] = executor.execute(Query(EntityKind.FILM, [select("producers")], filter="Jedi"))
        assert film["producers"] == ["Howard G. Kazanjian", "George Lucas", "Rick McCallum"]

    def test_starship_only_fields(self, executor):
        [xwing] = executor.execute(Query(EntityKind.STARSHIP, [select("MGLT"), select("hyperdriveRating")], filter="X-wing"))
        assert xwing == {"MGLT": 100, "hyperdriveRating": 1.0}

        with pytest.raises(QueryValidationError):
            executor.execute(Query(EntityKind.VEHICLE, [select("MGLT")]))


class TestRoots:
    """Root candidate selection."""

    def test_no_filter_returns_all_in_load_order(self, executor):
        result = executor.execute(Query(EntityKind.FILM, [select("episodeId")]))
        assert result == [{"episodeId": 4}, {"episodeId": 5}, {"episodeId": 6}]

    def test_empty_filter_same_as_none(self, executor):
        selections = [select("name")]
        assert executor.execute(people(*selections, filter="")) == executor.execute(people(*selections))

    def test_no_matches(self, executor):
        assert executor.execute(people(select("name"), filter="Jar Jar")) == []

    def test_lookup_by_id(self, executor):
        result = executor.execute(Query(EntityKind.PLANET, [select("name")], id="planets:4"))
        assert result == {"name": "Hoth"}

    def test_lookup_unknown_id(self, executor):
        assert executor.execute(Query(EntityKind.PLANET, [select("name")], id="planets:404")) is None

    def test_root_kind_by_name(self, executor):
        assert executor.execute(Query("Vehicle", [select("name")], filter="Snow")) == [{"name": "Snowspeeder"}]


class TestShape:
    """Output shape mirrors the selection."""

    def test_shape_fidelity(self, executor):
        selections = [
            select("name"),
            select("homeworld", "name", select("diameter", unit="MILE")),
            select("species", "name", select("homeworld", "name")),
            select("films", "title", select("vehicles", "name", select("pilots", "name"))),
        ]
        result = executor.execute(people(*selections))
        assert len(result) == 7
        for person in result:
            keys_match(person, selections)

    def test_idempotent(self, executor):
        query = Query(
            EntityKind.FILM,
            [select("title"), select("characters", "name", select("starships", "name", select("length", unit="FOOT")))],
        )
        first = json.dumps(executor.execute(query))
        second = json.dumps(executor.execute(query))
        assert first == second

    def test_concurrent_queries(self, executor):
        query = people(select("name"), select("films", "title", select("planets", "name")))
        expected = json.dumps(executor.execute(query))
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: json.dumps(executor.execute(query)), range(8)))
        assert results == [expected] * 8

    def test_cycles_bounded_by_selection(self, executor):
        deep = select("films", "title", select("characters", "name", select("films", "title")))
        [luke] = executor.execute(people(select("name"), deep, filter="Luke"))
        assert luke["films"][0]["characters"][0]["films"][0] == {"title": "A New Hope"}


class TestValidation:
    """Requests rejected before execution."""

    @pytest.fixture
    def untouched(self, sample_repo):
        yield QueryExecutor(sample_repo)
        assert sample_repo.lookups == 0

    def test_unknown_field(self, untouched):
        with pytest.raises(QueryValidationError) as exc_info:
            untouched.execute(people(select("homeworld", "nme")))
        assert exc_info.value.path == "Person.homeworld.nme"
        assert exc_info.value.suggestion == "name"

    def test_unknown_root_kind(self, untouched):
        with pytest.raises(QueryValidationError, match="unknown root kind"):
            untouched.execute(Query("Droid", [select("name")]))

    def test_malformed_filter(self, untouched):
        with pytest.raises(QueryValidationError, match="filter must be a string"):
            untouched.execute(people(select("name"), filter=42))

    def test_filter_and_id(self, untouched):
        with pytest.raises(QueryValidationError):
            untouched.execute(Query(EntityKind.PERSON, [select("name")], filter="Luke", id="people:1"))

    def test_unit_of_wrong_family(self, untouched):
        with pytest.raises(QueryValidationError, match="LengthUnit"):
            untouched.execute(people(select("height", unit="KILOGRAM")))

    def test_unknown_argument(self, untouched):
        with pytest.raises(QueryValidationError, match="unknown argument"):
            untouched.execute(people(select("name", unit="METER")))

    def test_relation_without_selection(self, untouched):
        with pytest.raises(QueryValidationError, match="nested selection"):
            untouched.execute(people(FieldSelection("homeworld")))

    def test_scalar_with_selection(self, untouched):
        with pytest.raises(QueryValidationError, match="scalar"):
            untouched.execute(people(select("name", "length")))

    def test_scalar_with_empty_selection(self, untouched):
        with pytest.raises(QueryValidationError, match="scalar"):
            untouched.execute(people(FieldSelection("name", selections=[])))

    def test_empty_selection(self, untouched):
        with pytest.raises(QueryValidationError, match="empty"):
            untouched.execute(people())

    def test_duplicate_output_key(self, untouched):
        with pytest.raises(QueryValidationError, match="alias"):
            untouched.execute(people(select("name"), select("name")))

    def test_error_deep_in_tree_stops_everything(self, untouched):
        query = people(select("name"), select("films", "title", select("planets", select("diameter", unit="FURLONG"))))
        with pytest.raises(QueryValidationError) as exc_info:
            untouched.execute(query)
        assert exc_info.value.path == "Person.films.planets.diameter"


class TestDocuments:
    """Text documents with several root fields."""

    def test_results_keyed_by_alias(self, executor):
        result = executor.execute_document(
            """
            {
              hoth: planet(id: "planets:4") { name residents { name } }
              allStarships(filter: "TIE") { name pilots { name } }
            }
            """
        )
        assert result == {
            "hoth": {"name": "Hoth", "residents": []},
            "allStarships": [{"name": "TIE Advanced x1", "pilots": [{"name": "Darth Vader"}]}],
        }

    def test_every_root_validated_before_any_runs(self, sample_repo):
        executor = QueryExecutor(sample_repo)
        with pytest.raises(QueryValidationError):
            executor.execute_document("{ allPeople { name } allPlanets { diameter(unit: FURLONG) } }")
        assert sample_repo.lookups == 0

    def test_duplicate_root_keys(self, executor):
        with pytest.raises(QueryValidationError, match="alias"):
            executor.execute_document("{ allPeople { name } allPeople { height } }")
