"""Query validation, parsing and execution."""

from swapi_graph.query.executor import QueryExecutor, format_timestamp
from swapi_graph.query.parser import parse_document
from swapi_graph.query.schema import ROOT_FIELDS, SCHEMA, FieldSpec, FieldType
from swapi_graph.query.selection import FieldSelection, Query, select
from swapi_graph.query.validator import PlannedField, QueryPlan, validate

__all__ = [
    "FieldSelection",
    "FieldSpec",
    "FieldType",
    "PlannedField",
    "Query",
    "QueryExecutor",
    "QueryPlan",
    "ROOT_FIELDS",
    "SCHEMA",
    "format_timestamp",
    "parse_document",
    "select",
    "validate",
]
