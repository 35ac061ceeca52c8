"""Parse GraphQL-style text documents into structured queries.

Supported syntax:

    query Optional Name {
      luke: allPeople(filter: "Luke") {
        name
        height(unit: METER)
        homeworld { name }   # comments run to end of line
      }
      film(id: "films:1") { title }
    }

Commas are insignificant. Argument values may be strings, numbers,
``true``/``false``/``null`` or bare enum names.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from ..errors import QuerySyntaxError, QueryValidationError
from .schema import ROOT_FIELDS
from .selection import FieldSelection, Query
from .validator import suggest

TOKEN_RE = re.compile(
    r"""
    (?P<comment>\#[^\n]*)
    |(?P<ws>[\s,]+)
    |(?P<string>"(?:[^"\\\n]|\\.)*")
    |(?P<number>-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)
    |(?P<name>[_A-Za-z][_0-9A-Za-z]*)
    |(?P<punct>[{}():])
    |(?P<error>.)
    """,
    re.VERBOSE,
)

KEYWORDS = {"true": True, "false": False, "null": None}


@dataclass
class Token:
    type: str
    value: str
    line: int
    column: int


def tokenize(text: str) -> list[Token]:
    """Split a document into tokens, dropping whitespace and comments."""
    tokens: list[Token] = []
    line, line_start = 1, 0
    for match in TOKEN_RE.finditer(text):
        kind = match.lastgroup
        value = match.group()
        column = match.start() - line_start + 1
        if kind == "error":
            raise QuerySyntaxError(f"Unexpected character {value!r}", line, column)
        if kind not in ("ws", "comment"):
            tokens.append(Token(kind, value, line, column))
        newlines = value.count("\n")
        if newlines:
            line += newlines
            line_start = match.start() + value.rindex("\n") + 1
    tokens.append(Token("eof", "", line, len(text) - line_start + 1))
    return tokens


class DocumentParser:
    """Recursive-descent parser over the token stream."""

    def __init__(self, text: str):
        self.tokens = tokenize(text)
        self.pos = 0

    # -- token helpers -------------------------------------------------

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.current
        self.pos += 1
        return token

    def _peek_is(self, value: str) -> bool:
        token = self.current
        return token.type == "punct" and token.value == value

    def _expect(self, value: str) -> Token:
        if not self._peek_is(value):
            self._fail(f"Expected '{value}'")
        return self._advance()

    def _expect_name(self) -> Token:
        if self.current.type != "name":
            self._fail("Expected a name")
        return self._advance()

    def _fail(self, message: str):
        token = self.current
        found = "end of document" if token.type == "eof" else repr(token.value)
        raise QuerySyntaxError(f"{message}, found {found}", token.line, token.column)

    # -- grammar -------------------------------------------------------

    def parse(self) -> list[FieldSelection]:
        """Parse the document and return its root field selections."""
        if self.current.type == "name" and self.current.value == "query":
            self._advance()
            if self.current.type == "name":
                self._advance()  # operation name
        roots = self._selection_set()
        if self.current.type != "eof":
            self._fail("Expected end of document")
        return roots

    def _selection_set(self) -> list[FieldSelection]:
        self._expect("{")
        fields = []
        while not self._peek_is("}"):
            fields.append(self._field())
        self._advance()
        if not fields:
            token = self.tokens[self.pos - 1]
            raise QuerySyntaxError("Empty selection set", token.line, token.column)
        return fields

    def _field(self) -> FieldSelection:
        alias = None
        name = self._expect_name().value
        if self._peek_is(":"):
            self._advance()
            alias, name = name, self._expect_name().value

        arguments = self._arguments() if self._peek_is("(") else {}
        selections = self._selection_set() if self._peek_is("{") else None
        return FieldSelection(name, arguments=arguments, selections=selections, alias=alias)

    def _arguments(self) -> dict[str, Any]:
        self._expect("(")
        arguments: dict[str, Any] = {}
        while not self._peek_is(")"):
            name = self._expect_name()
            self._expect(":")
            if name.value in arguments:
                raise QuerySyntaxError(f"Duplicate argument '{name.value}'", name.line, name.column)
            arguments[name.value] = self._value()
        self._advance()
        return arguments

    def _value(self) -> Any:
        token = self.current
        if token.type == "string":
            self._advance()
            try:
                return json.loads(token.value)
            except json.JSONDecodeError as e:
                raise QuerySyntaxError(f"Invalid string literal: {e.msg}", token.line, token.column) from e
        if token.type == "number":
            self._advance()
            text = token.value
            return float(text) if any(c in text for c in ".eE") else int(text)
        if token.type == "name":
            self._advance()
            return KEYWORDS.get(token.value, token.value)
        self._fail("Expected a value")


def parse_document(text: str) -> list[Query]:
    """Parse a text document into one ``Query`` per root field.

    Raises:
        QuerySyntaxError: If the text is not well formed
        QueryValidationError: If a root field or its arguments are unknown
    """
    queries = []
    for selection in DocumentParser(text).parse():
        queries.append(_root_query(selection))
    return queries


def _root_query(selection: FieldSelection) -> Query:
    path = selection.output_key
    root = ROOT_FIELDS.get(selection.name)
    if root is None:
        raise QueryValidationError(
            path,
            f"unknown root field '{selection.name}'",
            suggestion=suggest(selection.name, ROOT_FIELDS),
        )

    for arg in selection.arguments:
        if arg not in root.arguments:
            raise QueryValidationError(
                path, f"unknown argument '{arg}' on {root.name}", suggestion=suggest(arg, root.arguments)
            )

    if root.many:
        return Query(
            root.kind,
            selection.selections,
            filter=selection.arguments.get("filter"),
            alias=path,
        )

    if selection.arguments.get("id") is None:
        raise QueryValidationError(path, f"{root.name} requires an id argument")
    return Query(root.kind, selection.selections, id=selection.arguments["id"], alias=path)
