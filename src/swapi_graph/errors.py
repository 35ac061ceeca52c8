"""Exception hierarchy for SWAPI Graph."""


class SwapiGraphError(Exception):
    """Base class for all errors raised by the package."""


class SeedDataError(SwapiGraphError):
    """Seed data could not be loaded into the repository."""


class QuerySyntaxError(SwapiGraphError):
    """A text query document is malformed."""

    def __init__(self, message: str, line: int, column: int):
        self.line = line
        self.column = column
        super().__init__(f"{message} (line {line}, column {column})")


class QueryValidationError(SwapiGraphError):
    """A query was rejected before execution.

    Attributes:
        path: Dotted path to the offending field, e.g. ``allPeople.homeworld.nme``
        suggestion: Closest known name, when the error is an unknown name
    """

    def __init__(self, path: str, message: str, suggestion: str | None = None):
        self.path = path
        self.message = message
        self.suggestion = suggestion
        text = f"{path}: {message}"
        if suggestion:
            text += f" (did you mean '{suggestion}'?)"
        super().__init__(text)


class ConversionError(SwapiGraphError):
    """A unit that was never validated reached unit conversion."""
