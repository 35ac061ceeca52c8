"""SWAPI Graph - a read-only query engine over the Star Wars catalog."""

__version__ = "0.1.0"
