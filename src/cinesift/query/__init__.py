"""Query layer — Field registry, escaping and compilation into RediSearch syntax."""

from cinesift.query.compiler import QueryCompiler, RangeShape
from cinesift.query.escape import escape
from cinesift.query.registry import MOVIE_FIELDS, FieldRegistry

__all__ = ["MOVIE_FIELDS", "FieldRegistry", "QueryCompiler", "RangeShape", "escape"]
