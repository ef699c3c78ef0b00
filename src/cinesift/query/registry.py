"""Field Registry — Immutable lookup from attribute name to index descriptor.

The registry is built once at startup from a static table and never
mutated afterwards, so any number of compiler invocations may read it
concurrently without coordination.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from cinesift.exceptions import UnknownFieldError
from cinesift.models.fields import FieldDescriptor, FieldKind

logger = logging.getLogger(__name__)

FieldSpec = FieldKind | tuple[FieldKind, float]
"""Table entry: a bare kind, or ``(FieldKind.TEXT, weight)`` for weighted text."""

# Index layout of the movie documents.
MOVIE_FIELDS: Mapping[str, FieldSpec] = MappingProxyType(
    {
        "title": (FieldKind.TEXT, 3.0),
        "description": (FieldKind.TEXT, 1.0),
        "director": (FieldKind.TEXT, 3.0),
        "genre": FieldKind.TAG,
        "actors": FieldKind.TAG,
        "year": FieldKind.NUMERIC,
        "runtime": FieldKind.NUMERIC,
        "rating": FieldKind.NUMERIC,
        "votes": FieldKind.NUMERIC,
        "revenue": FieldKind.NUMERIC,
        "metascore": FieldKind.NUMERIC,
    }
)


class FieldRegistry:
    """Read-only registry of :class:`FieldDescriptor` objects.

    Example:
        >>> registry = FieldRegistry.from_table(MOVIE_FIELDS)
        >>> registry.descriptor_of("genre").delimiter_start
        '{'
    """

    def __init__(self, descriptors: list[FieldDescriptor]) -> None:
        by_name: dict[str, FieldDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in by_name:
                raise ValueError(f"Duplicate field registration: {descriptor.name}")
            by_name[descriptor.name] = descriptor
        self._descriptors: Mapping[str, FieldDescriptor] = MappingProxyType(by_name)
        logger.debug("Field registry built with %d fields", len(by_name))

    @classmethod
    def from_table(cls, table: Mapping[str, FieldSpec]) -> FieldRegistry:
        """Build a registry from a ``{name: kind | (kind, weight)}`` table."""
        descriptors: list[FieldDescriptor] = []
        for name, spec in table.items():
            if isinstance(spec, tuple):
                kind, weight = spec
                descriptors.append(FieldDescriptor(name=name, kind=kind, weight=weight))
            else:
                descriptors.append(FieldDescriptor(name=name, kind=spec))
        return cls(descriptors)

    @classmethod
    def movies(cls) -> FieldRegistry:
        """Registry for the default movie index."""
        return cls.from_table(MOVIE_FIELDS)

    def descriptor_of(self, name: str) -> FieldDescriptor:
        """Look up the descriptor for ``name``.

        Raises:
            UnknownFieldError: If ``name`` is not registered.
        """
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def names(self) -> list[str]:
        """Registered field names, in registration order."""
        return list(self._descriptors)
