"""Field models — Index types and per-field query syntax descriptors."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldKind(str, Enum):
    """How an attribute is indexed by the search engine."""

    TEXT = "text"
    TAG = "tag"
    NUMERIC = "numeric"

    @property
    def delimiters(self) -> tuple[str, str]:
        """Opening and closing delimiters used in query clauses for this kind."""
        return _DELIMITERS[self]


_DELIMITERS: dict[FieldKind, tuple[str, str]] = {
    FieldKind.TEXT: ("(", ")"),
    FieldKind.TAG: ("{", "}"),
    FieldKind.NUMERIC: ("[", "]"),
}


class FieldDescriptor(BaseModel):
    """Immutable description of one indexed attribute.

    Delimiters default to the conventional pair for ``kind`` when omitted.
    ``weight`` only carries meaning for TEXT fields and is ``None`` otherwise.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Attribute name as indexed, e.g. 'actors'")
    kind: FieldKind = Field(description="Index type of the attribute")
    delimiter_start: str = Field(default="", description="Clause opening delimiter")
    delimiter_end: str = Field(default="", description="Clause closing delimiter")
    weight: float | None = Field(default=None, gt=0, description="Relevance weight (TEXT only)")

    @model_validator(mode="before")
    @classmethod
    def _default_delimiters(cls, data: object) -> object:
        if isinstance(data, dict) and "kind" in data:
            start, end = FieldKind(data["kind"]).delimiters
            data = {"delimiter_start": start, "delimiter_end": end, **data}
        return data

    @model_validator(mode="after")
    def _check_weight(self) -> FieldDescriptor:
        if self.weight is not None and self.kind is not FieldKind.TEXT:
            raise ValueError(f"weight is only valid for TEXT fields, got {self.kind.value} field '{self.name}'")
        return self

    def clause(self, body: str, *, negate: bool = False) -> str:
        """Wrap ``body`` in this field's delimiters, e.g. ``@genre:{Drama}``."""
        prefix = "-@" if negate else "@"
        return f"{prefix}{self.name}:{self.delimiter_start}{body}{self.delimiter_end}"
