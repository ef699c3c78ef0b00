"""Criteria models — Flat filter criteria compiled into a single search query."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Operator(str, Enum):
    """How the values of a set criterion combine."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    @classmethod
    def from_string(cls, value: str | None) -> Operator | None:
        """Parse an operator name case-insensitively.

        Returns:
            The matching operator, or ``None`` for blank or unknown input.
        """
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class SetCriterion(BaseModel):
    """A set-valued filter on a TAG or TEXT field.

    Values are stripped; blank values are dropped and at least one value
    must remain.
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Registered field name, e.g. 'genre'")
    values: frozenset[str] = Field(description="Values to match")
    operator: Operator = Field(default=Operator.AND, description="How the values combine")

    @field_validator("values", mode="before")
    @classmethod
    def _clean_values(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple, set, frozenset)):
            cleaned = {str(item).strip() for item in v}
            cleaned.discard("")
            if not cleaned:
                raise ValueError("a set criterion needs at least one non-blank value")
            return frozenset(cleaned)
        return v

    @field_validator("operator", mode="before")
    @classmethod
    def _parse_operator(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Operator.from_string(v) or v
        return v


class RangeCriterion(BaseModel):
    """A numeric range filter.

    Either bound may be omitted to leave that side open. A criterion with
    neither bound contributes nothing to the compiled query. Zero is a
    valid bound.
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Registered NUMERIC field name, e.g. 'year'")
    lower: int | float | None = Field(default=None, ge=0, description="Inclusive lower bound")
    upper: int | float | None = Field(default=None, ge=0, description="Upper bound")


class FilterCriteria(BaseModel):
    """One search request's criteria: free text plus set and range filters."""

    text: str | None = Field(default=None, description="Engine-native free-text query, emitted verbatim")
    sets: list[SetCriterion] = Field(default_factory=list, description="Set criteria, in emission order")
    ranges: list[RangeCriterion] = Field(default_factory=list, description="Range criteria, in emission order")

    @model_validator(mode="after")
    def _blank_text_is_absent(self) -> FilterCriteria:
        if self.text is not None and not self.text.strip():
            self.text = None
        return self

    @property
    def is_empty(self) -> bool:
        return self.text is None and not self.sets and not self.ranges
