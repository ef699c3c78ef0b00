"""Movie model — The record stored in, and materialized from, the movie index.

Payloads are read by case-sensitive primary name, falling back to the
documented alternate used by the original CSV import (e.g. ``"Rank"``,
``"Runtime (Minutes)"``). Output always uses the primary names.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _alias(primary: str, alternate: str) -> AliasChoices:
    return AliasChoices(primary, alternate)


class Movie(BaseModel):
    """A movie document."""

    model_config = ConfigDict(populate_by_name=True)

    movie_id: str | None = Field(
        default=None,
        validation_alias=_alias("movieId", "movie_id"),
        serialization_alias="movieId",
    )
    rank: int = Field(default=0, validation_alias=_alias("rank", "Rank"))
    title: str = Field(default="", validation_alias=_alias("title", "Title"))
    genre: list[str] = Field(default_factory=list, validation_alias=_alias("genre", "Genre"))
    description: str = Field(default="", validation_alias=_alias("description", "Description"))
    director: str = Field(default="", validation_alias=_alias("director", "Director"))
    actors: list[str] = Field(default_factory=list, validation_alias=_alias("actors", "Actors"))
    year: int = Field(default=0, validation_alias=_alias("year", "Year"))
    runtime: int = Field(default=0, validation_alias=_alias("runtime", "Runtime (Minutes)"))
    rating: float = Field(default=0.0, validation_alias=_alias("rating", "Rating"))
    votes: int = Field(default=0, validation_alias=_alias("votes", "Votes"))
    revenue: float = Field(default=0.0, validation_alias=_alias("revenue", "Revenue (Millions)"))
    metascore: int = Field(default=0, validation_alias=_alias("metascore", "Metascore"))

    @field_validator("genre", "actors", mode="before")
    @classmethod
    def split_tag_list(cls, v: Any) -> Any:
        # Hash-stored documents return TAG fields as one comma-joined string
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v
