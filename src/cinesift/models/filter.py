"""Movie query filter — Request body of the advanced movie search.

Comma-separated strings select actors, directors and genres; paired
``...GTE``/``...LTE`` numbers bound rating, runtime, release year and
meta rating. :meth:`MovieQueryFilter.to_criteria` maps the body onto
:class:`~cinesift.models.criteria.FilterCriteria` in a fixed order::

    text, actors, director, genre, rating, runtime, year, metascore
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cinesift.models.criteria import FilterCriteria, Operator, RangeCriterion, SetCriterion


class MovieQueryFilter(BaseModel):
    """Advanced search request body.

    Example::

        {
            "genericCriteria": "Avengers",
            "actors": "Chris Evans,Scarlett Johansson",
            "actorOperator": "AND",
            "genres": "Action,Sci-Fi",
            "genreOperator": "OR",
            "directors": "Joss Whedon, Anthony Russo",
            "releaseYearGTE": 2005,
            "imdbRatingGTE": 9,
            "imdbRatingLTE": 7
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    generic_criteria: str | None = Field(default=None, alias="genericCriteria")
    actors: str | None = Field(default=None, description="Comma-separated actor names")
    actor_operator: str | None = Field(default=None, alias="actorOperator")
    directors: str | None = Field(default=None, description="Comma-separated director names (always OR)")
    genres: str | None = Field(default=None, description="Comma-separated genres")
    genre_operator: str | None = Field(default=None, alias="genreOperator")
    release_year_gte: int | None = Field(default=None, alias="releaseYearGTE")
    release_year_lte: int | None = Field(default=None, alias="releaseYearLTE")
    imdb_rating_gte: float | None = Field(default=None, alias="imdbRatingGTE")
    imdb_rating_lte: float | None = Field(default=None, alias="imdbRatingLTE")
    meta_rating_gte: int | None = Field(default=None, alias="metaRatingGTE")
    meta_rating_lte: int | None = Field(default=None, alias="metaRatingLTE")
    runtime_gte: int | None = Field(default=None, alias="runtimeGTE")
    runtime_lte: int | None = Field(default=None, alias="runtimeLTE")

    def to_criteria(self, default_operator: Operator = Operator.AND) -> FilterCriteria:
        """Build the equivalent :class:`FilterCriteria`.

        Blank strings and unset bounds are skipped. A missing or unknown
        operator falls back to ``default_operator``.
        """
        sets: list[SetCriterion] = []
        if _has_values(self.actors):
            sets.append(
                SetCriterion(
                    field="actors",
                    values=self.actors,
                    operator=Operator.from_string(self.actor_operator) or default_operator,
                )
            )
        if _has_values(self.directors):
            sets.append(SetCriterion(field="director", values=self.directors, operator=Operator.OR))
        if _has_values(self.genres):
            sets.append(
                SetCriterion(
                    field="genre",
                    values=self.genres,
                    operator=Operator.from_string(self.genre_operator) or default_operator,
                )
            )

        bounds = [
            ("rating", self.imdb_rating_gte, self.imdb_rating_lte),
            ("runtime", self.runtime_gte, self.runtime_lte),
            ("year", self.release_year_gte, self.release_year_lte),
            ("metascore", self.meta_rating_gte, self.meta_rating_lte),
        ]
        ranges = [
            RangeCriterion(field=field, lower=lower, upper=upper)
            for field, lower, upper in bounds
            if lower is not None or upper is not None
        ]

        return FilterCriteria(text=self.generic_criteria, sets=sets, ranges=ranges)


def _has_values(csv: str | None) -> bool:
    return bool(csv) and any(part.strip() for part in csv.split(","))
