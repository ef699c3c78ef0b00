"""Tests for criteria models and the advanced search filter."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cinesift.models.criteria import FilterCriteria, Operator, RangeCriterion, SetCriterion
from cinesift.models.filter import MovieQueryFilter


class TestOperator:
    @pytest.mark.parametrize(("raw", "expected"), [("and", Operator.AND), (" Or ", Operator.OR), ("NOT", Operator.NOT)])
    def test_from_string(self, raw: str, expected: Operator) -> None:
        assert Operator.from_string(raw) is expected

    @pytest.mark.parametrize("raw", [None, "", "XOR"])
    def test_from_string_unknown(self, raw: str | None) -> None:
        assert Operator.from_string(raw) is None


class TestSetCriterion:
    def test_csv_values(self) -> None:
        criterion = SetCriterion(field="actors", values="Chris Evans, Scarlett Johansson,")
        assert criterion.values == frozenset({"Chris Evans", "Scarlett Johansson"})
        assert criterion.operator is Operator.AND

    def test_duplicates_collapse(self) -> None:
        assert SetCriterion(field="genre", values=["Drama", " Drama "]).values == frozenset({"Drama"})

    def test_operator_from_string(self) -> None:
        assert SetCriterion(field="genre", values=["Drama"], operator="or").operator is Operator.OR

    def test_unknown_operator_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SetCriterion(field="genre", values=["Drama"], operator="XOR")

    @pytest.mark.parametrize("values", [[], [" ", ""], " , "])
    def test_needs_a_value(self, values: object) -> None:
        with pytest.raises(ValidationError):
            SetCriterion(field="genre", values=values)


class TestRangeCriterion:
    def test_open_bounds(self) -> None:
        criterion = RangeCriterion(field="year")
        assert criterion.lower is None
        assert criterion.upper is None

    def test_negative_bound_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RangeCriterion(field="year", lower=-1)

    def test_zero_bound_accepted(self) -> None:
        assert RangeCriterion(field="metascore", upper=0).upper == 0


class TestFilterCriteria:
    def test_empty(self) -> None:
        assert FilterCriteria().is_empty
        assert FilterCriteria(text=" ").is_empty

    def test_not_empty(self) -> None:
        assert not FilterCriteria(text="Avengers").is_empty
        assert not FilterCriteria(ranges=[RangeCriterion(field="year")]).is_empty


class TestMovieQueryFilter:
    def test_camel_case_body(self) -> None:
        query_filter = MovieQueryFilter.model_validate(
            {
                "genericCriteria": "Avengers",
                "actors": "Chris Evans,Scarlett Johansson",
                "actorOperator": "AND",
                "directors": "Joss Whedon, Anthony Russo",
                "genres": "Action,Sci-Fi",
                "genreOperator": "OR",
                "releaseYearGTE": 2005,
                "imdbRatingGTE": 9,
                "imdbRatingLTE": 7,
            }
        )
        criteria = query_filter.to_criteria()

        assert criteria.text == "Avengers"
        assert [(s.field, s.operator) for s in criteria.sets] == [
            ("actors", Operator.AND),
            ("director", Operator.OR),
            ("genre", Operator.OR),
        ]
        assert [(r.field, r.lower, r.upper) for r in criteria.ranges] == [
            ("rating", 9, 7),
            ("year", 2005, None),
        ]

    def test_range_order(self) -> None:
        query_filter = MovieQueryFilter(
            metaRatingGTE=50,
            releaseYearLTE=2010,
            runtimeGTE=90,
            imdbRatingLTE=8.5,
        )
        assert [r.field for r in query_filter.to_criteria().ranges] == ["rating", "runtime", "year", "metascore"]

    def test_missing_operator_uses_default(self) -> None:
        query_filter = MovieQueryFilter(actors="Chris Evans,Chris Pratt", genres="Action", genreOperator="bogus")
        criteria = query_filter.to_criteria(default_operator=Operator.OR)
        assert [s.operator for s in criteria.sets] == [Operator.OR, Operator.OR]

    def test_directors_always_or(self) -> None:
        criteria = MovieQueryFilter(directors="Joss Whedon").to_criteria(default_operator=Operator.NOT)
        assert criteria.sets[0].operator is Operator.OR

    def test_blank_strings_skipped(self) -> None:
        criteria = MovieQueryFilter(genericCriteria=" ", actors=" , ", genres="").to_criteria()
        assert criteria.is_empty

    def test_empty_body(self) -> None:
        assert MovieQueryFilter().to_criteria().is_empty
