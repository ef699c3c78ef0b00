"""Tests for the result materializer."""

from __future__ import annotations

import json
from typing import Any

import pytest

from redis.commands.search.document import Document

from cinesift.adapters.base.adapter import Hit
from cinesift.adapters.redisearch.adapter import RediSearchAdapter
from cinesift.core.materializer import ResultMaterializer
from cinesift.exceptions import DeserializationError
from cinesift.models.movie import Movie


@pytest.fixture
def materializer() -> ResultMaterializer[Movie]:
    return ResultMaterializer(Movie, id_field="movieId")


class TestMaterialize:
    def test_json_string_payload(self, materializer: ResultMaterializer[Movie], avengers_doc: dict[str, Any]) -> None:
        movies = materializer.materialize([Hit(id="cinesift.movie:77", payload=json.dumps(avengers_doc))])
        assert len(movies) == 1
        assert movies[0].title == "The Avengers"

    def test_bytes_payload(self, materializer: ResultMaterializer[Movie], avengers_doc: dict[str, Any]) -> None:
        hit = Hit(id="k", payload=json.dumps(avengers_doc).encode())
        assert materializer.materialize_one(hit).year == 2012

    def test_mapping_payload(self, materializer: ResultMaterializer[Movie], legacy_doc: dict[str, Any]) -> None:
        movie = materializer.materialize_one(Hit(id="cinesift.movie:1", payload=legacy_doc))
        assert movie.title == "Guardians of the Galaxy"
        assert movie.runtime == 121

    def test_one_element_array_unwrapped(
        self, materializer: ResultMaterializer[Movie], avengers_doc: dict[str, Any]
    ) -> None:
        hit = Hit(id="k", payload=json.dumps([avengers_doc]))
        assert materializer.materialize_one(hit).title == "The Avengers"

    def test_preserves_order(self, materializer: ResultMaterializer[Movie]) -> None:
        hits = [Hit(id=str(i), payload=json.dumps({"title": f"Movie {i}"})) for i in range(5)]
        assert [m.title for m in materializer.materialize(hits)] == [f"Movie {i}" for i in range(5)]

    def test_empty_hits(self, materializer: ResultMaterializer[Movie]) -> None:
        assert materializer.materialize([]) == []

    def test_id_filled_from_hit(self, materializer: ResultMaterializer[Movie], legacy_doc: dict[str, Any]) -> None:
        movie = materializer.materialize_one(Hit(id="cinesift.movie:1", payload=legacy_doc))
        assert movie.movie_id == "cinesift.movie:1"

    def test_payload_id_kept(self, materializer: ResultMaterializer[Movie], avengers_doc: dict[str, Any]) -> None:
        movie = materializer.materialize_one(Hit(id="other-key", payload=avengers_doc))
        assert movie.movie_id == "cinesift.movie:77"

    def test_alternate_id_key_kept(self, materializer: ResultMaterializer[Movie]) -> None:
        hit = Hit(id="other-key", payload={"movie_id": "cinesift.movie:5", "title": "Up"})
        assert materializer.materialize_one(hit).movie_id == "cinesift.movie:5"

    def test_hash_document(self, materializer: ResultMaterializer[Movie]) -> None:
        doc = Document(
            "cinesift.movie:1",
            title="Guardians of the Galaxy",
            genre="Action,Adventure,Sci-Fi",
            actors="Chris Pratt, Vin Diesel",
            year="2014",
        )

        movie = materializer.materialize_one(RediSearchAdapter._to_hit(doc))

        assert movie.movie_id == "cinesift.movie:1"
        assert movie.genre == ["Action", "Adventure", "Sci-Fi"]
        assert movie.actors == ["Chris Pratt", "Vin Diesel"]
        assert movie.year == 2014

    def test_payload_not_mutated(self, materializer: ResultMaterializer[Movie], legacy_doc: dict[str, Any]) -> None:
        materializer.materialize_one(Hit(id="cinesift.movie:1", payload=legacy_doc))
        assert "movieId" not in legacy_doc

    def test_without_id_field(self, legacy_doc: dict[str, Any]) -> None:
        movie = ResultMaterializer(Movie).materialize_one(Hit(id="cinesift.movie:1", payload=legacy_doc))
        assert movie.movie_id is None


class TestFailFast:
    def test_second_of_three_malformed(self, materializer: ResultMaterializer[Movie]) -> None:
        hits = [
            Hit(id="m1", payload=json.dumps({"title": "One"})),
            Hit(id="m2", payload="{not json"),
            Hit(id="m3", payload=json.dumps({"title": "Three"})),
        ]
        with pytest.raises(DeserializationError) as exc_info:
            materializer.materialize(hits)
        assert exc_info.value.hit_id == "m2"

    @pytest.mark.parametrize(
        "payload",
        [
            "{broken",
            json.dumps([1, 2]),
            json.dumps("just a string"),
            json.dumps({"year": "next year"}),
        ],
    )
    def test_malformed_payloads(self, materializer: ResultMaterializer[Movie], payload: str) -> None:
        with pytest.raises(DeserializationError) as exc_info:
            materializer.materialize_one(Hit(id="bad", payload=payload))
        assert exc_info.value.cause is not None
        assert "bad" in str(exc_info.value)
