"""Shared test fixtures and configuration."""

from __future__ import annotations

import json
from typing import Any

import pytest

from cinesift.adapters.base.adapter import AdapterHealth, Hit, SearchAdapter, SearchResult
from cinesift.adapters.base.exceptions import DocumentNotFoundError
from cinesift.config.settings import Settings
from cinesift.query.compiler import QueryCompiler
from cinesift.query.registry import FieldRegistry


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance that never connects to Redis."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        redis={"enabled": False},
    )


@pytest.fixture
def registry() -> FieldRegistry:
    return FieldRegistry.movies()


@pytest.fixture
def compiler(registry: FieldRegistry) -> QueryCompiler:
    return QueryCompiler(registry)


# ── Movie payloads ───────────────────────────────────────────────────────────


@pytest.fixture
def avengers_doc() -> dict[str, Any]:
    """A movie document as stored by the JSON import."""
    return {
        "movieId": "cinesift.movie:77",
        "rank": 77,
        "title": "The Avengers",
        "genre": ["Action", "Sci-Fi"],
        "description": "Earth's mightiest heroes must come together.",
        "director": "Joss Whedon",
        "actors": ["Robert Downey Jr.", "Chris Evans", "Scarlett Johansson", "Jeremy Renner"],
        "year": 2012,
        "runtime": 143,
        "rating": 8.1,
        "votes": 1045588,
        "revenue": 623.28,
        "metascore": 69,
    }


@pytest.fixture
def legacy_doc() -> dict[str, Any]:
    """A movie document keyed by the CSV column names."""
    return {
        "Rank": 1,
        "Title": "Guardians of the Galaxy",
        "Genre": ["Action", "Adventure", "Sci-Fi"],
        "Description": "A group of intergalactic criminals are forced to work together.",
        "Director": "James Gunn",
        "Actors": ["Chris Pratt", "Vin Diesel", "Bradley Cooper", "Zoe Saldana"],
        "Year": 2014,
        "Runtime (Minutes)": 121,
        "Rating": 8.1,
        "Votes": 757074,
        "Revenue (Millions)": 333.13,
        "Metascore": 76,
    }


# ── In-memory adapter ────────────────────────────────────────────────────────


class FakeAdapter(SearchAdapter):
    """Search adapter serving canned hits and recording every call."""

    def __init__(self, docs: list[dict[str, Any]] | None = None, total: int | None = None) -> None:
        self.docs = docs or []
        self.total = total
        self.calls: list[tuple[str, int, int]] = []

    @property
    def name(self) -> str:
        return "redisearch"

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def execute(self, query: str, offset: int, limit: int) -> SearchResult:
        self.check_window(offset, limit)
        self.calls.append((query, offset, limit))
        window = self.docs[offset : offset + limit]
        hits = [
            Hit(id=doc.get("movieId") or f"cinesift.movie:{offset + i}", payload=json.dumps(doc))
            for i, doc in enumerate(window)
        ]
        total = self.total if self.total is not None else len(self.docs)
        return SearchResult(hits=hits, total=total, took_ms=1)

    async def fetch_document(self, doc_id: str) -> Hit:
        for doc in self.docs:
            if doc.get("movieId") == doc_id:
                return Hit(id=doc_id, payload=doc)
        raise DocumentNotFoundError(f"Document '{doc_id}' not found.")

    async def health_check(self) -> AdapterHealth:
        return AdapterHealth(status="healthy", message="in-memory")


@pytest.fixture
def fake_adapter(avengers_doc: dict[str, Any]) -> FakeAdapter:
    return FakeAdapter([avengers_doc])


@pytest.fixture
def adapter_factory() -> type[FakeAdapter]:
    """The in-memory adapter class, for tests that need custom documents."""
    return FakeAdapter
