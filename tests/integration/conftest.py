"""Integration test fixtures — Redis Stack with a seeded movie index.

Expects Redis Stack to be running, e.g.:
    docker run -d -p 6379:6379 redis/redis-stack-server:latest

Seed data is loaded into the index on first use.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
import redis.asyncio as aioredis
from redis.commands.search.field import NumericField, TagField, TextField
from redis.commands.search.index_definition import IndexDefinition, IndexType
from redis.exceptions import RedisError, ResponseError

REDIS_URL = "redis://localhost:6379"
INDEX = "cinesift.test-movie-idx"
PREFIX = "cinesift.test-movie:"

MOCK_MOVIES: list[dict[str, Any]] = [
    {
        "title": "The Avengers",
        "genre": ["Action", "Sci-Fi"],
        "description": "Earth's mightiest heroes must come together to stop Loki.",
        "director": "Joss Whedon",
        "actors": ["Robert Downey Jr.", "Chris Evans", "Scarlett Johansson"],
        "year": 2012,
        "runtime": 143,
        "rating": 8.1,
        "metascore": 69,
    },
    {
        "title": "Captain America: Civil War",
        "genre": ["Action", "Adventure", "Sci-Fi"],
        "description": "Political involvement in the Avengers' affairs causes a rift.",
        "director": "Anthony Russo",
        "actors": ["Chris Evans", "Robert Downey Jr.", "Scarlett Johansson"],
        "year": 2016,
        "runtime": 147,
        "rating": 7.9,
        "metascore": 75,
    },
    {
        "title": "Guardians of the Galaxy",
        "genre": ["Action", "Adventure", "Sci-Fi"],
        "description": "A group of intergalactic criminals are forced to work together.",
        "director": "James Gunn",
        "actors": ["Chris Pratt", "Vin Diesel", "Bradley Cooper", "Zoe Saldana"],
        "year": 2014,
        "runtime": 121,
        "rating": 8.1,
        "metascore": 76,
    },
    {
        "title": "La La Land",
        "genre": ["Comedy", "Drama", "Music"],
        "description": "A jazz pianist falls for an aspiring actress in Los Angeles.",
        "director": "Damien Chazelle",
        "actors": ["Ryan Gosling", "Emma Stone"],
        "year": 2016,
        "runtime": 128,
        "rating": 8.3,
        "metascore": 93,
    },
]


async def _seed_redis(url: str = REDIS_URL) -> None:
    client = aioredis.from_url(url, decode_responses=True)
    try:
        try:
            await client.ft(INDEX).dropindex(delete_documents=True)
        except ResponseError:
            pass

        schema = (
            TextField("$.title", as_name="title", weight=3.0),
            TextField("$.description", as_name="description"),
            TextField("$.director", as_name="director", weight=3.0),
            TagField("$.genre[*]", as_name="genre"),
            TagField("$.actors[*]", as_name="actors"),
            NumericField("$.year", as_name="year"),
            NumericField("$.runtime", as_name="runtime"),
            NumericField("$.rating", as_name="rating"),
            NumericField("$.metascore", as_name="metascore"),
        )
        await client.ft(INDEX).create_index(
            schema,
            definition=IndexDefinition(prefix=[PREFIX], index_type=IndexType.JSON),
        )

        for i, movie in enumerate(MOCK_MOVIES, start=1):
            await client.json().set(f"{PREFIX}{i}", "$", movie)

        # Wait for the background indexer
        for _ in range(50):
            info = await client.ft(INDEX).info()
            if int(info.get("num_docs", 0)) >= len(MOCK_MOVIES):
                break
            await asyncio.sleep(0.1)
    finally:
        await client.aclose()


async def _ping(url: str) -> bool:
    client = aioredis.from_url(url)
    try:
        return bool(await asyncio.wait_for(client.ping(), timeout=2))
    except (RedisError, OSError, TimeoutError):
        return False
    finally:
        await client.aclose()


@pytest.fixture(scope="session")
def redis_ready() -> str:
    """Ensure Redis Stack is running and seeded."""
    if not asyncio.run(_ping(REDIS_URL)):
        pytest.skip(f"Redis Stack not available at {REDIS_URL}")
    asyncio.run(_seed_redis(REDIS_URL))
    return REDIS_URL
