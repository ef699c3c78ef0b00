"""Movie endpoints — Lookup, set-valued, free-text, year and advanced search.

Every list endpoint takes ``page`` (zero-based) and ``size`` query
parameters; ``size <= 0`` falls back to the configured default page size.

Examples::

    GET  /v1/movies/actors?actors=Chris Evans,Scarlett Johansson&operator=AND
         → @actors:{Chris Evans} @actors:{Scarlett Johansson}
    GET  /v1/movies/genre?genres=Action,Adventure&operator=NOT
         → -@genre:{Action|Adventure}
    GET  /v1/movies/year/2016
         → @year:[(2016]
    POST /v1/movies/advanced/search
         {"genericCriteria": "Avengers", "genres": "Action,Sci-Fi", "genreOperator": "OR"}
         → Avengers @genre:{Action|Sci\\-Fi}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from cinesift.api.deps import PageParams, get_engine, operator_param, page_params
from cinesift.core.engine import CineSiftEngine
from cinesift.models.criteria import Operator
from cinesift.models.filter import MovieQueryFilter
from cinesift.models.movie import Movie
from cinesift.models.page import PageResult

router = APIRouter(prefix="/movies")


def _split(csv: str) -> list[str]:
    return [part for part in csv.split(",") if part.strip()]


@router.get(
    "/id/{movie_id}",
    response_model=Movie,
    summary="Get Movie",
    description="Fetch one movie by id or by its full key.",
)
async def get_movie(
    movie_id: str,
    engine: CineSiftEngine = Depends(get_engine),
) -> Movie:
    return await engine.get_movie(movie_id)


@router.get(
    "/actors",
    response_model=PageResult[Movie],
    summary="Search by Actors",
    description="Movies with the given actors. `operator` is AND (default), OR or NOT.",
)
async def find_by_actors(
    actors: str = Query(description="Comma-separated actor names"),
    operator: Operator = Depends(operator_param),
    paging: PageParams = Depends(page_params),
    engine: CineSiftEngine = Depends(get_engine),
) -> PageResult[Movie]:
    return await engine.search_by_collection("actors", _split(actors), operator, *paging)


@router.get(
    "/genre",
    response_model=PageResult[Movie],
    summary="Search by Genre",
    description="Movies with the given genres. `operator` is AND (default), OR or NOT.",
)
async def find_by_genre(
    genres: str = Query(description="Comma-separated genres"),
    operator: Operator = Depends(operator_param),
    paging: PageParams = Depends(page_params),
    engine: CineSiftEngine = Depends(get_engine),
) -> PageResult[Movie]:
    return await engine.search_by_collection("genre", _split(genres), operator, *paging)


@router.get(
    "/search",
    response_model=PageResult[Movie],
    summary="Free-text Search",
    description="Relevance search over title, description and director.",
)
async def search(
    query: str = Query(min_length=1, description="Free-text query"),
    paging: PageParams = Depends(page_params),
    engine: CineSiftEngine = Depends(get_engine),
) -> PageResult[Movie]:
    return await engine.search_text(query, *paging)


@router.get(
    "/year/{year}",
    response_model=PageResult[Movie],
    summary="Search by Release Year",
)
async def find_by_year(
    year: int,
    paging: PageParams = Depends(page_params),
    engine: CineSiftEngine = Depends(get_engine),
) -> PageResult[Movie]:
    return await engine.search_by_year(year, *paging)


@router.get(
    "/years/{lower}/{upper}",
    response_model=PageResult[Movie],
    summary="Search by Release Year Range",
)
async def find_by_year_between(
    lower: int,
    upper: int,
    paging: PageParams = Depends(page_params),
    engine: CineSiftEngine = Depends(get_engine),
) -> PageResult[Movie]:
    return await engine.search_by_year_between(lower, upper, *paging)


@router.post(
    "/advanced/search",
    response_model=PageResult[Movie],
    summary="Advanced Search",
    description=(
        "Combine free text, actor/director/genre sets and numeric ranges "
        "(rating, runtime, release year, meta rating) in one query."
    ),
)
async def advanced_search(
    query_filter: MovieQueryFilter,
    paging: PageParams = Depends(page_params),
    engine: CineSiftEngine = Depends(get_engine),
) -> PageResult[Movie]:
    return await engine.advanced_search(query_filter, *paging)
