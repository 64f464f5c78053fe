from __future__ import annotations

from fastapi import Depends, FastAPI

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .recipes.cache import InMemoryCache
from .recipes.config import DEFAULT_RECIPE_CONFIG
from .recipes.engine import RecipeSearchEngine
from .recipes.models import (
    BatchSearchRequest,
    BatchSearchResponse,
    SearchRequest,
    SearchResponse,
)
from .recipes.sources import build_source

app = FastAPI(title="Pantry Recipe Search API", version="1.0.0")

_engine = RecipeSearchEngine(
    source=build_source(DEFAULT_RECIPE_CONFIG),
    cache=InMemoryCache(),
    config=DEFAULT_RECIPE_CONFIG,
)


def get_engine() -> RecipeSearchEngine:
    return _engine


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Recipe endpoints ─────────────────────────────────────────────────────


@app.post("/recipes/search", response_model=SearchResponse)
def search_recipes(
    body: SearchRequest,
    engine: RecipeSearchEngine = Depends(get_engine),
) -> SearchResponse:
    results = engine.search(body.query)
    return SearchResponse(query=body.query, results=results, total=len(results))


@app.get("/recipes/suggestions", response_model=SearchResponse)
def suggest_recipes(
    ingredient: str = "",
    engine: RecipeSearchEngine = Depends(get_engine),
) -> SearchResponse:
    # Pantry screens link here with whatever item is selected, possibly none
    if not ingredient.strip():
        return SearchResponse(query=ingredient, results=[], total=0)
    results = engine.search(ingredient)
    return SearchResponse(query=ingredient, results=results, total=len(results))


@app.post("/recipes/batch", response_model=BatchSearchResponse)
def batch_search_recipes(
    body: BatchSearchRequest,
    engine: RecipeSearchEngine = Depends(get_engine),
) -> BatchSearchResponse:
    return BatchSearchResponse(results=engine.search_batch(body.queries))


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats(engine: RecipeSearchEngine = Depends(get_engine)) -> dict:
    return engine.store.stats()


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
