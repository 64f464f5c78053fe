from __future__ import annotations

import hashlib
import logging
import time
from typing import Any

import pandas as pd
from pydantic import ValidationError

from ..analytics.store import record_event
from .cache import CacheGateway, SafeCache
from .config import DEFAULT_RECIPE_CONFIG, RecipeSearchConfig
from .exceptions import RecipeSourceError
from .formatter import format_recipe
from .models import RawRecipe, RecipeSummary
from .scoring import score_recipe
from .sources import RecipeSource
from .text import normalize_text

logger = logging.getLogger(__name__)

SEARCH_KEY_PREFIX = "receitas:"
BATCH_KEY_PREFIX = "receitas_busca_lote_"


def search_cache_key(normalized_query: str) -> str:
    return f"{SEARCH_KEY_PREFIX}{normalized_query}"


def batch_cache_key(queries: list[str]) -> str:
    digest = hashlib.md5("_".join(queries).encode()).hexdigest()
    return f"{BATCH_KEY_PREFIX}{digest}"


def _copy_summaries(summaries: list[RecipeSummary]) -> list[RecipeSummary]:
    # Cached entries must not share objects with what callers receive
    return [s.model_copy(deep=True) for s in summaries]


def parse_corpus(records: list[Any]) -> list[RawRecipe]:
    """Validate upstream records, dropping any without a name or ingredients."""
    recipes: list[RawRecipe] = []
    for record in records:
        try:
            recipes.append(RawRecipe.model_validate(record))
        except ValidationError as exc:
            logger.debug("Dropping malformed recipe record: %s", exc.errors())
    return recipes


class RecipeSearchEngine:
    def __init__(
        self,
        source: RecipeSource,
        cache: CacheGateway,
        config: RecipeSearchConfig = DEFAULT_RECIPE_CONFIG,
    ) -> None:
        self.source = source
        self.store = cache
        self.cache = SafeCache(cache)
        self.config = config

    def _rank(self, recipes: list[RawRecipe], normalized_query: str) -> list[RecipeSummary]:
        if not recipes:
            return []

        df = pd.DataFrame({
            "name_norm": [normalize_text(r.name) for r in recipes],
            "ingredients_norm": [normalize_text(r.ingredients) for r in recipes],
        })

        # --- Substring filter ---
        mask = df["name_norm"].str.contains(normalized_query, regex=False) | df[
            "ingredients_norm"
        ].str.contains(normalized_query, regex=False)
        candidates = df.loc[mask].copy()
        if candidates.empty:
            return []

        # --- Scoring ---
        candidates["_score"] = [
            score_recipe(name, ingredients, normalized_query)
            for name, ingredients in zip(candidates["name_norm"], candidates["ingredients_norm"])
        ]

        # Stable sort keeps filter order for equal scores
        candidates = candidates.sort_values("_score", ascending=False, kind="stable")

        # --- Formatting ---
        results: list[RecipeSummary] = []
        for idx, score in candidates["_score"].items():
            formatted = format_recipe(
                recipes[idx], int(score), servings=self.config.default_servings
            )
            if not formatted.ok:
                continue
            results.append(formatted.summary)
            if len(results) >= self.config.max_results:
                break
        return results

    def search(self, query: str) -> list[RecipeSummary]:
        """
        Return up to ``max_results`` recipes matching ``query``, best first.

        Raises ValueError for a blank query. Every other failure is logged
        and reported as an empty list.
        """
        normalized = normalize_text(query)
        if not normalized:
            raise ValueError("search query must not be blank")

        start_time = time.time()
        outcome = "ok"
        results: list[RecipeSummary] = []
        try:
            key = search_cache_key(normalized)

            # --- Cache check ---
            cached = self.cache.get(key)
            if cached is not None:
                outcome = "cache_hit"
                results = _copy_summaries(cached)
                return results

            # --- Corpus fetch ---
            try:
                corpus = self.source.fetch_all()
            except RecipeSourceError as exc:
                logger.error(
                    "Recipe source failed for query %r: %s (status=%s, body=%r)",
                    query, exc, exc.status, exc.body[:500],
                )
                outcome = "upstream_error"
                return results

            if not corpus:
                logger.info("Recipe source returned no recipes for query %r", query)
                outcome = "empty_corpus"
                return results

            results = self._rank(parse_corpus(corpus), normalized)
            self.cache.put(key, _copy_summaries(results), self.config.cache_ttl)
            return results

        except Exception:
            logger.error("Unexpected failure searching recipes for %r", query, exc_info=True)
            outcome = "error"
            results = []
            return results

        finally:
            record_event("search", {
                "query": query,
                "normalized_query": normalized,
                "results_returned": len(results),
                "response_time_ms": round((time.time() - start_time) * 1000, 1),
                "cache_hit": outcome == "cache_hit",
                "outcome": outcome,
            })

    def search_batch(self, queries: list[str]) -> dict[str, RecipeSummary]:
        """
        Return the best recipe for each query, keyed by the query as given.

        Queries with no match (or whose search failed) are left out. The
        composite result is cached as a whole when it is non-empty.
        """
        start_time = time.time()
        result: dict[str, RecipeSummary] = {}
        cache_hit = False
        try:
            key = batch_cache_key(queries)
            cached = self.cache.get(key)
            if cached is not None:
                cache_hit = True
                result = {q: s.model_copy(deep=True) for q, s in cached.items()}
                return result

            for query in queries:
                if not normalize_text(query):
                    logger.warning("Skipping blank query in batch %r", queries)
                    continue
                found = self.search(query)
                if found:
                    result[query] = found[0]

            if result:
                self.cache.put(
                    key,
                    {q: s.model_copy(deep=True) for q, s in result.items()},
                    self.config.cache_ttl,
                )
            return result

        except Exception:
            logger.error("Unexpected failure in batch recipe search for %r", queries, exc_info=True)
            result = {}
            return result

        finally:
            record_event("batch_search", {
                "queries": list(queries),
                "results_returned": len(result),
                "response_time_ms": round((time.time() - start_time) * 1000, 1),
                "cache_hit": cache_hit,
            })
