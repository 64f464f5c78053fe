from __future__ import annotations

SCORE_WEIGHTS = {
    "name_exact": 10,
    "name_partial": 5,
    "ingredients_exact": 8,
    "ingredients_partial": 3,
}


def score_recipe(
    normalized_name: str,
    normalized_ingredients: str,
    normalized_query: str,
    weights: dict[str, int] | None = None,
) -> int:
    """
    Compute an additive relevance score for one recipe against one query.

    All inputs must already be normalized. Each query token found in the
    name or ingredients adds its partial weight; whole-query matches add
    the exact weights on top.
    """
    w = weights or SCORE_WEIGHTS
    tokens = normalized_query.split()

    score = 0
    if normalized_name == normalized_query:
        score += w["name_exact"]
    score += w["name_partial"] * sum(1 for t in tokens if t in normalized_name)

    if normalized_query in normalized_ingredients:
        score += w["ingredients_exact"]
    score += w["ingredients_partial"] * sum(1 for t in tokens if t in normalized_ingredients)

    return score
