from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass

from .config import DEFAULT_RECIPE_CONFIG
from .models import IngredientOut, RawRecipe, RecipeSummary
from .text import normalize_text

logger = logging.getLogger(__name__)

PLACEHOLDER_THUMBNAIL = "https://via.placeholder.com/350x250.png?text=Image+not+available"
DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_AREA = "Brazilian"
TO_TASTE = "to taste"

_MEASURE_PATTERNS = [
    re.compile(
        r"(\d+)\s*(kg|g|ml|l|xícaras|xícara|colheres|colher|unidades|unidade)\b",
        re.IGNORECASE,
    ),
    re.compile(r"(\d+)"),
]

# Ingredient keywords are in Portuguese, like the upstream corpus.
_MEAT = ["carne", "frango", "peixe", "atum", "bacon", "presunto", "salsicha", "linguica"]
_ANIMAL_PRODUCTS = [
    "carne", "frango", "peixe", "atum", "bacon", "presunto",
    "leite", "ovo", "mel", "queijo", "manteiga", "iogurte",
]
_GLUTEN = ["farinha de trigo", "trigo", "aveia", "cevada", "malte", "centeio"]


@dataclass(frozen=True)
class FormatResult:
    """Outcome of formatting one record: a summary, or a skip with the reason."""

    summary: RecipeSummary | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.summary is not None


def extract_measure(ingredient: str) -> str:
    """Return the first quantity (with unit when present) in an ingredient line."""
    if not ingredient:
        return TO_TASTE
    for pattern in _MEASURE_PATTERNS:
        match = pattern.search(ingredient)
        if match:
            return match.group(0)
    return TO_TASTE


def estimate_prep_time(instructions: str) -> int:
    """Estimate minutes from the number of steps (periods and line breaks)."""
    steps = instructions.count(".") + instructions.count("\n")
    return max(15, min(120, steps * 10))


def format_prep_time(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} minutes"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}min" if rest else f"{hours}h"


def _mentions_any(text: str, words: list[str]) -> bool:
    normalized = normalize_text(text)
    return any(w in normalized for w in words)


def is_vegetarian(ingredients: str) -> bool:
    return bool(ingredients) and not _mentions_any(ingredients, _MEAT)


def is_vegan(ingredients: str) -> bool:
    return bool(ingredients) and not _mentions_any(ingredients, _ANIMAL_PRODUCTS)


def is_gluten_free(ingredients: str) -> bool:
    return bool(ingredients) and not _mentions_any(ingredients, _GLUTEN)


def split_ingredients(ingredients: str) -> list[str]:
    return [item.strip() for item in ingredients.split(",") if item.strip()]


def format_recipe(
    recipe: RawRecipe,
    score: int = 0,
    servings: int = DEFAULT_RECIPE_CONFIG.default_servings,
) -> FormatResult:
    """
    Map a validated upstream record into a RecipeSummary.

    Never raises: a record that cannot be formatted comes back as a skip
    result so the caller can drop it and carry on with the rest.
    """
    try:
        if not recipe.name or not recipe.ingredients:
            return FormatResult(error="missing name or ingredients")

        instructions = recipe.preparation_steps or ""
        minutes = estimate_prep_time(instructions)

        summary = RecipeSummary(
            id=recipe.id or uuid.uuid4().hex,
            name=recipe.name,
            thumbnail=recipe.image_url or PLACEHOLDER_THUMBNAIL,
            category=recipe.type or DEFAULT_CATEGORY,
            area=DEFAULT_AREA,
            ingredients=[
                IngredientOut(name=item, measure=extract_measure(item))
                for item in split_ingredients(recipe.ingredients)
            ],
            instructions=instructions,
            prep_time_minutes=minutes,
            prep_time_text=format_prep_time(minutes),
            servings=servings,
            url=recipe.image_url or "",
            vegetarian=is_vegetarian(recipe.ingredients),
            vegan=is_vegan(recipe.ingredients),
            gluten_free=is_gluten_free(recipe.ingredients),
            relevance=score,
        )
        return FormatResult(summary=summary)

    except Exception as exc:
        logger.warning("Failed to format recipe %r: %s", recipe.name, exc, exc_info=True)
        return FormatResult(error=str(exc))
