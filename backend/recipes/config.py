from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RecipeSearchConfig:
    api_base_url: str = os.getenv("RECIPES_API_BASE_URL", "")
    corpus_path: str = os.getenv("RECIPES_CORPUS_PATH", "")
    request_timeout: float = 10.0
    cache_ttl: int = 3600
    max_results: int = 12
    default_servings: int = 4


DEFAULT_RECIPE_CONFIG = RecipeSearchConfig()
