from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx
import pandas as pd

from .config import DEFAULT_RECIPE_CONFIG, RecipeSearchConfig
from .exceptions import RecipeSourceError

logger = logging.getLogger(__name__)

ALL_RECIPES_PATH = "/receitas/todas"


class RecipeSource(Protocol):
    def fetch_all(self) -> list[dict[str, Any]]: ...


class HttpRecipeSource:
    """Fetch the full corpus from the upstream recipe API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_RECIPE_CONFIG.request_timeout,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def fetch_all(self) -> list[dict[str, Any]]:
        if not self.base_url:
            raise RecipeSourceError("Recipe API base URL is not configured")

        url = f"{self.base_url}{ALL_RECIPES_PATH}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(url)
        except httpx.HTTPError as exc:
            raise RecipeSourceError(f"Recipe API unreachable: {exc}") from exc

        if not response.is_success:
            raise RecipeSourceError(
                f"Recipe API returned status {response.status_code}",
                status=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise RecipeSourceError(
                "Recipe API returned invalid JSON",
                status=response.status_code,
                body=response.text,
            ) from exc

        if payload is None:
            return []
        if not isinstance(payload, list):
            raise RecipeSourceError(
                f"Recipe API returned {type(payload).__name__}, expected a list",
                status=response.status_code,
                body=response.text,
            )
        return payload


class FileRecipeSource:
    """Read a CSV or JSON snapshot of the corpus from disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load_json(self) -> list[Any]:
        # json keeps ids and nested values as written; pandas would coerce them
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(payload, list):
            raise ValueError(f"expected a list of records, got {type(payload).__name__}")
        return [
            {k: v for k, v in record.items() if v is not None}
            if isinstance(record, dict) else record
            for record in payload
        ]

    def _load_csv(self) -> list[dict[str, Any]]:
        df = pd.read_csv(self.path, dtype=str, keep_default_na=False, na_values=[""])
        # Missing cells become absent fields, not NaN values
        return [
            {k: v for k, v in row.items() if not (pd.api.types.is_scalar(v) and pd.isna(v))}
            for row in df.to_dict(orient="records")
        ]

    def fetch_all(self) -> list[Any]:
        if not self.path.is_file():
            raise RecipeSourceError(f"Recipe corpus not found at {self.path}")
        try:
            if self.path.suffix.lower() == ".json":
                return self._load_json()
            return self._load_csv()
        except (OSError, ValueError) as exc:
            raise RecipeSourceError(f"Recipe corpus at {self.path} is unreadable: {exc}") from exc


def build_source(config: RecipeSearchConfig = DEFAULT_RECIPE_CONFIG) -> RecipeSource:
    if config.corpus_path:
        logger.info("Using local recipe corpus at %s", config.corpus_path)
        return FileRecipeSource(config.corpus_path)
    return HttpRecipeSource(config.api_base_url, timeout=config.request_timeout)
