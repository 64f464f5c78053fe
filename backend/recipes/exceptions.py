from __future__ import annotations


class RecipeSourceError(Exception):
    """The recipe source could not be reached or returned a non-success status."""

    def __init__(self, message: str, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body
