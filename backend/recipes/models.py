from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class RawRecipe(BaseModel):
    """Upstream recipe record. Accepts both the English and the API's Portuguese keys."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(..., validation_alias=AliasChoices("name", "receita"))
    ingredients: str = Field(..., validation_alias=AliasChoices("ingredients", "ingredientes"))
    id: str | None = None
    image_url: str | None = Field(
        default=None, validation_alias=AliasChoices("image_url", "link_imagem")
    )
    type: str | None = Field(default=None, validation_alias=AliasChoices("type", "tipo"))
    preparation_steps: str | None = Field(
        default=None, validation_alias=AliasChoices("preparation_steps", "modo_preparo")
    )

    @field_validator("name", "ingredients")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class IngredientOut(BaseModel):
    name: str
    measure: str


class NutritionOut(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class RecipeSummary(BaseModel):
    id: str
    name: str
    thumbnail: str
    category: str
    area: str
    ingredients: list[IngredientOut]
    instructions: str
    prep_time_minutes: int
    prep_time_text: str
    servings: int
    nutrition: NutritionOut = Field(default_factory=NutritionOut)
    url: str = ""
    vegetarian: bool
    vegan: bool
    gluten_free: bool
    relevance: int = Field(default=0, ge=0)


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=200, description="Food item or recipe name")

    @field_validator("query")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value


class SearchResponse(BaseModel):
    query: str
    results: list[RecipeSummary]
    total: int


class BatchSearchRequest(BaseModel):
    queries: list[str] = Field(..., min_length=1, max_length=50)


class BatchSearchResponse(BaseModel):
    results: dict[str, RecipeSummary]
