from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Recipe(BaseModel):
    id: int
    name: str
    description: str = ""
    image: str = ""
    prep_time_minutes: int | None = None
    cook_time_minutes: int | None = None
    total_time_minutes: int | None = None
    servings: int | None = None
    rating: float | None = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    calories: int | None = None
    protein: float | None = None
    fat: float | None = None
    carbs: float | None = None
    fiber: float | None = None
    sodium: float | None = None


class DietPlanOut(BaseModel):
    name: str
    description: str
    filters: dict[str, Any] = Field(default_factory=dict)


class SearchResponse(BaseModel):
    recipes: list[Recipe]
    count: int
    diet_plan: DietPlanOut | None = None


class DietPlansResponse(BaseModel):
    diet_plans: dict[str, DietPlanOut]
