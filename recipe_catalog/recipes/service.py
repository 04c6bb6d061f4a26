from __future__ import annotations

import logging

from ..errors import RecipeNotFoundError
from ..filters.adapters import SearchQuery
from ..filters.engine import compose, compose_lookup
from ..filters.hydrator import hydrate_rows
from ..filters.presets import DietPresetTable
from .models import DietPlanOut, DietPlansResponse, Recipe, SearchResponse
from .store import RecipeStore

logger = logging.getLogger(__name__)


def search_recipes(
    store: RecipeStore,
    presets: DietPresetTable,
    query: SearchQuery,
) -> SearchResponse:
    """Run a search for any surface; unknown diets fall back to caller filters only."""
    preset = presets.lookup(query.diet)
    if query.diet and preset is None:
        logger.debug("Unknown diet preset %r ignored", query.diet)

    composed = compose(preset, query.spec)
    rows = store.execute(composed)
    recipes = hydrate_rows(rows)[: query.spec.row_limit]

    return SearchResponse(
        recipes=recipes,
        count=len(recipes),
        diet_plan=DietPlanOut(**preset.to_dict()) if preset else None,
    )


def get_recipe(store: RecipeStore, recipe_id: int) -> Recipe:
    row = store.fetch_one(compose_lookup(recipe_id))
    if row is None:
        raise RecipeNotFoundError(recipe_id)
    recipes = hydrate_rows([row])
    if not recipes:
        # Row exists but cannot be read back; treat like a missing recipe.
        raise RecipeNotFoundError(recipe_id)
    return recipes[0]


def list_diet_plans(presets: DietPresetTable) -> DietPlansResponse:
    return DietPlansResponse(
        diet_plans={key: DietPlanOut(**value) for key, value in presets.as_dict().items()}
    )
