from __future__ import annotations

import logging

from ..filters.adapters import Translator, parse_translated
from ..filters.models import TOOL_ROW_LIMIT
from ..filters.presets import DietPresetTable
from ..recipes.service import search_recipes
from ..recipes.store import RecipeStore
from .models import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)


def _build_reply(diet_name: str | None, count: int | None) -> str:
    if count is None:
        if diet_name:
            return f"Here is how I read your request, using the {diet_name} preset."
        return "Here is how I read your request."
    if count == 0:
        return "I couldn't find any recipes matching that. Could you loosen a filter or two?"
    if diet_name:
        return f"Found {count} {diet_name} recipes for you:"
    return f"Found {count} recipes for you:"


def handle_chat(
    body: ChatRequest,
    translator: Translator,
    store: RecipeStore,
    presets: DietPresetTable,
) -> ChatResponse:
    """
    Translate a chat message into search filters, optionally running the search.

    TranslatorError propagates to the caller; store errors only occur when
    ``body.execute`` is set.
    """
    query_string, query = parse_translated(body.message, translator, row_limit=TOOL_ROW_LIMIT)
    preset = presets.lookup(query.diet)
    diet_name = preset.name if preset else None
    logger.debug("Chat message translated to %r", query_string)

    results = search_recipes(store, presets, query) if body.execute else None

    return ChatResponse(
        message=_build_reply(diet_name, results.count if results is not None else None),
        query_string=query_string,
        diet=preset.key if preset else None,
        filters=query.spec.to_params(),
        results=results,
    )
