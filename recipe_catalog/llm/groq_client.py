from __future__ import annotations

import logging

from groq import Groq

from ..errors import TranslatorError
from ..filters.models import PARAM_FIELDS, SORT_COLUMNS
from ..filters.presets import DEFAULT_DIET_PRESETS
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)


def _build_system_prompt() -> str:
    ranges = ", ".join(f"min_{stem}, max_{stem}" for stem in PARAM_FIELDS)
    return (
        "You convert a user's recipe request into URL query parameters for a "
        "recipe search API.\n\n"
        "Accepted parameters:\n"
        "- search: text matched against recipe name and description\n"
        f"- diet: one of {', '.join(DEFAULT_DIET_PRESETS.names())}\n"
        "- include_ingredients: comma-separated ingredients that must appear\n"
        "- exclude_ingredients: comma-separated ingredients that must not appear\n"
        f"- numeric bounds: {ranges} "
        "(times in minutes, calories per serving, nutrients in grams, sodium in mg)\n"
        f"- sort_by: one of {', '.join(sorted(SORT_COLUMNS))}\n"
        "- sort_order: asc or desc\n\n"
        "Return ONLY the query string, for example:\n"
        "diet=vegan&include_ingredients=tofu&max_prep_time=30\n"
        "No explanation, no leading '?', no code fences."
    )


SYSTEM_PROMPT = _build_system_prompt()


class GroqTranslator:
    """Translate prose into a recipe search query string with a Groq model."""

    def __init__(self, config: LLMConfig = DEFAULT_LLM_CONFIG) -> None:
        self.config = config

    def translate(self, text: str) -> str:
        config = self.config
        if not config.enabled or not config.api_key:
            raise TranslatorError("Natural-language search is not configured")

        try:
            client = Groq(
                api_key=config.api_key,
                timeout=config.timeout,
                max_retries=config.max_retries,
            )
            response = client.chat.completions.create(
                model=config.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": text},
                ],
                max_tokens=config.max_tokens,
                temperature=config.temperature,
            )
            content = (response.choices[0].message.content or "").strip()
        except Exception as exc:
            logger.warning("Groq translation call failed", exc_info=True)
            raise TranslatorError(f"Translator request failed: {exc}") from exc

        if not content:
            raise TranslatorError("Translator returned an empty response")
        return content


def get_translator() -> GroqTranslator:
    """FastAPI dependency for the chat endpoint."""
    return GroqTranslator()
