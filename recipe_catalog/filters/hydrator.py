from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from ..recipes.models import Recipe

logger = logging.getLogger(__name__)

_LIST_FIELDS = ("ingredients", "instructions")


def decode_list(raw: Any) -> list[str]:
    """Decode a JSON-encoded list of strings; anything unusable becomes []."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw if item is not None]
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str) or not raw.strip():
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        return []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def hydrate(row: Mapping[str, Any]) -> Recipe:
    """Build a Recipe from a raw store row, decoding the list columns."""
    data = dict(row)
    for name in _LIST_FIELDS:
        data[name] = decode_list(data.get(name))
    # Text columns may be NULL in the store.
    data["description"] = data.get("description") or ""
    data["image"] = data.get("image") or ""
    return Recipe(**data)


def hydrate_rows(rows: Iterable[Mapping[str, Any]]) -> list[Recipe]:
    """Hydrate every row, skipping rows that cannot be converted."""
    recipes: list[Recipe] = []
    for row in rows:
        try:
            recipes.append(hydrate(row))
        except (KeyError, TypeError, ValueError, ValidationError):
            logger.debug("Skipping malformed recipe row id=%r", row.get("id"), exc_info=True)
    return recipes
