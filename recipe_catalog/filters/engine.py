"""
Filter composition engine.

Turns an optional diet preset plus a caller FilterSpec into one
parameterized SELECT over the recipes table. The SQL text is assembled only
from literals defined in this module and whitelisted column names; every
caller-influenced value travels in ``ComposedQuery.args``.

Ingredient filters are substring matches against the stored JSON blob, so
``egg`` also matches ``eggplant``. LIKE case sensitivity follows the store's
collation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .models import INTEGER_FIELDS, SORT_COLUMNS, FilterSpec, Number, SortOrder
from .presets import DietPreset

logger = logging.getLogger(__name__)

RECIPE_TABLE = "recipes"

RECIPE_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "description",
    "image",
    "prep_time_minutes",
    "cook_time_minutes",
    "total_time_minutes",
    "servings",
    "rating",
    "ingredients",
    "instructions",
    "calories",
    "protein",
    "fat",
    "carbs",
    "fiber",
    "sodium",
)

_SELECT = f"SELECT {', '.join(RECIPE_COLUMNS)} FROM {RECIPE_TABLE}"
_DEFAULT_ORDER = "ORDER BY id ASC"


@dataclass(frozen=True)
class ComposedQuery:
    sql: str
    args: tuple[Any, ...] = ()


def _bind_number(column: str, value: Number) -> Number:
    return int(value) if column in INTEGER_FIELDS else float(value)


def _like(token: str) -> str:
    return f"%{token}%"


def _predicates(spec: FilterSpec) -> tuple[list[str], list[Any]]:
    """Translate one FilterSpec into ``AND ...`` fragments and bind values."""
    fragments: list[str] = []
    args: list[Any] = []

    for column, bound in spec.ranges.items():
        if bound.min is not None:
            fragments.append(f"AND {column} >= ?")
            args.append(_bind_number(column, bound.min))
        if bound.max is not None:
            fragments.append(f"AND {column} <= ?")
            args.append(_bind_number(column, bound.max))

    if spec.text_search:
        fragments.append("AND (name LIKE ? OR description LIKE ?)")
        term = _like(spec.text_search)
        args.extend([term, term])

    for token in spec.include_ingredients:
        fragments.append("AND ingredients LIKE ?")
        args.append(_like(token))

    for token in spec.exclude_ingredients:
        fragments.append("AND ingredients NOT LIKE ?")
        args.append(_like(token))

    return fragments, args


def _order_clause(preset: DietPreset | None, spec: FilterSpec) -> str:
    sort_by, sort_order = spec.sort_by, spec.sort_order
    if sort_by is None and preset is not None:
        sort_by, sort_order = preset.constraints.sort_by, preset.constraints.sort_order

    if sort_by not in SORT_COLUMNS:
        return _DEFAULT_ORDER
    direction = "DESC" if sort_order is SortOrder.desc else "ASC"
    return f"ORDER BY {sort_by} {direction}"


def compose(preset: DietPreset | None, spec: FilterSpec) -> ComposedQuery:
    """
    Build the search query for ``spec``, applying ``preset`` first.

    Preset constraints go through the same translation as caller
    constraints, so a preset and the equivalent explicit filters produce the
    same fragments. A caller ``sort_by`` overrides the preset's sort; with
    neither, results come back in id order. The row cap is
    ``spec.row_limit``, which each call site fixes.
    """
    parts = [_SELECT, "WHERE 1=1"]
    args: list[Any] = []

    if preset is not None:
        preset_fragments, preset_args = _predicates(preset.constraints)
        parts.extend(preset_fragments)
        args.extend(preset_args)

    caller_fragments, caller_args = _predicates(spec)
    parts.extend(caller_fragments)
    args.extend(caller_args)

    parts.append(_order_clause(preset, spec))
    parts.append(f"LIMIT {int(spec.row_limit)}")

    sql = " ".join(parts)
    logger.debug("Composed recipe query with %d bind values: %s", len(args), sql)
    return ComposedQuery(sql=sql, args=tuple(args))


def compose_lookup(recipe_id: int) -> ComposedQuery:
    return ComposedQuery(sql=f"{_SELECT} WHERE id = ?", args=(int(recipe_id),))
