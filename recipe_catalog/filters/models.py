from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Union

Number = Union[int, float]

SEARCH_ROW_LIMIT = 100
TOOL_ROW_LIMIT = 20

# Emission order of range predicates.
RANGE_FIELDS: tuple[str, ...] = (
    "calories",
    "protein",
    "fat",
    "carbs",
    "fiber",
    "sodium",
    "prep_time_minutes",
    "cook_time_minutes",
    "total_time_minutes",
    "servings",
    "rating",
)

INTEGER_FIELDS: frozenset[str] = frozenset({
    "calories",
    "prep_time_minutes",
    "cook_time_minutes",
    "total_time_minutes",
    "servings",
})

SORT_COLUMNS: frozenset[str] = frozenset({"id", "name", *RANGE_FIELDS})

# Range of an sqlite INTEGER bind value.
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Query-parameter stem -> column, e.g. ``max_prep_time`` -> prep_time_minutes.
PARAM_FIELDS: dict[str, str] = {
    "calories": "calories",
    "protein": "protein",
    "fat": "fat",
    "carbs": "carbs",
    "fiber": "fiber",
    "sodium": "sodium",
    "prep_time": "prep_time_minutes",
    "cook_time": "cook_time_minutes",
    "total_time": "total_time_minutes",
    "servings": "servings",
    "rating": "rating",
}

_FIELD_PARAMS = {column: stem for stem, column in PARAM_FIELDS.items()}


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"

    @classmethod
    def parse(cls, value: Any) -> "SortOrder":
        """Anything other than ``desc`` sorts ascending."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == "desc":
            return cls.desc
        return cls.asc


@dataclass(frozen=True)
class RangeBound:
    min: Number | None = None
    max: Number | None = None

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None


def _clean_tokens(tokens: Iterable[str] | str | None) -> tuple[str, ...]:
    if not tokens:
        return ()
    if isinstance(tokens, str):
        tokens = tokens.split(",")
    cleaned = []
    for token in tokens:
        token = str(token).strip()
        if token:
            cleaned.append(token)
    return tuple(cleaned)


def _clean_ranges(ranges: Mapping[str, Any] | None) -> Mapping[str, RangeBound]:
    if not ranges:
        return MappingProxyType({})
    cleaned: dict[str, RangeBound] = {}
    for name in RANGE_FIELDS:
        bound = ranges.get(name)
        if bound is None:
            continue
        if not isinstance(bound, RangeBound):
            low, high = bound
            bound = RangeBound(min=low, max=high)
        if not bound.is_empty:
            cleaned[name] = bound
    return MappingProxyType(cleaned)


@dataclass(frozen=True)
class FilterSpec:
    """
    Protocol-agnostic description of a recipe search.

    Construction normalizes the inputs: range fields outside RANGE_FIELDS
    and a ``sort_by`` outside SORT_COLUMNS are dropped, ingredient tokens are
    trimmed and blank ones discarded, and an empty text search becomes None.
    """

    text_search: str | None = None
    include_ingredients: tuple[str, ...] = ()
    exclude_ingredients: tuple[str, ...] = ()
    ranges: Mapping[str, RangeBound] = field(default_factory=dict)
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.asc
    row_limit: int = SEARCH_ROW_LIMIT

    def __post_init__(self) -> None:
        text = self.text_search.strip() if isinstance(self.text_search, str) else None
        object.__setattr__(self, "text_search", text or None)
        object.__setattr__(self, "include_ingredients", _clean_tokens(self.include_ingredients))
        object.__setattr__(self, "exclude_ingredients", _clean_tokens(self.exclude_ingredients))
        object.__setattr__(self, "ranges", _clean_ranges(self.ranges))
        if not isinstance(self.sort_by, str) or self.sort_by not in SORT_COLUMNS:
            object.__setattr__(self, "sort_by", None)
        object.__setattr__(self, "sort_order", SortOrder.parse(self.sort_order))
        if int(self.row_limit) < 1:
            raise ValueError(f"row_limit must be positive, got {self.row_limit}")
        object.__setattr__(self, "row_limit", int(self.row_limit))

    def to_params(self) -> dict[str, Any]:
        """Render these filters using the REST query-parameter names."""
        params: dict[str, Any] = {}
        if self.text_search:
            params["search"] = self.text_search
        if self.include_ingredients:
            params["include_ingredients"] = list(self.include_ingredients)
        if self.exclude_ingredients:
            params["exclude_ingredients"] = list(self.exclude_ingredients)
        for name, bound in self.ranges.items():
            stem = _FIELD_PARAMS[name]
            if bound.min is not None:
                params[f"min_{stem}"] = bound.min
            if bound.max is not None:
                params[f"max_{stem}"] = bound.max
        if self.sort_by:
            params["sort_by"] = self.sort_by
            params["sort_order"] = self.sort_order.value
        return params
