from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Protocol
from urllib.parse import parse_qsl

from ..errors import TranslatorError
from .models import (
    INT64_MAX,
    INT64_MIN,
    INTEGER_FIELDS,
    PARAM_FIELDS,
    SEARCH_ROW_LIMIT,
    TOOL_ROW_LIMIT,
    FilterSpec,
    Number,
    RangeBound,
)

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class Translator(Protocol):
    def translate(self, text: str) -> str:
        ...


@dataclass(frozen=True)
class SearchQuery:
    """Adapter output: the caller's filters plus the requested preset key."""

    spec: FilterSpec
    diet: str | None = None


# ---------------------------------------------------------------------------
# Conversions (total, fail closed)
# ---------------------------------------------------------------------------


def to_number(value: Any, integer: bool = False) -> Number | None:
    """
    Convert a native number or numeric string; return None when unusable.

    Integer fields take integral values only, and only within the 64-bit
    range the store can bind.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        exact = value
    elif isinstance(value, float):
        exact = None
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_RE.match(text):
            return None
        number = float(text)
        exact = None
        if _INTEGER_RE.match(text):
            try:
                exact = int(text)
            except ValueError:
                # Beyond the interpreter's digit limit.
                return None
    else:
        return None

    if exact is not None:
        if integer:
            return exact if INT64_MIN <= exact <= INT64_MAX else None
        try:
            number = float(exact)
        except OverflowError:
            return None

    if not math.isfinite(number):
        return None
    if integer:
        if not number.is_integer():
            return None
        exact = int(number)
        return exact if INT64_MIN <= exact <= INT64_MAX else None
    return number


def to_tokens(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(value.split(","))
    if isinstance(value, (list, tuple)):
        return tuple(item for item in value if isinstance(item, str))
    return ()


def _to_text(value: Any) -> str | None:
    return value if isinstance(value, str) and value.strip() else None


def _build_query(values: Mapping[str, Any], row_limit: int) -> SearchQuery:
    ranges: dict[str, RangeBound] = {}
    for stem, column in PARAM_FIELDS.items():
        integer = column in INTEGER_FIELDS
        bounds = {}
        for side in ("min", "max"):
            key = f"{side}_{stem}"
            if key not in values:
                continue
            number = to_number(values[key], integer=integer)
            if number is None:
                logger.debug("Ignoring unparseable %s=%r", key, values[key])
                continue
            bounds[side] = number
        if bounds:
            ranges[column] = RangeBound(**bounds)

    spec = FilterSpec(
        text_search=_to_text(values.get("search")),
        include_ingredients=to_tokens(values.get("include_ingredients")),
        exclude_ingredients=to_tokens(values.get("exclude_ingredients")),
        ranges=ranges,
        sort_by=_to_text(values.get("sort_by")),
        sort_order=values.get("sort_order"),
        row_limit=row_limit,
    )
    return SearchQuery(spec=spec, diet=_to_text(values.get("diet")))


# ---------------------------------------------------------------------------
# Surfaces
# ---------------------------------------------------------------------------


def parse_query_params(
    params: Mapping[str, str],
    row_limit: int = SEARCH_ROW_LIMIT,
) -> SearchQuery:
    """REST surface: string key/value pairs, unknown keys ignored."""
    values = {key: value for key, value in params.items() if isinstance(value, str)}
    return _build_query(values, row_limit)


def parse_tool_arguments(
    arguments: Mapping[str, Any] | None,
    row_limit: int = TOOL_ROW_LIMIT,
) -> SearchQuery:
    """JSON-RPC surface: numbers may arrive native or as numeric strings."""
    if not isinstance(arguments, Mapping):
        arguments = {}
    return _build_query(arguments, row_limit)


def _extract_query_string(raw: str) -> str:
    text = raw.strip().strip("`'\"").strip()
    prefix, mark, rest = text.partition("?")
    # Only a path or URL prefix is dropped; a "?" inside a value stays.
    if mark and "=" not in prefix:
        text = rest
    return text.lstrip("&").strip()


def parse_translated(
    text: str,
    translator: Translator,
    row_limit: int = TOOL_ROW_LIMIT,
) -> tuple[str, SearchQuery]:
    """
    Free-text surface: translate prose to a query string, then parse it.

    Returns the query string the translator produced together with the
    parsed query. Raises TranslatorError if the translator fails or its
    output holds no parameters; the call is never retried.
    """
    try:
        raw = translator.translate(text)
    except TranslatorError:
        raise
    except Exception as exc:
        logger.warning("Translator call failed", exc_info=True)
        raise TranslatorError(f"Translator request failed: {exc}") from exc

    query_string = _extract_query_string(raw or "")
    pairs = parse_qsl(query_string, keep_blank_values=False)
    if not pairs:
        raise TranslatorError("Translator returned no usable query parameters")

    return query_string, parse_query_params(dict(pairs), row_limit=row_limit)
