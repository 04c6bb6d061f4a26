from __future__ import annotations

import json
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, List

import pandas as pd

from ..filters.engine import RECIPE_COLUMNS
from ..filters.models import INTEGER_FIELDS, RANGE_FIELDS
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

CANONICAL_COLUMNS: List[str] = list(RECIPE_COLUMNS)

_LIST_COLUMNS = ("ingredients", "instructions")


def _encode_list(value: Any) -> str:
    """Store a list column as a JSON array of strings."""
    if isinstance(value, (list, tuple)):
        items = list(value)
    elif value is None or pd.isna(value):
        return "[]"
    else:
        text = str(value).strip()
        if not text:
            return "[]"
        items = None
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
            if isinstance(parsed, list):
                items = parsed
        if items is None:
            separator = "\n" if "\n" in text else "|"
            items = text.split(separator)

    cleaned = [str(item).strip() for item in items if item is not None and str(item).strip()]
    return json.dumps(cleaned)


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the recipe ingestion pipeline.

    Steps:
    - Read the raw recipe CSV.
    - Map raw fields into the canonical recipe columns.
    - Replace the recipe table in the sqlite database.
    """

    df = pd.read_csv(config.source_csv)

    # Source exports name a few columns differently.
    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in df.columns:
                return col
        return None

    canonical = pd.DataFrame(index=df.index)

    col_id = _first_present(["id", "recipe_id"])
    if col_id:
        canonical["id"] = pd.to_numeric(df[col_id], errors="coerce")
    else:
        canonical["id"] = pd.Series(range(1, len(df) + 1), index=df.index)

    col_name = _first_present(["name", "title", "recipe_name"])
    canonical["name"] = df[col_name].fillna("").astype(str) if col_name else ""

    col_description = _first_present(["description", "summary"])
    canonical["description"] = df[col_description].fillna("").astype(str) if col_description else ""

    col_image = _first_present(["image", "image_url", "imageUrl"])
    canonical["image"] = df[col_image].fillna("").astype(str) if col_image else ""

    aliases = {
        "ingredients": ["ingredients", "ingredient_list"],
        "instructions": ["instructions", "steps", "directions"],
    }
    for column in _LIST_COLUMNS:
        source = _first_present(aliases[column])
        canonical[column] = df[source].apply(_encode_list) if source else "[]"

    for column in RANGE_FIELDS:
        if column in df.columns:
            values = pd.to_numeric(df[column], errors="coerce")
        else:
            values = pd.Series(pd.NA, index=df.index, dtype="Float64")
        if column in INTEGER_FIELDS:
            values = values.round().astype("Int64")
        canonical[column] = values

    canonical = canonical.dropna(subset=["id"])
    canonical["id"] = canonical["id"].astype(int)
    canonical = canonical.drop_duplicates(subset=["id"])

    # Ensure all expected columns exist and order them
    canonical = canonical[CANONICAL_COLUMNS]

    config.db_path.parent.mkdir(parents=True, exist_ok=True)
    with closing(sqlite3.connect(config.db_path)) as conn:
        canonical.to_sql(config.table, conn, if_exists="replace", index=False)
        conn.commit()
    return config.db_path


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Recipe database saved to: {path}")
