"""
Data ingestion configuration.

The ingestion pipeline is the only code that writes the recipe store; the
service itself opens the database read-only.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the recipe ingestion pipeline.
    """

    source_csv: Path = Path("recipe_catalog/data/raw/recipes.csv")
    db_path: Path = Path("recipe_catalog/data/recipes.db")
    table: str = "recipes"


DEFAULT_INGESTION_CONFIG = IngestionConfig()
