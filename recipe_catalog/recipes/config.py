"""
Store configuration for the recipe catalog.

The relational store is a single sqlite database file holding the
``recipes`` table. Its location comes from ``RECIPES_DB_PATH``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Load .env from project root
load_dotenv(_PROJECT_ROOT / ".env")

_DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "data" / "recipes.db"


@dataclass(frozen=True)
class StoreConfig:
    db_path: Path = field(
        default_factory=lambda: Path(os.getenv("RECIPES_DB_PATH", str(_DEFAULT_DB_PATH)))
    )


DEFAULT_STORE_CONFIG = StoreConfig()
