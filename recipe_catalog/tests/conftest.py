from __future__ import annotations

import json
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from recipe_catalog.app import app
from recipe_catalog.recipes.config import StoreConfig
from recipe_catalog.recipes.store import RecipeStore, get_store

SCHEMA = """
CREATE TABLE recipes (
    id INTEGER PRIMARY KEY,
    name TEXT,
    description TEXT,
    image TEXT,
    prep_time_minutes INTEGER,
    cook_time_minutes INTEGER,
    total_time_minutes INTEGER,
    servings INTEGER,
    rating REAL,
    ingredients TEXT,
    instructions TEXT,
    calories INTEGER,
    protein REAL,
    fat REAL,
    carbs REAL,
    fiber REAL,
    sodium REAL
)
"""

COLUMNS = [
    "id", "name", "description", "image", "prep_time_minutes", "cook_time_minutes",
    "total_time_minutes", "servings", "rating", "ingredients", "instructions",
    "calories", "protein", "fat", "carbs", "fiber", "sodium",
]


def make_row(recipe_id: int, name: str, **fields: Any) -> dict[str, Any]:
    row = {column: None for column in COLUMNS}
    row.update(id=recipe_id, name=name, description="", image="")
    for key in ("ingredients", "instructions"):
        if isinstance(fields.get(key), list):
            fields[key] = json.dumps(fields[key])
    row.update(fields)
    return row


SAMPLE_ROWS = [
    make_row(
        1, "Tofu Stir Fry",
        description="Crispy tofu with vegetables",
        ingredients=["firm tofu", "broccoli", "soy sauce"],
        instructions=["Press tofu", "Stir fry everything"],
        prep_time_minutes=15, cook_time_minutes=10, total_time_minutes=25, servings=2,
        rating=4.5, calories=350, protein=18.0, fat=12.0, carbs=30.0, fiber=6.0, sodium=900.0,
    ),
    make_row(
        2, "Bacon and Eggs",
        description="Classic keto breakfast",
        ingredients=["bacon", "egg", "butter"],
        instructions=["Fry bacon", "Fry eggs in butter"],
        prep_time_minutes=5, cook_time_minutes=10, total_time_minutes=15, servings=1,
        rating=4.0, calories=450, protein=20.0, fat=35.0, carbs=2.0, fiber=0.0, sodium=800.0,
    ),
    make_row(
        3, "Chicken Salad",
        description="Grilled chicken over greens",
        ingredients=["chicken breast", "lettuce", "olive oil"],
        instructions=["Grill chicken", "Toss salad"],
        prep_time_minutes=20, cook_time_minutes=15, total_time_minutes=35, servings=2,
        rating=4.2, calories=400, protein=30.0, fat=18.0, carbs=10.0, fiber=3.0, sodium=700.0,
    ),
    make_row(
        4, "Lentil Soup",
        description="Hearty vegan soup",
        ingredients=["lentils", "carrot", "onion", "vegetable broth"],
        instructions=["Simmer everything"],
        prep_time_minutes=10, cook_time_minutes=40, total_time_minutes=50, servings=4,
        rating=4.7, calories=300, protein=15.0, fat=5.0, carbs=40.0, fiber=12.0, sodium=1100.0,
    ),
    make_row(
        5, "Mystery Stew",
        description="Ingredients were never recorded",
        ingredients="not json at all",
        instructions="",
        calories=500,
    ),
    make_row(
        6, "Corrupted Pie",
        description="Calories column holds text",
        ingredients=["flour"],
        calories="abc",
    ),
]


def write_recipes(path: Path, rows: list[dict[str, Any]]) -> Path:
    with closing(sqlite3.connect(path)) as conn:
        conn.execute(SCHEMA)
        conn.executemany(
            f"INSERT INTO recipes ({', '.join(COLUMNS)}) VALUES ({', '.join('?' for _ in COLUMNS)})",
            [[row[column] for column in COLUMNS] for row in rows],
        )
        conn.commit()
    return path


@pytest.fixture
def make_store(tmp_path: Path) -> Callable[[list[dict[str, Any]]], RecipeStore]:
    counter = {"n": 0}

    def _make(rows: list[dict[str, Any]]) -> RecipeStore:
        counter["n"] += 1
        path = write_recipes(tmp_path / f"recipes_{counter['n']}.db", rows)
        return RecipeStore(StoreConfig(db_path=path))

    return _make


@pytest.fixture
def store(make_store) -> RecipeStore:
    return make_store(SAMPLE_ROWS)


@pytest.fixture
def client(store: RecipeStore):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def recipe_row() -> Callable[..., dict[str, Any]]:
    return make_row
