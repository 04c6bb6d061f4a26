from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .models import FilterSpec, RangeBound


@dataclass(frozen=True)
class DietPreset:
    key: str
    name: str
    description: str
    constraints: FilterSpec

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "filters": self.constraints.to_params(),
        }


class DietPresetTable:
    """Read-only lookup of dietary presets, keyed by preset identifier."""

    def __init__(self, presets: Mapping[str, DietPreset]) -> None:
        self._presets = MappingProxyType(dict(presets))

    def lookup(self, name: str | None) -> DietPreset | None:
        if not name:
            return None
        return self._presets.get(name)

    def names(self) -> list[str]:
        return list(self._presets)

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {key: preset.to_dict() for key, preset in self._presets.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._presets

    def __iter__(self) -> Iterator[DietPreset]:
        return iter(self._presets.values())

    def __len__(self) -> int:
        return len(self._presets)


def _preset(key: str, name: str, description: str, **constraints: Any) -> DietPreset:
    return DietPreset(key=key, name=name, description=description, constraints=FilterSpec(**constraints))


DEFAULT_DIET_PRESETS = DietPresetTable({
    p.key: p
    for p in (
        _preset(
            "keto",
            "Ketogenic Diet",
            "High fat, very low carb diet for ketosis",
            ranges={"carbs": RangeBound(max=20), "fat": RangeBound(min=15)},
            sort_by="fat",
            sort_order="desc",
        ),
        _preset(
            "paleo",
            "Paleo Diet",
            "Whole foods, no processed ingredients",
            exclude_ingredients=("wheat", "grain", "dairy", "sugar", "legume", "bean"),
            sort_by="protein",
            sort_order="desc",
        ),
        _preset(
            "mediterranean",
            "Mediterranean Diet",
            "Heart-healthy with olive oil, fish, and vegetables",
            include_ingredients=("olive", "fish", "vegetable", "fruit", "nut"),
            ranges={"sodium": RangeBound(max=1500)},
            sort_by="rating",
            sort_order="desc",
        ),
        _preset(
            "vegan",
            "Vegan Diet",
            "Plant-based, no animal products",
            exclude_ingredients=(
                "meat", "chicken", "beef", "pork", "fish",
                "dairy", "milk", "cheese", "egg", "butter",
            ),
            sort_by="fiber",
            sort_order="desc",
        ),
        _preset(
            "vegetarian",
            "Vegetarian Diet",
            "No meat, but includes dairy and eggs",
            exclude_ingredients=("meat", "chicken", "beef", "pork", "fish", "seafood"),
            sort_by="protein",
            sort_order="desc",
        ),
        _preset(
            "low_carb",
            "Low Carb Diet",
            "Reduced carbohydrate intake",
            ranges={"carbs": RangeBound(max=50)},
            sort_by="carbs",
            sort_order="asc",
        ),
        _preset(
            "high_protein",
            "High Protein Diet",
            "Protein-rich foods for muscle building",
            ranges={"protein": RangeBound(min=20)},
            sort_by="protein",
            sort_order="desc",
        ),
        _preset(
            "low_sodium",
            "Low Sodium Diet",
            "Heart-healthy, reduced sodium intake",
            ranges={"sodium": RangeBound(max=1000)},
            sort_by="sodium",
            sort_order="asc",
        ),
        _preset(
            "diabetic",
            "Diabetic Friendly",
            "Low sugar, controlled carbs",
            ranges={"carbs": RangeBound(max=45)},
            exclude_ingredients=("sugar", "honey", "syrup", "candy"),
            sort_by="carbs",
            sort_order="asc",
        ),
        _preset(
            "heart_healthy",
            "Heart Healthy",
            "Low sodium, healthy fats",
            ranges={"sodium": RangeBound(max=1200), "fiber": RangeBound(min=5)},
            exclude_ingredients=("fried", "processed"),
            sort_by="fiber",
            sort_order="desc",
        ),
    )
})


def get_diet_presets() -> DietPresetTable:
    """FastAPI dependency returning the process-wide preset table."""
    return DEFAULT_DIET_PRESETS
