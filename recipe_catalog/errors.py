from __future__ import annotations


class RecipeCatalogError(Exception):
    """Base class for errors that are reported back to the caller."""

    kind: str = "error"

    def to_detail(self) -> dict[str, str]:
        return {"error": self.kind, "message": str(self)}


class RecipeNotFoundError(RecipeCatalogError):
    kind = "not_found"

    def __init__(self, recipe_id: int) -> None:
        super().__init__(f"Recipe with ID {recipe_id} not found")
        self.recipe_id = recipe_id


class StoreUnavailableError(RecipeCatalogError):
    kind = "store_unavailable"


class TranslatorError(RecipeCatalogError):
    kind = "translator_failure"
