from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field


class CatalogModel(BaseModel):
    # frozen models hash by value so they can live in sets
    model_config = ConfigDict(frozen=True)


class Recipe(CatalogModel):
    id: int
    name: str = Field(
        ..., min_length=1, json_schema_extra={"example": "Spaghetti Carbonara"}
    )


class Ingredient(CatalogModel):
    id: int
    name: str = Field(
        ..., min_length=1, json_schema_extra={"example": "Spaghetti"}
    )


class DietaryRestriction(CatalogModel):
    id: int
    name: str = Field(
        ..., min_length=1, json_schema_extra={"example": "Vegetarian"}
    )


class IngredientRestriction(CatalogModel):
    ingredient_id: int
    dietary_restriction_id: int


class RecipeIngredient(CatalogModel):
    recipe_id: int
    ingredient_id: int


class RecipeWithIngredients(BaseModel):
    """A new recipe and the names of the ingredients it uses.

    Ingredients are matched by name against the catalog, so only names are
    needed here. Ids are assigned when the recipe is added.
    """

    name: str = Field(
        ..., min_length=1, json_schema_extra={"example": "Simple Pancakes"}
    )
    ingredients: List[Annotated[str, Field(min_length=1)]] = Field(
        default_factory=list,
        json_schema_extra={"example": ["Flour", "Milk", "Eggs"]},
    )
