import threading
from typing import Dict, Tuple

from .schemas import (
    DietaryRestriction,
    Ingredient,
    IngredientRestriction,
    Recipe,
    RecipeIngredient,
)


class AppStorage:
    """In-memory catalog store.

    Collections are plain dicts keyed by id (or by the id pair for join
    records) and keep insertion order. Nothing here checks invariants; that
    is the job of :mod:`recipe_catalog.crud`.
    """

    def __init__(self):
        self.recipes: Dict[int, Recipe] = {}
        self.ingredients: Dict[int, Ingredient] = {}
        self.dietary_restrictions: Dict[int, DietaryRestriction] = {}
        self.ingredient_restrictions: Dict[
            Tuple[int, int], IngredientRestriction
        ] = {}
        self.recipe_ingredients: Dict[Tuple[int, int], RecipeIngredient] = {}
        self.lock = threading.RLock()
        self._last_key = 0

    def generate_primary_key(self) -> int:
        self._last_key += 1
        return self._last_key

    def reserve_keys(self, upto: int):
        """Make sure generated keys never collide with ids up to `upto`."""
        if upto > self._last_key:
            self._last_key = upto

    def add_recipe(self, recipe: Recipe):
        self.recipes[recipe.id] = recipe

    def remove_recipe(self, recipe_id: int):
        self.recipes.pop(recipe_id, None)

    def add_ingredient(self, ingredient: Ingredient):
        self.ingredients[ingredient.id] = ingredient

    def remove_ingredient(self, ingredient_id: int):
        self.ingredients.pop(ingredient_id, None)

    def add_dietary_restriction(self, restriction: DietaryRestriction):
        self.dietary_restrictions[restriction.id] = restriction

    def add_ingredient_restriction(self, link: IngredientRestriction):
        key = (link.ingredient_id, link.dietary_restriction_id)
        self.ingredient_restrictions[key] = link

    def remove_ingredient_restriction(self, link: IngredientRestriction):
        key = (link.ingredient_id, link.dietary_restriction_id)
        self.ingredient_restrictions.pop(key, None)

    def add_recipe_ingredient(self, link: RecipeIngredient):
        self.recipe_ingredients[(link.recipe_id, link.ingredient_id)] = link

    def remove_recipe_ingredient(self, link: RecipeIngredient):
        self.recipe_ingredients.pop((link.recipe_id, link.ingredient_id), None)
