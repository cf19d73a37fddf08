import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from .config import Settings
from .schemas import (
    DietaryRestriction,
    Ingredient,
    IngredientRestriction,
    Recipe,
    RecipeIngredient,
)
from .storage import AppStorage

logger = logging.getLogger(__name__)


class SeedError(ValueError):
    pass


class SeedData(BaseModel):
    recipes: List[Recipe] = Field(default_factory=list)
    ingredients: List[Ingredient] = Field(default_factory=list)
    dietary_restrictions: List[DietaryRestriction] = Field(
        default_factory=list
    )
    ingredient_restrictions: List[IngredientRestriction] = Field(
        default_factory=list
    )
    recipe_ingredients: List[RecipeIngredient] = Field(default_factory=list)


_RECIPES = [
    (1, "Spaghetti Carbonara", [1, 2, 3, 4]),
    (2, "Margherita Pizza", [5, 6, 7, 8]),
    (3, "Chicken Curry", [9, 10, 11]),
    (4, "Beef Stroganoff", [12, 13, 14]),
    (5, "Caesar Salad", [15, 16, 17]),
    (6, "Vegetable Stir Fry", [18, 19, 20]),
    (7, "Tomato Soup", [6, 21]),
    (8, "Beef Tacos", [22, 23, 24]),
    (9, "Pancakes", [25, 26, 27]),
    (10, "Grilled Salmon", [28, 29]),
    (11, "Mushroom Risotto", [30, 31, 21]),
    (12, "Guacamole", [32, 33, 34]),
]

_INGREDIENTS = [
    "Spaghetti", "Eggs", "Pancetta", "Parmesan", "Pizza Dough",
    "Tomato Sauce", "Mozzarella", "Basil", "Chicken", "Curry Paste",
    "Coconut Milk", "Beef", "Mushrooms", "Sour Cream", "Romaine Lettuce",
    "Croutons", "Caesar Dressing", "Broccoli", "Bell Pepper", "Soy Sauce",
    "Vegetable Stock", "Taco Shells", "Ground Beef", "Salsa", "Flour",
    "Milk", "Butter", "Salmon", "Lemon", "Arborio Rice", "Porcini",
    "Avocado", "Lime", "Onion", "Saffron",
]

_RESTRICTIONS = [
    (1, "Vegetarian", [18, 13, 8]),
    (2, "Vegan", [32, 33]),
    (3, "Gluten-Free", [28, 30]),
    (4, "Pescatarian", [28]),
    (5, "Keto", []),
]

DEFAULT_SEED = SeedData(
    recipes=[Recipe(id=rid, name=name) for rid, name, _ in _RECIPES],
    ingredients=[
        Ingredient(id=i, name=name) for i, name in enumerate(_INGREDIENTS, 1)
    ],
    dietary_restrictions=[
        DietaryRestriction(id=did, name=name) for did, name, _ in _RESTRICTIONS
    ],
    ingredient_restrictions=[
        IngredientRestriction(ingredient_id=iid, dietary_restriction_id=did)
        for did, _, ingredient_ids in _RESTRICTIONS
        for iid in ingredient_ids
    ],
    recipe_ingredients=[
        RecipeIngredient(recipe_id=rid, ingredient_id=iid)
        for rid, _, ingredient_ids in _RECIPES
        for iid in ingredient_ids
    ],
)


def _check(data: SeedData):
    for label, items in (
        ("recipe", data.recipes),
        ("ingredient", data.ingredients),
        ("dietary restriction", data.dietary_restrictions),
    ):
        ids = [i.id for i in items]
        if len(set(ids)) != len(ids):
            raise SeedError(f"Duplicate {label} id in seed data")
        if label != "dietary restriction":
            names = [i.name for i in items]
            if len(set(names)) != len(names):
                raise SeedError(f"Duplicate {label} name in seed data")

    recipe_ids = {r.id for r in data.recipes}
    ingredient_ids = {i.id for i in data.ingredients}
    restriction_ids = {d.id for d in data.dietary_restrictions}
    for ri in data.recipe_ingredients:
        if (
            ri.recipe_id not in recipe_ids
            or ri.ingredient_id not in ingredient_ids
        ):
            raise SeedError(f"Recipe ingredient link to unknown id: {ri}")
    for ir in data.ingredient_restrictions:
        if (
            ir.ingredient_id not in ingredient_ids
            or ir.dietary_restriction_id not in restriction_ids
        ):
            raise SeedError(f"Ingredient restriction link to unknown id: {ir}")


def load_seed(
    storage: AppStorage, data: SeedData = DEFAULT_SEED
) -> AppStorage:
    """Insert seed records and move the key generator past their ids."""
    _check(data)
    with storage.lock:
        for r in data.recipes:
            storage.add_recipe(r)
        for i in data.ingredients:
            storage.add_ingredient(i)
        for d in data.dietary_restrictions:
            storage.add_dietary_restriction(d)
        for ir in data.ingredient_restrictions:
            storage.add_ingredient_restriction(ir)
        for ri in data.recipe_ingredients:
            storage.add_recipe_ingredient(ri)

        entities = (
            *data.recipes,
            *data.ingredients,
            *data.dietary_restrictions,
        )
        ids = [e.id for e in entities]
        storage.reserve_keys(max(ids, default=0))
    logger.info(
        "Seeded %d recipe(s), %d ingredient(s), %d dietary restriction(s)",
        len(data.recipes),
        len(data.ingredients),
        len(data.dietary_restrictions),
    )
    return storage


def load_seed_file(path) -> SeedData:
    """Read seed data from a JSON file.

    Args:
        path (str or Path): Path to the JSON file.

    Returns:
        SeedData: the validated records.
    """
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return SeedData.model_validate(json.load(f))


def create_storage(settings: Optional[Settings] = None) -> AppStorage:
    settings = Settings() if settings is None else settings
    storage = AppStorage()
    if settings.seed_file is not None:
        load_seed(storage, load_seed_file(settings.seed_file))
    elif settings.seed:
        load_seed(storage)
    return storage
