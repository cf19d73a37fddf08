import logging
from enum import Enum
from http import HTTPStatus
from typing import Iterable, List, Optional, Set

from . import schemas
from .storage import AppStorage

logger = logging.getLogger(__name__)


class DuplicateRecipeError(ValueError):
    def __init__(self, name: str):
        super().__init__(f"A recipe named {name!r} already exists")
        self.name = name


class DeleteResult(Enum):
    NO_CONTENT = HTTPStatus.NO_CONTENT
    NOT_FOUND = HTTPStatus.NOT_FOUND
    FORBIDDEN = HTTPStatus.FORBIDDEN


def _find(collection: dict, entity_id: Optional[int], name: Optional[str]):
    # id wins over name; an empty name never matches
    if entity_id is not None:
        return collection.get(entity_id)
    if name:
        return next(
            (e for e in collection.values() if e.name == name), None
        )
    return None


def get_recipe_by_name(storage: AppStorage, name: str):
    with storage.lock:
        return _find(storage.recipes, None, name)


def get_ingredient_by_name(storage: AppStorage, name: str):
    with storage.lock:
        return _find(storage.ingredients, None, name)


def _recipes_using(
    storage: AppStorage, ingredient_id: int
) -> Set[schemas.Recipe]:
    recipe_ids = {
        link.recipe_id
        for link in storage.recipe_ingredients.values()
        if link.ingredient_id == ingredient_id
    }
    return {r for r in storage.recipes.values() if r.id in recipe_ids}


def _lookup(collection: dict, entity_id: Optional[int], name: Optional[str]):
    """Singleton set for a filtered lookup, everything when unfiltered.

    Returns None when a filter was given but matched nothing.
    """
    if entity_id is None and not name:
        return set(collection.values())
    found = _find(collection, entity_id, name)
    if found is None:
        return None
    return {found}


def get_recipes(
    storage: AppStorage,
    recipe_id: Optional[int] = None,
    name: Optional[str] = None,
) -> Optional[Set[schemas.Recipe]]:
    with storage.lock:
        return _lookup(storage.recipes, recipe_id, name)


def get_ingredients(
    storage: AppStorage,
    ingredient_id: Optional[int] = None,
    name: Optional[str] = None,
) -> Optional[Set[schemas.Ingredient]]:
    with storage.lock:
        return _lookup(storage.ingredients, ingredient_id, name)


def get_dietary_restrictions(
    storage: AppStorage,
    restriction_id: Optional[int] = None,
    name: Optional[str] = None,
) -> Optional[Set[schemas.DietaryRestriction]]:
    with storage.lock:
        return _lookup(storage.dietary_restrictions, restriction_id, name)


def get_recipes_by_ingredient(
    storage: AppStorage,
    ingredient_id: Optional[int] = None,
    name: Optional[str] = None,
) -> Optional[Set[schemas.Recipe]]:
    """Return every recipe that uses the ingredient given by id or name.

    None means the ingredient does not exist; an ingredient no recipe uses
    gives an empty set.
    """
    with storage.lock:
        ingredient = _find(storage.ingredients, ingredient_id, name)
        if ingredient is None:
            logger.debug(
                "Ingredient not found (id=%s, name=%r)", ingredient_id, name
            )
            return None
        return _recipes_using(storage, ingredient.id)


def get_recipes_by_dietary_restriction(
    storage: AppStorage,
    restriction_id: Optional[int] = None,
    name: Optional[str] = None,
) -> Optional[Set[schemas.Recipe]]:
    """Return the recipes that use the restriction's first linked ingredient.

    Only the first ingredient linked to the restriction (in insertion order)
    is followed. None means the restriction does not exist.
    """
    with storage.lock:
        restriction = _find(storage.dietary_restrictions, restriction_id, name)
        if restriction is None:
            logger.debug(
                "Dietary restriction not found (id=%s, name=%r)",
                restriction_id,
                name,
            )
            return None
        link = next(
            (
                ir
                for ir in storage.ingredient_restrictions.values()
                if ir.dietary_restriction_id == restriction.id
            ),
            None,
        )
        if link is None:
            return set()
        return _recipes_using(storage, link.ingredient_id)


def add_recipes(
    storage: AppStorage,
    recipes_with_ingredients: Iterable[schemas.RecipeWithIngredients],
) -> List[schemas.Recipe]:
    """Add recipes along with any ingredients the catalog does not have yet.

    Ingredients are reused by name. A recipe whose name is already taken
    raises DuplicateRecipeError; recipes added earlier in the same call are
    kept.
    """
    if recipes_with_ingredients is None:
        raise TypeError("recipes_with_ingredients must not be None")

    created = []
    with storage.lock:
        for entry in recipes_with_ingredients:
            if get_recipe_by_name(storage, entry.name) is not None:
                logger.warning("Rejected duplicate recipe %r", entry.name)
                raise DuplicateRecipeError(entry.name)

            recipe = schemas.Recipe(
                id=storage.generate_primary_key(), name=entry.name
            )
            storage.add_recipe(recipe)

            # repeated names in one entry give a single link
            ingredient_names = list(dict.fromkeys(entry.ingredients))
            for ingredient_name in ingredient_names:
                ingredient = get_ingredient_by_name(storage, ingredient_name)
                if ingredient is None:
                    ingredient = schemas.Ingredient(
                        id=storage.generate_primary_key(), name=ingredient_name
                    )
                    storage.add_ingredient(ingredient)
                    logger.info(
                        "Created ingredient %d %r",
                        ingredient.id,
                        ingredient.name,
                    )
                storage.add_recipe_ingredient(
                    schemas.RecipeIngredient(
                        recipe_id=recipe.id, ingredient_id=ingredient.id
                    )
                )

            logger.info(
                "Created recipe %d %r with %d ingredient(s)",
                recipe.id,
                recipe.name,
                len(ingredient_names),
            )
            created.append(recipe)
    return created


def _drop_ingredient(storage: AppStorage, ingredient: schemas.Ingredient):
    for link in [
        ir
        for ir in storage.ingredient_restrictions.values()
        if ir.ingredient_id == ingredient.id
    ]:
        storage.remove_ingredient_restriction(link)
    storage.remove_ingredient(ingredient.id)


def delete_ingredient(
    storage: AppStorage,
    ingredient_id: Optional[int] = None,
    name: Optional[str] = None,
) -> DeleteResult:
    """Delete an ingredient by id or name.

    An ingredient used by exactly one recipe takes that recipe (and all of
    its ingredient links) with it. An ingredient shared by several recipes
    is left alone and FORBIDDEN is returned.
    """
    with storage.lock:
        ingredient = _find(storage.ingredients, ingredient_id, name)
        if ingredient is None:
            return DeleteResult.NOT_FOUND

        links = [
            link
            for link in storage.recipe_ingredients.values()
            if link.ingredient_id == ingredient.id
        ]

        if len(links) > 1:
            logger.warning(
                "Refused to delete ingredient %d %r used by %d recipes",
                ingredient.id,
                ingredient.name,
                len(links),
            )
            return DeleteResult.FORBIDDEN

        if links:
            recipe_id = links[0].recipe_id
            for link in [
                ri
                for ri in storage.recipe_ingredients.values()
                if ri.recipe_id == recipe_id
            ]:
                storage.remove_recipe_ingredient(link)
            storage.remove_recipe(recipe_id)
            logger.info(
                "Deleted recipe %d along with ingredient %r",
                recipe_id,
                ingredient.name,
            )

        _drop_ingredient(storage, ingredient)
        logger.info("Deleted ingredient %d %r", ingredient.id, ingredient.name)
        return DeleteResult.NO_CONTENT
