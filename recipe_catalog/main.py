import logging

from . import crud
from .config import Settings
from .seed import create_storage


def main():
    settings = Settings()
    logging.basicConfig(
        level=settings.resolved_log_level(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    storage = create_storage(settings)
    recipes = sorted(crud.get_recipes(storage), key=lambda r: r.id)
    print(f"Loaded {len(recipes)} recipe(s).")
    for r in recipes:
        ingredients = [
            storage.ingredients[link.ingredient_id].name
            for link in storage.recipe_ingredients.values()
            if link.recipe_id == r.id
            and link.ingredient_id in storage.ingredients
        ]
        print(f"- {r.name}: {', '.join(ingredients)}")


if __name__ == "__main__":
    main()
