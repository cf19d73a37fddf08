# flake8: noqa
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import pytest
from pydantic import ValidationError

from recipe_catalog import crud, main as main_module
from recipe_catalog.config import Env, Settings
from recipe_catalog.schemas import RecipeWithIngredients
from recipe_catalog.seed import (
    DEFAULT_SEED,
    SeedData,
    SeedError,
    create_storage,
    load_seed,
    load_seed_file,
)
from recipe_catalog.storage import AppStorage


SMALL_SEED = {
    "recipes": [{"id": 10, "name": "Toast"}],
    "ingredients": [{"id": 20, "name": "Bread"}, {"id": 21, "name": "Jam"}],
    "dietary_restrictions": [{"id": 30, "name": "Vegan"}],
    "ingredient_restrictions": [{"ingredient_id": 20, "dietary_restriction_id": 30}],
    "recipe_ingredients": [{"recipe_id": 10, "ingredient_id": 20}],
}


def test_default_seed_counts():
    storage = load_seed(AppStorage())
    assert len(storage.recipes) == 12
    assert len(storage.ingredients) == 35
    assert len(storage.dietary_restrictions) == 5
    assert storage.generate_primary_key() == 36


def test_seed_stores_are_independent():
    first = load_seed(AppStorage())
    second = load_seed(AppStorage())
    crud.add_recipes(first, [RecipeWithIngredients(name="Toast", ingredients=["Bread"])])
    assert len(first.recipes) == 13
    assert len(second.recipes) == 12


def test_load_seed_file(tmp_path):
    p = tmp_path / "seed.json"
    p.write_text(json.dumps(SMALL_SEED), encoding="utf-8")

    storage = load_seed(AppStorage(), load_seed_file(p))

    assert crud.get_recipes_by_dietary_restriction(storage, 30) == {storage.recipes[10]}
    assert storage.generate_primary_key() == 31


def test_seed_with_unknown_link_rejected():
    data = dict(SMALL_SEED, recipe_ingredients=[{"recipe_id": 10, "ingredient_id": 99}])
    with pytest.raises(SeedError):
        load_seed(AppStorage(), SeedData.model_validate(data))


def test_seed_with_duplicate_names_rejected():
    data = dict(SMALL_SEED, ingredients=[{"id": 20, "name": "Bread"}, {"id": 21, "name": "Bread"}])
    with pytest.raises(SeedError):
        load_seed(AppStorage(), SeedData.model_validate(data))


def test_seed_shape_validated():
    with pytest.raises(ValidationError):
        SeedData.model_validate({"recipes": [{"id": "x", "name": "Toast"}]})


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("RECIPE_CATALOG_ENV", "prod")
    monkeypatch.setenv("RECIPE_CATALOG_SEED", "false")
    settings = Settings()
    assert settings.env is Env.prod
    assert settings.seed is False
    assert create_storage(settings).recipes == {}


@pytest.mark.parametrize(
    "env,log_level,expected",
    [
        (Env.local, None, "DEBUG"),
        (Env.dev, None, "INFO"),
        (Env.prod, None, "INFO"),
        (Env.local, "warning", "WARNING"),
    ],
)
def test_log_level_follows_env(monkeypatch, env, log_level, expected):
    monkeypatch.delenv("RECIPE_CATALOG_LOG_LEVEL", raising=False)
    settings = Settings(env=env, log_level=log_level)
    assert settings.resolved_log_level() == expected


def test_main_configures_logging_from_env(monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(
        main_module.logging, "basicConfig", lambda **kw: calls.append(kw)
    )
    monkeypatch.setenv("RECIPE_CATALOG_ENV", "local")
    monkeypatch.delenv("RECIPE_CATALOG_LOG_LEVEL", raising=False)
    main_module.main()
    monkeypatch.setenv("RECIPE_CATALOG_ENV", "prod")
    main_module.main()
    capsys.readouterr()
    assert [c["level"] for c in calls] == ["DEBUG", "INFO"]


def test_create_storage_from_seed_file(tmp_path):
    p = tmp_path / "seed.json"
    p.write_text(json.dumps(SMALL_SEED), encoding="utf-8")
    storage = create_storage(Settings(seed_file=p))
    assert list(storage.recipes) == [10]


def test_create_storage_default():
    storage = create_storage(Settings())
    assert len(storage.recipes) == len(DEFAULT_SEED.recipes)


def test_main_lists_recipes(capsys, monkeypatch):
    monkeypatch.delenv("RECIPE_CATALOG_SEED_FILE", raising=False)
    monkeypatch.delenv("RECIPE_CATALOG_SEED", raising=False)
    main_module.main()
    out = capsys.readouterr().out
    assert "Loaded 12 recipe(s)." in out
    assert "- Spaghetti Carbonara: Spaghetti, Eggs, Pancetta, Parmesan" in out
