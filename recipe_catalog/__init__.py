"""In-memory recipe catalog: recipes, ingredients and dietary restrictions."""
