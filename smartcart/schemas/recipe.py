# smartcart/schemas/recipe.py
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class RecipeIngredient(SQLModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    quantity: str
    product_id: str
    dietary_flags: tuple[str, ...] = ()


class Recipe(SQLModel):
    """
    Static recipe with its dietary tags and ingredient→product mapping.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int
    name: str
    image: str = "/placeholder.svg"
    category: str
    difficulty: str
    time: str
    dietary_tags: tuple[str, ...] = ()
    description: str
    ingredients: tuple[RecipeIngredient, ...]
    instructions: tuple[str, ...]


class RecipeSummary(SQLModel):
    """
    List view of a recipe (no ingredients / instructions).
    """

    id: int
    name: str
    image: str
    category: str
    difficulty: str
    time: str
    dietary_tags: list[str]
    description: str


class IngredientView(SQLModel):
    """
    Ingredient annotated for the current shopper's preferences.
    """

    name: str
    quantity: str
    product_id: str
    dietary_flags: list[str]
    conflicts: bool = False
    substitution: str | None = None


class RecipeDetail(RecipeSummary):
    ingredients: list[IngredientView]
    instructions: list[str]
    compatible: bool = Field(
        default=True,
        description="False when at least one ingredient conflicts",
    )


class AddIngredientsResult(SQLModel):
    """
    Outcome of adding a recipe's compatible ingredients to the cart.
    """

    recipe_id: int
    added: list[str]
    skipped: list[str]
    unavailable: list[str]
