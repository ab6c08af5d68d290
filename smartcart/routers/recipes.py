# smartcart/routers/recipes.py
from fastapi import APIRouter, Depends, HTTPException, Query, status

from smartcart.container import Storefront
from smartcart.core.auth import ScreenGate, get_storefront
from smartcart.core.navigation import RECIPES_SCREEN
from smartcart.schemas.recipe import (
    AddIngredientsResult,
    Recipe,
    RecipeDetail,
    RecipeSummary,
)

router = APIRouter(
    prefix="/recipes",
    tags=["Recipes"],
    dependencies=[Depends(ScreenGate(RECIPES_SCREEN))],
)


def _summary(recipe: Recipe) -> RecipeSummary:
    return RecipeSummary(
        **recipe.model_dump(exclude={"ingredients", "instructions"}),
    )


def _active_preferences(storefront: Storefront) -> list[str]:
    """Preferences of the signed-in shopper; visitors have none."""
    snapshot = storefront.auth.snapshot()
    if snapshot.role != "shopper" or snapshot.identity is None:
        return []
    return storefront.preferences.get_preferences(snapshot.identity.id)


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Recipe not found",
    )


@router.get("", response_model=list[RecipeSummary])
def list_recipes(
    q: str | None = None,
    tags: list[str] = Query(default=[]),
    storefront: Storefront = Depends(get_storefront),
):
    """
    Search recipes.

    - `q` matches name, category and description.
    - every `tags` value must be carried by the recipe.
    """
    return [_summary(r) for r in storefront.recipes.search(q, tags)]


@router.get("/recommendations", response_model=list[RecipeSummary])
def recommend_recipes(
    limit: int = Query(default=3, ge=1, le=20),
    storefront: Storefront = Depends(get_storefront),
):
    """Recipes that use products already in the cart."""
    items = storefront.cart.get_summary().items
    return [_summary(r) for r in storefront.recipes.recommend_for_cart(items, limit)]


@router.get("/{recipe_id}", response_model=RecipeDetail)
def get_recipe(
    recipe_id: int,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Recipe detail with each ingredient checked against the signed-in
    shopper's dietary preferences.
    """
    detail = storefront.recipes.detail(recipe_id, _active_preferences(storefront))
    if detail is None:
        raise _not_found()
    return detail


@router.post("/{recipe_id}/add-to-cart", response_model=AddIngredientsResult)
def add_recipe_to_cart(
    recipe_id: int,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Add every ingredient compatible with the shopper's preferences to the cart.
    """
    result = storefront.recipes.add_compatible_ingredients(
        recipe_id, _active_preferences(storefront)
    )
    if result is None:
        raise _not_found()
    return result
