# smartcart/services/recipe_service.py
import logging
from collections.abc import Iterable, Sequence

from smartcart.core.notifications import Notifier
from smartcart.data.recipes import RECIPES
from smartcart.schemas.cart import CartItem
from smartcart.schemas.recipe import AddIngredientsResult, Recipe, RecipeDetail
from smartcart.services.cart_service import CartEngine
from smartcart.services.catalog_service import CatalogService
from smartcart.services.dietary_service import annotate_recipe, conflicts, filter_recipes

logger = logging.getLogger(__name__)


class RecipeService:
    """
    Recipe browsing and recipe -> cart operations.

    Responsibilities:
      - search + tag filtering for the recipes screen
      - recommendations from the current cart
      - add a recipe's compatible ingredients to the cart
    """

    def __init__(
        self,
        catalog: CatalogService,
        cart: CartEngine,
        notifier: Notifier,
        recipes: Sequence[Recipe] | None = None,
    ):
        self.catalog = catalog
        self.cart = cart
        self.notifier = notifier
        self.recipes: list[Recipe] = list(RECIPES if recipes is None else recipes)

    def get(self, recipe_id: int) -> Recipe | None:
        return next((r for r in self.recipes if r.id == recipe_id), None)

    def search(
        self, term: str | None = None, filters: Iterable[str] = ()
    ) -> list[Recipe]:
        """
        Case-insensitive substring over name/category/description, then
        tag filters (a recipe must carry all selected tags).
        """
        items = self.recipes
        if term and term.strip():
            needle = term.strip().lower()
            items = [
                r
                for r in items
                if needle in r.name.lower()
                or needle in r.category.lower()
                or needle in r.description.lower()
            ]
        return filter_recipes(items, filters)

    def detail(self, recipe_id: int, preferences: Sequence[str]) -> RecipeDetail | None:
        recipe = self.get(recipe_id)
        if recipe is None:
            return None
        return annotate_recipe(recipe, preferences)

    def recommend_for_cart(self, items: Iterable[CartItem], limit: int = 3) -> list[Recipe]:
        """
        Recipes using something already in the cart: an ingredient name
        (lowercased) that appears in a cart product name.
        """
        names = [item.product.name.lower() for item in items]
        if not names:
            return []
        picked: list[Recipe] = []
        for recipe in self.recipes:
            if any(
                ing.name.lower() in name for ing in recipe.ingredients for name in names
            ):
                picked.append(recipe)
                if len(picked) >= limit:
                    break
        return picked

    def add_compatible_ingredients(
        self, recipe_id: int, preferences: Sequence[str]
    ) -> AddIngredientsResult | None:
        """
        Add every ingredient that does not conflict with the preferences.

        Rules:
          - conflicting ingredients are skipped
          - ingredients whose product is not in the catalog are unavailable
          - each ingredient adds one unit of its product, without its own toast
          - an ingredient whose product is at its stock limit is unavailable
          - one summary notification for the whole recipe
        """
        recipe = self.get(recipe_id)
        if recipe is None:
            return None

        added: list[str] = []
        skipped: list[str] = []
        unavailable: list[str] = []

        for ing in recipe.ingredients:
            if conflicts(ing, preferences):
                skipped.append(ing.name)
                continue
            product = self.catalog.get(ing.product_id)
            if product is None or self.cart.add_units(product, 1) == 0:
                unavailable.append(ing.name)
                continue
            added.append(ing.name)

        problems = []
        if skipped:
            problems.append(
                f"{len(skipped)} ingredient(s) were skipped due to your dietary "
                f"preferences: {', '.join(skipped)}."
            )
        if unavailable:
            problems.append(
                f"{len(unavailable)} ingredient(s) could not be added: "
                f"{', '.join(unavailable)}."
            )

        if problems:
            title = "Some ingredients skipped" if skipped else "Some ingredients unavailable"
            self.notifier.notify(title, " ".join(problems))
        else:
            self.notifier.notify(
                "Ingredients added",
                f"All compatible ingredients for {recipe.name} have been added to your cart.",
            )

        logger.info(
            f"Recipe {recipe.id}: added {len(added)}, skipped {len(skipped)}, "
            f"unavailable {len(unavailable)}"
        )
        return AddIngredientsResult(
            recipe_id=recipe.id,
            added=added,
            skipped=skipped,
            unavailable=unavailable,
        )
