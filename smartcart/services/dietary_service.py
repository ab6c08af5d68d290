# smartcart/services/dietary_service.py
import logging
from collections.abc import Iterable, Sequence

from sqlalchemy.exc import SQLAlchemyError

from smartcart.core.notifications import Notifier
from smartcart.data.recipes import (
    DIETARY_CONFLICTS,
    DIETARY_RESTRICTIONS,
    INGREDIENT_SUBSTITUTIONS,
)
from smartcart.database import SessionFactory
from smartcart.repositories.user_repo import ShopperRepository
from smartcart.schemas.recipe import (
    IngredientView,
    Recipe,
    RecipeDetail,
    RecipeIngredient,
)
from smartcart.schemas.user import DietaryPreferencesRead, DietaryRestrictionRead

logger = logging.getLogger(__name__)


def conflicts(ingredient: RecipeIngredient, preferences: Iterable[str]) -> bool:
    """
    True iff one of the ingredient's flags is ruled out by an active preference.

    Preferences without a conflict entry (halal, low-sugar) never conflict,
    and "may-contain-*" flags are never in a conflict set.
    """
    flags = set(ingredient.dietary_flags)
    if not flags:
        return False
    for pref in preferences:
        if flags & DIETARY_CONFLICTS.get(pref, frozenset()):
            return True
    return False


def substitution(
    ingredient: RecipeIngredient, preferences: Sequence[str]
) -> str | None:
    """First substitution for the ingredient's exact name, in preference order."""
    for pref in preferences:
        suggestion = INGREDIENT_SUBSTITUTIONS.get(pref, {}).get(ingredient.name)
        if suggestion:
            return suggestion
    return None


def matches_filters(recipe: Recipe, filters: Iterable[str]) -> bool:
    """A recipe matches when it carries every selected tag."""
    return set(filters) <= set(recipe.dietary_tags)


def filter_recipes(recipes: Iterable[Recipe], filters: Iterable[str]) -> list[Recipe]:
    wanted = set(filters)
    return [r for r in recipes if matches_filters(r, wanted)]


def annotate_recipe(recipe: Recipe, preferences: Sequence[str]) -> RecipeDetail:
    """
    Recipe detail with each ingredient checked against the shopper's preferences.
    """
    views = [
        IngredientView(
            name=ing.name,
            quantity=ing.quantity,
            product_id=ing.product_id,
            dietary_flags=list(ing.dietary_flags),
            conflicts=conflicts(ing, preferences),
            substitution=substitution(ing, preferences),
        )
        for ing in recipe.ingredients
    ]
    return RecipeDetail(
        id=recipe.id,
        name=recipe.name,
        image=recipe.image,
        category=recipe.category,
        difficulty=recipe.difficulty,
        time=recipe.time,
        dietary_tags=list(recipe.dietary_tags),
        description=recipe.description,
        ingredients=views,
        instructions=list(recipe.instructions),
        compatible=not any(v.conflicts for v in views),
    )


class DietaryPreferenceService:
    """
    Shopper dietary preferences stored in `shoppers.dietary_preferences`.

    Remote failures never raise: reads fall back to no preferences, writes
    report saved=False with a notification.
    """

    def __init__(
        self,
        notifier: Notifier,
        session_factory: SessionFactory,
        shopper_repo: ShopperRepository | None = None,
    ):
        self.notifier = notifier
        self.session_factory = session_factory
        self.shopper_repo = shopper_repo or ShopperRepository()

    @staticmethod
    def options() -> list[DietaryRestrictionRead]:
        return [DietaryRestrictionRead(**r) for r in DIETARY_RESTRICTIONS]

    def get_preferences(self, shopper_id: str) -> list[str]:
        try:
            with self.session_factory() as session:
                shopper = self.shopper_repo.get_by_id(session, shopper_id)
                prefs = list(shopper.dietary_preferences or []) if shopper else []
        except SQLAlchemyError:
            logger.exception(f"Loading dietary preferences of {shopper_id} failed")
            return []
        return prefs

    def save_preferences(
        self, shopper_id: str, preferences: list[str]
    ) -> DietaryPreferencesRead:
        try:
            with self.session_factory() as session:
                shopper = self.shopper_repo.get_by_id(session, shopper_id)
                if shopper is None:
                    logger.warning(f"No shopper row for {shopper_id}; preferences not saved")
                    self.notifier.notify(
                        "Error",
                        "Your profile was not found, preferences were not saved.",
                        variant="destructive",
                    )
                    return DietaryPreferencesRead(preferences=preferences, saved=False)
                shopper.dietary_preferences = list(preferences)
                self.shopper_repo.update(session, shopper)
        except SQLAlchemyError:
            logger.exception(f"Saving dietary preferences of {shopper_id} failed")
            self.notifier.notify(
                "Error",
                "Failed to save your dietary preferences.",
                variant="destructive",
            )
            return DietaryPreferencesRead(preferences=preferences, saved=False)

        self.notifier.notify(
            "Preferences saved",
            "Your dietary preferences have been updated.",
        )
        return DietaryPreferencesRead(preferences=preferences, saved=True)
