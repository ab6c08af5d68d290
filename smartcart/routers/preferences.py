# smartcart/routers/preferences.py
from fastapi import APIRouter, Depends

from smartcart.container import Storefront
from smartcart.core.auth import get_storefront, require_shopper
from smartcart.schemas.user import (
    DietaryPreferencesRead,
    DietaryPreferencesUpdate,
    DietaryRestrictionRead,
    Identity,
)
from smartcart.services.dietary_service import DietaryPreferenceService

router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("/options", response_model=list[DietaryRestrictionRead])
def list_options():
    """Dietary restrictions a shopper can choose from."""
    return DietaryPreferenceService.options()


@router.get("", response_model=DietaryPreferencesRead)
def read_preferences(
    storefront: Storefront = Depends(get_storefront),
    shopper: Identity = Depends(require_shopper),
):
    """
    The signed-in shopper's dietary preferences.

    Auth:
      - shoppers only (owners get 403)
    """
    prefs = storefront.preferences.get_preferences(shopper.id)
    return DietaryPreferencesRead(preferences=prefs)


@router.put("", response_model=DietaryPreferencesRead)
def save_preferences(
    payload: DietaryPreferencesUpdate,
    storefront: Storefront = Depends(get_storefront),
    shopper: Identity = Depends(require_shopper),
):
    """
    Replace the shopper's dietary preferences.

    A failed save answers 200 with saved=false and a notification.
    """
    return storefront.preferences.save_preferences(shopper.id, payload.preferences)
