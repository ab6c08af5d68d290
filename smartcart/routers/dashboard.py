# smartcart/routers/dashboard.py
from fastapi import APIRouter, Depends

from smartcart.container import Storefront
from smartcart.core.auth import ScreenGate, get_storefront, require_owner
from smartcart.core.navigation import DASHBOARD_SCREEN
from smartcart.schemas.stats import OwnerDashboardStats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "/stats",
    response_model=OwnerDashboardStats,
    dependencies=[Depends(ScreenGate(DASHBOARD_SCREEN)), Depends(require_owner)],
)
def get_dashboard_stats(storefront: Storefront = Depends(get_storefront)):
    """
    Aggregated statistics for the owner dashboard.

    Shoppers are redirected to the shop, visitors to the sign-in screen.
    """
    return storefront.stats.get_dashboard_stats()
