# smartcart/routers/notifications.py
from fastapi import APIRouter, Depends

from smartcart.container import Storefront
from smartcart.core.auth import get_storefront
from smartcart.core.notifications import Notification

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=list[Notification])
def drain_notifications(storefront: Storefront = Depends(get_storefront)):
    """Pending toasts, oldest first. Reading them clears the buffer."""
    return storefront.notifier.drain()
