# smartcart/routers/navigation.py
from fastapi import APIRouter, Depends
from sqlmodel import SQLModel

from smartcart.core.auth import get_auth_status
from smartcart.core.navigation import redirect_for
from smartcart.schemas.user import AuthSnapshot

router = APIRouter(prefix="/navigation", tags=["Navigation"])


class NavigationDecision(SQLModel):
    path: str
    allowed: bool
    redirect_to: str | None = None


@router.get("/resolve", response_model=NavigationDecision)
def resolve_navigation(
    path: str,
    snapshot: AuthSnapshot = Depends(get_auth_status),
):
    """
    Where the front end may go: `path` itself, or the screen the current
    role is redirected to.
    """
    target = redirect_for(snapshot.role, path)
    return NavigationDecision(path=path, allowed=target is None, redirect_to=target)
