# smartcart/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException, status

from smartcart.container import Storefront
from smartcart.core.auth import ScreenGate, get_storefront
from smartcart.core.navigation import CART_SCREEN
from smartcart.schemas.cart import CartItemCreate, CartItemUpdate, CartSummary

router = APIRouter(
    prefix="/cart",
    tags=["Cart"],
    dependencies=[Depends(ScreenGate(CART_SCREEN))],
)


def _ensure_in_cart(storefront: Storefront, product_id: str) -> None:
    if storefront.cart.get_item(product_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not in cart",
        )


@router.get("", response_model=CartSummary)
def get_cart(storefront: Storefront = Depends(get_storefront)):
    """
    Get the cart summary.

    Owners are redirected to the dashboard.
    """
    return storefront.cart.get_summary()


@router.post("", response_model=CartSummary)
def add_to_cart(
    payload: CartItemCreate,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Add a catalog product to the cart.

    Returns the updated cart summary.
    """
    product = storefront.catalog.get(payload.product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return storefront.cart.add_to_cart(product, payload.quantity)


@router.patch("/{product_id}", response_model=CartSummary)
def update_cart_item(
    product_id: str,
    payload: CartItemUpdate,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Set the quantity of a product in the cart (0 removes it).

    Returns the updated cart summary.
    """
    _ensure_in_cart(storefront, product_id)
    return storefront.cart.update_quantity(product_id, payload.quantity)


@router.delete("/{product_id}", response_model=CartSummary)
def remove_cart_item(
    product_id: str,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Remove a product from the cart.

    Returns the updated cart summary.
    """
    _ensure_in_cart(storefront, product_id)
    return storefront.cart.remove_from_cart(product_id)


@router.delete("", response_model=CartSummary)
def clear_cart(storefront: Storefront = Depends(get_storefront)):
    """
    Clear the entire cart.

    Returns an empty cart summary.
    """
    return storefront.cart.clear_cart()
