# smartcart/routers/shop.py
from fastapi import APIRouter, Depends, HTTPException, status

from smartcart.container import Storefront
from smartcart.core.auth import ScreenGate, get_storefront
from smartcart.core.navigation import SHOP_SCREEN
from smartcart.schemas.product import CategoryRead, ProductRead

router = APIRouter(
    prefix="/shop",
    tags=["Shop"],
    dependencies=[Depends(ScreenGate(SHOP_SCREEN))],
)


@router.get("/categories", response_model=list[CategoryRead])
def list_categories(storefront: Storefront = Depends(get_storefront)):
    """All product categories of the store."""
    return storefront.catalog.categories()


@router.get("/categories/{category_id}/subcategories", response_model=list[str])
def list_subcategories(
    category_id: str,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Subcategories of one category.

    Raises 404 for an unknown category.
    """
    if not any(c.id == category_id for c in storefront.catalog.categories()):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )
    return storefront.catalog.subcategories(category_id)


@router.get("/products", response_model=list[ProductRead])
def list_products(
    category: str | None = None,
    subcategory: str | None = None,
    q: str | None = None,
    popular: bool | None = None,
    storefront: Storefront = Depends(get_storefront),
):
    """
    List products.

    - `category` / `subcategory` narrow by taxonomy.
    - `q` searches name and description.
    - `popular=true` keeps featured products only.
    """
    return storefront.catalog.list_products(
        category=category,
        subcategory=subcategory,
        search=q,
        popular=popular,
    )


@router.get("/products/{product_id}", response_model=ProductRead)
def get_product(
    product_id: str,
    storefront: Storefront = Depends(get_storefront),
):
    """Get a single product by id or barcode."""
    product = storefront.catalog.get(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product
