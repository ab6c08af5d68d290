# smartcart/repositories/product_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from smartcart.models.product import Product


class ProductRepository:
    """
    Data access layer for the remote `products` table.

    - Read-only: the storefront never writes products.
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: int) -> Product | None:
        return session.get(Product, product_id)

    def exists(self, session: Session, product_id: int) -> bool:
        stmt = select(Product.id).where(Product.id == product_id)
        return session.exec(stmt).first() is not None

    def count(self, session: Session) -> int:
        stmt = select(func.count()).select_from(Product)
        value = session.exec(stmt).one()
        return int(value or 0)
