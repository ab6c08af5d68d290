# smartcart/repositories/shopping_list_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from smartcart.models.cart import ShoppingListItem
from smartcart.models.product import Product


class ShoppingListRepository:
    """
    Data access layer for the remote `shopping_list` table.

    Rows are keyed by (shopper_id, product_id). There is no quantity column,
    so callers never create a second row for the same product.
    """

    def list_for_shopper(
        self,
        session: Session,
        shopper_id: str,
    ) -> list[tuple[ShoppingListItem, Product | None]]:
        """
        Rows of a shopper joined with their product.

        Outer join: a row whose product was deleted comes back with None.
        """
        stmt = (
            select(ShoppingListItem, Product)
            .join(Product, Product.id == ShoppingListItem.product_id, isouter=True)
            .where(ShoppingListItem.shopper_id == shopper_id)
        )
        return list(session.exec(stmt).all())

    def get_item(
        self, session: Session, shopper_id: str, product_id: int
    ) -> ShoppingListItem | None:
        stmt = select(ShoppingListItem).where(
            ShoppingListItem.shopper_id == shopper_id,
            ShoppingListItem.product_id == product_id,
        )
        return session.exec(stmt).first()

    def create(self, session: Session, item: ShoppingListItem) -> ShoppingListItem:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def delete_for_product(
        self, session: Session, shopper_id: str, product_id: int
    ) -> int:
        stmt = select(ShoppingListItem).where(
            ShoppingListItem.shopper_id == shopper_id,
            ShoppingListItem.product_id == product_id,
        )
        rows = session.exec(stmt).all()
        for row in rows:
            session.delete(row)
        session.commit()
        return len(rows)

    def clear_for_shopper(self, session: Session, shopper_id: str) -> int:
        stmt = select(ShoppingListItem).where(
            ShoppingListItem.shopper_id == shopper_id
        )
        rows = session.exec(stmt).all()
        for row in rows:
            session.delete(row)
        session.commit()
        return len(rows)

    def count(self, session: Session) -> int:
        stmt = select(func.count()).select_from(ShoppingListItem)
        value = session.exec(stmt).one()
        return int(value or 0)
