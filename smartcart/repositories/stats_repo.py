# smartcart/repositories/stats_repo.py
from sqlmodel import Session

from smartcart.repositories.shopping_list_repo import ShoppingListRepository
from smartcart.repositories.user_repo import ShopperRepository


class StatsRepository:
    """
    Read-only aggregated queries for the owner dashboard.
    """

    def __init__(
        self,
        shopper_repo: ShopperRepository | None = None,
        list_repo: ShoppingListRepository | None = None,
    ):
        self.shopper_repo = shopper_repo or ShopperRepository()
        self.list_repo = list_repo or ShoppingListRepository()

    def count_shoppers(self, session: Session) -> int:
        return self.shopper_repo.count(session)

    def count_shopping_list_items(self, session: Session) -> int:
        return self.list_repo.count(session)
