# smartcart/services/stats_service.py
import logging
from collections import defaultdict

from sqlalchemy.exc import SQLAlchemyError

from smartcart.data.catalog import BEST_SELLERS, CATEGORIES, INVENTORY, SALES
from smartcart.database import SessionFactory
from smartcart.repositories.stats_repo import StatsRepository
from smartcart.schemas.stats import (
    BestSeller,
    CategoryPrice,
    CategoryStock,
    MonthlySales,
    OwnerDashboardStats,
)
from smartcart.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class StatsService:
    """
    Orchestrates aggregated owner dashboard statistics.

    Catalog figures are computed from the static catalog; shopper and
    shopping list counts come from Supabase and are None when it fails.
    """

    def __init__(
        self,
        catalog: CatalogService,
        session_factory: SessionFactory,
        repo: StatsRepository | None = None,
        low_stock_threshold: int = 50,
    ):
        self.catalog = catalog
        self.session_factory = session_factory
        self.repo = repo or StatsRepository()
        self.low_stock_threshold = low_stock_threshold

    def _remote_counts(self) -> tuple[int | None, int | None]:
        try:
            with self.session_factory() as session:
                shoppers = self.repo.count_shoppers(session)
                list_items = self.repo.count_shopping_list_items(session)
        except SQLAlchemyError:
            logger.exception("Loading remote dashboard counts failed")
            return None, None
        return shoppers, list_items

    def get_dashboard_stats(self) -> OwnerDashboardStats:
        products = self.catalog.products

        total_inventory_value = round(
            sum(p.price * p.quantity_in_stock for p in products), 2
        )
        low_stock_items = sum(
            1 for p in products if p.quantity_in_stock < self.low_stock_threshold
        )

        monthly_sales = [MonthlySales(**s) for s in SALES]
        total_sales = float(sum(s.total for s in monthly_sales))

        # % change from first to last month
        revenue_trend = 0.0
        if len(monthly_sales) >= 2 and monthly_sales[0].total:
            first, last = monthly_sales[0].total, monthly_sales[-1].total
            revenue_trend = round((last - first) / first * 100, 1)

        inventory = [CategoryStock(**row) for row in INVENTORY]
        low_inventory = [
            row.category for row in sorted(inventory, key=lambda r: r.stock)[:3]
        ]

        # Average price per category, labelled with the category display name
        names = {c["id"]: c["name"] for c in CATEGORIES}
        prices: dict[str, list[float]] = defaultdict(list)
        for p in products:
            prices[names.get(p.category, p.category)].append(p.price)
        avg_price_by_category = [
            CategoryPrice(category=category, avg_price=round(sum(vals) / len(vals), 2))
            for category, vals in prices.items()
        ]

        best_sellers = [
            BestSeller(product_id=row["id"], name=row["name"], units=row["units"])
            for row in BEST_SELLERS
        ]

        total_shoppers, shopping_list_items = self._remote_counts()

        return OwnerDashboardStats(
            total_inventory_value=total_inventory_value,
            total_products=len(products),
            total_sales=total_sales,
            low_stock_items=low_stock_items,
            revenue_trend=revenue_trend,
            low_inventory_categories=low_inventory,
            avg_price_by_category=avg_price_by_category,
            monthly_sales=monthly_sales,
            inventory_by_category=inventory,
            best_sellers=best_sellers,
            total_shoppers=total_shoppers,
            shopping_list_items=shopping_list_items,
        )
