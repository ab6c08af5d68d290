# smartcart/schemas/stats.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class MonthlySales(SQLModel):
    """
    Revenue for one month of the sales series.
    """
    model_config = ConfigDict(extra="forbid")

    month: str
    total: float


class CategoryStock(SQLModel):
    model_config = ConfigDict(extra="forbid")

    category: str
    stock: int


class CategoryPrice(SQLModel):
    model_config = ConfigDict(extra="forbid")

    category: str
    avg_price: float


class BestSeller(SQLModel):
    """
    Aggregated stats for top-selling products.
    """
    model_config = ConfigDict(extra="forbid")

    product_id: str
    name: str
    units: int


class OwnerDashboardStats(SQLModel):
    """
    Full payload for the owner dashboard charts.

    Remote counts are None when Supabase could not be reached.
    """
    model_config = ConfigDict(extra="forbid")

    total_inventory_value: float
    total_products: int
    total_sales: float
    low_stock_items: int
    revenue_trend: float
    low_inventory_categories: list[str]
    avg_price_by_category: list[CategoryPrice]
    monthly_sales: list[MonthlySales]
    inventory_by_category: list[CategoryStock]
    best_sellers: list[BestSeller]
    total_shoppers: int | None = None
    shopping_list_items: int | None = None
