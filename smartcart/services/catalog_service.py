# smartcart/services/catalog_service.py
from smartcart.data.catalog import CATEGORIES, PRODUCTS, SUBCATEGORIES
from smartcart.schemas.product import CategoryRead, ProductRead, normalize_product


class CatalogService:
    """
    Read-only product catalog.

    Responsibilities:
      - normalize every raw entry once, at construction
      - lookups by id or barcode
      - category / subcategory / text filtering for the shop screen
    """

    def __init__(
        self,
        products: list[dict] | None = None,
        categories: list[dict] | None = None,
        subcategories: dict[str, list[str]] | None = None,
    ):
        raw = PRODUCTS if products is None else products
        self._products: list[ProductRead] = [normalize_product(p) for p in raw]
        self._by_id = {p.id: p for p in self._products}
        self._by_barcode = {p.barcode_id: p for p in self._products}
        self._categories = [
            CategoryRead(**c) for c in (CATEGORIES if categories is None else categories)
        ]
        self._subcategories = SUBCATEGORIES if subcategories is None else subcategories

    @property
    def products(self) -> list[ProductRead]:
        return list(self._products)

    def categories(self) -> list[CategoryRead]:
        return list(self._categories)

    def subcategories(self, category_id: str) -> list[str]:
        return list(self._subcategories.get(category_id, []))

    def get(self, product_id: str) -> ProductRead | None:
        """Find a product by catalog id, falling back to barcode."""
        product_id = str(product_id)
        return self._by_id.get(product_id) or self._by_barcode.get(product_id)

    def list_products(
        self,
        category: str | None = None,
        subcategory: str | None = None,
        search: str | None = None,
        popular: bool | None = None,
    ) -> list[ProductRead]:
        """
        Filter the catalog.

        Rules:
          - category / subcategory: exact match
          - search: case-insensitive substring of name or description
          - popular: only products flagged popular when True
        """
        items = self._products
        if category:
            items = [p for p in items if p.category == category]
        if subcategory:
            items = [p for p in items if p.subcategory == subcategory]
        if search:
            term = search.strip().lower()
            items = [
                p
                for p in items
                if term in p.name.lower() or term in p.description.lower()
            ]
        if popular:
            items = [p for p in items if p.popular]
        return list(items)
