"""Repository for the Product aggregate — catalog queries."""

import math
from dataclasses import dataclass

from protean.exceptions import ValidationError

from storefront.domain import storefront
from storefront.product.product import SORTABLE_FIELDS, Product

TOP_RATED_LIMIT = 5


@dataclass(frozen=True)
class CatalogPage:
    """One page of a filtered, sorted catalog listing."""

    items: list
    current_page: int
    total_pages: int
    total_count: int


def build_catalog_filter(category=None, min_price=None, max_price=None) -> dict:
    """Translate listing filters into repository criteria.

    Filters that were not supplied are left out entirely. Price bounds are
    inclusive.
    """
    criteria = {}
    if category:
        criteria["category"] = category
    if min_price is not None:
        criteria["price__gte"] = min_price
    if max_price is not None:
        criteria["price__lte"] = max_price
    return criteria


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_page(
        self,
        category=None,
        min_price=None,
        max_price=None,
        sort_by="created_at",
        order="desc",
        page=1,
        limit=10,
    ) -> CatalogPage:
        """Return one page of products matching the supplied filters."""
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError({"sort_by": [f"Cannot sort by {sort_by}"]})
        if page < 1:
            raise ValidationError({"page": ["Page must be at least 1"]})
        if limit < 1:
            raise ValidationError({"limit": ["Limit must be at least 1"]})

        query = self._dao.query
        criteria = build_catalog_filter(category, min_price, max_price)
        if criteria:
            query = query.filter(**criteria)

        ordering = f"-{sort_by}" if order == "desc" else sort_by
        results = query.order_by(ordering).offset((page - 1) * limit).limit(limit).all()

        return CatalogPage(
            items=list(results.items),
            current_page=page,
            total_pages=math.ceil(results.total / limit),
            total_count=results.total,
        )

    def search_by_name(self, text: str) -> list[Product]:
        """Case-insensitive substring match on the product name."""
        return list(self._dao.query.filter(name__icontains=text).all().items)

    def top_rated(self, limit: int = TOP_RATED_LIMIT) -> list[Product]:
        return list(self._dao.query.order_by("-rating").limit(limit).all().items)
