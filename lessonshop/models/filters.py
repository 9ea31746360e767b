"""
Catalog view state: filters, sorting and page navigation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Tuple, Union


# Stock filter values
StockFilter = Literal["all", "available", "soldout"]

DEFAULT_SORT_KEY = "subject-asc"
DEFAULT_MAX_PRICE = 9999

NUMERIC_SORT_FIELDS = ("price", "spaces")


@dataclass
class FilterState:
    """
    User-selected catalog filters.

    Attributes:
        search_term: Free-text search sent to the catalog service
        sort_key: "<field>-<direction>", e.g. "price-desc"
        filter_key: Stock filter (all/available/soldout)
        min_price: Inclusive lower price bound
        max_price: Inclusive upper price bound
        location_filter: Exact location to keep, empty for all
    """

    search_term: str = ""
    sort_key: str = DEFAULT_SORT_KEY
    filter_key: StockFilter = "all"
    min_price: Union[int, float] = 0
    max_price: Union[int, float] = DEFAULT_MAX_PRICE
    location_filter: str = ""

    def sort_spec(self) -> Tuple[str, bool]:
        """
        Split the sort key into field and direction.

        Returns:
            Tuple of (field, ascending). Any direction other than
            "asc" sorts descending.

        Examples:
            >>> FilterState(sort_key="price-asc").sort_spec()
            ('price', True)
            >>> FilterState(sort_key="spaces").sort_spec()
            ('spaces', False)
        """
        field, _, direction = self.sort_key.partition("-")
        return field, direction == "asc"


class Page(Enum):
    """Storefront views."""
    CATALOG = "catalog"
    CART = "cart"
    CHECKOUT = "checkout"
    SUCCESS = "success"


# User-driven transitions; CHECKOUT -> SUCCESS only happens on order success
PAGE_TRANSITIONS = {
    Page.CATALOG: {Page.CATALOG, Page.CART},
    Page.CART: {Page.CATALOG, Page.CART, Page.CHECKOUT},
    Page.CHECKOUT: {Page.CART, Page.CHECKOUT},
    Page.SUCCESS: {Page.CATALOG, Page.SUCCESS},
}
