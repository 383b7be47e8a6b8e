from __future__ import annotations

from typing import Callable

from ..exceptions import ProductNotFoundError
from ..models_catalog import Category, Customer, Product
from ..sequencing import DebouncedProductSearch, Scheduler, thread_timer_scheduler
from ..session import ApiSession
from .errors import CatalogServiceError, normalize_error


class ProductSearchService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def categories(self) -> list[Category]:
        try:
            return self.session.pos_client().get_categories()
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not load categories") from exc

    def category_products(self, category_id: int) -> list[Product]:
        try:
            return self.session.pos_client().get_category_products(category_id)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not load products") from exc

    def search(self, query: str) -> list[Product]:
        term = query.strip()
        if not term:
            return []
        return self.session.pos_client().search_products(term)

    def search_customers(self, query: str) -> list[Customer]:
        term = query.strip()
        if not term:
            return []
        try:
            return self.session.pos_client().search_customers(term)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not search customers") from exc

    def lookup_code(self, code: str) -> list[Product]:
        """Products matching a scanned barcode or SKU.

        Raises :class:`ProductNotFoundError` when nothing matches.
        """
        term = code.strip()
        if not term:
            raise ProductNotFoundError(code)
        try:
            matches = self.session.pos_client().search_products(term)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not look up the product") from exc
        if not matches:
            raise ProductNotFoundError(term)
        return matches

    def debounced(
        self,
        on_results: Callable[[str, list[Product]], None],
        *,
        wait_ms: int | None = None,
        scheduler: Scheduler = thread_timer_scheduler,
    ) -> DebouncedProductSearch[list[Product]]:
        return DebouncedProductSearch(
            search=self.search,
            on_results=on_results,
            wait_ms=self.session.config.search_debounce_ms if wait_ms is None else wait_ms,
            scheduler=scheduler,
        )
