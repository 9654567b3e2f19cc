"""
Estimator Service Use Case.

Single entry point used by the transport layer. It owns one catalog store
and its price table, and serializes every call behind one re-entrant lock so
that a CRUD call and its cascade complete before any other call observes the
pair.
"""
import threading
from decimal import Decimal
from typing import Callable, Optional, Union

from internal.domain.catalog import Category, Feature, FeatureOption, SelectionType, Size
from internal.domain.pricing import (
    EstimationRecord,
    PriceCombination,
    PriceEntry,
    PriceRange,
    ResolvedImage,
    SelectionValue,
    UserSelection,
)
from internal.infrastructure.ids import generate_id
from internal.usecase.catalog_store import CatalogStore
from internal.usecase.combinations import CombinationEnumerator
from internal.usecase.price_table import PriceTable
from internal.usecase.resolution import describe, resolve_image
from pkg.logger.logger import get_logger

logger = get_logger(__name__)

Number = Union[int, float, Decimal, str]


class EstimatorService:
    """
    Facade over CatalogStore, PriceTable, CombinationEnumerator and the
    resolution functions.

    Catalog mutators keep the store's contract: add/update raise
    NotFoundError subclasses, deletes return a bool.
    """

    def __init__(
        self,
        store: CatalogStore,
        id_factory: Callable[[str], str] = generate_id,
    ) -> None:
        """
        Initialize the estimator service.

        Args:
            store: Catalog store; its price table is used for pricing.
            id_factory: Produces estimation record ids.
        """
        self._store = store
        self._table: PriceTable = store.price_table
        self._enumerator = CombinationEnumerator(self._table)
        self._id_factory = id_factory
        self._lock = threading.RLock()

    @classmethod
    def create(cls, categories=None, prices=None, **store_kwargs) -> "EstimatorService":
        """Build a service with a fresh store and price table."""
        table = PriceTable(prices)
        return cls(CatalogStore(table, categories, **store_kwargs))

    # Catalog reads

    def categories(self) -> list[Category]:
        with self._lock:
            return self._store.categories()

    def get_category(self, category_id: str) -> Category:
        """
        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        with self._lock:
            return self._store.require_category(category_id)

    # Catalog mutators

    def add_category(self, name: str, icon_name: str = "", image_url: str = "", image_hint: str = "") -> Category:
        with self._lock:
            return self._store.add_category(name, icon_name, image_url, image_hint)

    def update_category(self, category: Category) -> Category:
        with self._lock:
            return self._store.update_category(category)

    def delete_category(self, category_id: str) -> bool:
        with self._lock:
            return self._store.delete_category(category_id)

    def add_feature(
        self,
        category_id: str,
        name: str,
        selection_type: SelectionType = SelectionType.SINGLE,
    ) -> Feature:
        with self._lock:
            return self._store.add_feature(category_id, name, selection_type)

    def update_feature(self, category_id: str, feature: Feature) -> Feature:
        with self._lock:
            return self._store.update_feature(category_id, feature)

    def delete_feature(self, category_id: str, feature_id: str) -> bool:
        with self._lock:
            return self._store.delete_feature(category_id, feature_id)

    def add_option(self, category_id: str, feature_id: str, label: str, **fields) -> FeatureOption:
        with self._lock:
            return self._store.add_option(category_id, feature_id, label, **fields)

    def update_option(self, category_id: str, feature_id: str, option: FeatureOption) -> FeatureOption:
        with self._lock:
            return self._store.update_option(category_id, feature_id, option)

    def delete_option(self, category_id: str, feature_id: str, option_id: str) -> bool:
        with self._lock:
            return self._store.delete_option(category_id, feature_id, option_id)

    def add_size(self, category_id: str, label: str, **fields) -> Size:
        with self._lock:
            return self._store.add_size(category_id, label, **fields)

    def update_size(self, category_id: str, size: Size) -> Size:
        with self._lock:
            return self._store.update_size(category_id, size)

    def delete_size(self, category_id: str, size_id: str) -> bool:
        with self._lock:
            return self._store.delete_size(category_id, size_id)

    # Pricing

    def list_prices(self, category_id: Optional[str] = None) -> list[PriceEntry]:
        with self._lock:
            return self._table.entries(category_id)

    def lookup_price(
        self,
        category_id: Optional[str],
        feature_selections: dict[str, SelectionValue],
        size_id: Optional[str],
    ) -> Optional[PriceEntry]:
        """
        Exact-match price lookup.

        Returns:
            The matching entry, or None when unpriced or the category is unknown.
        """
        with self._lock:
            category = self._store.get_category(category_id) if category_id else None
            if category is None:
                return None
            return self._table.lookup(category, feature_selections, size_id)

    def save_price(
        self,
        category_id: str,
        feature_selections: dict[str, SelectionValue],
        size_id: str,
        min_price: Number,
        max_price: Number,
    ) -> PriceEntry:
        """
        Insert or update the price of a combination.

        Raises:
            InvalidPriceRangeError: If the range is negative or inverted.
            CategoryNotFoundError: If the category does not exist.
            DomainValidationError: If the selection does not fit the category.
        """
        price_range = PriceRange(min_price, max_price)
        with self._lock:
            category = self._store.require_category(category_id)
            entry = PriceEntry(
                category_id=category_id,
                feature_selections=dict(feature_selections),  # type: ignore[arg-type]
                size_id=size_id,
                price_range=price_range,
            )
            return self._table.upsert(category, entry)

    def set_combination_image(
        self,
        category_id: str,
        feature_selections: dict[str, SelectionValue],
        size_id: str,
        image_url: Optional[str],
        image_hint: Optional[str] = None,
    ) -> PriceEntry:
        """
        Raises:
            CategoryNotFoundError: If the category does not exist.
            PriceEntryNotFoundError: If the combination is not priced.
        """
        with self._lock:
            category = self._store.require_category(category_id)
            return self._table.set_override_image(
                category, feature_selections, size_id, image_url, image_hint
            )

    def combinations(self) -> list[PriceCombination]:
        """Administrative price grid for the whole catalog."""
        with self._lock:
            return self._enumerator.enumerate(self._store.categories())

    # Resolution

    def describe(self, selection: UserSelection) -> str:
        with self._lock:
            return describe(selection, self._store.categories())

    def resolve_image(self, selection: UserSelection) -> ResolvedImage:
        with self._lock:
            return resolve_image(selection, self._store.categories())

    def estimate(self, selection: UserSelection, name: Optional[str] = None) -> EstimationRecord:
        """
        Snapshot a selection with its description and price.

        Args:
            selection: The user selection.
            name: Optional user-defined name.

        Returns:
            Estimation record with the resolved image; price_range is None
            when unpriced.
        """
        with self._lock:
            entry = self.lookup_price(
                selection.category_id,
                selection.feature_selections,
                selection.size_id,
            )
            record = EstimationRecord(
                id=self._id_factory("est"),
                selections=selection,
                description=self.describe(selection),
                price_range=entry.price_range if entry else None,
                name=name,
                image=self.resolve_image(selection),
            )
        logger.info(
            "Estimate produced",
            category_id=selection.category_id,
            priced=entry is not None,
        )
        return record
