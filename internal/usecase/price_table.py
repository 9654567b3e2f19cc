"""
Price Table Use Case.

Flat collection of priced combinations with exact-match lookup and upsert.
There is no partial or best-effort pricing: a query either matches the full
key of an entry or it is unpriced.
"""
from typing import Callable, Iterable, Optional

from internal.domain.catalog import Category
from internal.domain.errors import (
    DomainValidationError,
    IncompleteSelectionError,
    OptionNotFoundError,
    PriceEntryNotFoundError,
    SizeNotFoundError,
)
from internal.domain.pricing import (
    PriceEntry,
    SelectionValue,
    canonicalize_selections,
    split_canonical_value,
)
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


class PriceTable:
    """
    In-memory table of PriceEntry facts.

    Entries keep insertion order. Every operation that interprets feature
    selections takes the owning Category, since matching depends on the
    category's current feature set.
    """

    def __init__(self, entries: Optional[Iterable[PriceEntry]] = None) -> None:
        self._entries: list[PriceEntry] = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self, category_id: Optional[str] = None) -> list[PriceEntry]:
        """
        List price entries.

        Args:
            category_id: Restrict to one category when given.

        Returns:
            Entries in insertion order.
        """
        if category_id is None:
            return list(self._entries)
        return [e for e in self._entries if e.category_id == category_id]

    def lookup(
        self,
        category: Category,
        feature_selections: dict[str, SelectionValue],
        size_id: Optional[str],
    ) -> Optional[PriceEntry]:
        """
        Find the entry whose key matches the query exactly.

        Candidates are filtered by category and size. A category without
        features only matches entries with empty selections; otherwise the
        candidate must have as many keys as the query and every candidate
        key must carry an equal value in the query.

        Args:
            category: Category the query belongs to.
            feature_selections: Feature id to option id (or ids).
            size_id: Selected size.

        Returns:
            The matching entry, or None.
        """
        if not size_id:
            return None

        query = canonicalize_selections(feature_selections)
        matches = [
            entry
            for entry in self._entries
            if entry.category_id == category.id
            and entry.size_id == size_id
            and self._selections_match(category, entry.feature_selections, query)
        ]

        if len(matches) > 1:
            logger.warning(
                "Duplicate price entries for one combination",
                category_id=category.id,
                size_id=size_id,
                feature_selections=query,
                duplicates=len(matches),
            )
        return matches[0] if matches else None

    def upsert(self, category: Category, entry: PriceEntry) -> PriceEntry:
        """
        Insert a price entry or replace the price of an existing one.

        Selections are canonicalized and stale keys (features no longer on
        the category) are dropped. The remaining keys must cover every
        priceable feature and reference live options; the size must belong
        to the category. Validation happens before any mutation.

        Args:
            category: Category the entry belongs to.
            entry: Entry to save. Its price range is already validated.

        Returns:
            The stored entry.

        Raises:
            DomainValidationError: If the entry targets another category or
                a single-select feature holds several options.
            SizeNotFoundError: If the size is not on the category.
            OptionNotFoundError: If a selected option does not exist.
            IncompleteSelectionError: If a priceable feature has no selection.
        """
        if entry.category_id != category.id:
            raise DomainValidationError(
                f"Price entry for category {entry.category_id} "
                f"cannot be saved under category {category.id}"
            )
        selections = self.normalize_selections(category, entry.feature_selections)
        if category.get_size(entry.size_id) is None:
            raise SizeNotFoundError(entry.size_id)

        normalized = PriceEntry(
            category_id=category.id,
            feature_selections=selections,
            size_id=entry.size_id,
            price_range=entry.price_range,
            override_image_url=entry.override_image_url,
            override_image_hint=entry.override_image_hint,
        )

        existing = self._find_by_key(normalized)
        if existing is not None:
            existing.price_range = normalized.price_range
            if normalized.override_image_url:
                existing.override_image_url = normalized.override_image_url
                existing.override_image_hint = normalized.override_image_hint
            logger.info(
                "Price entry updated",
                category_id=category.id,
                size_id=existing.size_id,
                price_range=existing.price_range.to_dict(),
            )
            return existing

        self._entries.append(normalized)
        logger.info(
            "Price entry added",
            category_id=category.id,
            size_id=normalized.size_id,
            price_range=normalized.price_range.to_dict(),
        )
        return normalized

    def set_override_image(
        self,
        category: Category,
        feature_selections: dict[str, SelectionValue],
        size_id: str,
        image_url: Optional[str],
        image_hint: Optional[str] = None,
    ) -> PriceEntry:
        """
        Attach (or clear, with an empty URL) a combination-specific image.

        Raises:
            PriceEntryNotFoundError: If the combination has no price entry.
        """
        entry = self.lookup(category, feature_selections, size_id)
        if entry is None:
            raise PriceEntryNotFoundError(f"{category.id}/{size_id}")
        entry.override_image_url = image_url or None
        entry.override_image_hint = (image_hint or None) if image_url else None
        logger.info(
            "Combination image updated",
            category_id=category.id,
            size_id=size_id,
            cleared=not image_url,
        )
        return entry

    def remove_where(self, predicate: Callable[[PriceEntry], bool]) -> int:
        """
        Remove every entry matching the predicate.

        Returns:
            Number of removed entries.
        """
        kept = [e for e in self._entries if not predicate(e)]
        removed = len(self._entries) - len(kept)
        self._entries = kept
        return removed

    @staticmethod
    def normalize_selections(
        category: Category,
        feature_selections: dict[str, SelectionValue],
    ) -> dict[str, str]:
        """
        Canonicalize selections against the category's current features.

        Raises:
            DomainValidationError: On several options for a single-select feature.
            OptionNotFoundError: If an option id does not exist.
            IncompleteSelectionError: If a priceable feature is missing.
        """
        canonical = canonicalize_selections(feature_selections)
        selections: dict[str, str] = {}
        missing: list[str] = []

        for feature in category.priceable_features():
            value = canonical.get(feature.id)
            if not value:
                missing.append(feature.id)
                continue
            option_ids = split_canonical_value(value)
            if len(option_ids) > 1 and not feature.is_multiple:
                raise DomainValidationError(
                    f"Feature {feature.id} accepts a single option"
                )
            for option_id in option_ids:
                if feature.get_option(option_id) is None:
                    raise OptionNotFoundError(option_id)
            selections[feature.id] = value

        if missing:
            raise IncompleteSelectionError(category.id, missing)

        dropped = set(canonical) - set(selections)
        if dropped:
            logger.debug(
                "Dropped stale feature keys from selection",
                category_id=category.id,
                dropped=sorted(dropped),
            )
        return selections

    def _find_by_key(self, entry: PriceEntry) -> Optional[PriceEntry]:
        for existing in self._entries:
            if existing.key == entry.key:
                return existing
        return None

    @staticmethod
    def _selections_match(
        category: Category,
        stored: dict[str, str],
        query: dict[str, str],
    ) -> bool:
        if not category.features:
            return not stored
        if len(stored) != len(query):
            return False
        return all(query.get(key) == value for key, value in stored.items())
