"""
Catalog Store Use Case.

Owns the mutable set of categories with their features, options and sizes.
Deleting (or implicitly dropping) an entity removes the price entries that
depend on it.
"""
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from internal.domain.catalog import (
    DEFAULT_CATEGORY_IMAGE,
    DEFAULT_OPTION_IMAGE,
    DEFAULT_SIZE_IMAGE,
    Category,
    Feature,
    FeatureOption,
    SelectionType,
    Size,
    derive_image_hint,
)
from internal.domain.errors import (
    CategoryNotFoundError,
    FeatureNotFoundError,
    OptionNotFoundError,
    SizeNotFoundError,
)
from internal.domain.pricing import PriceEntry, split_canonical_value
from internal.infrastructure.ids import generate_id
from internal.usecase.price_table import PriceTable
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageDefaults:
    """Placeholder images applied when a new entity has no image."""

    category: str = DEFAULT_CATEGORY_IMAGE
    option: str = DEFAULT_OPTION_IMAGE
    size: str = DEFAULT_SIZE_IMAGE


class CatalogStore:
    """
    In-memory catalog of furniture categories.

    Add and update operations raise a NotFoundError subclass when the
    addressed parent or target is missing. Delete operations return whether
    anything was removed and never raise.
    """

    def __init__(
        self,
        price_table: PriceTable,
        categories: Optional[Iterable[Category]] = None,
        id_factory: Callable[[str], str] = generate_id,
        image_defaults: Optional[ImageDefaults] = None,
    ) -> None:
        """
        Initialize the catalog store.

        Args:
            price_table: Table whose entries are cascaded on deletes.
            categories: Initial categories, e.g. a seed catalog.
            id_factory: Produces a fresh id from a readable prefix.
            image_defaults: Placeholder images for new entities.
        """
        self._price_table = price_table
        self._categories: list[Category] = []
        self._id_factory = id_factory
        self._image_defaults = image_defaults or ImageDefaults()
        self._issued_ids: set[str] = set()

        for category in categories or []:
            self._register_ids(category)
            self._categories.append(category)

    @property
    def price_table(self) -> PriceTable:
        return self._price_table

    # Categories

    def categories(self) -> list[Category]:
        """List categories in stored order."""
        return list(self._categories)

    def get_category(self, category_id: str) -> Optional[Category]:
        """
        Get category by ID.

        Args:
            category_id: The ID of the category.

        Returns:
            Category if found, None otherwise.
        """
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def require_category(self, category_id: str) -> Category:
        """
        Get category by ID or fail.

        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        category = self.get_category(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    def add_category(
        self,
        name: str,
        icon_name: str = "",
        image_url: str = "",
        image_hint: str = "",
    ) -> Category:
        """
        Create a category with no features and no sizes.

        Args:
            name: Category name.
            icon_name: Icon reference.
            image_url: Image URL; the category placeholder when blank.
            image_hint: Image hint; derived from the name when blank.

        Returns:
            The created category.
        """
        category = Category(
            id=self._new_id(name),
            name=name,
            icon_name=icon_name,
            image_url=image_url or self._image_defaults.category,
            image_hint=image_hint or derive_image_hint(name),
        )
        self._categories.append(category)
        logger.info("Category added", category_id=category.id, name=name)
        return category

    def update_category(self, category: Category) -> Category:
        """
        Replace the category with the same ID wholesale.

        Price entries that no longer fit the new record (missing size or
        option, or keys other than the priceable features) are removed.

        Raises:
            CategoryNotFoundError: If no category has that ID.
        """
        index = self._index_of(category.id)
        self._register_ids(category)
        self._categories[index] = category
        removed = self._prune_orphans(category)
        logger.info(
            "Category updated",
            category_id=category.id,
            pruned_prices=removed,
        )
        return category

    def delete_category(self, category_id: str) -> bool:
        """
        Delete a category and every price entry of it.

        Returns:
            True if the category existed.
        """
        category = self.get_category(category_id)
        if category is None:
            return False
        self._categories.remove(category)
        removed = self._price_table.remove_where(lambda e: e.category_id == category_id)
        logger.info("Category deleted", category_id=category_id, removed_prices=removed)
        return True

    # Features

    def add_feature(
        self,
        category_id: str,
        name: str,
        selection_type: SelectionType = SelectionType.SINGLE,
    ) -> Feature:
        """
        Append a feature with no options to a category.

        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        category = self.require_category(category_id)
        feature = Feature(
            id=self._new_id("feat"),
            name=name,
            selection_type=selection_type,
        )
        category.features.append(feature)
        logger.info("Feature added", category_id=category_id, feature_id=feature.id)
        return feature

    def update_feature(self, category_id: str, feature: Feature) -> Feature:
        """
        Replace a feature by ID within its category.

        Raises:
            CategoryNotFoundError: If the category does not exist.
            FeatureNotFoundError: If the feature is not on the category.
        """
        category = self.require_category(category_id)
        index = self._feature_index(category, feature.id)
        self._register_ids(feature)
        category.features[index] = feature
        removed = self._prune_orphans(category)
        logger.info(
            "Feature updated",
            category_id=category_id,
            feature_id=feature.id,
            pruned_prices=removed,
        )
        return feature

    def delete_feature(self, category_id: str, feature_id: str) -> bool:
        """
        Delete a feature.

        Every price entry of the category that carried a selection for the
        feature is removed; entries without that key are kept.

        Returns:
            True if the feature existed.
        """
        category = self.get_category(category_id)
        if category is None:
            return False
        feature = category.get_feature(feature_id)
        if feature is None:
            return False
        category.features.remove(feature)
        removed = self._price_table.remove_where(
            lambda e: e.category_id == category_id and feature_id in e.feature_selections
        )
        logger.info(
            "Feature deleted",
            category_id=category_id,
            feature_id=feature_id,
            removed_prices=removed,
        )
        return True

    # Options

    def add_option(
        self,
        category_id: str,
        feature_id: str,
        label: str,
        icon_name: Optional[str] = None,
        image_url: Optional[str] = None,
        image_hint: Optional[str] = None,
    ) -> FeatureOption:
        """
        Append an option to a feature.

        A feature gaining its first option becomes priceable, so existing
        price entries of the category without its key are removed.

        Raises:
            CategoryNotFoundError: If the category does not exist.
            FeatureNotFoundError: If the feature is not on the category.
        """
        feature = self._require_feature(category_id, feature_id)
        option = FeatureOption(
            id=self._new_id("opt"),
            label=label,
            icon_name=icon_name,
            image_url=image_url or self._image_defaults.option,
            image_hint=image_hint or derive_image_hint(label),
        )
        feature.options.append(option)
        self._prune_orphans(self.require_category(category_id))
        logger.info(
            "Option added",
            category_id=category_id,
            feature_id=feature_id,
            option_id=option.id,
        )
        return option

    def update_option(
        self,
        category_id: str,
        feature_id: str,
        option: FeatureOption,
    ) -> FeatureOption:
        """
        Replace an option by ID within its feature.

        Raises:
            CategoryNotFoundError: If the category does not exist.
            FeatureNotFoundError: If the feature is not on the category.
            OptionNotFoundError: If the option is not on the feature.
        """
        feature = self._require_feature(category_id, feature_id)
        for index, existing in enumerate(feature.options):
            if existing.id == option.id:
                feature.options[index] = option
                self._prune_orphans(self.require_category(category_id))
                logger.info(
                    "Option updated",
                    category_id=category_id,
                    feature_id=feature_id,
                    option_id=option.id,
                )
                return option
        raise OptionNotFoundError(option.id)

    def delete_option(self, category_id: str, feature_id: str, option_id: str) -> bool:
        """
        Delete an option and every price entry that selected it.

        Returns:
            True if the option existed.
        """
        category = self.get_category(category_id)
        feature = category.get_feature(feature_id) if category else None
        option = feature.get_option(option_id) if feature else None
        if option is None:
            return False
        feature.options.remove(option)

        def selects_option(entry: PriceEntry) -> bool:
            value = entry.feature_selections.get(feature_id)
            return (
                entry.category_id == category_id
                and value is not None
                and option_id in split_canonical_value(value)
            )

        removed = self._price_table.remove_where(selects_option)
        logger.info(
            "Option deleted",
            category_id=category_id,
            feature_id=feature_id,
            option_id=option_id,
            removed_prices=removed,
        )
        return True

    # Sizes

    def add_size(
        self,
        category_id: str,
        label: str,
        icon_name: Optional[str] = None,
        image_url: Optional[str] = None,
        image_hint: Optional[str] = None,
    ) -> Size:
        """
        Append a size to a category.

        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        category = self.require_category(category_id)
        size = Size(
            id=self._new_id("size"),
            label=label,
            icon_name=icon_name,
            image_url=image_url or self._image_defaults.size,
            image_hint=image_hint or derive_image_hint(label),
        )
        category.sizes.append(size)
        logger.info("Size added", category_id=category_id, size_id=size.id)
        return size

    def update_size(self, category_id: str, size: Size) -> Size:
        """
        Replace a size by ID within its category.

        Raises:
            CategoryNotFoundError: If the category does not exist.
            SizeNotFoundError: If the size is not on the category.
        """
        category = self.require_category(category_id)
        for index, existing in enumerate(category.sizes):
            if existing.id == size.id:
                category.sizes[index] = size
                logger.info("Size updated", category_id=category_id, size_id=size.id)
                return size
        raise SizeNotFoundError(size.id)

    def delete_size(self, category_id: str, size_id: str) -> bool:
        """
        Delete a size and every price entry priced for it.

        Returns:
            True if the size existed.
        """
        category = self.get_category(category_id)
        size = category.get_size(size_id) if category else None
        if size is None:
            return False
        category.sizes.remove(size)
        removed = self._price_table.remove_where(
            lambda e: e.category_id == category_id and e.size_id == size_id
        )
        logger.info(
            "Size deleted",
            category_id=category_id,
            size_id=size_id,
            removed_prices=removed,
        )
        return True

    # Internals

    def _new_id(self, prefix: str) -> str:
        new_id = self._id_factory(prefix)
        while new_id in self._issued_ids:
            new_id = self._id_factory(prefix)
        self._issued_ids.add(new_id)
        return new_id

    def _register_ids(self, entity: object) -> None:
        """Record ids of a caller-supplied entity tree as issued."""
        self._issued_ids.add(entity.id)  # type: ignore[attr-defined]
        if isinstance(entity, Category):
            for feature in entity.features:
                self._register_ids(feature)
            for size in entity.sizes:
                self._issued_ids.add(size.id)
        elif isinstance(entity, Feature):
            for option in entity.options:
                self._issued_ids.add(option.id)

    def _index_of(self, category_id: str) -> int:
        for index, category in enumerate(self._categories):
            if category.id == category_id:
                return index
        raise CategoryNotFoundError(category_id)

    @staticmethod
    def _feature_index(category: Category, feature_id: str) -> int:
        for index, feature in enumerate(category.features):
            if feature.id == feature_id:
                return index
        raise FeatureNotFoundError(feature_id)

    def _require_feature(self, category_id: str, feature_id: str) -> Feature:
        category = self.require_category(category_id)
        feature = category.get_feature(feature_id)
        if feature is None:
            raise FeatureNotFoundError(feature_id)
        return feature

    def _prune_orphans(self, category: Category) -> int:
        """
        Remove price entries of ``category`` that no longer fit it.

        An entry fits when its size exists, its keys are exactly the
        priceable features and every selected option exists.
        """
        priceable = {feature.id for feature in category.priceable_features()}

        def is_orphan(entry: PriceEntry) -> bool:
            if entry.category_id != category.id:
                return False
            if category.get_size(entry.size_id) is None:
                return True
            if set(entry.feature_selections) != priceable:
                return True
            for feature_id, value in entry.feature_selections.items():
                feature = category.get_feature(feature_id)
                if any(feature.get_option(o) is None for o in split_canonical_value(value)):
                    return True
            return False

        removed = self._price_table.remove_where(is_orphan)
        if removed:
            logger.warning(
                "Removed orphaned price entries",
                category_id=category.id,
                removed_prices=removed,
            )
        return removed
