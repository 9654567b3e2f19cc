"""
Resolution Engine.

Turns a (possibly partial) user selection into a description string and the
most specific image. Unknown categories degrade to sentinels instead of
raising.
"""
from typing import Iterable, Optional

from internal.domain.catalog import DEFAULT_CATEGORY_IMAGE, Category, Feature
from internal.domain.pricing import ResolvedImage, SelectionValue, UserSelection
from pkg.logger.logger import get_logger

logger = get_logger(__name__)

NO_ITEM_SELECTED = "No item selected"
UNKNOWN_CATEGORY = "Unknown category"


def find_category(categories: Iterable[Category], category_id: Optional[str]) -> Optional[Category]:
    """Find a category by ID among ``categories``."""
    if not category_id:
        return None
    for category in categories:
        if category.id == category_id:
            return category
    return None


def option_labels(feature: Feature, value: Optional[SelectionValue]) -> list[str]:
    """
    Labels of the options selected for a feature.

    Unknown option ids are skipped.

    Args:
        feature: Feature the value belongs to.
        value: Option id or list of option ids.

    Returns:
        Labels in selection order.
    """
    if not value:
        return []
    option_ids = list(value) if isinstance(value, (list, tuple)) else [value]
    labels = []
    for option_id in option_ids:
        option = feature.get_option(option_id)
        if option is not None:
            labels.append(option.label)
    return labels


def describe(selection: UserSelection, categories: Iterable[Category]) -> str:
    """
    Build a human-readable description of a selection.

    Format: ``<Category> (<label>, <label>, ...), Size: <size label>``.
    Features without a selected option are skipped; several options of one
    multi-select feature are joined with " & ".

    Args:
        selection: The user selection.
        categories: Current catalog categories.

    Returns:
        Description, or a sentinel when no or an unknown category is selected.
    """
    if not selection.category_id:
        return NO_ITEM_SELECTED
    category = find_category(categories, selection.category_id)
    if category is None:
        logger.debug("Cannot describe unknown category", category_id=selection.category_id)
        return UNKNOWN_CATEGORY

    description = category.name
    parts = []
    for feature in category.features:
        labels = option_labels(feature, selection.feature_selections.get(feature.id))
        if labels:
            parts.append(" & ".join(labels))
    if parts:
        description += f" ({', '.join(parts)})"

    if selection.size_id:
        size = category.get_size(selection.size_id)
        if size is not None:
            description += f", Size: {size.label}"
    return description


def resolve_image(selection: UserSelection, categories: Iterable[Category]) -> ResolvedImage:
    """
    Resolve the most specific image for a selection.

    Precedence is category < size < first feature option with an image.
    Features are visited in declaration order and the first selected option
    that defines an image wins; later features are not consulted.

    Args:
        selection: The user selection.
        categories: Current catalog categories.

    Returns:
        Resolved image; both fields are None when the category is unknown.
    """
    category = find_category(categories, selection.category_id)
    if category is None:
        return ResolvedImage()

    url = category.image_url or DEFAULT_CATEGORY_IMAGE
    hint = category.image_hint or category.name.lower()

    if selection.size_id:
        size = category.get_size(selection.size_id)
        if size is not None and size.image_url:
            url = size.image_url
            hint = size.image_hint or size.label.lower()

    for feature in category.features:
        value = selection.feature_selections.get(feature.id)
        if not value:
            continue
        first_id = value[0] if isinstance(value, (list, tuple)) else value
        option = feature.get_option(first_id)
        if option is not None and option.image_url:
            url = option.image_url
            hint = option.image_hint or option.label.lower()
            break

    return ResolvedImage(url=url, hint=hint)
