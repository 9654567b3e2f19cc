"""
Combination Enumerator.

Builds the administrative price grid: every (category, feature assignment,
size) triple the catalog allows, annotated with its price when one exists.
"""
from typing import Iterable

from internal.domain.catalog import Category, Feature
from internal.domain.pricing import (
    PriceCombination,
    PriceRange,
    SelectionValue,
    UserSelection,
    canonicalize_selections,
)
from internal.usecase.price_table import PriceTable
from internal.usecase.resolution import describe, option_labels, resolve_image

NO_FEATURES_DESCRIPTION = "N/A"


def feature_choices(feature: Feature) -> list[SelectionValue]:
    """
    Values a feature can take in a complete combination.

    A single-select feature yields each option id in declaration order. A
    multi-select feature yields every non-empty subset of its options, in
    power-set order, each as a sorted list of ids.

    Args:
        feature: Feature with at least one option.

    Returns:
        Candidate values for the feature.
    """
    option_ids = [option.id for option in feature.options]
    if not feature.is_multiple:
        return list(option_ids)

    subsets: list[list[str]] = [[]]
    for option_id in option_ids:
        subsets += [subset + [option_id] for subset in subsets]
    return [sorted(subset) for subset in subsets if subset]


def feature_assignments(category: Category) -> list[dict[str, SelectionValue]]:
    """
    Every complete feature assignment for a category.

    Features are taken in declaration order, so the first feature varies
    slowest. A feature without options contributes no key. A category
    without features has exactly one assignment, the empty map.

    Args:
        category: Category to expand.

    Returns:
        Assignments in deterministic generation order.
    """
    assignments: list[dict[str, SelectionValue]] = [{}]
    for feature in category.features:
        if not feature.options:
            continue
        choices = feature_choices(feature)
        assignments = [
            {**assignment, feature.id: choice}
            for assignment in assignments
            for choice in choices
        ]
    return assignments


def describe_features(category: Category, assignment: dict[str, SelectionValue]) -> str:
    """``"<Feature>: <Option>"`` parts joined by commas, or "N/A" when empty."""
    parts = []
    for feature in category.features:
        labels = option_labels(feature, assignment.get(feature.id))
        if labels:
            parts.append(f"{feature.name}: {' & '.join(labels)}")
    return ", ".join(parts) or NO_FEATURES_DESCRIPTION


class CombinationEnumerator:
    """Cross-references the catalog with the price table."""

    def __init__(self, price_table: PriceTable) -> None:
        """
        Initialize the enumerator.

        Args:
            price_table: Table consulted for existing prices.
        """
        self._price_table = price_table

    def enumerate(self, categories: Iterable[Category]) -> list[PriceCombination]:
        """
        Enumerate every priceable combination.

        Ordering is category order, then size order, then feature assignment
        order. Categories without sizes are skipped.

        Args:
            categories: Catalog categories in stored order.

        Returns:
            One row per (feature assignment, size) of each category.
        """
        categories = list(categories)
        rows: list[PriceCombination] = []

        for category in categories:
            if not category.sizes:
                continue
            assignments = feature_assignments(category)

            for size in category.sizes:
                for assignment in assignments:
                    rows.append(self._build_row(categories, category, assignment, size.id))
        return rows

    def _build_row(
        self,
        categories: list[Category],
        category: Category,
        assignment: dict[str, SelectionValue],
        size_id: str,
    ) -> PriceCombination:
        selection = UserSelection(
            category_id=category.id,
            feature_selections=assignment,
            size_id=size_id,
        )
        entry = self._price_table.lookup(category, assignment, size_id)
        image = resolve_image(selection, categories)
        size = category.get_size(size_id)

        override_url = entry.override_image_url if entry else None
        override_hint = entry.override_image_hint if entry else None

        return PriceCombination(
            category_id=category.id,
            category_name=category.name,
            feature_selections=canonicalize_selections(assignment),
            feature_description=describe_features(category, assignment),
            size_id=size_id,
            size_label=size.label if size else "",
            price_range=entry.price_range if entry else PriceRange.unpriced(),
            description=describe(selection, categories),
            is_priced=entry is not None,
            image_url=override_url or image.url,
            image_hint=(override_hint or image.hint) if override_url else image.hint,
            override_image_url=override_url,
            override_image_hint=override_hint,
        )
