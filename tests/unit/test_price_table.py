"""
Unit tests for the price table.
"""
import logging

import pytest

from internal.domain.catalog import Category, Feature, FeatureOption, SelectionType, Size
from internal.domain.errors import (
    DomainValidationError,
    IncompleteSelectionError,
    OptionNotFoundError,
    PriceEntryNotFoundError,
    SizeNotFoundError,
)
from internal.domain.pricing import PriceEntry, PriceRange
from internal.usecase.price_table import PriceTable


def make_entry(category_id, selections, size_id, min_price=300, max_price=700):
    return PriceEntry(
        category_id=category_id,
        feature_selections=selections,
        size_id=size_id,
        price_range=PriceRange(min_price, max_price),
    )


@pytest.fixture
def styled_category():
    """Category with a multi-select style feature."""
    return Category(
        id="chairs",
        name="Chairs",
        features=[
            Feature(
                id="style",
                name="Style",
                selection_type=SelectionType.MULTIPLE,
                options=[FeatureOption("modern", "Modern"), FeatureOption("retro", "Retro")],
            ),
        ],
        sizes=[Size("one", "One size")],
    )


class TestLookup:
    """Tests for exact-match lookup."""

    def test_exact_match(self, price_table, sofa_category, sofa_selection):
        """Test that a full selection finds its entry."""
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small"))

        entry = price_table.lookup(sofa_category, dict(sofa_selection), "small")

        assert entry is not None
        assert entry.price_range == PriceRange(300, 700)

    def test_partial_selection_never_matches(self, price_table, sofa_category, sofa_selection):
        """Test there is no best-effort pricing for partial selections."""
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small"))

        assert price_table.lookup(sofa_category, {"seats": "seats-2"}, "small") is None

    def test_extra_query_key_never_matches(self, price_table, sofa_category, sofa_selection):
        """Test cardinality must be equal."""
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small"))

        query = {**sofa_selection, "legs": "oak"}
        assert price_table.lookup(sofa_category, query, "small") is None

    def test_mismatched_value(self, price_table, sofa_category, sofa_selection):
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small"))

        query = {**sofa_selection, "material": "leather"}
        assert price_table.lookup(sofa_category, query, "small") is None

    def test_other_size_or_missing_size(self, price_table, sofa_category, sofa_selection):
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small"))

        assert price_table.lookup(sofa_category, sofa_selection, "large") is None
        assert price_table.lookup(sofa_category, sofa_selection, None) is None

    def test_category_without_features(self, price_table, stool_category):
        """Test a featureless category matches entries with empty selections."""
        price_table.upsert(stool_category, make_entry("stools", {}, "std", 50, 80))

        entry = price_table.lookup(stool_category, {}, "std")

        assert entry is not None
        assert entry.price_range == PriceRange(50, 80)

    def test_category_without_features_ignores_non_empty_entries(self, stool_category):
        """Test a stored entry with selections never matches a featureless category."""
        table = PriceTable([make_entry("stools", {"legacy": "x"}, "std")])

        assert table.lookup(stool_category, {}, "std") is None

    def test_multi_select_is_order_independent(self, price_table, styled_category):
        """Test list values are compared in canonical form."""
        price_table.upsert(styled_category, make_entry("chairs", {"style": ["retro", "modern"]}, "one"))

        entry = price_table.lookup(styled_category, {"style": ["modern", "retro"]}, "one")

        assert entry is not None
        assert entry.feature_selections == {"style": "modern,retro"}
        assert price_table.lookup(styled_category, {"style": ["modern"]}, "one") is None

    def test_duplicate_keys_first_wins_and_warns(self, sofa_category, sofa_selection, caplog):
        """Test duplicate entries are reported as a data-integrity problem."""
        first = make_entry("sofas", dict(sofa_selection), "small", 1, 2)
        second = make_entry("sofas", dict(sofa_selection), "small", 3, 4)
        table = PriceTable([first, second])

        with caplog.at_level(logging.WARNING):
            entry = table.lookup(sofa_category, sofa_selection, "small")

        assert entry is first
        assert "Duplicate price entries" in caplog.text


class TestUpsert:
    """Tests for price upsert."""

    def test_upsert_twice_keeps_one_entry(self, price_table, sofa_category, sofa_selection):
        """Test upsert is idempotent on the key and keeps the last price."""
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small", 100, 200))
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small", 150, 250))

        assert len(price_table) == 1
        entry = price_table.entries()[0]
        assert entry.feature_selections == sofa_selection
        assert entry.price_range == PriceRange(150, 250)

    def test_stale_keys_are_dropped(self, price_table, sofa_category, sofa_selection):
        """Test keys for features the category no longer has are removed."""
        stored = price_table.upsert(
            sofa_category,
            make_entry("sofas", {**sofa_selection, "removed-feature": "x"}, "small"),
        )

        assert stored.feature_selections == sofa_selection

    def test_incomplete_selection_rejected(self, price_table, sofa_category):
        with pytest.raises(IncompleteSelectionError) as exc_info:
            price_table.upsert(sofa_category, make_entry("sofas", {"seats": "seats-2"}, "small"))

        assert exc_info.value.missing == ["material"]
        assert len(price_table) == 0

    def test_unknown_size_rejected(self, price_table, sofa_category, sofa_selection):
        with pytest.raises(SizeNotFoundError):
            price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "huge"))
        assert len(price_table) == 0

    def test_unknown_option_rejected(self, price_table, sofa_category):
        with pytest.raises(OptionNotFoundError):
            price_table.upsert(
                sofa_category,
                make_entry("sofas", {"seats": "seats-9", "material": "fabric"}, "small"),
            )

    def test_several_options_for_single_select_rejected(self, price_table, sofa_category):
        with pytest.raises(DomainValidationError):
            price_table.upsert(
                sofa_category,
                make_entry("sofas", {"seats": ["seats-2", "seats-3"], "material": "fabric"}, "small"),
            )

    def test_entry_for_other_category_rejected(self, price_table, sofa_category, sofa_selection):
        with pytest.raises(DomainValidationError):
            price_table.upsert(sofa_category, make_entry("stools", sofa_selection, "small"))

    def test_features_without_options_need_no_selection(self, price_table, sofa_category, sofa_selection):
        """Test option-less features neither block nor key an entry."""
        sofa_category.features.append(Feature(id="legs", name="Legs"))

        stored = price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small"))

        assert stored.feature_selections == sofa_selection
        assert price_table.lookup(sofa_category, sofa_selection, "small") is stored

    def test_price_update_keeps_override_image(self, price_table, sofa_category, sofa_selection):
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small", 100, 200))
        price_table.set_override_image(sofa_category, sofa_selection, "small", "data:image/png;base64,AA", "custom")

        entry = price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small", 120, 220))

        assert entry.override_image_url == "data:image/png;base64,AA"
        assert entry.override_image_hint == "custom"
        assert entry.price_range == PriceRange(120, 220)


class TestOverrideImage:
    """Tests for combination-specific images."""

    def test_unpriced_combination_rejected(self, price_table, sofa_category, sofa_selection):
        with pytest.raises(PriceEntryNotFoundError):
            price_table.set_override_image(sofa_category, sofa_selection, "small", "X")

    def test_empty_url_clears_override(self, price_table, sofa_category, sofa_selection):
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small"))
        price_table.set_override_image(sofa_category, sofa_selection, "small", "X", "hint")

        entry = price_table.set_override_image(sofa_category, sofa_selection, "small", "", "hint")

        assert entry.override_image_url is None
        assert entry.override_image_hint is None


class TestRemoveWhere:
    """Tests for predicate removal."""

    def test_returns_removed_count(self, price_table, sofa_category, stool_category, sofa_selection):
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "small"))
        price_table.upsert(sofa_category, make_entry("sofas", sofa_selection, "large"))
        price_table.upsert(stool_category, make_entry("stools", {}, "std"))

        removed = price_table.remove_where(lambda e: e.category_id == "sofas")

        assert removed == 2
        assert [e.category_id for e in price_table.entries()] == ["stools"]
        assert price_table.entries("sofas") == []
