"""
Unit tests for product type classification.

Covers keyword rules, bow tie / tie disambiguation, suit sets and the
line-count tags.
"""

import pytest

from config.fulfillment import DEFAULT_FULFILLMENT_CONFIG, ClassificationRule
from services.product_type_classifier import classify, classify_item, item_text
from tests.factories import OrderItemFactory


class TestClassifyItem:
    """Tests for single item tags."""

    @pytest.mark.parametrize("name,expected", [
        ("Navy Slim Suit", ["suits"]),
        ("Velvet Dinner Jacket", ["blazers"]),
        ("Silk Bow Tie", ["bow_ties"]),
        ("Black Bowtie", ["bow_ties"]),
        ("Skinny Tie", ["ties"]),
        ("Oxford Leather Shoe", ["shoes"]),
        ("Chelsea Boot", ["shoes"]),
        ("Grey Wool Vest", ["vests"]),
        ("Grey Waistcoat", ["blazers", "vests"]),
        ("Clip Suspenders", ["suspenders"]),
        ("Leather Belt", ["accessories"]),
        ("Classic Dress Shirt", ["shirts"]),
    ])
    def test_keyword_rules(self, name, expected):
        """Each keyword maps to its category."""
        item = OrderItemFactory.build(product_name=name)

        assert classify_item(item) == expected

    def test_bow_tie_is_not_tie(self):
        """Bow ties never get the plain ties tag."""
        item = OrderItemFactory.build(product_name="Burgundy Bow Tie")

        assert "ties" not in classify_item(item)

    def test_suit_quantity_is_suit_set(self):
        """Suits ordered in quantity are tagged as sets."""
        item = OrderItemFactory.build(product_name="Navy Suit", quantity=3)

        assert classify_item(item) == ["suit_sets"]

    def test_suit_described_as_set(self):
        """A single suit described as a set is tagged as a set."""
        item = OrderItemFactory.build(
            product_name="Charcoal Suit",
            product_description="Three piece set with vest"
        )

        tags = classify_item(item)

        assert "suit_sets" in tags
        assert "suits" not in tags
        assert "vests" in tags

    def test_description_is_matched(self):
        """Description text participates in matching."""
        item = OrderItemFactory.build(
            product_name="Wedding Add-on",
            product_description="Matching pocket accessory"
        )

        assert classify_item(item) == ["accessories"]

    def test_unmatched_item_has_no_tags(self):
        """Items with no keyword return nothing."""
        item = OrderItemFactory.build(product_name="Gift Card")

        assert classify_item(item) == []

    def test_item_text_handles_missing_fields(self):
        item = OrderItemFactory.build(product_name=None, product_description=None)

        assert item_text(item).strip() == ""


class TestClassify:
    """Tests for order-level tags."""

    def test_single_suit(self):
        """One suit line gives only suits."""
        items = OrderItemFactory.build_many("Navy Suit")

        assert classify(items) == frozenset({"suits"})

    def test_multiple_items_tag(self):
        """Two or more lines add multiple_items."""
        items = OrderItemFactory.build_many("Navy Suit", "Silk Tie")

        assert classify(items) == frozenset({"suits", "ties", "multiple_items"})

    def test_bulk_orders_tag(self):
        """Six or more lines add bulk_orders."""
        items = OrderItemFactory.build_many(*["Dress Shirt"] * 6)

        tags = classify(items)

        assert "bulk_orders" in tags
        assert "multiple_items" in tags

    def test_five_lines_not_bulk(self):
        items = OrderItemFactory.build_many(*["Dress Shirt"] * 5)

        assert "bulk_orders" not in classify(items)

    def test_units_do_not_count_as_lines(self):
        """One line with many units is not multiple_items."""
        items = [OrderItemFactory.build(product_name="Dress Shirt", quantity=8)]

        assert classify(items) == frozenset({"shirts"})

    def test_tags_are_deduplicated(self):
        items = OrderItemFactory.build_many("Silk Tie", "Knit Tie")

        assert classify(items) == frozenset({"ties", "multiple_items"})

    def test_empty_order(self):
        assert classify([]) == frozenset()

    def test_custom_rules(self):
        """Injected config replaces the rule table."""
        config = DEFAULT_FULFILLMENT_CONFIG.model_copy(update={
            "classification_rules": (ClassificationRule(tag="tuxedos", includes=("tux",)),),
        })
        items = OrderItemFactory.build_many("Midnight Tux")

        assert classify(items, config) == frozenset({"tuxedos"})

    def test_repeated_calls_identical(self):
        items = OrderItemFactory.build_many(
            "Navy Suit", "Silk Bow Tie", "Oxford Shoe", "Grey Waistcoat", "Dress Shirt", "Leather Belt"
        )

        assert classify(items) == classify(items)
        assert [classify_item(item) for item in items] == [classify_item(item) for item in items]
