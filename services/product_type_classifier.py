"""
Product type classification for order contents.

Turns free-text line items ("Navy Slim Suit", "Silk Bow Tie") into the
category tags shipping templates are recommended for.
"""

from typing import Iterable, Optional

from config.fulfillment import (
    BULK_ORDERS_TAG,
    MULTIPLE_ITEMS_TAG,
    DEFAULT_FULFILLMENT_CONFIG,
    ClassificationRule,
    FulfillmentConfig,
)
from models.order import OrderItem


def item_text(item: OrderItem) -> str:
    """Lowercased name + description used for keyword matching."""
    return f"{item.product_name or ''} {item.product_description or ''}".lower()


def _matches(rule: ClassificationRule, text: str) -> bool:
    if not any(keyword in text for keyword in rule.includes):
        return False
    return not any(keyword in text for keyword in rule.excludes)


def classify_item(item: OrderItem, config: Optional[FulfillmentConfig] = None) -> list[str]:
    """
    Tags for a single line item.

    Every matching rule contributes its tag, in rule order. Items that
    match nothing return an empty list.
    """
    config = config or DEFAULT_FULFILLMENT_CONFIG
    text = item_text(item)

    tags = []
    for rule in config.classification_rules:
        if not _matches(rule, text):
            continue
        if rule.set_tag and (item.quantity > 1 or "set" in text):
            tags.append(rule.set_tag)
        else:
            tags.append(rule.tag)
    return tags


def classify(
    items: Iterable[OrderItem],
    config: Optional[FulfillmentConfig] = None
) -> frozenset[str]:
    """
    Derive category tags from order line items.

    Adds bulk_orders and multiple_items based on the number of line
    items (not units).

    Args:
        items: Order line items
        config: Fulfillment tables (defaults to DEFAULT_FULFILLMENT_CONFIG)

    Returns:
        Deduplicated set of tags
    """
    config = config or DEFAULT_FULFILLMENT_CONFIG
    items = list(items)

    tags = set()
    for item in items:
        tags.update(classify_item(item, config))

    if len(items) >= config.bulk_order_min_items:
        tags.add(BULK_ORDERS_TAG)
    if len(items) >= config.multiple_items_min_items:
        tags.add(MULTIPLE_ITEMS_TAG)

    return frozenset(tags)
