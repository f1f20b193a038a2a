"""
Shipping weight estimation from order items (pounds).
"""

from typing import Iterable, Optional

from config.fulfillment import DEFAULT_FULFILLMENT_CONFIG, FulfillmentConfig
from models.order import OrderItem


def unit_weight(item: OrderItem, config: Optional[FulfillmentConfig] = None) -> float:
    """
    Per-unit weight of an item.

    Only the product name is matched; the first matching rule wins,
    otherwise the default item weight applies.
    """
    config = config or DEFAULT_FULFILLMENT_CONFIG
    name = (item.product_name or "").lower()

    for rule in config.weight_rules:
        if any(keyword in name for keyword in rule.includes):
            return rule.weight_lbs
    return config.default_item_weight_lbs


def estimate_weight(
    items: Iterable[OrderItem],
    explicit_weight: Optional[float] = None,
    config: Optional[FulfillmentConfig] = None
) -> float:
    """
    Estimate total shipping weight.

    A positive explicit_weight is authoritative and returned unchanged
    (raised to the weight floor if it is below it). Zero, negative or
    missing values fall through to estimation.

    Args:
        items: Order line items
        explicit_weight: Caller-supplied total weight in lbs
        config: Fulfillment tables (defaults to DEFAULT_FULFILLMENT_CONFIG)

    Returns:
        Total weight in lbs
    """
    config = config or DEFAULT_FULFILLMENT_CONFIG

    if explicit_weight is not None and explicit_weight > 0:
        return max(explicit_weight, config.weight_floor_lbs)

    total = sum(unit_weight(item, config) * item.quantity for item in items)

    return max(total, config.weight_floor_lbs)
