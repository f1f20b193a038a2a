"""
Order queue prioritization.

Filters an order snapshot and sorts it into processing order: highest
priority tier first, oldest first within a tier.
"""

from collections import Counter
from typing import Iterable, Optional
import structlog

from config.fulfillment import DEFAULT_FULFILLMENT_CONFIG, FulfillmentConfig
from models.order import Order, QueueFilters, QueueSummary

logger = structlog.get_logger(__name__)


def priority_rank(priority: Optional[str], config: Optional[FulfillmentConfig] = None) -> int:
    """
    Integer rank of a priority tier.

    Unrecognized or missing tiers get config.unknown_priority_rank (0).
    """
    config = config or DEFAULT_FULFILLMENT_CONFIG
    if not priority:
        return config.unknown_priority_rank
    return config.priority_weights.get(priority, config.unknown_priority_rank)


def _matches_search(order: Order, search: str) -> bool:
    needle = search.lower()
    return (
        needle in order.order_number.lower()
        or needle in order.customer_name.lower()
        or needle in order.customer_email.lower()
    )


def filter_orders(orders: Iterable[Order], filters: Optional[QueueFilters] = None) -> list[Order]:
    """
    Apply queue filters in sequence.

    Unset filters are no-ops; set filters combine with AND.
    """
    filtered = list(orders)
    if filters is None:
        return filtered

    if filters.status is not None:
        filtered = [o for o in filtered if o.order_status == filters.status]

    if filters.priority is not None:
        filtered = [o for o in filtered if o.order_priority == filters.priority]

    if filters.product_source is not None:
        filtered = [
            o for o in filtered
            if any(item.product_source == filters.product_source for item in o.order_items)
        ]

    if filters.is_rush_order is not None:
        filtered = [o for o in filtered if o.is_rush_order == filters.is_rush_order]

    if filters.is_group_order is not None:
        filtered = [o for o in filtered if o.is_group_order == filters.is_group_order]

    if filters.search:
        filtered = [o for o in filtered if _matches_search(o, filters.search)]

    return filtered


def rank_queue(
    orders: Iterable[Order],
    filters: Optional[QueueFilters] = None,
    config: Optional[FulfillmentConfig] = None
) -> list[Order]:
    """
    Filter and sort orders for processing.

    Args:
        orders: Order snapshot
        filters: Optional queue filters
        config: Fulfillment tables (priority weights)

    Returns:
        Filtered orders, rank descending then created_at ascending
    """
    config = config or DEFAULT_FULFILLMENT_CONFIG
    orders = list(orders)
    filtered = filter_orders(orders, filters)

    ranked = sorted(
        filtered,
        key=lambda o: (-priority_rank(o.order_priority, config), o.created_at)
    )

    logger.debug("order_queue_ranked", orders=len(orders), matched=len(ranked))

    return ranked


def summarize_queue(
    orders: Iterable[Order],
    config: Optional[FulfillmentConfig] = None
) -> QueueSummary:
    """Counts by status and priority for the queue header."""
    config = config or DEFAULT_FULFILLMENT_CONFIG
    orders = list(orders)

    by_status = Counter(o.order_status.value for o in orders)
    by_priority = Counter(o.order_priority for o in orders)

    return QueueSummary(
        total=len(orders),
        by_status=dict(by_status),
        by_priority=dict(by_priority),
        rush_orders=sum(1 for o in orders if o.is_rush_order),
        group_orders=sum(1 for o in orders if o.is_group_order),
        high_priority=sum(
            1 for o in orders
            if priority_rank(o.order_priority, config) >= config.high_priority_min_rank
        ),
    )
