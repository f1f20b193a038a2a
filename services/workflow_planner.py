"""
Workflow planning helpers.

Pure estimates the automation service attaches to an accepted action:
priority score, customer tier, processor routing, bundle grouping and
group-order delivery coordination.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from models.order import Order, OrderItem
from models.workflow import BundlePlan, CoordinationPlan, RoutingDecision

# Priority score
BASE_PRIORITY_SCORE = 100
HIGH_VALUE_SCORE_BONUS = 50
RUSH_SCORE_BONUS = 100
GROUP_SCORE_BONUS = 75
MAX_PRIORITY_SCORE = 500

# Customer tiers by order total
VIP_TIER_MIN_TOTAL = Decimal("5000")
PREMIUM_TIER_MIN_TOTAL = Decimal("1000")

# Routing (hours)
STANDARD_PROCESSING_HOURS = 48
RUSH_PROCESSING_HOURS = 24
GROUP_PROCESSING_HOURS = 72
PREMIUM_ROUTING_MIN_TOTAL = Decimal("3000")

# Bundles
HOURS_PER_BUNDLE_ITEM = 6
DEFAULT_BUNDLE_TYPE = "standard"
COORDINATED_BUNDLE_TYPES = frozenset({"wedding_package"})

# Group delivery buffer after the slowest order
COORDINATION_BUFFER_HOURS = 24


def calculate_priority_score(order: Order) -> int:
    """
    Queue priority score (100-500).

    100 base, +50 over $5000, +100 rush, +75 group order.
    """
    score = BASE_PRIORITY_SCORE
    if order.total_amount > VIP_TIER_MIN_TOTAL:
        score += HIGH_VALUE_SCORE_BONUS
    if order.is_rush_order:
        score += RUSH_SCORE_BONUS
    if order.is_group_order:
        score += GROUP_SCORE_BONUS
    return min(MAX_PRIORITY_SCORE, score)


def customer_tier(total_amount: Decimal) -> str:
    """vip over $5000, premium over $1000, otherwise standard."""
    if total_amount > VIP_TIER_MIN_TOTAL:
        return "vip"
    if total_amount > PREMIUM_TIER_MIN_TOTAL:
        return "premium"
    return "standard"


def make_routing_decision(order: Order, now: datetime) -> RoutingDecision:
    """
    Estimate processing time and routing reason.

    Rules apply in order and later ones override: rush, high value, group.
    """
    hours = STANDARD_PROCESSING_HOURS
    reason = "Standard processing"

    if order.is_rush_order:
        hours = RUSH_PROCESSING_HOURS
        reason = "Rush order - expedited processing"

    if order.total_amount > PREMIUM_ROUTING_MIN_TOTAL:
        reason = "High-value order - premium processing"

    if order.is_group_order:
        hours = GROUP_PROCESSING_HOURS
        reason = "Group order - coordination required"

    return RoutingDecision(
        estimated_hours=hours,
        estimated_completion=now + timedelta(hours=hours),
        routing_reason=reason,
    )


def group_bundle_items(items: Iterable[OrderItem]) -> dict[str, list[OrderItem]]:
    """Bundle items keyed by bundle_type, in first-seen order."""
    groups: dict[str, list[OrderItem]] = {}
    for item in items:
        if not item.is_bundle_item:
            continue
        groups.setdefault(item.bundle_type or DEFAULT_BUNDLE_TYPE, []).append(item)
    return groups


def plan_bundles(items: Iterable[OrderItem]) -> list[BundlePlan]:
    """One processing plan per bundle group."""
    plans = []
    for bundle_type, grouped in group_bundle_items(items).items():
        plans.append(BundlePlan(
            bundle_type=bundle_type,
            item_count=len(grouped),
            estimated_hours=len(grouped) * HOURS_PER_BUNDLE_ITEM,
            special_requirements=(
                "Coordination required" if bundle_type in COORDINATED_BUNDLE_TYPES
                else "Standard processing"
            ),
        ))
    return plans


def create_coordination_plan(
    orders: list[Order],
    now: datetime,
    processing_hours: Optional[dict[str, int]] = None
) -> CoordinationPlan:
    """
    Synchronized delivery plan for a group party.

    Args:
        orders: Orders in the same group
        now: Planning time
        processing_hours: Estimated hours per order id (48 when missing)

    Returns:
        CoordinationPlan targeting the slowest order plus a 24h buffer
    """
    processing_hours = processing_hours or {}
    party_size = len(orders)
    slowest = max(
        (processing_hours.get(o.id, STANDARD_PROCESSING_HOURS) for o in orders),
        default=STANDARD_PROCESSING_HOURS
    )

    return CoordinationPlan(
        party_size=party_size,
        target_delivery_date=now + timedelta(hours=slowest + COORDINATION_BUFFER_HOURS),
        coordination_notes=f"Wedding party of {party_size} orders - synchronized delivery",
    )
