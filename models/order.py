"""
Order schemas, status machine and queue filters.

Orders are read-only snapshots of the Supabase `orders` table with their
embedded `order_items`.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from enum import Enum
from datetime import datetime
from decimal import Decimal

from models.base import BaseSchema


class OrderStatus(str, Enum):
    """Order status values."""
    PENDING_PAYMENT = "pending_payment"
    PAYMENT_CONFIRMED = "payment_confirmed"
    PROCESSING = "processing"
    IN_PRODUCTION = "in_production"
    QUALITY_CHECK = "quality_check"
    PACKAGING = "packaging"
    SHIPPED = "shipped"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    EXCEPTION = "exception"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class OrderPriority(str, Enum):
    """Priority tiers set on orders by staff or automation."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"
    RUSH = "rush"
    WEDDING_PARTY = "wedding_party"
    PROM_GROUP = "prom_group"
    VIP_CUSTOMER = "vip_customer"


class ProductSource(str, Enum):
    """Where an order line's product is defined."""
    CORE_STRIPE = "core_stripe"
    CATALOG_SUPABASE = "catalog_supabase"


# ===================
# STATUS MACHINE
# ===================

# Main path, in order
MAIN_STATUS_FLOW = [
    OrderStatus.PENDING_PAYMENT,
    OrderStatus.PAYMENT_CONFIRMED,
    OrderStatus.PROCESSING,
    OrderStatus.IN_PRODUCTION,
    OrderStatus.QUALITY_CHECK,
    OrderStatus.PACKAGING,
    OrderStatus.SHIPPED,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
    OrderStatus.COMPLETED,
]

STATUS_ORDER = {status: index for index, status in enumerate(MAIN_STATUS_FLOW)}

SIDE_STATUSES = frozenset({
    OrderStatus.ON_HOLD,
    OrderStatus.EXCEPTION,
    OrderStatus.CANCELLED,
    OrderStatus.REFUNDED,
})

TERMINAL_STATUSES = frozenset({
    OrderStatus.CANCELLED,
    OrderStatus.REFUNDED,
    OrderStatus.COMPLETED,
})

# Paused states resume only through external intervention
PAUSED_STATUSES = frozenset({OrderStatus.ON_HOLD, OrderStatus.EXCEPTION})


def is_terminal(status: OrderStatus) -> bool:
    """Check if no further transitions are possible from status."""
    return status in TERMINAL_STATUSES


def next_main_status(status: OrderStatus) -> Optional[OrderStatus]:
    """Get the next status on the main path, or None off-path / at the end."""
    index = STATUS_ORDER.get(status)
    if index is None or index + 1 >= len(MAIN_STATUS_FLOW):
        return None
    return MAIN_STATUS_FLOW[index + 1]


def is_valid_status_transition(current: OrderStatus, new: OrderStatus) -> bool:
    """
    Check if status transition is valid.

    Rules:
    - cancelled, refunded and completed are terminal
    - Main path advances one step at a time
    - on_hold / exception reachable from main states before delivered
    - cancelled reachable before shipped, refunded from payment_confirmed
      through delivered
    - on_hold / exception resume to any non-terminal main state, or end in
      cancelled / refunded
    """
    if current == new or is_terminal(current):
        return False

    if current in PAUSED_STATUSES:
        if new in PAUSED_STATUSES:
            return True
        if new in (OrderStatus.CANCELLED, OrderStatus.REFUNDED):
            return True
        return new in STATUS_ORDER and not is_terminal(new)

    position = STATUS_ORDER[current]

    if new in PAUSED_STATUSES:
        return position < STATUS_ORDER[OrderStatus.DELIVERED]
    if new == OrderStatus.CANCELLED:
        return position < STATUS_ORDER[OrderStatus.SHIPPED]
    if new == OrderStatus.REFUNDED:
        return STATUS_ORDER[OrderStatus.PAYMENT_CONFIRMED] <= position <= STATUS_ORDER[OrderStatus.DELIVERED]

    return next_main_status(current) == new


# ===================
# ORDER SCHEMAS
# ===================

class OrderItem(BaseSchema):
    """Order line item snapshot."""

    id: Optional[str] = Field(None, description="Order item UUID")
    product_name: str = Field(default="", description="Product name")
    product_description: Optional[str] = Field(None, description="Product description")
    quantity: int = Field(default=1, ge=1, description="Units ordered")
    size: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    product_source: Optional[ProductSource] = None
    is_bundle_item: bool = Field(default=False, description="Part of a bundle (suit set, wedding package)")
    bundle_type: Optional[str] = Field(None, description="Bundle kind, e.g. wedding_package")

    @field_validator("product_name", mode="before")
    @classmethod
    def none_to_empty(cls, v: Optional[str]) -> str:
        """Supabase returns null names for some catalog lines."""
        return v or ""

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v):
        return 1 if v is None else v


class Order(BaseSchema):
    """Order snapshot with line items."""

    id: str = Field(..., description="Order UUID")
    order_number: str = Field(..., description="Human-facing order number")
    customer_name: str = Field(default="", description="Customer full name")
    customer_email: str = Field(default="", description="Customer email")
    order_status: OrderStatus = Field(..., description="Current status")
    order_priority: str = Field(
        default=OrderPriority.NORMAL.value,
        description="Priority tier; unknown tiers rank lowest"
    )
    total_amount: Decimal = Field(default=Decimal("0"), ge=0, description="Order total")
    is_rush_order: bool = False
    is_group_order: bool = False
    group_order_id: Optional[str] = Field(None, description="Shared id of orders in one wedding party")
    estimated_processing_time: Optional[int] = Field(
        None,
        ge=0,
        description="Processing hours recorded by the last routing run"
    )
    created_at: datetime = Field(..., description="Created timestamp")
    order_items: list[OrderItem] = Field(default_factory=list)

    @field_validator("order_priority", mode="before")
    @classmethod
    def normalize_priority(cls, v) -> str:
        """Store tiers as lowercase strings."""
        if v is None:
            return OrderPriority.NORMAL.value
        if isinstance(v, OrderPriority):
            return v.value
        return str(v).strip().lower()

    @field_validator("customer_name", "customer_email", mode="before")
    @classmethod
    def none_to_empty(cls, v: Optional[str]) -> str:
        return v or ""

    @property
    def has_bundle_items(self) -> bool:
        return any(item.is_bundle_item for item in self.order_items)


class OrderFlags(BaseModel):
    """Order flags consulted by workflow preconditions."""

    is_group_order: bool = False
    is_rush_order: bool = False
    has_bundle_items: bool = False

    @classmethod
    def from_order(cls, order: Order) -> "OrderFlags":
        return cls(
            is_group_order=order.is_group_order,
            is_rush_order=order.is_rush_order,
            has_bundle_items=order.has_bundle_items,
        )


# ===================
# QUEUE SCHEMAS
# ===================

class QueueFilters(BaseSchema):
    """
    Order queue filters.

    Unset (None) filters are ignored; set filters are combined with AND.
    """

    status: Optional[OrderStatus] = None
    priority: Optional[str] = None
    product_source: Optional[ProductSource] = None
    is_rush_order: Optional[bool] = None
    is_group_order: Optional[bool] = None
    search: Optional[str] = Field(
        None,
        description="Case-insensitive match on order number, customer name or email"
    )

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        if isinstance(v, OrderPriority):
            return v.value
        if isinstance(v, str):
            return v.strip().lower() or None
        return v


class QueueSummary(BaseSchema):
    """Counts shown above the order queue."""

    total: int
    by_status: dict[str, int] = Field(default_factory=dict)
    by_priority: dict[str, int] = Field(default_factory=dict)
    rush_orders: int = 0
    group_orders: int = 0
    high_priority: int = Field(0, description="Orders ranked at or above the high tier")


class OrderQueueResponse(BaseSchema):
    """Ranked order queue."""

    data: list[Order]
    total: int
    summary: QueueSummary
