"""
Test data factories.

Uses factory pattern to generate consistent rows matching the Supabase
`orders`, `order_items` and `shipping_templates` tables.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from models.order import Order, OrderItem
from models.shipping_template import ShippingTemplate


class OrderItemFactory:
    """
    Factory for order item rows.

    Usage:
        item = OrderItemFactory.create(product_name="Navy Suit")
        model = OrderItemFactory.build(product_name="Silk Tie", quantity=3)
    """

    @classmethod
    def create(
        cls,
        product_name: str = "Classic Dress Shirt",
        quantity: int = 1,
        product_description: Optional[str] = None,
        product_source: Optional[str] = "catalog_supabase",
        is_bundle_item: bool = False,
        bundle_type: Optional[str] = None,
        **overrides
    ) -> dict:
        """Create a single order item dict."""
        return {
            "id": str(uuid4()),
            "product_name": product_name,
            "product_description": product_description,
            "quantity": quantity,
            "size": "40R",
            "color": "navy",
            "material": "wool",
            "product_source": product_source,
            "is_bundle_item": is_bundle_item,
            "bundle_type": bundle_type,
            **overrides,
        }

    @classmethod
    def build(cls, **kwargs) -> OrderItem:
        """Create a validated OrderItem model."""
        return OrderItem(**cls.create(**kwargs))

    @classmethod
    def build_many(cls, *names: str) -> list[OrderItem]:
        """One single-unit item per product name."""
        return [cls.build(product_name=name) for name in names]


class OrderFactory:
    """
    Factory for order rows.

    Usage:
        # Create with defaults
        order = OrderFactory.create()

        # Create with overrides
        order = OrderFactory.create(order_priority="rush", is_rush_order=True)

        # Validated model
        order = OrderFactory.build(order_status="processing")
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        order_number: Optional[str] = None,
        order_status: str = "payment_confirmed",
        order_priority: Optional[str] = "normal",
        created_at: Optional[str] = None,
        order_items: Optional[list] = None,
        **overrides
    ) -> dict:
        """
        Create a single order dict.

        Args:
            id: Order UUID (auto-generated if not provided)
            order_number: Order number (auto-generated if not provided)
            order_status: Status value
            order_priority: Priority tier
            created_at: ISO timestamp (now if not provided)
            order_items: Item dicts (one shirt if not provided)
            **overrides: Any other column

        Returns:
            Order dict matching database schema
        """
        counter = cls._next_counter()
        now = datetime.utcnow().isoformat() + "Z"

        return {
            "id": id or str(uuid4()),
            "order_number": order_number or f"KCT-{9000 + counter}",
            "customer_name": f"Customer {counter}",
            "customer_email": f"customer{counter}@example.com",
            "order_status": order_status,
            "order_priority": order_priority,
            "total_amount": 450.00,
            "is_rush_order": False,
            "is_group_order": False,
            "group_order_id": None,
            "created_at": created_at or now,
            "order_items": order_items if order_items is not None else [OrderItemFactory.create()],
            **overrides,
        }

    @classmethod
    def build(cls, **kwargs) -> Order:
        """Create a validated Order model."""
        return Order(**cls.create(**kwargs))

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create multiple order dicts."""
        return [cls.create(**overrides) for _ in range(count)]


class ShippingTemplateFactory:
    """
    Factory for shipping template rows.

    Usage:
        template = ShippingTemplateFactory.build(max_weight_lbs=5, recommended_for=["suits"])
    """

    _counter = 0

    @classmethod
    def create(
        cls,
        template_code: Optional[str] = None,
        length_inches: float = 12,
        width_inches: float = 10,
        height_inches: float = 4,
        max_weight_lbs: float = 10,
        recommended_for: Optional[list] = None,
        is_active: bool = True,
        **overrides
    ) -> dict:
        """Create a single template dict."""
        cls._counter += 1
        code = template_code or f"BOX_{cls._counter}"
        return {
            "id": str(uuid4()),
            "template_code": code,
            "template_name": code.replace("_", " ").title(),
            "length_inches": length_inches,
            "width_inches": width_inches,
            "height_inches": height_inches,
            "max_weight_lbs": max_weight_lbs,
            "recommended_for": recommended_for or [],
            "is_active": is_active,
            **overrides,
        }

    @classmethod
    def build(cls, **kwargs) -> ShippingTemplate:
        """Create a validated ShippingTemplate model."""
        return ShippingTemplate(**cls.create(**kwargs))
