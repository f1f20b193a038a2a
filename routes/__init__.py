"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.orders import router as orders_router
from routes.shipping_templates import router as shipping_templates_router

__all__ = [
    "orders_router",
    "shipping_templates_router",
]
