"""
Business logic services.

The classifier, weight estimator, template selector, queue ranker and
workflow dispatcher are pure functions over snapshots. OrderService and
ShippingTemplateService read those snapshots from Supabase.
"""

from services.product_type_classifier import classify
from services.weight_estimator import estimate_weight
from services.template_selector import recommend_templates
from services.order_queue_service import rank_queue, priority_rank, summarize_queue
from services.workflow_dispatcher import (
    validate_transition,
    validate_order_action,
    available_actions,
)
from services.order_service import OrderService, get_order_service
from services.shipping_template_service import (
    ShippingTemplateService,
    get_shipping_template_service,
)

__all__ = [
    "classify",
    "estimate_weight",
    "recommend_templates",
    "rank_queue",
    "priority_rank",
    "summarize_queue",
    "validate_transition",
    "validate_order_action",
    "available_actions",
    "OrderService",
    "get_order_service",
    "ShippingTemplateService",
    "get_shipping_template_service",
]
