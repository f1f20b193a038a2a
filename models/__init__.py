"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.order import (
    OrderStatus,
    OrderPriority,
    ProductSource,
    OrderItem,
    Order,
    OrderFlags,
    QueueFilters,
    QueueSummary,
    OrderQueueResponse,
    MAIN_STATUS_FLOW,
    TERMINAL_STATUSES,
    is_terminal,
    is_valid_status_transition,
)
from models.shipping_template import (
    RecommendationLevel,
    ShippingTemplate,
    RankedTemplate,
    TemplateRecommendationRequest,
    TemplateRecommendationResponse,
    ShippingTemplateListResponse,
)
from models.workflow import (
    WorkflowAction,
    WorkflowActionRequest,
    WorkflowAcceptance,
    RoutingDecision,
    BundlePlan,
    CoordinationPlan,
    WorkflowActionResponse,
    AvailableActionsResponse,
)

__all__ = [
    # Base
    "BaseSchema",

    # Orders
    "OrderStatus",
    "OrderPriority",
    "ProductSource",
    "OrderItem",
    "Order",
    "OrderFlags",
    "QueueFilters",
    "QueueSummary",
    "OrderQueueResponse",
    "MAIN_STATUS_FLOW",
    "TERMINAL_STATUSES",
    "is_terminal",
    "is_valid_status_transition",

    # Shipping templates
    "RecommendationLevel",
    "ShippingTemplate",
    "RankedTemplate",
    "TemplateRecommendationRequest",
    "TemplateRecommendationResponse",
    "ShippingTemplateListResponse",

    # Workflow
    "WorkflowAction",
    "WorkflowActionRequest",
    "WorkflowAcceptance",
    "RoutingDecision",
    "BundlePlan",
    "CoordinationPlan",
    "WorkflowActionResponse",
    "AvailableActionsResponse",
]
