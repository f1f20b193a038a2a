"""
Workflow action schemas.

The dashboard offers these actions as buttons; the automation service
executes them after the dispatcher accepts.
"""

from pydantic import Field
from typing import Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema
from models.order import OrderStatus


class WorkflowAction(str, Enum):
    """Automation actions understood by the execution system."""
    PROCESS_PAYMENT_CONFIRMATION = "process_payment_confirmation"
    INTELLIGENT_ORDER_ROUTING = "intelligent_order_routing"
    BUNDLE_ORDER_PROCESSING = "bundle_order_processing"
    WEDDING_PARTY_COORDINATION = "wedding_party_coordination"
    EXCEPTION_HANDLING = "exception_handling"
    QUALITY_ASSURANCE_WORKFLOW = "quality_assurance_workflow"


class WorkflowActionRequest(BaseSchema):
    """Request to fire a workflow action on an order."""

    action: str = Field(..., min_length=1, description="Workflow action name")


class WorkflowAcceptance(BaseSchema):
    """Dispatcher acceptance handed to the execution system."""

    action: WorkflowAction
    order_id: Optional[str] = None
    current_status: OrderStatus
    target_status: Optional[OrderStatus] = Field(
        None,
        description="Status the executor is expected to set, if the action advances it"
    )
    accepted: bool = True


# ===================
# PLANS
# ===================

class RoutingDecision(BaseSchema):
    """Processor routing estimate for an order."""

    assigned_processor: Optional[str] = None
    estimated_hours: int
    estimated_completion: datetime
    routing_reason: str


class BundlePlan(BaseSchema):
    """Processing estimate for one bundle group."""

    bundle_type: str
    item_count: int
    estimated_hours: int
    special_requirements: str


class CoordinationPlan(BaseSchema):
    """Synchronized delivery plan for a group/wedding party."""

    party_size: int
    target_delivery_date: datetime
    coordination_notes: str
    processing_strategy: str = "parallel_with_coordination"


class WorkflowActionResponse(BaseSchema):
    """Accepted action with the plan the executor should follow."""

    acceptance: WorkflowAcceptance
    priority_score: int
    customer_tier: str
    routing: Optional[RoutingDecision] = None
    bundles: list[BundlePlan] = Field(default_factory=list)
    coordination: Optional[CoordinationPlan] = None


class AvailableActionsResponse(BaseSchema):
    """Actions whose preconditions currently hold for an order."""

    order_id: str
    current_status: OrderStatus
    actions: list[WorkflowAction]
