"""
Workflow action validation.

Gates dashboard/automation actions against the order's current status and
flags. The dispatcher never changes an order: on acceptance the execution
system performs the transition and its side effects.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union
import structlog

from models.order import Order, OrderFlags, OrderStatus, is_terminal
from models.workflow import WorkflowAcceptance, WorkflowAction
from exceptions import InvalidStateTransitionError, UnknownWorkflowActionError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActionPrecondition:
    """When an action may fire and what status it leads to."""

    requirement: str
    check: Callable[[OrderStatus, OrderFlags], bool]
    target_status: Optional[OrderStatus] = None


ACTION_PRECONDITIONS = {
    WorkflowAction.PROCESS_PAYMENT_CONFIRMATION: ActionPrecondition(
        requirement="status must be pending_payment",
        check=lambda status, flags: status == OrderStatus.PENDING_PAYMENT,
        target_status=OrderStatus.PAYMENT_CONFIRMED,
    ),
    WorkflowAction.INTELLIGENT_ORDER_ROUTING: ActionPrecondition(
        requirement="status must be payment_confirmed",
        check=lambda status, flags: status == OrderStatus.PAYMENT_CONFIRMED,
    ),
    WorkflowAction.BUNDLE_ORDER_PROCESSING: ActionPrecondition(
        requirement="status must be processing and order must contain bundle items",
        check=lambda status, flags: status == OrderStatus.PROCESSING and flags.has_bundle_items,
    ),
    WorkflowAction.WEDDING_PARTY_COORDINATION: ActionPrecondition(
        requirement="order must be a group order",
        check=lambda status, flags: flags.is_group_order,
    ),
    WorkflowAction.QUALITY_ASSURANCE_WORKFLOW: ActionPrecondition(
        requirement="status must be in_production or quality_check",
        check=lambda status, flags: status in (OrderStatus.IN_PRODUCTION, OrderStatus.QUALITY_CHECK),
        target_status=OrderStatus.PACKAGING,
    ),
    WorkflowAction.EXCEPTION_HANDLING: ActionPrecondition(
        requirement="order must not be cancelled, refunded or completed",
        check=lambda status, flags: not is_terminal(status),
        target_status=OrderStatus.EXCEPTION,
    ),
}


def parse_action(action: Union[str, WorkflowAction]) -> WorkflowAction:
    """
    Resolve an action name.

    Raises:
        UnknownWorkflowActionError: If the name is not a WorkflowAction
    """
    if isinstance(action, WorkflowAction):
        return action
    try:
        return WorkflowAction(action)
    except ValueError:
        raise UnknownWorkflowActionError(action, [a.value for a in WorkflowAction])


def validate_transition(
    action: Union[str, WorkflowAction],
    current_status: OrderStatus,
    flags: Optional[OrderFlags] = None,
    order_id: Optional[str] = None
) -> WorkflowAcceptance:
    """
    Check an action against the order's status and flags.

    Args:
        action: Workflow action (name or enum)
        current_status: Status from the order snapshot
        flags: Group/rush/bundle flags from the snapshot
        order_id: Order UUID, echoed in the acceptance and errors

    Returns:
        WorkflowAcceptance for the execution system

    Raises:
        UnknownWorkflowActionError: Unrecognized action
        InvalidStateTransitionError: Precondition not met
    """
    action = parse_action(action)
    flags = flags or OrderFlags()
    precondition = ACTION_PRECONDITIONS[action]

    if not precondition.check(current_status, flags):
        logger.info(
            "workflow_action_rejected",
            action=action.value,
            order_id=order_id,
            status=current_status.value,
            reason=precondition.requirement
        )
        raise InvalidStateTransitionError(
            action=action.value,
            current_status=current_status.value,
            requirement=precondition.requirement,
            order_id=order_id
        )

    logger.info(
        "workflow_action_accepted",
        action=action.value,
        order_id=order_id,
        status=current_status.value
    )

    return WorkflowAcceptance(
        action=action,
        order_id=order_id,
        current_status=current_status,
        target_status=precondition.target_status,
    )


def validate_order_action(action: Union[str, WorkflowAction], order: Order) -> WorkflowAcceptance:
    """validate_transition using status and flags from an order snapshot."""
    return validate_transition(
        action,
        order.order_status,
        OrderFlags.from_order(order),
        order_id=order.id
    )


def available_actions(order: Order) -> list[WorkflowAction]:
    """Actions whose preconditions hold for the order, in declaration order."""
    flags = OrderFlags.from_order(order)
    return [
        action for action, precondition in ACTION_PRECONDITIONS.items()
        if precondition.check(order.order_status, flags)
    ]
