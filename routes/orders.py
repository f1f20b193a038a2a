"""
Order queue and workflow action routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.order import (
    OrderQueueResponse,
    OrderStatus,
    ProductSource,
    QueueFilters,
)
from models.workflow import (
    AvailableActionsResponse,
    WorkflowActionRequest,
    WorkflowActionResponse,
)
from services.order_service import get_order_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("/queue", response_model=OrderQueueResponse)
async def get_order_queue(
    status: Optional[OrderStatus] = Query(None, description="Filter by status"),
    priority: Optional[str] = Query(None, description="Filter by priority tier"),
    product_source: Optional[ProductSource] = Query(None, description="Orders with any item from this source"),
    is_rush_order: Optional[bool] = Query(None, description="Filter by rush flag"),
    is_group_order: Optional[bool] = Query(None, description="Filter by group flag"),
    search: Optional[str] = Query(None, description="Order number, customer name or email")
):
    """
    Get the processing queue.

    Sorted by priority tier (rush first), then oldest first.
    """
    try:
        service = get_order_service()

        filters = QueueFilters(
            status=status,
            priority=priority,
            product_source=product_source,
            is_rush_order=is_rush_order,
            is_group_order=is_group_order,
            search=search,
        )

        return service.get_queue(filters)

    except Exception as e:
        return handle_error(e)


@router.get("/{order_id}/actions", response_model=AvailableActionsResponse)
async def get_available_actions(order_id: str):
    """
    Get workflow actions currently allowed for an order.

    Raises:
        404: Order not found
    """
    try:
        service = get_order_service()
        return service.get_available_actions(order_id)

    except Exception as e:
        return handle_error(e)


@router.post("/{order_id}/actions", response_model=WorkflowActionResponse)
async def run_workflow_action(order_id: str, data: WorkflowActionRequest):
    """
    Validate a workflow action for the execution system.

    The order is not modified; the response carries the acceptance and the
    routing, bundle or coordination plan for the action.

    Raises:
        404: Order not found
        422: Unknown action, or action not allowed in the current status
    """
    try:
        service = get_order_service()
        return service.run_action(order_id, data.action)

    except Exception as e:
        return handle_error(e)
