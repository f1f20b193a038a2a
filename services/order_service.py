"""
Order service: Supabase snapshots, queue and workflow actions.

Reads orders with their items, then hands the snapshot to the pure queue
ranker, workflow dispatcher and planner. Nothing here writes to the
database; accepted actions are executed by the automation service.
"""

from datetime import datetime
from typing import Optional, Union
import structlog

from config import get_supabase_client, get_fulfillment_config, settings
from config.fulfillment import FulfillmentConfig
from models.order import Order, OrderQueueResponse, QueueFilters
from models.workflow import (
    AvailableActionsResponse,
    WorkflowAction,
    WorkflowActionResponse,
)
from services.order_queue_service import rank_queue, summarize_queue
from services.workflow_dispatcher import available_actions, validate_order_action
from services.workflow_planner import (
    calculate_priority_score,
    create_coordination_plan,
    customer_tier,
    make_routing_decision,
    plan_bundles,
)
from exceptions import DatabaseError, OrderNotFoundError

logger = structlog.get_logger(__name__)


class OrderService:
    """
    Order snapshot reads and queue/workflow operations.
    """

    def __init__(self, config: Optional[FulfillmentConfig] = None):
        self.db = get_supabase_client()
        self.table = "orders"
        self.select = "*, order_items(*)"
        self.config = config or get_fulfillment_config()

    # ===================
    # READ OPERATIONS
    # ===================

    def get_snapshot(self, limit: Optional[int] = None) -> list[Order]:
        """
        Read a snapshot of orders with items.

        Args:
            limit: Maximum rows (defaults to settings.queue_snapshot_limit)

        Returns:
            List of Order
        """
        limit = limit or settings.queue_snapshot_limit
        logger.debug("getting_order_snapshot", limit=limit)

        try:
            result = (
                self.db.table(self.table)
                .select(self.select)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )

            orders = [self._row_to_order(row) for row in result.data]

            logger.info("order_snapshot_retrieved", count=len(orders))
            return orders

        except Exception as e:
            logger.error("get_order_snapshot_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, order_id: str) -> Order:
        """
        Get a single order with items.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        logger.debug("getting_order", order_id=order_id)

        try:
            result = (
                self.db.table(self.table)
                .select(self.select)
                .eq("id", order_id)
                .execute()
            )

            if not result.data:
                raise OrderNotFoundError(order_id)

            return self._row_to_order(result.data[0])

        except OrderNotFoundError:
            raise
        except Exception as e:
            logger.error("get_order_failed", order_id=order_id, error=str(e))
            raise DatabaseError("select", str(e))

    def get_group_orders(self, order: Order) -> list[Order]:
        """
        Orders sharing the order's group_order_id.

        An order without a group id is its own group.
        """
        if not order.group_order_id:
            return [order]

        try:
            result = (
                self.db.table(self.table)
                .select(self.select)
                .eq("group_order_id", order.group_order_id)
                .execute()
            )
            orders = [self._row_to_order(row) for row in result.data]
            return orders or [order]

        except Exception as e:
            logger.error(
                "get_group_orders_failed",
                group_order_id=order.group_order_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    # ===================
    # QUEUE
    # ===================

    def get_queue(self, filters: Optional[QueueFilters] = None) -> OrderQueueResponse:
        """
        Ranked order queue for the dashboard.

        The summary covers the filtered queue.
        """
        orders = self.get_snapshot()
        ranked = rank_queue(orders, filters, self.config)

        logger.info(
            "order_queue_built",
            snapshot=len(orders),
            queued=len(ranked),
            filters=filters.model_dump(exclude_none=True) if filters else {}
        )

        return OrderQueueResponse(
            data=ranked,
            total=len(ranked),
            summary=summarize_queue(ranked, self.config),
        )

    # ===================
    # WORKFLOW
    # ===================

    def get_available_actions(self, order_id: str) -> AvailableActionsResponse:
        """Workflow actions the dashboard may offer for an order."""
        order = self.get_by_id(order_id)
        return AvailableActionsResponse(
            order_id=order.id,
            current_status=order.order_status,
            actions=available_actions(order),
        )

    def run_action(
        self,
        order_id: str,
        action: Union[str, WorkflowAction],
        now: Optional[datetime] = None
    ) -> WorkflowActionResponse:
        """
        Validate an action and attach the execution plan.

        Raises:
            OrderNotFoundError: If order doesn't exist
            UnknownWorkflowActionError: Unrecognized action
            InvalidStateTransitionError: Precondition not met
        """
        now = now or datetime.utcnow()
        order = self.get_by_id(order_id)

        acceptance = validate_order_action(action, order)

        response = WorkflowActionResponse(
            acceptance=acceptance,
            priority_score=calculate_priority_score(order),
            customer_tier=customer_tier(order.total_amount),
        )

        if acceptance.action in (
            WorkflowAction.PROCESS_PAYMENT_CONFIRMATION,
            WorkflowAction.INTELLIGENT_ORDER_ROUTING,
        ):
            response.routing = make_routing_decision(order, now)
        elif acceptance.action == WorkflowAction.BUNDLE_ORDER_PROCESSING:
            response.bundles = plan_bundles(order.order_items)
        elif acceptance.action == WorkflowAction.WEDDING_PARTY_COORDINATION:
            party = self.get_group_orders(order)
            hours = {
                o.id: o.estimated_processing_time
                for o in party if o.estimated_processing_time
            }
            response.coordination = create_coordination_plan(party, now, hours)

        return response

    # ===================
    # HELPERS
    # ===================

    def _row_to_order(self, row: dict) -> Order:
        """Convert database row (with embedded order_items) to Order."""
        return Order(
            id=row["id"],
            order_number=row.get("order_number") or row["id"],
            customer_name=row.get("customer_name"),
            customer_email=row.get("customer_email"),
            order_status=row.get("order_status") or row.get("status"),
            order_priority=row.get("order_priority"),
            total_amount=row.get("total_amount") or 0,
            is_rush_order=bool(row.get("is_rush_order")),
            is_group_order=bool(row.get("is_group_order")),
            group_order_id=row.get("group_order_id"),
            estimated_processing_time=row.get("estimated_processing_time"),
            created_at=row["created_at"],
            order_items=row.get("order_items") or [],
        )


# Singleton instance
_order_service: Optional[OrderService] = None


def get_order_service() -> OrderService:
    """Get or create OrderService instance."""
    global _order_service
    if _order_service is None:
        _order_service = OrderService()
    return _order_service
