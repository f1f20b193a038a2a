"""
Custom exception classes for the application.

Error codes are returned to the dashboard in the standard envelope:
    {"error": {"code", "message", "details", "timestamp"}}
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.
    
    All custom exceptions inherit from this.
    
    Attributes:
        code: Error code (e.g., "ORDER_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """
    
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)
    
    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""
    
    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""
    
    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""
    
    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# ORDER ERRORS
# ===================

class OrderNotFoundError(NotFoundError):
    """Order not found in the snapshot store."""

    def __init__(self, order_id: str):
        super().__init__(
            resource="Order",
            identifier=order_id,
            code="ORDER_NOT_FOUND"
        )


# ===================
# WORKFLOW ERRORS
# ===================

class InvalidStateTransitionError(ValidationError):
    """Workflow action fired from a status or flag set that does not allow it."""

    def __init__(
        self,
        action: str,
        current_status: str,
        requirement: str,
        order_id: Optional[str] = None
    ):
        super().__init__(
            code="INVALID_STATE_TRANSITION",
            message=f"Cannot run {action} while order is {current_status}",
            details={
                "action": action,
                "current_status": current_status,
                "order_id": order_id,
                "reason": requirement
            }
        )
        self.action = action
        self.current_status = current_status


class UnknownWorkflowActionError(ValidationError):
    """Workflow action name not recognized."""

    def __init__(self, action: str, valid: list[str]):
        super().__init__(
            code="UNKNOWN_WORKFLOW_ACTION",
            message=f"Unknown workflow action: {action}",
            details={"provided": action, "valid": valid}
        )


# ===================
# SHIPPING TEMPLATE ERRORS
# ===================

class NoTemplatesAvailableError(AppError):
    """No active shipping templates to recommend from (404, recoverable)."""

    def __init__(self, details: Optional[dict] = None):
        super().__init__(
            code="NO_TEMPLATES_AVAILABLE",
            message="No active shipping templates available",
            status_code=404,
            details=details
        )
