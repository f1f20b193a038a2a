"""
Custom exceptions module.

All errors derive from AppError and carry an error code and HTTP status.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    DatabaseError,

    # Orders
    OrderNotFoundError,

    # Workflow
    InvalidStateTransitionError,
    UnknownWorkflowActionError,

    # Shipping templates
    NoTemplatesAvailableError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "DatabaseError",

    # Orders
    "OrderNotFoundError",

    # Workflow
    "InvalidStateTransitionError",
    "UnknownWorkflowActionError",

    # Shipping templates
    "NoTemplatesAvailableError",
]
