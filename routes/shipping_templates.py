"""
Shipping template routes.

Catalog listing and packaging recommendations for the packing station.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.shipping_template import (
    ShippingTemplateListResponse,
    TemplateRecommendationRequest,
    TemplateRecommendationResponse,
)
from services.shipping_template_service import get_shipping_template_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/shipping-templates", tags=["Shipping Templates"])


def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
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


@router.get("", response_model=ShippingTemplateListResponse)
async def list_shipping_templates():
    """
    List active shipping templates.

    Small table, no pagination.
    """
    try:
        service = get_shipping_template_service()
        templates = service.get_active_templates()
        return ShippingTemplateListResponse(data=templates, total=len(templates))

    except Exception as e:
        return handle_error(e)


@router.post("/recommend", response_model=TemplateRecommendationResponse)
async def recommend_shipping_templates(data: TemplateRecommendationRequest):
    """
    Recommend packaging for order items.

    Returns up to five templates with score, reasons and recommendation
    level.

    Raises:
        404: NO_TEMPLATES_AVAILABLE when the active catalog is empty
    """
    try:
        service = get_shipping_template_service()
        return service.recommend(data.order_items, data.total_weight)

    except Exception as e:
        return handle_error(e)
