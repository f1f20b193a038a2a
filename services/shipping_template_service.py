"""
Shipping template service.

Reads the active template catalog from Supabase and runs the
classify → estimate weight → score pipeline for a set of order items.
"""

from typing import Optional
import structlog

from config import get_supabase_client, get_fulfillment_config
from config.fulfillment import FulfillmentConfig
from models.order import OrderItem
from models.shipping_template import (
    ShippingTemplate,
    TemplateRecommendationResponse,
)
from services.product_type_classifier import classify
from services.weight_estimator import estimate_weight
from services.template_selector import recommend_templates
from exceptions import DatabaseError, NoTemplatesAvailableError

logger = structlog.get_logger(__name__)


class ShippingTemplateService:
    """
    Shipping template catalog and packaging recommendations.
    """

    def __init__(self, config: Optional[FulfillmentConfig] = None):
        self.db = get_supabase_client()
        self.table = "shipping_templates"
        self.config = config or get_fulfillment_config()

    def get_active_templates(self) -> list[ShippingTemplate]:
        """
        Get all active templates, in the order the catalog returns them.

        Returns:
            List of ShippingTemplate (may be empty)
        """
        logger.debug("getting_active_templates")

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("is_active", True)
                .execute()
            )

            templates = [self._row_to_template(row) for row in result.data]

            logger.info("active_templates_retrieved", count=len(templates))
            return templates

        except Exception as e:
            logger.error("get_active_templates_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def recommend(
        self,
        order_items: list[OrderItem],
        total_weight: Optional[float] = None,
        templates: Optional[list[ShippingTemplate]] = None
    ) -> TemplateRecommendationResponse:
        """
        Recommend packaging for order items.

        Args:
            order_items: Items to ship
            total_weight: Authoritative weight in lbs, if known
            templates: Catalog to score (reads active templates when None)

        Returns:
            TemplateRecommendationResponse

        Raises:
            NoTemplatesAvailableError: Catalog empty or fully inactive
        """
        if templates is None:
            templates = self.get_active_templates()

        product_types = classify(order_items, self.config)
        weight = estimate_weight(order_items, total_weight, self.config)
        recommendations = recommend_templates(
            templates,
            product_types,
            weight,
            len(order_items),
            self.config
        )

        if not recommendations:
            logger.warning(
                "no_templates_available",
                catalog_size=len(templates),
                item_count=len(order_items)
            )
            raise NoTemplatesAvailableError(details={"catalog_size": len(templates)})

        logger.info(
            "templates_recommended",
            item_count=len(order_items),
            product_types=sorted(product_types),
            estimated_weight=weight,
            top_template=recommendations[0].template_code,
            top_score=recommendations[0].score
        )

        return TemplateRecommendationResponse(
            recommendations=recommendations,
            product_types=sorted(product_types),
            estimated_weight=weight,
            total_items=len(order_items),
        )

    def _row_to_template(self, row: dict) -> ShippingTemplate:
        """Convert database row to ShippingTemplate."""
        return ShippingTemplate(
            id=row.get("id"),
            template_code=row["template_code"],
            template_name=row.get("template_name"),
            length_inches=row.get("length_inches") or 0,
            width_inches=row.get("width_inches") or 0,
            height_inches=row.get("height_inches") or 0,
            max_weight_lbs=row.get("max_weight_lbs") or 0,
            recommended_for=row.get("recommended_for"),
            is_active=row.get("is_active", True),
        )


# Singleton instance
_shipping_template_service: Optional[ShippingTemplateService] = None


def get_shipping_template_service() -> ShippingTemplateService:
    """Get or create ShippingTemplateService instance."""
    global _shipping_template_service
    if _shipping_template_service is None:
        _shipping_template_service = ShippingTemplateService()
    return _shipping_template_service
