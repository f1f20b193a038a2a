"""
Shipping template schemas for packaging recommendations.

Templates are reference data from the Supabase `shipping_templates` table.
Dimensions are inches, weights are pounds.
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum

from models.base import BaseSchema
from models.order import OrderItem


class RecommendationLevel(str, Enum):
    """Coarse label derived from a template's score."""
    HIGHLY_RECOMMENDED = "highly_recommended"
    RECOMMENDED = "recommended"
    POSSIBLE = "possible"


class ShippingTemplate(BaseSchema):
    """Shipping box template."""

    id: Optional[str] = Field(None, description="Template UUID")
    template_code: str = Field(..., min_length=1, description="Unique template code")
    template_name: Optional[str] = Field(None, description="Display name")
    length_inches: float = Field(..., ge=0)
    width_inches: float = Field(..., ge=0)
    height_inches: float = Field(..., ge=0)
    max_weight_lbs: float = Field(..., ge=0, description="Maximum weight capacity")
    recommended_for: list[str] = Field(
        default_factory=list,
        description="Product tags this template suits"
    )
    is_active: bool = True

    @field_validator("recommended_for", mode="before")
    @classmethod
    def none_to_list(cls, v):
        return v or []

    @property
    def volume(self) -> float:
        """Outer volume in cubic inches."""
        return self.length_inches * self.width_inches * self.height_inches


class RankedTemplate(ShippingTemplate):
    """Template with its score for one order."""

    score: int = Field(..., description="Integer fit score")
    reasons: list[str] = Field(default_factory=list, description="Human-readable scoring reasons")
    fits_weight: bool = Field(..., description="Order weight within template capacity")
    efficiency: float = Field(..., description="Score per 100 cubic inches (diagnostic only)")
    recommendation_level: RecommendationLevel


# ===================
# REQUEST / RESPONSE
# ===================

class TemplateRecommendationRequest(BaseSchema):
    """Recommend packaging for a set of order items."""

    order_items: list[OrderItem] = Field(default_factory=list)
    total_weight: Optional[float] = Field(
        None,
        description="Authoritative total weight in lbs; skips estimation when positive"
    )


class TemplateRecommendationResponse(BaseSchema):
    """Packaging recommendation result."""

    recommendations: list[RankedTemplate]
    product_types: list[str] = Field(..., description="Classifier tags, sorted")
    estimated_weight: float
    total_items: int


class ShippingTemplateListResponse(BaseSchema):
    """List of shipping templates."""

    data: list[ShippingTemplate]
    total: int
