"""
Fulfillment configuration: classification, weight and scoring tables.

Every table the classifier, weight estimator, template selector and queue
ranker use lives on FulfillmentConfig. The core functions take it as an
argument so they stay pure; DEFAULT_FULFILLMENT_CONFIG reproduces the
production values.
"""

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# PRODUCT CLASSIFICATION
# =============================================================================

class ClassificationRule(BaseModel):
    """
    Substring rule mapping item text to a product tag.

    The rule matches when any include substring is present and no exclude
    substring is. When set_tag is given, items ordered in quantity or
    described as a set get set_tag instead of tag.
    """

    model_config = ConfigDict(frozen=True)

    tag: str
    includes: tuple[str, ...]
    excludes: tuple[str, ...] = ()
    set_tag: Optional[str] = None


# Evaluated in order; "bow tie" is checked before the plain "tie" rule,
# which excludes anything mentioning "bow".
DEFAULT_CLASSIFICATION_RULES = (
    ClassificationRule(tag="suits", includes=("suit",), set_tag="suit_sets"),
    ClassificationRule(tag="blazers", includes=("blazer", "jacket", "coat")),
    ClassificationRule(tag="bow_ties", includes=("bow tie", "bowtie")),
    ClassificationRule(tag="ties", includes=("tie",), excludes=("bow",)),
    ClassificationRule(tag="shoes", includes=("shoe", "boot", "footwear")),
    ClassificationRule(tag="vests", includes=("vest", "waistcoat")),
    ClassificationRule(tag="suspenders", includes=("suspender",)),
    ClassificationRule(tag="accessories", includes=("belt", "accessory")),
    ClassificationRule(tag="shirts", includes=("shirt",)),
)

BULK_ORDERS_TAG = "bulk_orders"
MULTIPLE_ITEMS_TAG = "multiple_items"


# =============================================================================
# WEIGHT ESTIMATION (pounds)
# =============================================================================

class WeightRule(BaseModel):
    """First matching rule sets the per-unit weight of an item."""

    model_config = ConfigDict(frozen=True)

    includes: tuple[str, ...]
    weight_lbs: float = Field(..., ge=0)


DEFAULT_WEIGHT_RULES = (
    WeightRule(includes=("suit",), weight_lbs=2.5),
    WeightRule(includes=("blazer", "jacket"), weight_lbs=1.5),
    WeightRule(includes=("shoe", "boot"), weight_lbs=1.0),
    WeightRule(includes=("shirt",), weight_lbs=0.5),
    WeightRule(includes=("tie", "bow tie"), weight_lbs=0.1),
    WeightRule(includes=("vest",), weight_lbs=0.3),
    WeightRule(includes=("suspender",), weight_lbs=0.2),
)

DEFAULT_ITEM_WEIGHT_LBS = 0.5

# A recommendation must still pick some box for trivial orders
MIN_SHIPPING_WEIGHT_LBS = 0.1


# =============================================================================
# ORDER PRIORITY
# =============================================================================

# Comparison only, never displayed. Tiers missing here rank 0.
DEFAULT_PRIORITY_WEIGHTS = {
    "rush": 5,
    "urgent": 4,
    "wedding_party": 4,
    "vip_customer": 3,
    "high": 2,
    "normal": 1,
    "low": 0,
}


class FulfillmentConfig(BaseModel):
    """
    Injected configuration for the fulfillment core.

    Usage:
        config = DEFAULT_FULFILLMENT_CONFIG.model_copy(
            update={"bulk_template_code": "XL_BOX"}
        )
        recommend_templates(templates, tags, weight, count, config=config)
    """

    model_config = ConfigDict(frozen=True)

    # Classification
    classification_rules: tuple[ClassificationRule, ...] = DEFAULT_CLASSIFICATION_RULES
    bulk_order_min_items: int = Field(default=6, ge=1, description="Line items for bulk_orders tag")
    multiple_items_min_items: int = Field(default=2, ge=1, description="Line items for multiple_items tag")

    # Weight
    weight_rules: tuple[WeightRule, ...] = DEFAULT_WEIGHT_RULES
    default_item_weight_lbs: float = Field(default=DEFAULT_ITEM_WEIGHT_LBS, ge=0)
    weight_floor_lbs: float = Field(default=MIN_SHIPPING_WEIGHT_LBS, gt=0)

    # Template scoring
    fits_weight_bonus: int = 10
    overweight_penalty: int = -50
    tag_match_bonus: int = 20
    bulk_template_code: str = "BIG_BIG_BOX_13_SUITS"
    bulk_item_threshold: int = Field(default=10, description="Bonus applies above this item count")
    bulk_template_bonus: int = 15
    single_item_template_markers: tuple[str, ...] = ("SOFT_PACK", "SMALL")
    single_item_bonus: int = 10
    oversized_volume: float = 100
    oversized_max_items: int = Field(default=3, description="Penalty applies below this item count")
    oversized_penalty: int = -5
    undersized_volume: float = 50
    undersized_min_items: int = Field(default=5, description="Penalty applies above this item count")
    undersized_penalty: int = -10
    efficiency_volume_unit: float = Field(default=100, gt=0)
    max_recommendations: int = Field(default=5, ge=1)
    highly_recommended_above: int = 20
    recommended_above: int = 0

    # Queue ranking
    priority_weights: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_PRIORITY_WEIGHTS))
    unknown_priority_rank: int = 0
    high_priority_min_rank: int = Field(default=2, description="Rank counted as high priority in summaries")


DEFAULT_FULFILLMENT_CONFIG = FulfillmentConfig()


@lru_cache()
def get_fulfillment_config() -> FulfillmentConfig:
    """
    Get FulfillmentConfig with overrides from application settings.

    Falls back to DEFAULT_FULFILLMENT_CONFIG values for anything the
    settings do not cover. Call get_fulfillment_config.cache_clear()
    after changing settings.
    """
    from config.settings import get_settings

    settings = get_settings()
    return DEFAULT_FULFILLMENT_CONFIG.model_copy(
        update={
            "bulk_template_code": settings.bulk_template_code,
            "max_recommendations": settings.max_template_recommendations,
            "weight_floor_lbs": settings.min_shipping_weight_lbs,
        }
    )
