"""
Shipping template scoring and ranking.

Scores each active box template against an order's tags, weight and item
count. Over-capacity templates are penalized rather than excluded so the
packing station can still see the closest misses.

Scoring (default FulfillmentConfig):
    +10  weight within max_weight_lbs     / -50 over capacity
    +20  per recommended_for tag the order carries
    +15  more than 10 items and the bulk template
    +10  single item and a SOFT_PACK / SMALL template
    -5   volume > 100 in³ with fewer than 3 items
    -10  volume < 50 in³ with more than 5 items
"""

from typing import Iterable, Optional
import structlog

from config.fulfillment import DEFAULT_FULFILLMENT_CONFIG, FulfillmentConfig
from models.shipping_template import (
    RankedTemplate,
    RecommendationLevel,
    ShippingTemplate,
)

logger = structlog.get_logger(__name__)


def recommendation_level(score: int, config: Optional[FulfillmentConfig] = None) -> RecommendationLevel:
    """Map a score to its recommendation label."""
    config = config or DEFAULT_FULFILLMENT_CONFIG

    if score > config.highly_recommended_above:
        return RecommendationLevel.HIGHLY_RECOMMENDED
    if score > config.recommended_above:
        return RecommendationLevel.RECOMMENDED
    return RecommendationLevel.POSSIBLE


def score_template(
    template: ShippingTemplate,
    tags: Iterable[str],
    weight: float,
    item_count: int,
    config: Optional[FulfillmentConfig] = None
) -> tuple[int, list[str], bool]:
    """
    Score one template for an order.

    Args:
        template: Candidate template
        tags: Classifier tags for the order
        weight: Order weight in lbs
        item_count: Number of line items
        config: Fulfillment tables

    Returns:
        Tuple of (score, reasons, fits_weight)
    """
    config = config or DEFAULT_FULFILLMENT_CONFIG
    tags = set(tags)
    score = 0
    reasons = []

    fits_weight = weight <= template.max_weight_lbs
    score += config.fits_weight_bonus if fits_weight else config.overweight_penalty

    # dict.fromkeys keeps template order and counts each tag once
    for tag in dict.fromkeys(template.recommended_for):
        if tag in tags:
            score += config.tag_match_bonus
            reasons.append(f"Recommended for {tag}")

    if item_count > config.bulk_item_threshold and template.template_code == config.bulk_template_code:
        score += config.bulk_template_bonus
        reasons.append("Ideal for bulk orders")

    if item_count == 1 and any(
        marker in template.template_code for marker in config.single_item_template_markers
    ):
        score += config.single_item_bonus
        reasons.append("Good for single items")

    volume = template.volume
    if volume > config.oversized_volume and item_count < config.oversized_max_items:
        score += config.oversized_penalty
        reasons.append("May be oversized for this order")

    if volume < config.undersized_volume and item_count > config.undersized_min_items:
        score += config.undersized_penalty
        reasons.append("May be too small for this order")

    return score, reasons, fits_weight


def recommend_templates(
    templates: Iterable[ShippingTemplate],
    tags: Iterable[str],
    weight: float,
    item_count: int,
    config: Optional[FulfillmentConfig] = None
) -> list[RankedTemplate]:
    """
    Rank active templates for an order.

    Sort is stable: equal scores keep catalog order. An empty result
    means no templates are available.

    Args:
        templates: Template catalog, in catalog order
        tags: Classifier tags for the order
        weight: Estimated or explicit weight in lbs
        item_count: Number of line items
        config: Fulfillment tables

    Returns:
        Up to config.max_recommendations ranked templates, best first
    """
    config = config or DEFAULT_FULFILLMENT_CONFIG
    tags = frozenset(tags)

    scored = []
    for template in templates:
        if not template.is_active:
            continue

        score, reasons, fits_weight = score_template(template, tags, weight, item_count, config)
        efficiency = score / max(template.volume / config.efficiency_volume_unit, 1)

        scored.append(RankedTemplate(
            **template.model_dump(),
            score=score,
            reasons=reasons,
            fits_weight=fits_weight,
            efficiency=efficiency,
            recommendation_level=recommendation_level(score, config),
        ))

    ranked = sorted(scored, key=lambda t: t.score, reverse=True)[:config.max_recommendations]

    logger.debug(
        "templates_scored",
        candidates=len(scored),
        returned=len(ranked),
        weight=weight,
        item_count=item_count,
        top=ranked[0].template_code if ranked else None
    )

    return ranked
