"""
Unit tests for ShippingTemplateService.

Tests the catalog read and the classify, weigh and score pipeline.
"""

import pytest

from config.fulfillment import DEFAULT_FULFILLMENT_CONFIG
from models.shipping_template import RecommendationLevel
from services.shipping_template_service import ShippingTemplateService
from exceptions import DatabaseError, NoTemplatesAvailableError
from tests.factories import OrderItemFactory, ShippingTemplateFactory


@pytest.fixture
def template_service(mock_db, sample_templates_data) -> ShippingTemplateService:
    """ShippingTemplateService over the sample catalog."""
    mock_db.set_table_data("shipping_templates", sample_templates_data)
    return ShippingTemplateService()


class TestGetActiveTemplates:
    """Tests for get_active_templates."""

    def test_catalog_order(self, template_service):
        templates = template_service.get_active_templates()

        assert [t.template_code for t in templates] == [
            "SOFT_PACK_TIES",
            "SUIT_BOX_STANDARD",
            "BIG_BIG_BOX_13_SUITS",
        ]

    def test_inactive_excluded(self, mock_db, sample_templates_data):
        sample_templates_data.append(
            ShippingTemplateFactory.create(template_code="OLD_CRATE", is_active=False)
        )
        mock_db.set_table_data("shipping_templates", sample_templates_data)

        codes = [t.template_code for t in ShippingTemplateService().get_active_templates()]

        assert "OLD_CRATE" not in codes

    def test_null_recommended_for(self, mock_db):
        mock_db.set_table_data("shipping_templates", [
            ShippingTemplateFactory.create(template_code="BARE", recommended_for=None),
        ])

        templates = ShippingTemplateService().get_active_templates()

        assert templates[0].recommended_for == []

    def test_database_error(self, mock_db):
        mock_db.set_table_error("shipping_templates", Exception("timeout"))

        with pytest.raises(DatabaseError):
            ShippingTemplateService().get_active_templates()


class TestRecommend:
    """Tests for recommend."""

    def test_single_suit(self, template_service):
        items = OrderItemFactory.build_many("Navy Suit")

        result = template_service.recommend(items)

        assert result.product_types == ["suits"]
        assert result.estimated_weight == pytest.approx(2.5)
        assert result.total_items == 1
        assert [t.template_code for t in result.recommendations] == [
            "SUIT_BOX_STANDARD",
            "BIG_BIG_BOX_13_SUITS",
            "SOFT_PACK_TIES",
        ]
        top = result.recommendations[0]
        assert top.score == 25
        assert top.recommendation_level == RecommendationLevel.HIGHLY_RECOMMENDED
        assert top.reasons == ["Recommended for suits", "May be oversized for this order"]

    def test_single_tie_prefers_soft_pack(self, template_service):
        items = OrderItemFactory.build_many("Silk Tie")

        result = template_service.recommend(items)

        assert result.recommendations[0].template_code == "SOFT_PACK_TIES"
        assert result.recommendations[0].score == 40

    def test_bulk_wedding_order(self, template_service):
        """Eleven suit lines go in the bulk box."""
        items = [OrderItemFactory.build(product_name="Navy Suit", quantity=2) for _ in range(11)]

        result = template_service.recommend(items, total_weight=40)

        assert result.estimated_weight == 40
        assert "bulk_orders" in result.product_types
        assert "suit_sets" in result.product_types
        top = result.recommendations[0]
        assert top.template_code == "BIG_BIG_BOX_13_SUITS"
        assert "Ideal for bulk orders" in top.reasons

    def test_sorted_product_types(self, template_service):
        items = OrderItemFactory.build_many("Silk Tie", "Navy Suit")

        result = template_service.recommend(items)

        assert result.product_types == ["multiple_items", "suits", "ties"]

    def test_explicit_catalog(self, mock_db):
        service = ShippingTemplateService()
        templates = [ShippingTemplateFactory.build(template_code="ONLY_BOX")]

        result = service.recommend(OrderItemFactory.build_many("Dress Shirt"), templates=templates)

        assert [t.template_code for t in result.recommendations] == ["ONLY_BOX"]

    def test_empty_catalog_raises(self, mock_db):
        mock_db.set_table_data("shipping_templates", [])

        with pytest.raises(NoTemplatesAvailableError) as exc_info:
            ShippingTemplateService().recommend(OrderItemFactory.build_many("Navy Suit"))

        assert exc_info.value.code == "NO_TEMPLATES_AVAILABLE"
        assert exc_info.value.status_code == 404
        assert exc_info.value.details == {"catalog_size": 0}

    def test_injected_config(self, template_service):
        config = DEFAULT_FULFILLMENT_CONFIG.model_copy(update={"max_recommendations": 1})
        service = ShippingTemplateService(config=config)

        result = service.recommend(
            OrderItemFactory.build_many("Navy Suit"),
            templates=template_service.get_active_templates()
        )

        assert len(result.recommendations) == 1
