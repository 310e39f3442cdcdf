from datetime import timezone
from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE
from bizhub.extension import ma
from bizhub.models import Promotion
from bizhub.models.promotion import PROMOTION_TYPES, DISPLAY_TYPES, DISCOUNT_TYPES, PROMOTION_PLATFORMS


def promotion_rule_errors(data):
    """Cross-field rules, checked against the merged promotion state."""
    errors = {}
    discount_type = data.get("discount_type") or "none"
    if discount_type != "none" and not (data.get("discount_value") or 0) > 0:
        errors["discount_value"] = ["Discount value must be greater than 0"]
    start, end = data.get("start_date"), data.get("end_date")
    if start and end and not end > start:
        errors["end_date"] = ["End date must be after start date"]
    if data.get("type") == "coupon" and not data.get("coupon_code"):
        errors["coupon_code"] = ["Coupon code is required for coupon promotions"]
    return errors


class PromotionSchema(ma.SQLAlchemyAutoSchema):
    is_active = fields.Boolean(dump_only=True)
    performance = fields.Method("get_performance", dump_only=True)

    class Meta:
        model = Promotion
        load_instance = True
        include_fk = True
        exclude = ("impressions", "clicks", "conversions", "revenue_generated")

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    start_date = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    end_date = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")

    def get_performance(self, obj):
        return {
            "impressions": obj.impressions,
            "clicks": obj.clicks,
            "conversions": obj.conversions,
            "revenue": obj.revenue_generated,
        }


# For creating/updating; "status" is not a field, it is always derived
class PromotionCreateUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    description = fields.String(required=True, validate=validate.Length(min=1))
    type = fields.String(validate=validate.OneOf(PROMOTION_TYPES), load_default="general")
    link = fields.String(allow_none=True)
    display_type = fields.String(validate=validate.OneOf(DISPLAY_TYPES), load_default="banner")
    discount_type = fields.String(validate=validate.OneOf(DISCOUNT_TYPES), load_default="none")
    discount_value = fields.Float(load_default=0)
    coupon_code = fields.String(allow_none=True)
    start_date = fields.NaiveDateTime(required=True, timezone=timezone.utc)
    end_date = fields.NaiveDateTime(allow_none=True, timezone=timezone.utc)
    platforms = fields.List(fields.String(validate=validate.OneOf(PROMOTION_PLATFORMS)), load_default=list)
    image = fields.String(allow_none=True)

    @validates_schema
    def validate_rules(self, data, partial=False, **kwargs):
        # Partial updates are checked again after merging with the stored row
        if partial:
            return
        errors = promotion_rule_errors(data)
        if errors:
            raise ValidationError(errors)


class TrackSchema(Schema):
    type = fields.String(required=True, validate=validate.OneOf(("impression", "click")))
