import logging
from flask import g, request
from flask_restful import Resource, Api
from sqlalchemy import update
from bizhub.models import Business, Promotion
from bizhub.schemas.promotion_schema import (
    PromotionSchema,
    PromotionCreateUpdateSchema,
    TrackSchema,
    promotion_rule_errors,
)
from bizhub.service import promotion_lifecycle
from bizhub.utils.decorators import role_required
from bizhub.utils.errors import Forbidden, ValidationError
from bizhub.utils.helper import get_store, get_json
from bizhub.utils.roles import ROLE_BUSINESS_OWNER
from . import promotion_bp

logger = logging.getLogger(__name__)

api = Api(promotion_bp)

promotion_schema = PromotionSchema()
promotions_schema = PromotionSchema(many=True)
promotion_create_update_schema = PromotionCreateUpdateSchema()
track_schema = TrackSchema()

RULE_FIELDS = ("type", "discount_type", "discount_value", "coupon_code", "start_date", "end_date")
TRACKED_COUNTERS = {"impression": "impressions", "click": "clicks"}


def owned_promotion(promotion_id):
    promotion = get_store().find_by_id(Promotion, promotion_id)
    if promotion.business.owner_id != g.current_user.id:
        raise Forbidden("Only the business owner can manage this promotion")
    return promotion


class PromotionListResource(Resource):
    def get(self):
        criteria = [Promotion.business.has(Business.status == "active")]
        if request.args.get("active", "").lower() == "true":
            criteria.append(Promotion.is_active)
        promotions = get_store().find(Promotion, *criteria, order_by=Promotion.created_at.desc())
        return {"success": True, "count": len(promotions), "promotions": promotions_schema.dump(promotions)}, 200

    @role_required(ROLE_BUSINESS_OWNER)
    def post(self):
        json_data = get_json()
        errors = promotion_create_update_schema.validate(json_data)
        if errors:
            return {"success": False, "message": "Validation failed", "errors": errors}, 400
        data = promotion_create_update_schema.load(json_data)

        store = get_store()
        business = store.find_one(Business, owner_id=g.current_user.id)
        if not business:
            raise ValidationError("No business found for this user")

        # Status is derived from the dates when the row is flushed
        promotion = Promotion(business_id=business.id, user_id=g.current_user.id, status="draft", **data)
        store.session.add(promotion)
        store.commit(Promotion)
        logger.info("Promotion %s created for business %s (%s)", promotion.id, business.id, promotion.status)

        return {
            "success": True,
            "message": "Promotion created successfully",
            "promotion": promotion_schema.dump(promotion),
        }, 201


class PromotionResource(Resource):
    def get(self, promotion_id):
        promotion = get_store().find_by_id(Promotion, promotion_id)
        return {"success": True, "promotion": promotion_schema.dump(promotion)}, 200

    @role_required(ROLE_BUSINESS_OWNER)
    def put(self, promotion_id):
        promotion = owned_promotion(promotion_id)

        json_data = get_json()
        errors = promotion_create_update_schema.validate(json_data, partial=True)
        if errors:
            return {"success": False, "message": "Validation failed", "errors": errors}, 400
        data = promotion_create_update_schema.load(json_data, partial=True)

        merged = {field: getattr(promotion, field) for field in RULE_FIELDS}
        merged.update({key: value for key, value in data.items() if key in RULE_FIELDS})
        errors = promotion_rule_errors(merged)
        if errors:
            return {"success": False, "message": "Validation failed", "errors": errors}, 400

        for field, value in data.items():
            setattr(promotion, field, value)
        # Re-derived on every update, including ones that change no column
        promotion.refresh_status()
        store = get_store()
        store.commit(Promotion)

        return {
            "success": True,
            "message": "Promotion updated successfully",
            "promotion": promotion_schema.dump(promotion),
        }, 200

    @role_required(ROLE_BUSINESS_OWNER)
    def delete(self, promotion_id):
        promotion = owned_promotion(promotion_id)
        get_store().delete(promotion)
        return {"success": True, "message": "Promotion deleted successfully"}, 200


class PromotionPauseResource(Resource):
    @role_required(ROLE_BUSINESS_OWNER)
    def post(self, promotion_id):
        promotion = owned_promotion(promotion_id)
        promotion_lifecycle.pause(promotion)
        get_store().commit(Promotion)
        return {"success": True, "promotion": promotion_schema.dump(promotion)}, 200


class PromotionResumeResource(Resource):
    @role_required(ROLE_BUSINESS_OWNER)
    def post(self, promotion_id):
        promotion = owned_promotion(promotion_id)
        promotion_lifecycle.resume(promotion)
        get_store().commit(Promotion)
        return {"success": True, "promotion": promotion_schema.dump(promotion)}, 200


class BusinessPromotionsResource(Resource):
    def get(self, business_id):
        store = get_store()
        store.find_by_id(Business, business_id)
        promotions = store.find(Promotion, business_id=business_id, order_by=Promotion.created_at.desc())
        return {"success": True, "count": len(promotions), "promotions": promotions_schema.dump(promotions)}, 200


class PromotionTrackResource(Resource):
    def post(self, promotion_id):
        json_data = get_json()
        errors = track_schema.validate(json_data)
        if errors:
            return {"success": False, "message": "Invalid tracking type", "errors": errors}, 400
        column = TRACKED_COUNTERS[track_schema.load(json_data)["type"]]

        store = get_store()
        store.find_by_id(Promotion, promotion_id)
        counter = getattr(Promotion, column)
        store.session.execute(
            update(Promotion)
            .where(Promotion.id == promotion_id)
            .values({column: counter + 1})
            .execution_options(synchronize_session=False)
        )
        store.commit(Promotion)
        return {"success": True}, 200


api.add_resource(PromotionListResource, "/promotions")
api.add_resource(PromotionResource, "/promotions/<int:promotion_id>")
api.add_resource(PromotionPauseResource, "/promotions/<int:promotion_id>/pause")
api.add_resource(PromotionResumeResource, "/promotions/<int:promotion_id>/resume")
api.add_resource(BusinessPromotionsResource, "/business/<int:business_id>/promotions")
api.add_resource(PromotionTrackResource, "/promotion/<int:promotion_id>/track")
