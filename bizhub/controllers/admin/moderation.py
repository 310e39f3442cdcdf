import logging
from flask import request
from flask_restful import Resource, Api
from bizhub.models import Business
from bizhub.schemas.business_schema import BusinessSchema, ModerationSchema
from bizhub.utils.decorators import role_required
from bizhub.utils.helper import get_store, get_json
from bizhub.utils.roles import ROLE_ADMIN, ROLE_BUSINESS_OWNER
from . import admin_bp

logger = logging.getLogger(__name__)

api = Api(admin_bp)

business_schema = BusinessSchema()
businesses_schema = BusinessSchema(many=True)
moderation_schema = ModerationSchema()

STATUS_FILTERS = {
    "pending": (Business.status == "pending") | ((Business.status == "active") & (Business.verified.is_(False))),
    "approved": (Business.status == "active") & (Business.verified.is_(True)),
}


def moderation_reason():
    json_data = get_json()
    errors = moderation_schema.validate(json_data)
    if errors:
        return None, ({"success": False, "message": "A reason is required", "errors": errors}, 400)
    return moderation_schema.load(json_data)["reason"], None


class AdminBusinessList(Resource):
    @role_required(ROLE_ADMIN)
    def get(self):
        status = request.args.get("status", "pending")
        if status not in STATUS_FILTERS:
            return {"success": False, "message": "Invalid status filter. Use pending or approved"}, 400

        businesses = get_store().find(Business, STATUS_FILTERS[status], order_by=Business.created_at.desc())
        return {"success": True, "count": len(businesses), "businesses": businesses_schema.dump(businesses)}, 200


class ApproveBusiness(Resource):
    @role_required(ROLE_ADMIN)
    def put(self, business_id):
        store = get_store()
        business = store.find_by_id(Business, business_id)
        business.status = "active"
        business.verified = True
        business.rejection_reason = None
        business.owner.role = ROLE_BUSINESS_OWNER
        store.commit(Business)
        logger.info("Business %s approved", business_id)
        return {"success": True, "message": "Business approved successfully", "business": business_schema.dump(business)}, 200


class RejectBusiness(Resource):
    @role_required(ROLE_ADMIN)
    def put(self, business_id):
        reason, error = moderation_reason()
        if error:
            return error

        store = get_store()
        business = store.find_by_id(Business, business_id)
        business.status = "inactive"
        business.verified = False
        business.rejection_reason = reason
        store.commit(Business)
        logger.info("Business %s rejected: %s", business_id, reason)
        return {"success": True, "message": "Business rejected", "business": business_schema.dump(business)}, 200


class SuspendBusiness(Resource):
    @role_required(ROLE_ADMIN)
    def put(self, business_id):
        reason, error = moderation_reason()
        if error:
            return error

        store = get_store()
        business = store.find_by_id(Business, business_id)
        business.status = "suspended"
        business.suspension_reason = reason
        store.commit(Business)
        logger.info("Business %s suspended: %s", business_id, reason)
        return {"success": True, "message": "Business suspended", "business": business_schema.dump(business)}, 200


class ActivateBusiness(Resource):
    @role_required(ROLE_ADMIN)
    def put(self, business_id):
        store = get_store()
        business = store.find_by_id(Business, business_id)
        business.status = "active"
        business.suspension_reason = None
        store.commit(Business)
        return {"success": True, "message": "Business activated", "business": business_schema.dump(business)}, 200


api.add_resource(AdminBusinessList, "/admin/businesses")
api.add_resource(ApproveBusiness, "/admin/businesses/<int:business_id>/approve")
api.add_resource(RejectBusiness, "/admin/businesses/<int:business_id>/reject")
api.add_resource(SuspendBusiness, "/admin/businesses/<int:business_id>/suspend")
api.add_resource(ActivateBusiness, "/admin/businesses/<int:business_id>/activate")
