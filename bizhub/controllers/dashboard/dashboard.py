from flask import g
from flask_restful import Resource, Api
from bizhub.models import Business
from bizhub.service.analytics import get_business_analytics
from bizhub.utils.dashboard_service import DashboardService
from bizhub.utils.decorators import role_required
from bizhub.utils.errors import Forbidden
from bizhub.utils.helper import get_store
from bizhub.utils.roles import ROLE_BUSINESS_OWNER, ROLE_ADMIN
from . import dashboard_bp

api = Api(dashboard_bp)


class BusinessDashboard(Resource):
    @role_required(ROLE_BUSINESS_OWNER, ROLE_ADMIN)
    def get(self, business_id):
        store = get_store()
        business = store.find_by_id(Business, business_id)
        if business.owner_id != g.current_user.id and g.current_user.role != ROLE_ADMIN:
            raise Forbidden("You can only view your own dashboard")

        dashboard = DashboardService.get_dashboard(store, business_id)
        return {"success": True, "dashboard": dashboard}, 200


class BusinessAnalytics(Resource):
    @role_required(ROLE_BUSINESS_OWNER)
    def get(self):
        store = get_store()
        business = store.find_one(Business, owner_id=g.current_user.id)
        if not business:
            return {"success": False, "message": "Business not found for this user."}, 404

        data = get_business_analytics(store, business, g.current_user.id)
        return {"success": True, **data}, 200


api.add_resource(BusinessDashboard, "/dashboard/<int:business_id>")
api.add_resource(BusinessAnalytics, "/analytics")
