from flask_restful import Resource, Api
from bizhub.utils.dashboard_service import DashboardService
from bizhub.utils.decorators import role_required
from bizhub.utils.helper import get_store
from bizhub.utils.roles import ROLE_ADMIN
from . import admin_bp

api = Api(admin_bp)


class PlatformStats(Resource):
    @role_required(ROLE_ADMIN)
    def get(self):
        return {"success": True, "stats": DashboardService.get_platform_stats(get_store())}, 200


class BusinessAnalyticsTable(Resource):
    @role_required(ROLE_ADMIN)
    def get(self):
        table = DashboardService.get_business_analytics_table(get_store())
        return {"success": True, "count": len(table), "businesses": table}, 200


api.add_resource(PlatformStats, "/admin/stats")
api.add_resource(BusinessAnalyticsTable, "/admin/analytics/businesses")
