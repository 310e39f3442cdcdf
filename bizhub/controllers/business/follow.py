import logging
from flask_restful import Resource, Api
from bizhub.models import Business, Client
from bizhub.schemas.business_schema import BusinessSchema
from bizhub.schemas.post_schema import ActorSchema
from bizhub.service.actors import load_actors
from bizhub.service.engagement import toggle_follow
from bizhub.service.toggle_set import FOLLOWERS
from bizhub.utils.helper import get_store, get_json
from . import business_bp

logger = logging.getLogger(__name__)

api = Api(business_bp)

actor_schema = ActorSchema()
following_schema = BusinessSchema(
    many=True,
    only=("id", "name", "username", "category", "description", "website", "logo_url",
          "verified", "followers", "total_posts", "total_products", "engagement_rate"),
)


class FollowResource(Resource):
    def post(self, business_id):
        json_data = get_json()
        errors = actor_schema.validate(json_data)
        if errors:
            return {"success": False, "message": "User ID is required", "errors": errors}, 400
        client_id = actor_schema.load(json_data)["user_id"]

        result = toggle_follow(get_store(), business_id, client_id)
        logger.info("Client %s %s business %s", client_id, "followed" if result.is_active else "unfollowed", business_id)
        return {"success": True, "isFollowing": result.is_active, "followers": result.count}, 200


class FollowStatusResource(Resource):
    def get(self, business_id, user_id):
        is_following = FOLLOWERS.contains(get_store(), business_id, user_id)
        return {"success": True, "isFollowing": is_following}, 200


class FollowersResource(Resource):
    def get(self, business_id):
        store = get_store()
        store.find_by_id(Business, business_id)
        member_ids = FOLLOWERS.member_ids(store, business_id)
        actors = load_actors(store, set(member_ids))
        followers = [actors[client_id] for client_id in member_ids if client_id in actors]
        return {"success": True, "followers": followers, "count": len(followers)}, 200


class ClientFollowingResource(Resource):
    def get(self, user_id):
        client = get_store().find_by_id(Client, user_id)
        following = following_schema.dump(client.following)
        return {"success": True, "following": following, "count": len(following)}, 200


api.add_resource(FollowResource, "/follow/<int:business_id>")
api.add_resource(FollowStatusResource, "/follow/<int:business_id>/status/<int:user_id>")
api.add_resource(FollowersResource, "/followers/<int:business_id>")
api.add_resource(ClientFollowingResource, "/user/<int:user_id>/following")
