from flask_restful import Resource, Api
from bizhub.schemas.post_schema import ActorSchema, CommentCreateSchema
from bizhub.service.comments import add_comment, list_comments
from bizhub.service.engagement import toggle_like, recompute_engagement
from bizhub.service.feed import post_likers
from bizhub.service.toggle_set import LIKES
from bizhub.utils.helper import get_store, get_json
from . import post_bp

api = Api(post_bp)

actor_schema = ActorSchema()
comment_create_schema = CommentCreateSchema()


class LikeResource(Resource):
    def post(self, post_id):
        json_data = get_json()
        errors = actor_schema.validate(json_data)
        if errors:
            return {"success": False, "message": "User ID is required", "errors": errors}, 400
        client_id = actor_schema.load(json_data)["user_id"]

        result = toggle_like(get_store(), post_id, client_id)
        return {"success": True, "isLiked": result.is_active, "likesCount": result.count}, 200


class LikeStatusResource(Resource):
    def get(self, post_id, user_id):
        return {"isLiked": LIKES.contains(get_store(), post_id, user_id)}, 200


class LikesResource(Resource):
    def get(self, post_id):
        users = post_likers(get_store(), post_id)
        return {"success": True, "totalLikes": len(users), "users": users}, 200


class CommentResource(Resource):
    def post(self, post_id):
        json_data = get_json()
        errors = comment_create_schema.validate(json_data)
        if errors:
            return {"success": False, "message": "User ID and text are required", "errors": errors}, 400
        data = comment_create_schema.load(json_data)

        store = get_store()
        comment, count = add_comment(store, post_id, data["user_id"], data["text"])
        recompute_engagement(store, comment.post.business_id)
        return {"success": True, "commentsCount": count, "comment": comment.to_dict()}, 200


class CommentsResource(Resource):
    def get(self, post_id):
        return {"success": True, "comments": list_comments(get_store(), post_id)}, 200


api.add_resource(LikeResource, "/post/<int:post_id>/like")
api.add_resource(LikeStatusResource, "/post/<int:post_id>/like-status/<int:user_id>")
api.add_resource(LikesResource, "/post/<int:post_id>/likes")
api.add_resource(CommentResource, "/post/<int:post_id>/comment")
api.add_resource(CommentsResource, "/post/<int:post_id>/comments")
