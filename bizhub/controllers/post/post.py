import logging
from flask import g, request
from flask_restful import Resource, Api
from bizhub.models import Business, Post
from bizhub.schemas.post_schema import PostSchema, PostCreateSchema
from bizhub.service.engagement import recompute_engagement
from bizhub.service.feed import business_posts_page, following_feed, discover_feed
from bizhub.utils.decorators import role_required
from bizhub.utils.errors import Forbidden, ValidationError
from bizhub.utils.helper import get_store, get_json
from bizhub.utils.roles import ROLE_BUSINESS_OWNER
from . import post_bp

logger = logging.getLogger(__name__)

api = Api(post_bp)

post_schema = PostSchema()
feed_schema = PostSchema(many=True)
page_schema = PostSchema(exclude=("business",))
post_create_schema = PostCreateSchema()


def owner_business(store, user):
    business = store.find_one(Business, owner_id=user.id)
    if not business:
        raise ValidationError("No business found for this user")
    return business


class PostCreateResource(Resource):
    @role_required(ROLE_BUSINESS_OWNER)
    def post(self):
        json_data = get_json()
        errors = post_create_schema.validate(json_data)
        if errors:
            return {"success": False, "message": "Validation failed", "errors": errors}, 400
        data = post_create_schema.load(json_data)

        store = get_store()
        business = owner_business(store, g.current_user)

        media_type = data.pop("media_type") or ("image" if data.get("media_url") else "none")
        post = Post(
            user_id=g.current_user.id,
            business_id=business.id,
            media_type=media_type,
            status="scheduled" if data.get("scheduled_for") else "published",
            **data,
        )
        store.session.add(post)
        store.commit(Post)
        recompute_engagement(store, business.id)
        logger.info("Post %s created for business %s (%s)", post.id, business.id, post.status)

        return {
            "success": True,
            "message": "Post created successfully",
            "post": post_schema.dump(post),
        }, 201


class PostResource(Resource):
    @role_required(ROLE_BUSINESS_OWNER)
    def delete(self, post_id):
        store = get_store()
        post = store.find_by_id(Post, post_id)
        if post.user_id != g.current_user.id:
            raise Forbidden("Unauthorized to delete this post")

        business_id = post.business_id
        store.delete(post)
        recompute_engagement(store, business_id)
        logger.info("Post %s deleted from business %s", post_id, business_id)
        return {"success": True, "message": "Post deleted successfully"}, 200


class BusinessPostsResource(Resource):
    def get(self, business_id):
        page = request.args.get("page", 1, type=int)
        limit = request.args.get("limit", 10, type=int)
        posts, pagination = business_posts_page(get_store(), business_id, page=max(page, 1), per_page=max(limit, 1))

        items = []
        for post in posts:
            data = page_schema.dump(post)
            data["likes_list"] = post.likers
            data["comments_list"] = post.comments
            items.append(data)

        return {
            "success": True,
            "posts": items,
            "pagination": {
                "page": pagination.page,
                "pages": pagination.pages,
                "total": pagination.total,
            },
        }, 200


class FollowingFeedResource(Resource):
    def get(self, user_id):
        posts = following_feed(get_store(), user_id)
        return {"success": True, "count": len(posts), "posts": feed_schema.dump(posts)}, 200


class DiscoverFeedResource(Resource):
    def get(self, user_id):
        posts = discover_feed(get_store(), user_id)
        return {"success": True, "count": len(posts), "posts": feed_schema.dump(posts)}, 200


api.add_resource(PostCreateResource, "/posts")
api.add_resource(PostResource, "/post/<int:post_id>")
api.add_resource(BusinessPostsResource, "/business/<int:business_id>/posts")
api.add_resource(FollowingFeedResource, "/posts/following/<int:user_id>")
api.add_resource(DiscoverFeedResource, "/posts/unfollowed/<int:user_id>")
