import logging
from flask import g, request
from flask_restful import Resource, Api
from sqlalchemy import func
from bizhub.models import Business, Post, Product
from bizhub.schemas.business_schema import BusinessSchema, BusinessCreateUpdateSchema
from bizhub.schemas.post_schema import PostSchema
from bizhub.schemas.product_schema import ProductSchema
from bizhub.service.feed import business_catalogs
from bizhub.utils.decorators import role_required
from bizhub.utils.errors import Forbidden
from bizhub.utils.helper import get_store, get_json
from bizhub.utils.roles import ROLE_USER, ROLE_BUSINESS_OWNER, ROLE_ADMIN
from . import business_bp

logger = logging.getLogger(__name__)

api = Api(business_bp)

# Schema instances
business_schema = BusinessSchema()
businesses_schema = BusinessSchema(many=True)
business_create_update_schema = BusinessCreateUpdateSchema()
posts_schema = PostSchema(many=True, exclude=("business",))
products_schema = ProductSchema(many=True)

UPDATABLE_FIELDS = ("name", "category", "description", "address", "phone", "website", "logo_url")
CATALOG_PARTS = {"products", "posts"}


def owned_business(business_id):
    """Load a business and make sure the current user owns it."""
    business = get_store().find_by_id(Business, business_id)
    if business.owner_id != g.current_user.id and g.current_user.role != ROLE_ADMIN:
        raise Forbidden("Only the business owner can modify this business")
    return business


def name_taken(store, name, exclude_id=None):
    criteria = [func.lower(Business.name) == name.lower()]
    if exclude_id is not None:
        criteria.append(Business.id != exclude_id)
    return store.find_one(Business, *criteria) is not None


# ---------------------------
# /business (current owner)
# ---------------------------
class MyBusinessResource(Resource):
    @role_required(ROLE_USER, ROLE_BUSINESS_OWNER)
    def get(self):
        business = get_store().find_one(Business, owner_id=g.current_user.id)
        if not business:
            return {"success": False, "message": "Business not found for this user."}, 404
        return {"success": True, "business": business_schema.dump(business)}, 200

    @role_required(ROLE_USER, ROLE_BUSINESS_OWNER)
    def post(self):
        current_user = g.current_user
        json_data = get_json()

        errors = business_create_update_schema.validate(json_data)
        if errors:
            return {"success": False, "message": "Validation failed", "errors": errors}, 400
        data = business_create_update_schema.load(json_data)

        store = get_store()
        if store.find_one(Business, owner_id=current_user.id):
            return {"success": False, "message": "You already have a business registered"}, 400
        if name_taken(store, data["name"]):
            return {"success": False, "message": "A business with this name already exists"}, 400

        # The unique indexes on owner_id/name/website still guard concurrent registrations
        business = Business(owner_id=current_user.id, status="pending", verified=False, **data)
        store.session.add(business)
        current_user.role = ROLE_BUSINESS_OWNER
        store.commit(Business)
        logger.info("Business %s registered by user %s", business.id, current_user.id)

        return {
            "success": True,
            "message": "Business registered successfully!",
            "business": business_schema.dump(business),
        }, 201


# ---------------------------
# /business/<id>
# ---------------------------
class BusinessResource(Resource):
    @role_required(ROLE_BUSINESS_OWNER, ROLE_ADMIN)
    def put(self, business_id):
        business = owned_business(business_id)

        json_data = get_json()
        errors = business_create_update_schema.validate(json_data, partial=True)
        if errors:
            return {"success": False, "message": "Validation failed", "errors": errors}, 400
        data = business_create_update_schema.load(json_data, partial=True)

        store = get_store()
        if "name" in data and name_taken(store, data["name"], exclude_id=business.id):
            return {"success": False, "message": "A business with this name already exists"}, 400

        # Only allow safe fields to be updated
        for field in UPDATABLE_FIELDS:
            if field in data:
                setattr(business, field, data[field])
        store.commit(Business)
        return {
            "success": True,
            "business": business_schema.dump(business),
            "message": "Business updated successfully",
        }, 200

    @role_required(ROLE_BUSINESS_OWNER, ROLE_ADMIN)
    def delete(self, business_id):
        business = owned_business(business_id)
        store = get_store()
        # Posts, products, promotions, analytics and follower rows go with it
        store.delete(business)
        logger.info("Business %s deleted", business_id)
        return {"success": True, "message": "Business deleted successfully"}, 200


# ---------------------------
# /businesses/<id> (public profile)
# ---------------------------
class BusinessProfileResource(Resource):
    def get(self, business_id):
        store = get_store()
        business = store.find_by_id(Business, business_id)
        products = store.find(Product, business_id=business_id, is_active=True, order_by=Product.created_at.desc())
        posts = store.find(Post, business_id=business_id, order_by=Post.created_at.desc())
        return {
            "success": True,
            "data": {
                "business": business_schema.dump(business),
                "products": products_schema.dump(products),
                "posts": posts_schema.dump(posts),
            },
        }, 200


# ---------------------------
# /business/all?status=&category=&include=products,posts
# ---------------------------
class BusinessListResource(Resource):
    def get(self):
        filters = {}
        status = request.args.get("status")
        if status:
            filters["status"] = status
        category = request.args.get("category")
        if category and category != "All":
            filters["category"] = category

        store = get_store()
        businesses = store.find(Business, order_by=Business.created_at.desc(), **filters)
        data = businesses_schema.dump(businesses)

        include = {part.strip() for part in request.args.get("include", "").split(",")} & CATALOG_PARTS
        if include:
            catalogs = business_catalogs(store, [business.id for business in businesses])
            for item in data:
                catalog = catalogs[item["id"]]
                if "products" in include:
                    item["products"] = products_schema.dump(catalog["products"])
                if "posts" in include:
                    item["posts"] = posts_schema.dump(catalog["posts"])

        return {"success": True, "businesses": data}, 200


# ---------------------------
# Register resources
# ---------------------------
api.add_resource(MyBusinessResource, "/business")
api.add_resource(BusinessListResource, "/business/all")
api.add_resource(BusinessResource, "/business/<int:business_id>")
api.add_resource(BusinessProfileResource, "/businesses/<int:business_id>")
