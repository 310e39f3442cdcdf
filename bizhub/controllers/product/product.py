import logging
from flask import g
from flask_restful import Resource, Api
from bizhub.models import Business, Product
from bizhub.schemas.product_schema import ProductSchema, ProductCreateSchema
from bizhub.service.engagement import recompute_engagement
from bizhub.utils.decorators import role_required
from bizhub.utils.errors import Forbidden, ValidationError
from bizhub.utils.helper import get_store, get_json
from bizhub.utils.roles import ROLE_BUSINESS_OWNER
from . import product_bp

logger = logging.getLogger(__name__)

api = Api(product_bp)

product_schema = ProductSchema()
products_schema = ProductSchema(many=True)
product_create_schema = ProductCreateSchema()


class ProductCreateResource(Resource):
    @role_required(ROLE_BUSINESS_OWNER)
    def post(self):
        json_data = get_json()
        errors = product_create_schema.validate(json_data)
        if errors:
            return {"success": False, "message": "Validation failed", "errors": errors}, 400
        data = product_create_schema.load(json_data)

        store = get_store()
        business = store.find_one(Business, owner_id=g.current_user.id)
        if not business:
            raise ValidationError("No business found for this user")

        if not data.get("sku"):
            data.pop("sku")
        product = Product(
            business_id=business.id,
            user_id=g.current_user.id,
            image_alt=data["name"],
            **data,
        )
        store.session.add(product)
        store.commit(Product)
        recompute_engagement(store, business.id)
        logger.info("Product %s added to business %s", product.id, business.id)

        return {
            "success": True,
            "message": "Product added successfully",
            "product": product_schema.dump(product),
        }, 201


class BusinessProductsResource(Resource):
    def get(self, business_id):
        store = get_store()
        store.find_by_id(Business, business_id)
        products = store.find(Product, business_id=business_id, order_by=(Product.created_at.desc(), Product.id.desc()))
        return {"success": True, "count": len(products), "products": products_schema.dump(products)}, 200


class ProductResource(Resource):
    @role_required(ROLE_BUSINESS_OWNER)
    def delete(self, product_id):
        store = get_store()
        product = store.find_by_id(Product, product_id)
        if product.business.owner_id != g.current_user.id:
            raise Forbidden("Unauthorized to delete this product")

        business_id = product.business_id
        store.delete(product)
        recompute_engagement(store, business_id)
        return {"success": True, "message": "Product deleted successfully"}, 200


api.add_resource(ProductCreateResource, "/products")
api.add_resource(BusinessProductsResource, "/business/<int:business_id>/products")
api.add_resource(ProductResource, "/product/<int:product_id>")
