from marshmallow import Schema, fields, validate
from bizhub.extension import ma
from bizhub.models import Product


class ProductSchema(ma.SQLAlchemyAutoSchema):
    sales = fields.Method("get_sales", dump_only=True)

    class Meta:
        model = Product
        load_instance = True
        include_fk = True

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")

    def get_sales(self, obj):
        return {"total_sold": obj.total_sold, "revenue": obj.revenue}


class ProductCreateSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    price = fields.Float(required=True, validate=validate.Range(min=0))
    link = fields.String(allow_none=True, load_default=None)
    sku = fields.String(allow_none=True, load_default=None)
    image_url = fields.String(allow_none=True, load_default=None)
