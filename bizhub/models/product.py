import random
import string
import time
from bizhub.extension import db
from bizhub.utils.helper import utcnow


def generate_sku():
    suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=6))
    return f"SKU-{int(time.time() * 1000)}-{suffix}"


class Product(db.Model):
    __tablename__ = "products"
    __unique_fields__ = {"sku": "A product with this SKU already exists"}
    __table_args__ = (
        db.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)
    business_id = db.Column(db.Integer, db.ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    name = db.Column(db.String(255), nullable=False)
    link = db.Column(db.String(500), nullable=True)
    price = db.Column(db.Float, nullable=False)
    sku = db.Column(db.String(64), unique=True, nullable=False, default=generate_sku)
    image_url = db.Column(db.String(500), nullable=True)
    image_alt = db.Column(db.String(255), default="")
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    # Sales
    total_sold = db.Column(db.Integer, nullable=False, default=0)
    revenue = db.Column(db.Float, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    business = db.relationship("Business", back_populates="products")

    @property
    def sales_value(self):
        return (self.total_sold or 0) * (self.price or 0)
