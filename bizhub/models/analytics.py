from sqlalchemy_serializer import SerializerMixin
from bizhub.extension import db
from bizhub.utils.helper import utcnow

ANALYTICS_PERIODS = ("daily", "weekly", "monthly")


class Analytics(db.Model, SerializerMixin):
    """Periodic per-business snapshot."""

    __tablename__ = "analytics"

    id = db.Column(db.Integer, primary_key=True)
    business_id = db.Column(db.Integer, db.ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    period = db.Column(db.String(10), nullable=False, default="monthly")
    date = db.Column(db.DateTime, nullable=False, default=utcnow)

    followers_total = db.Column(db.Integer, default=0)
    followers_growth = db.Column(db.Integer, default=0)

    engagement_rate = db.Column(db.Float, default=0)
    likes = db.Column(db.Integer, default=0)
    comments = db.Column(db.Integer, default=0)
    shares = db.Column(db.Integer, default=0)

    reach_total = db.Column(db.Integer, default=0)
    reach_organic = db.Column(db.Integer, default=0)
    reach_paid = db.Column(db.Integer, default=0)

    sales_revenue = db.Column(db.Float, default=0)
    sales_orders = db.Column(db.Integer, default=0)
    conversion_rate = db.Column(db.Float, default=0)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    serialize_rules = ("-business", "-user_id")
    datetime_format = "%Y-%m-%dT%H:%M:%S"

    business = db.relationship("Business", back_populates="analytics")
