from sqlalchemy import and_, or_, event
from sqlalchemy.ext.hybrid import hybrid_property
from bizhub.extension import db
from bizhub.utils.helper import utcnow
from bizhub.service.promotion_lifecycle import derive_status

PROMOTION_TYPES = ("general", "coupon")
DISPLAY_TYPES = ("banner", "popup")
DISCOUNT_TYPES = ("percentage", "fixed", "none")
PROMOTION_STATUSES = ("active", "scheduled", "paused", "expired", "draft")
PROMOTION_PLATFORMS = ("facebook", "instagram", "twitter", "google", "email", "website")


class Promotion(db.Model):
    __tablename__ = "promotions"

    id = db.Column(db.Integer, primary_key=True)
    business_id = db.Column(db.Integer, db.ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(20), nullable=False, default="general")
    link = db.Column(db.String(500), nullable=True)
    display_type = db.Column(db.String(20), nullable=False, default="banner")
    discount_type = db.Column(db.String(20), nullable=False, default="none")
    discount_value = db.Column(db.Float, nullable=False, default=0)
    coupon_code = db.Column(db.String(64), nullable=True)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(20), nullable=False, default="draft")
    platforms = db.Column(db.JSON, default=list)
    image = db.Column(db.String(500), nullable=True)

    # Performance
    impressions = db.Column(db.Integer, nullable=False, default=0)
    clicks = db.Column(db.Integer, nullable=False, default=0)
    conversions = db.Column(db.Integer, nullable=False, default=0)
    revenue_generated = db.Column(db.Float, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    business = db.relationship("Business", back_populates="promotions")

    @db.validates("coupon_code")
    def normalize_coupon(self, key, value):
        return value.strip().upper() if value else value

    @hybrid_property
    def is_active(self):
        now = utcnow()
        return (
            self.status == "active"
            and self.start_date <= now
            and (self.end_date is None or self.end_date > now)
        )

    @is_active.expression
    def is_active(cls):
        now = utcnow()
        return and_(
            cls.status == "active",
            cls.start_date <= now,
            or_(cls.end_date.is_(None), cls.end_date > now),
        )

    def refresh_status(self, now=None):
        self.status = derive_status(self.start_date, self.end_date, self.status, now or utcnow())
        return self.status


@event.listens_for(Promotion, "before_insert")
@event.listens_for(Promotion, "before_update")
def _recompute_status(mapper, connection, target):
    target.refresh_status()
