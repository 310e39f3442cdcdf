from sqlalchemy import func
from bizhub.extension import db
from bizhub.utils.helper import utcnow

business_followers = db.Table(
    "business_followers",
    db.Column("business_id", db.Integer, db.ForeignKey("businesses.id", ondelete="CASCADE"), primary_key=True),
    db.Column("client_id", db.Integer, db.ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True),
    db.Column("created_at", db.DateTime, default=utcnow),
)

BUSINESS_STATUSES = ("pending", "active", "inactive", "suspended")


class Business(db.Model):
    __tablename__ = "businesses"
    __unique_fields__ = {
        "owner_id": "You already have a business registered",
        "website": "A business with this website already exists",
        "name": "A business with this name already exists",
    }

    id = db.Column(db.Integer, primary_key=True)
    # One business per owner; the unique index closes concurrent duplicate registrations
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, unique=True)
    name = db.Column(db.String(100), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500), nullable=False)
    website = db.Column(db.String(255), unique=True, nullable=True)
    address = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    logo_url = db.Column(db.String(500), nullable=True)

    status = db.Column(db.String(20), nullable=False, default="pending")
    verified = db.Column(db.Boolean, nullable=False, default=False)
    rejection_reason = db.Column(db.String(500), nullable=True)
    suspension_reason = db.Column(db.String(500), nullable=True)

    # Denormalized counters, recomputed from their backing rows
    followers = db.Column(db.Integer, nullable=False, default=0)
    total_posts = db.Column(db.Integer, nullable=False, default=0)
    total_products = db.Column(db.Integer, nullable=False, default=0)
    engagement_rate = db.Column(db.Float, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    owner = db.relationship("User", back_populates="business")
    followers_list = db.relationship(
        "Client",
        secondary=business_followers,
    )
    posts = db.relationship("Post", back_populates="business", cascade="all, delete-orphan")
    products = db.relationship("Product", back_populates="business", cascade="all, delete-orphan")
    promotions = db.relationship("Promotion", back_populates="business", cascade="all, delete-orphan")
    analytics = db.relationship("Analytics", back_populates="business", cascade="all, delete-orphan")

    @property
    def username(self):
        return self.name.lower().replace(" ", "_").replace(".", "_") if self.name else None


# Business names are unique regardless of case
db.Index("ix_businesses_name_lower", func.lower(Business.name), unique=True)
