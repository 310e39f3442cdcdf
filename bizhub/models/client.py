from werkzeug.security import generate_password_hash, check_password_hash
from bizhub.extension import db
from bizhub.utils.helper import utcnow


class Client(db.Model):
    """End user who follows businesses and likes/comments on posts."""

    __tablename__ = "clients"
    __unique_fields__ = {"email": "Email already registered"}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    company = db.Column(db.String(255), default="")
    password_hash = db.Column(db.String(255), nullable=False)
    profile_image = db.Column(db.String(500), default="")
    phone = db.Column(db.String(20), default="")
    bio = db.Column(db.String(500), default="")
    website = db.Column(db.String(255), default="")
    interests = db.Column(db.JSON, default=list)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Read side of business_followers; writes go through the followers toggle
    following = db.relationship(
        "Business",
        secondary="business_followers",
        viewonly=True,
    )

    @db.validates("email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
