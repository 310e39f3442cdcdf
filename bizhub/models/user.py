from werkzeug.security import generate_password_hash, check_password_hash
from bizhub.extension import db
from bizhub.utils.helper import utcnow


class User(db.Model):
    __tablename__ = "users"
    __unique_fields__ = {"email": "User already exists with this email"}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(50), nullable=False, default="user")  # user, admin, business_owner
    phone = db.Column(db.String(20), default="")
    address = db.Column(db.String(200), default="")
    avatar = db.Column(db.String(500), default="")
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    business = db.relationship("Business", back_populates="owner", uselist=False)

    @db.validates("email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
