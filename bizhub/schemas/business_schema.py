import re
from urllib.parse import urlparse
from marshmallow import Schema, fields, validate, validates, pre_load, ValidationError
from bizhub.extension import ma
from bizhub.models import Business
from bizhub.schemas.user_schema import UserSchema

PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")


def clean_phone(value):
    return re.sub(r"[\s\-()]", "", value or "")


# For reading responses
class BusinessSchema(ma.SQLAlchemyAutoSchema):
    owner = fields.Nested(UserSchema, only=("id", "name", "email", "role"), dump_only=True)
    username = fields.String(dump_only=True)

    class Meta:
        model = Business
        load_instance = True
        include_fk = True
        dump_only = ("id", "created_at", "followers", "engagement_rate")

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


# For creating/updating
class BusinessCreateUpdateSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=2, max=100))
    category = fields.String(required=True, validate=validate.Length(min=1, max=100))
    description = fields.String(required=True, validate=validate.Length(min=10, max=500))
    address = fields.String(required=True, validate=validate.Length(min=1, max=200))
    phone = fields.String(required=True)
    website = fields.String(required=False, allow_none=True)
    logo_url = fields.String(required=False, allow_none=True)

    @pre_load
    def strip_strings(self, data, **kwargs):
        cleaned = {}
        for key, value in data.items():
            cleaned[key] = value.strip() if isinstance(value, str) else value
        if cleaned.get("phone"):
            cleaned["phone"] = clean_phone(cleaned["phone"])
        if cleaned.get("website") == "":
            cleaned["website"] = None
        return cleaned

    @validates("phone")
    def validate_phone(self, value, **kwargs):
        if not PHONE_RE.match(value):
            raise ValidationError("Please enter a valid phone number")

    @validates("website")
    def validate_website(self, value, **kwargs):
        if value is None:
            return
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or "." not in parsed.netloc:
            raise ValidationError("Please enter a valid website URL")


class ModerationSchema(Schema):
    reason = fields.String(required=True, validate=validate.Length(min=1, max=500))
