from marshmallow import Schema, fields, validate, EXCLUDE
from bizhub.extension import ma
from bizhub.models import User, Client


class UserSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = User
        load_instance = True
        exclude = ("password_hash",)

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


class ClientSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Client
        load_instance = True
        exclude = ("password_hash",)

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


# For registration requests
class UserRegisterSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=6))


class ClientRegisterSchema(UserRegisterSchema):
    company = fields.String(required=False, load_default="")
    interests = fields.List(fields.String(), required=False, load_default=list)


class LoginSchema(Schema):
    email = fields.Email(required=True)
    password = fields.String(required=True)


# For profile edits; every field is optional
class OwnerProfileSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(validate=validate.Length(min=1, max=120))
    email = fields.Email()
    phone = fields.String(allow_none=True, validate=validate.Length(max=20))
    address = fields.String(allow_none=True, validate=validate.Length(max=200))
    avatar = fields.String(allow_none=True, validate=validate.Length(max=500))


class ClientProfileSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(validate=validate.Length(min=1, max=120))
    email = fields.Email()
    phone = fields.String(allow_none=True, validate=validate.Length(max=20))
    bio = fields.String(allow_none=True, validate=validate.Length(max=500))
    website = fields.String(allow_none=True, validate=validate.Length(max=255))
    profile_image = fields.String(allow_none=True, validate=validate.Length(max=500))
