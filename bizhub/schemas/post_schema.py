from datetime import timezone
from marshmallow import Schema, fields, validate, pre_load
from bizhub.extension import ma
from bizhub.models import Post
from bizhub.models.post import POST_PLATFORMS
from bizhub.schemas.business_schema import BusinessSchema


def split_csv(value):
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class PostSchema(ma.SQLAlchemyAutoSchema):
    business = fields.Nested(BusinessSchema, only=("id", "name", "category", "logo_url", "verified", "username"), dump_only=True)

    class Meta:
        model = Post
        load_instance = True
        include_fk = True

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    scheduled_for = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


class PostCreateSchema(Schema):
    content = fields.String(required=True, validate=validate.Length(min=1))
    caption = fields.String(load_default="")
    media_url = fields.String(allow_none=True, load_default=None)
    media_type = fields.String(validate=validate.OneOf(("image", "video", "none")), load_default=None)
    platforms = fields.List(fields.String(validate=validate.OneOf(POST_PLATFORMS)), load_default=lambda: ["facebook"])
    tags = fields.List(fields.String(), load_default=list)
    category = fields.String(load_default="General")
    scheduled_for = fields.NaiveDateTime(allow_none=True, load_default=None, timezone=timezone.utc)

    @pre_load
    def split_lists(self, data, **kwargs):
        data = dict(data)
        for key in ("platforms", "tags"):
            if key in data:
                data[key] = split_csv(data[key])
        return data


# Contract bodies for follow/like/comment
class ActorSchema(Schema):
    user_id = fields.Integer(required=True, data_key="userId")


class CommentCreateSchema(ActorSchema):
    text = fields.String(required=True)
