import logging
from flask import g
from flask_restful import Resource, Api
from bizhub.models import User, Client
from bizhub.schemas.user_schema import UserSchema, ClientSchema, OwnerProfileSchema, ClientProfileSchema
from bizhub.utils.decorators import role_required
from bizhub.utils.errors import Forbidden
from bizhub.utils.helper import get_store, get_json
from bizhub.utils.roles import ROLE_CLIENT, USER_ROLES
from . import auth_bp

logger = logging.getLogger(__name__)

api = Api(auth_bp)

user_schema = UserSchema()
client_schema = ClientSchema()
owner_profile_schema = OwnerProfileSchema()
client_profile_schema = ClientProfileSchema()


def email_taken(store, model, email, principal):
    existing = store.find_one(model, email=email.strip().lower())
    return existing is not None and existing.id != principal.id


def apply_profile(store, model, principal, schema):
    """Validate a partial profile body and write it onto ``principal``.

    Returns an error response tuple, or None once the change is committed.
    """
    json_data = get_json()
    errors = schema.validate(json_data)
    if errors:
        return {"success": False, "message": "Validation failed", "errors": errors}, 400
    data = schema.load(json_data)

    if "email" in data and email_taken(store, model, data["email"], principal):
        return {"success": False, "message": model.__unique_fields__["email"]}, 400

    for field, value in data.items():
        setattr(principal, field, value)
    # The unique index on email still catches a concurrent change
    store.commit(model)
    logger.info("%s %s updated profile fields %s", model.__name__, principal.id, sorted(data))
    return None


class OwnerProfile(Resource):
    @role_required(*USER_ROLES)
    def put(self):
        user = g.current_user
        error = apply_profile(get_store(), User, user, owner_profile_schema)
        if error:
            return error
        return {"success": True, "message": "Profile updated successfully", "user": user_schema.dump(user)}, 200


class ClientProfile(Resource):
    @role_required(ROLE_CLIENT)
    def put(self, user_id):
        client = g.current_user
        if client.id != user_id:
            raise Forbidden("You can only edit your own profile")

        error = apply_profile(get_store(), Client, client, client_profile_schema)
        if error:
            return error
        return {"success": True, "message": "Profile updated successfully", "user": client_schema.dump(client)}, 200


api.add_resource(OwnerProfile, '/profile')
api.add_resource(ClientProfile, '/user/<int:user_id>')
