from flask import g
from flask_restful import Resource, Api
from bizhub.models import Client
from bizhub.schemas.user_schema import UserSchema, ClientSchema
from bizhub.utils.decorators import role_required
from . import auth_bp

api = Api(auth_bp)

user_schema = UserSchema()
client_schema = ClientSchema()


class Me(Resource):
    @role_required()
    def get(self):
        principal = g.current_user
        if isinstance(principal, Client):
            return {"success": True, "kind": "client", "user": client_schema.dump(principal)}, 200
        return {"success": True, "kind": "user", "user": user_schema.dump(principal)}, 200


api.add_resource(Me, '/auth/me')
