from flask_restful import Resource, Api
from flask_jwt_extended import create_access_token
from bizhub.models import Client
from bizhub.schemas.user_schema import ClientRegisterSchema, LoginSchema, ClientSchema
from bizhub.utils.errors import Unauthorized
from bizhub.utils.helper import get_store, get_json
from bizhub.utils.roles import ROLE_CLIENT
from . import auth_bp

api = Api(auth_bp)

register_schema = ClientRegisterSchema()
login_schema = LoginSchema()
client_schema = ClientSchema(only=("id", "name", "email", "company", "interests", "profile_image"))


class ClientRegister(Resource):
    def post(self):
        json_data = get_json()
        errors = register_schema.validate(json_data)
        if errors:
            return {"success": False, "errors": errors}, 400

        data = register_schema.load(json_data)
        store = get_store()
        if store.find_one(Client, email=data["email"].lower()):
            return {"success": False, "message": "Email already registered"}, 400

        client = Client(
            name=data["name"],
            email=data["email"],
            company=data["company"],
            interests=data["interests"],
        )
        client.set_password(data["password"])
        store.session.add(client)
        store.commit(Client)

        return {
            "success": True,
            "message": "User registered successfully",
            "client": client_schema.dump(client),
        }, 201


class ClientLogin(Resource):
    def post(self):
        json_data = get_json()
        errors = login_schema.validate(json_data)
        if errors:
            return {"success": False, "errors": errors}, 400

        client = get_store().find_one(Client, email=json_data["email"].strip().lower())
        if not client or not client.check_password(json_data["password"]):
            raise Unauthorized("Invalid credentials")

        token = create_access_token(identity=str(client.id), additional_claims={"role": ROLE_CLIENT})
        return {
            "success": True,
            "message": "Login successful",
            "token": token,
            "user": client_schema.dump(client),
        }, 200


api.add_resource(ClientRegister, '/auth/register')
api.add_resource(ClientLogin, '/auth/login')
