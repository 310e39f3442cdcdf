from flask_restful import Resource, Api
from flask_jwt_extended import create_access_token
from bizhub.models import User, Business
from bizhub.schemas.user_schema import UserRegisterSchema, LoginSchema
from bizhub.utils.errors import Unauthorized
from bizhub.utils.helper import get_store, get_json
from bizhub.utils.roles import ROLE_USER
from . import auth_bp

api = Api(auth_bp)

register_schema = UserRegisterSchema()
login_schema = LoginSchema()


def user_payload(user):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
    }


def issue_token(user):
    return create_access_token(identity=str(user.id), additional_claims={"role": user.role})


class OwnerRegister(Resource):
    def post(self):
        json_data = get_json()
        errors = register_schema.validate(json_data)
        if errors:
            return {"success": False, "errors": errors}, 400

        data = register_schema.load(json_data)
        store = get_store()
        if store.find_one(User, email=data["email"].lower()):
            return {"success": False, "message": "User already exists with this email"}, 400

        user = User(name=data["name"], email=data["email"], role=ROLE_USER)
        user.set_password(data["password"])
        store.session.add(user)
        store.commit(User)

        return {
            "success": True,
            "token": issue_token(user),
            "user": user_payload(user),
        }, 201


class OwnerLogin(Resource):
    def post(self):
        json_data = get_json()
        errors = login_schema.validate(json_data)
        if errors:
            return {"success": False, "errors": errors}, 400

        store = get_store()
        user = store.find_one(User, email=json_data["email"].strip().lower())
        if not user or not user.check_password(json_data["password"]):
            raise Unauthorized("Invalid email or password")

        business = store.find_one(Business, owner_id=user.id)
        return {
            "success": True,
            "token": issue_token(user),
            "user": user_payload(user),
            "business_id": business.id if business else None,
            "has_business": business is not None,
        }, 200


api.add_resource(OwnerRegister, '/register')
api.add_resource(OwnerLogin, '/login')
