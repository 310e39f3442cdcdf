from functools import wraps
from flask import g
from flask_jwt_extended import get_jwt, verify_jwt_in_request, get_jwt_identity
from bizhub.models import User, Client
from bizhub.utils.errors import Forbidden, NotFound
from bizhub.utils.helper import get_store
from .roles import ROLE_CLIENT, ALL_ROLES


def role_required(*roles):
    """
    Decorator to restrict access to routes based on the token's role claim.
    If no roles are passed, allows access to ALL_ROLES by default.
    Attaches the authenticated principal (User or Client) to g.current_user.
    """
    allowed_roles = roles or ALL_ROLES

    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            # Verify JWT first
            verify_jwt_in_request()
            claims = get_jwt()
            user_role = claims.get("role")

            model = Client if user_role == ROLE_CLIENT else User
            try:
                principal = get_store().find_by_id(model, int(get_jwt_identity()))
            except NotFound:
                raise NotFound("User not found")
            g.current_user = principal

            # Role check against the stored role, tokens may predate a promotion
            current_role = ROLE_CLIENT if model is Client else principal.role
            if current_role not in allowed_roles:
                raise Forbidden()

            return fn(*args, **kwargs)
        return decorator
    return wrapper
