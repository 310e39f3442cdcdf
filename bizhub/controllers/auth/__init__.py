from flask import Blueprint

auth_bp = Blueprint('auth_bp', __name__)


from .owner_auth import *
from .client_auth import *
from .me import *
from .profile import *
