from flask import Blueprint

post_bp = Blueprint('post_bp', __name__)


from .post import *
from .engagement import *
