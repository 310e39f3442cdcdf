from flask import Blueprint

promotion_bp = Blueprint('promotion_bp', __name__)


from .promotion import *
