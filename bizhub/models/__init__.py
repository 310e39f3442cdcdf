from bizhub.extension import db
from bizhub.models.user import User
from bizhub.models.client import Client
from bizhub.models.business import Business, business_followers
from bizhub.models.post import Post, Comment, post_likes
from bizhub.models.product import Product
from bizhub.models.promotion import Promotion
from bizhub.models.analytics import Analytics

__all__ = [
    "db",
    "User",
    "Client",
    "Business",
    "business_followers",
    "Post",
    "Comment",
    "post_likes",
    "Product",
    "Promotion",
    "Analytics",
]
