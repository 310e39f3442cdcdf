import logging
from sqlalchemy import select, func
from bizhub.models import Business, Post, Product
from bizhub.service.toggle_set import FOLLOWERS, LIKES

logger = logging.getLogger(__name__)


def engagement_rate(total_engagement, followers):
    if not followers:
        return 0.0
    return round(total_engagement / followers * 100, 2)


def recompute_engagement(store, business_id):
    """Rebuild the business's cached counters from its posts and products.

    Full recompute over every post of the business; engagement_rate is only
    ever a cache of ``(likes + comments + shares) / followers * 100``.
    """
    business = store.find_by_id(Business, business_id)
    totals = store.session.execute(
        select(
            func.count(Post.id),
            func.coalesce(func.sum(Post.likes_count + Post.comments_count + Post.shares), 0),
        ).where(Post.business_id == business_id)
    ).one()
    total_posts, total_engagement = totals

    business.total_posts = total_posts
    business.total_products = store.count(Product, business_id=business_id)
    business.engagement_rate = engagement_rate(total_engagement, business.followers)
    store.commit(Business)
    logger.debug(
        "Engagement for business %s: %s interactions, %s followers, rate %s",
        business_id, total_engagement, business.followers, business.engagement_rate,
    )
    return business.engagement_rate


def toggle_follow(store, business_id, client_id):
    result = FOLLOWERS.toggle(store, business_id, client_id)
    recompute_engagement(store, business_id)
    return result


def toggle_like(store, post_id, client_id):
    result = LIKES.toggle(store, post_id, client_id)
    post = store.find_by_id(Post, post_id)
    recompute_engagement(store, post.business_id)
    return result
