import logging
from sqlalchemy import select, func
from bizhub.models import Analytics, Post, Product
from bizhub.utils.helper import utcnow

logger = logging.getLogger(__name__)


def latest_snapshot(store, business_id):
    snapshots = store.find(
        Analytics,
        business_id=business_id,
        order_by=(Analytics.date.desc(), Analytics.id.desc()),
        limit=1,
    )
    return snapshots[0] if snapshots else None


def create_snapshot(store, business, user_id, period="monthly"):
    """Build a snapshot from the business's current state."""
    likes, comments, shares = store.session.execute(
        select(
            func.coalesce(func.sum(Post.likes_count), 0),
            func.coalesce(func.sum(Post.comments_count), 0),
            func.coalesce(func.sum(Post.shares), 0),
        ).where(Post.business_id == business.id)
    ).one()
    orders, revenue = store.session.execute(
        select(
            func.coalesce(func.sum(Product.total_sold), 0),
            func.coalesce(func.sum(Product.total_sold * Product.price), 0),
        ).where(Product.business_id == business.id)
    ).one()

    previous = latest_snapshot(store, business.id)
    growth = business.followers - previous.followers_total if previous else 0

    logger.info("Creating %s analytics snapshot for business %s", period, business.id)
    return store.create(
        Analytics,
        business_id=business.id,
        user_id=user_id,
        period=period,
        date=utcnow(),
        followers_total=business.followers,
        followers_growth=growth,
        engagement_rate=business.engagement_rate,
        likes=int(likes),
        comments=int(comments),
        shares=int(shares),
        sales_revenue=round(float(revenue), 2),
        sales_orders=int(orders),
    )


def get_business_analytics(store, business, user_id):
    """Latest snapshot (created lazily on first read) plus live summary."""
    snapshot = latest_snapshot(store, business.id)
    if snapshot is None:
        snapshot = create_snapshot(store, business, user_id)

    products = store.find(Product, business_id=business.id)
    return {
        "analytics": {
            "followers": business.followers,
            "engagement": business.engagement_rate,
            "posts": store.count(Post, business_id=business.id),
            "leads": snapshot.sales_orders,
            "revenue": round(sum(p.sales_value for p in products), 2),
            "products": len(products),
        },
        "detailedAnalytics": snapshot.to_dict(),
    }
