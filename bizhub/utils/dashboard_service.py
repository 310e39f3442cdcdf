import heapq
import logging
from collections import OrderedDict
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from bizhub.models import Business, Post, Product, Promotion
from bizhub.utils.errors import DashboardError
from bizhub.utils.helper import isoformat

logger = logging.getLogger(__name__)

RECENT_POSTS_LIMIT = 5
RECENT_PRODUCTS_LIMIT = 5
RECENT_ACTIVITY_WINDOW = 10


def _excerpt(text, length=30):
    text = text or ""
    return text[:length] + ("..." if len(text) > length else "")


class DashboardService:
    @staticmethod
    def get_dashboard(store, business_id):
        business = store.find_by_id(Business, business_id)
        try:
            posts = store.find(Post, business_id=business_id)
            products = store.find(Product, business_id=business_id)
            stats = {
                "totalPosts": len(posts),
                "totalProducts": len(products),
                "totalPromotions": store.count(Promotion, Promotion.is_active, business_id=business_id),
                "totalEngagement": DashboardService.total_engagement(posts),
                "totalRevenue": DashboardService.total_revenue(products),
                "followers": business.followers,
                "engagementRate": business.engagement_rate,
            }
            recent_activity = DashboardService.get_recent_activity(store, business_id)
            platform_performance = DashboardService.get_platform_performance(posts)
        except SQLAlchemyError as e:
            logger.error("Dashboard aggregation failed for business %s: %s", business_id, e, exc_info=True)
            store.session.rollback()
            raise DashboardError()

        return {
            "stats": stats,
            "recentActivity": recent_activity,
            "platformPerformance": platform_performance,
            "business": {
                "name": business.name,
                "category": business.category,
                "joinedDate": isoformat(business.created_at),
            },
        }

    @staticmethod
    def total_engagement(posts):
        return sum(post.likes_count + post.comments_count + (post.shares or 0) for post in posts)

    @staticmethod
    def total_revenue(products):
        return round(sum((p.total_sold or 0) * (p.price or 0) for p in products), 2)

    @staticmethod
    def get_recent_activity(store, business_id):
        recent_posts = store.find(
            Post, business_id=business_id, order_by=(Post.created_at.desc(), Post.id.desc()), limit=RECENT_POSTS_LIMIT
        )
        recent_products = store.find(
            Product, business_id=business_id, order_by=(Product.created_at.desc(), Product.id.desc()), limit=RECENT_PRODUCTS_LIMIT
        )

        post_items = (
            {
                "type": "post",
                "id": post.id,
                "description": f'New post: "{_excerpt(post.content)}"',
                "engagement": f"{post.likes_count} likes, {post.comments_count} comments",
                "time": post.created_at,
            }
            for post in recent_posts
        )
        product_items = (
            {
                "type": "product",
                "id": product.id,
                "description": f"New product added: {product.name}",
                "engagement": f"{product.total_sold or 0} sales",
                "time": product.created_at,
            }
            for product in recent_products
        )

        # Both inputs are already newest-first, so a merge keeps the order
        merged = heapq.merge(post_items, product_items, key=lambda item: item["time"], reverse=True)
        activity = []
        for item in merged:
            if len(activity) == RECENT_ACTIVITY_WINDOW:
                break
            item["time"] = isoformat(item["time"])
            activity.append(item)
        return activity

    @staticmethod
    def get_platform_performance(posts):
        groups = {}
        for post in posts:
            for platform in set(post.platforms or []):
                group = groups.setdefault(platform, {"platform": platform, "count": 0, "totalEngagement": 0})
                group["count"] += 1
                group["totalEngagement"] += post.likes_count + post.comments_count + (post.shares or 0)
        return [groups[name] for name in sorted(groups)]

    @staticmethod
    def get_platform_stats(store):
        revenue = store.session.execute(
            select(func.coalesce(func.sum(Product.total_sold * Product.price), 0))
        ).scalar_one()
        return {
            "totalBusinesses": store.count(Business),
            "pendingApprovals": store.count(
                Business, (Business.status == "pending") | ((Business.status == "active") & (Business.verified.is_(False)))
            ),
            "activeBusinesses": store.count(Business, status="active", verified=True),
            "totalPosts": store.count(Post),
            "totalProducts": store.count(Product),
            "totalPromotions": store.count(Promotion, Promotion.is_active),
            "totalRevenue": round(float(revenue), 2),
        }

    @staticmethod
    def get_business_analytics_table(store):
        engagement = dict(
            store.session.execute(
                select(Post.business_id, func.sum(Post.likes_count + Post.comments_count + Post.shares))
                .group_by(Post.business_id)
            ).all()
        )
        post_counts = dict(
            store.session.execute(select(Post.business_id, func.count(Post.id)).group_by(Post.business_id)).all()
        )
        product_rows = store.session.execute(
            select(Product.business_id, func.count(Product.id), func.sum(Product.total_sold * Product.price))
            .group_by(Product.business_id)
        ).all()
        products = {business_id: (count, revenue) for business_id, count, revenue in product_rows}
        promotions = dict(
            store.session.execute(
                select(Promotion.business_id, func.count(Promotion.id))
                .where(Promotion.is_active)
                .group_by(Promotion.business_id)
            ).all()
        )

        table = []
        for business in store.find(Business, order_by=Business.created_at.desc()):
            product_count, revenue = products.get(business.id, (0, 0))
            table.append(OrderedDict([
                ("businessId", business.id),
                ("businessName", business.name),
                ("status", business.status),
                ("totalPosts", post_counts.get(business.id, 0)),
                ("totalProducts", product_count),
                ("totalPromotions", promotions.get(business.id, 0)),
                ("totalEngagement", int(engagement.get(business.id) or 0)),
                ("revenue", round(float(revenue or 0), 2)),
                ("followers", business.followers),
            ]))
        return table
