from collections import defaultdict
from sqlalchemy import select
from bizhub.models import Business, Client, Comment, Post, Product, business_followers, post_likes
from bizhub.service.actors import load_actors
from bizhub.service.toggle_set import LIKES


def followed_business_ids(client_id):
    return select(business_followers.c.business_id).where(business_followers.c.client_id == client_id)


def business_posts_page(store, business_id, page=1, per_page=10):
    """One page of a business's posts with likers and commenters resolved.

    All actor ids referenced by the page are fetched in a single query and
    joined in memory. Returns ``(posts, pagination)`` where posts are the ORM
    rows and each carries ``likers`` and ``comments`` lists.
    """
    store.find_by_id(Business, business_id)
    pagination = store.paginate(
        Post,
        business_id=business_id,
        page=page,
        per_page=per_page,
        order_by=(Post.created_at.desc(), Post.id.desc()),
    )
    posts = pagination.items
    post_ids = [post.id for post in posts]

    likes = defaultdict(list)
    comments = defaultdict(list)
    if post_ids:
        like_rows = store.session.execute(
            select(post_likes.c.post_id, post_likes.c.client_id)
            .where(post_likes.c.post_id.in_(post_ids))
            .order_by(post_likes.c.created_at)
        ).all()
        for post_id, client_id in like_rows:
            likes[post_id].append(client_id)
        for comment in store.find(Comment, Comment.post_id.in_(post_ids), order_by=Comment.id):
            comments[comment.post_id].append(comment)

    actor_ids = {cid for ids in likes.values() for cid in ids}
    actor_ids |= {c.client_id for items in comments.values() for c in items}
    actors = load_actors(store, actor_ids)

    for post in posts:
        post.likers = [actors[cid] for cid in likes[post.id] if cid in actors]
        post.comments = [
            dict(comment.to_dict(), user=actors.get(comment.client_id)) for comment in comments[post.id]
        ]
    return posts, pagination


def following_feed(store, client_id):
    store.find_by_id(Client, client_id)
    return store.find(
        Post,
        Post.business_id.in_(followed_business_ids(client_id)),
        Post.business.has(Business.status == "active"),
        order_by=(Post.created_at.desc(), Post.id.desc()),
    )


def discover_feed(store, client_id):
    store.find_by_id(Client, client_id)
    return store.find(
        Post,
        Post.business_id.not_in(followed_business_ids(client_id)),
        Post.business.has(Business.status == "active"),
        order_by=(Post.created_at.desc(), Post.id.desc()),
    )


def post_likers(store, post_id):
    store.find_by_id(Post, post_id)
    member_ids = LIKES.member_ids(store, post_id)
    actors = load_actors(store, set(member_ids))
    return [actors[cid] for cid in member_ids if cid in actors]


def business_catalogs(store, business_ids):
    """Products and posts for many businesses in two queries.

    Returns ``{business_id: {"products": [...], "posts": [...]}}``, each list
    newest first.
    """
    catalogs = {business_id: {"products": [], "posts": []} for business_id in business_ids}
    if not catalogs:
        return catalogs
    ids = list(catalogs)
    for product in store.find(Product, Product.business_id.in_(ids), order_by=(Product.created_at.desc(), Product.id.desc())):
        catalogs[product.business_id]["products"].append(product)
    for post in store.find(Post, Post.business_id.in_(ids), order_by=(Post.created_at.desc(), Post.id.desc())):
        catalogs[post.business_id]["posts"].append(post)
    return catalogs
