from sqlalchemy import select, update, func
from bizhub.models import Client, Comment, Post
from bizhub.utils.errors import ValidationError
from bizhub.service.actors import load_actors


def sync_comments_count(store, post_id):
    size = select(func.count()).select_from(Comment).where(Comment.post_id == post_id).scalar_subquery()
    store.session.execute(
        update(Post)
        .where(Post.id == post_id)
        .values(comments_count=size)
        .execution_options(synchronize_session=False)
    )
    return store.session.execute(select(Post.comments_count).where(Post.id == post_id)).scalar_one()


def add_comment(store, post_id, actor_id, text):
    """Append a comment to a post and resync its comments_count.

    Returns ``(comment, comments_count)``.
    """
    if not actor_id:
        raise ValidationError("User ID is required to comment")
    if not text or not text.strip():
        raise ValidationError("Comment cannot be empty")

    store.find_by_id(Client, actor_id)
    # Held until commit so concurrent comments recount after each other
    store.lock_by_id(Post, post_id)

    comment = Comment(post_id=post_id, client_id=actor_id, text=text.strip())
    store.session.add(comment)
    store.session.flush()
    count = sync_comments_count(store, post_id)
    store.commit(Comment)
    return comment, count


def list_comments(store, post_id):
    store.find_by_id(Post, post_id)
    comments = store.find(Comment, post_id=post_id, order_by=Comment.id)
    actors = load_actors(store, {c.client_id for c in comments})
    result = []
    for comment in comments:
        data = comment.to_dict()
        data["user"] = actors.get(comment.client_id)
        result.append(data)
    return result
