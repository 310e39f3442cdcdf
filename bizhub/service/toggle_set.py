"""Set membership with an always-consistent denormalized count.

Used for "client follows business" and "client likes post". Membership rows
live in an association table keyed by (target, actor), so an actor can never
be in the set twice. The count column on the target is rewritten as
``count(*)`` over the set in the same transaction as every mutation.
"""
import logging
from collections import namedtuple
from sqlalchemy import delete, insert, select, update, func, exists
from sqlalchemy.exc import IntegrityError
from bizhub.models import Business, Client, Post, business_followers, post_likes

logger = logging.getLogger(__name__)

ToggleResult = namedtuple("ToggleResult", ["is_active", "count"])


class ToggleSet:
    def __init__(self, target_model, table, target_column, count_attr, actor_model=Client, actor_column="client_id"):
        self.target_model = target_model
        self.table = table
        self.target_col = table.c[target_column]
        self.actor_col = table.c[actor_column]
        self.count_attr = count_attr
        self.actor_model = actor_model

    def _membership(self, target_id, actor_id):
        return (self.target_col == target_id) & (self.actor_col == actor_id)

    def contains(self, store, target_id, actor_id):
        store.find_by_id(self.target_model, target_id)
        stmt = select(exists().where(self._membership(target_id, actor_id)))
        return bool(store.session.execute(stmt).scalar())

    def member_ids(self, store, target_id):
        stmt = select(self.actor_col).where(self.target_col == target_id).order_by(self.table.c.created_at, self.actor_col)
        return store.session.execute(stmt).scalars().all()

    def sync_count(self, store, target_id):
        """Rewrite the target's counter from the set and return it (no commit)."""
        size = (
            select(func.count())
            .select_from(self.table)
            .where(self.target_col == target_id)
            .scalar_subquery()
        )
        store.session.execute(
            update(self.target_model)
            .where(self.target_model.id == target_id)
            .values({self.count_attr: size})
            .execution_options(synchronize_session=False)
        )
        return store.session.execute(
            select(getattr(self.target_model, self.count_attr)).where(self.target_model.id == target_id)
        ).scalar_one()

    def toggle(self, store, target_id, actor_id):
        store.find_by_id(self.actor_model, actor_id)
        # Toggles on one target run one at a time, so the recount sees every committed member
        store.lock_by_id(self.target_model, target_id)
        session = store.session

        removed = session.execute(delete(self.table).where(self._membership(target_id, actor_id))).rowcount
        if removed:
            count = self.sync_count(store, target_id)
            session.commit()
            return ToggleResult(False, count)

        try:
            session.execute(insert(self.table).values({self.target_col.name: target_id, self.actor_col.name: actor_id}))
            count = self.sync_count(store, target_id)
            session.commit()
        except IntegrityError:
            # A concurrent toggle by the same actor inserted the row first
            session.rollback()
            logger.info("Concurrent insert on %s for target=%s actor=%s", self.table.name, target_id, actor_id)
            store.lock_by_id(self.target_model, target_id)
            count = self.sync_count(store, target_id)
            session.commit()
        return ToggleResult(True, count)


FOLLOWERS = ToggleSet(Business, business_followers, "business_id", "followers")
LIKES = ToggleSet(Post, post_likes, "post_id", "likes_count")
