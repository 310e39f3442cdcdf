import logging
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from bizhub.utils.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)


def _integrity_message(model, error):
    detail = str(getattr(error, "orig", error)).lower()
    for field, message in getattr(model, "__unique_fields__", {}).items():
        if field in detail:
            return message
    if "unique" in detail or "duplicate" in detail:
        return f"Duplicate {model.__name__.lower()}"
    return f"Invalid {model.__name__.lower()} data"


def locking_select(model, obj_id):
    return select(model).where(model.id == obj_id).with_for_update()


class EntityStore:
    """Thin persistence facade over the Flask-SQLAlchemy session.

    One instance is built per application in ``create_app`` and handed to the
    services, so nothing below the controllers touches ``db`` directly.
    """

    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    def commit(self, model=None):
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Integrity error on %s: %s", getattr(model, "__name__", "commit"), e.orig)
            raise ValidationError(_integrity_message(model, e) if model else "Invalid data")

    def create(self, model, **fields):
        obj = model(**fields)
        self.session.add(obj)
        self.commit(model)
        return obj

    def find_by_id(self, model, obj_id):
        obj = self.session.get(model, obj_id) if obj_id is not None else None
        if obj is None:
            raise NotFound(f"{model.__name__} not found")
        return obj

    def lock_by_id(self, model, obj_id):
        """Load a row with SELECT ... FOR UPDATE; the lock is held until commit or rollback."""
        obj = self.session.execute(locking_select(model, obj_id)).scalars().first() if obj_id is not None else None
        if obj is None:
            raise NotFound(f"{model.__name__} not found")
        return obj

    def find_one(self, model, *criteria, **filters):
        stmt = select(model).filter(*criteria).filter_by(**filters).limit(1)
        return self.session.execute(stmt).scalars().first()

    def _select(self, model, criteria, filters, order_by=None):
        stmt = select(model).filter(*criteria).filter_by(**filters)
        if order_by is not None:
            stmt = stmt.order_by(*order_by) if isinstance(order_by, (list, tuple)) else stmt.order_by(order_by)
        return stmt

    def find(self, model, *criteria, order_by=None, limit=None, **filters):
        stmt = self._select(model, criteria, filters, order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        return self.session.execute(stmt).scalars().all()

    def paginate(self, model, *criteria, page=1, per_page=10, order_by=None, **filters):
        stmt = self._select(model, criteria, filters, order_by)
        return self.db.paginate(stmt, page=page, per_page=per_page, error_out=False)

    def count(self, model, *criteria, **filters):
        stmt = select(func.count()).select_from(model).filter(*criteria).filter_by(**filters)
        return self.session.execute(stmt).scalar_one()

    def update_by_id(self, model, obj_id, patch):
        obj = self.find_by_id(model, obj_id)
        for key, value in patch.items():
            setattr(obj, key, value)
        self.commit(model)
        return obj

    def delete(self, obj):
        self.session.delete(obj)
        self.commit(type(obj))

    def delete_by_id(self, model, obj_id):
        obj = self.find_by_id(model, obj_id)
        self.delete(obj)
        return obj
