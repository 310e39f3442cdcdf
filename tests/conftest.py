from datetime import timedelta
import pytest
from flask_jwt_extended import create_access_token
from bizhub import create_app
from bizhub.config import TestingConfig
from bizhub.extension import db as _db
from bizhub.models import User, Client, Business, Post, Product, Promotion
from bizhub.utils.helper import utcnow
from bizhub.utils.roles import ROLE_ADMIN, ROLE_BUSINESS_OWNER, ROLE_CLIENT


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions["store"]


@pytest.fixture
def make_user(store):
    counter = {"n": 0}

    def _make(role=ROLE_BUSINESS_OWNER, **fields):
        counter["n"] += 1
        user = User(
            name=fields.pop("name", f"Owner {counter['n']}"),
            email=fields.pop("email", f"owner{counter['n']}@example.com"),
            role=role,
        )
        user.set_password(fields.pop("password", "secret123"))
        store.session.add(user)
        store.commit(User)
        return user

    return _make


@pytest.fixture
def make_client(store):
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        client = Client(
            name=fields.pop("name", f"Client {counter['n']}"),
            email=fields.pop("email", f"client{counter['n']}@example.com"),
        )
        client.set_password(fields.pop("password", "secret123"))
        store.session.add(client)
        store.commit(Client)
        return client

    return _make


@pytest.fixture
def make_business(store, make_user):
    def _make(owner=None, **fields):
        owner = owner or make_user()
        data = {
            "name": f"Shop {owner.id}",
            "category": "Retail",
            "description": "A small shop",
            "address": "1 Main Street",
            "phone": "+254700000000",
            "status": "active",
            "verified": True,
        }
        data.update(fields)
        business = Business(owner_id=owner.id, **data)
        store.session.add(business)
        store.commit(Business)
        return business

    return _make


@pytest.fixture
def make_post(store):
    def _make(business, **fields):
        data = {"content": "Hello world", "platforms": ["facebook"], "status": "published"}
        data.update(fields)
        post = Post(business_id=business.id, user_id=business.owner_id, **data)
        store.session.add(post)
        store.commit(Post)
        return post

    return _make


@pytest.fixture
def make_product(store):
    def _make(business, **fields):
        data = {"name": "Widget", "price": 10.0}
        data.update(fields)
        product = Product(business_id=business.id, user_id=business.owner_id, **data)
        store.session.add(product)
        store.commit(Product)
        return product

    return _make


@pytest.fixture
def make_promotion(store):
    def _make(business, **fields):
        data = {
            "name": "Launch sale",
            "description": "Ten percent off",
            "start_date": utcnow() - timedelta(days=1),
            "status": "draft",
        }
        data.update(fields)
        promotion = Promotion(business_id=business.id, user_id=business.owner_id, **data)
        store.session.add(promotion)
        store.commit(Promotion)
        return promotion

    return _make


def auth_header(principal):
    role = ROLE_CLIENT if isinstance(principal, Client) else principal.role
    token = create_access_token(identity=str(principal.id), additional_claims={"role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(make_user):
    return make_user(role=ROLE_ADMIN, email="admin@example.com")


@pytest.fixture
def auth():
    return auth_header
