import pytest
from flask_jwt_extended import create_access_token

from family_logbook import create_app
from family_logbook.extensions import db, page_cache
from family_logbook.models.logbook_member import LogbookMember
from family_logbook.application.users.accounts import create_user
from family_logbook.application.logbooks.create_logbook import create_logbook


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        page_cache.clear()
        yield app
        db.session.remove()
        db.drop_all()
        page_cache.clear()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(email, password="password123", display_name=None):
        return create_user(email=email, password=password, display_name=display_name)
    return _make


@pytest.fixture
def parent(make_user):
    return make_user("parent@example.com", display_name="Pat Parent")


@pytest.fixture
def logbook(parent):
    return create_logbook(actor_id=parent.id, data={"name": "Smith Family"})


@pytest.fixture
def add_member(logbook):
    def _add(user, role, target=None):
        membership = LogbookMember()
        membership.logbook_id = (target or logbook).id
        membership.user_id = user.id
        membership.role = role
        db.session.add(membership)
        db.session.commit()
        return membership
    return _add


@pytest.fixture
def second_parent(make_user, add_member):
    user = make_user("coparent@example.com")
    add_member(user, "parent")
    return user


@pytest.fixture
def family_user(make_user, add_member):
    user = make_user("grandma@example.com")
    add_member(user, "family")
    return user


@pytest.fixture
def friend_user(make_user, add_member):
    user = make_user("friend@example.com")
    add_member(user, "friend")
    return user


@pytest.fixture
def outsider(make_user):
    return make_user("stranger@example.com")


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = create_access_token(identity=user.id)
        return {"Authorization": f"Bearer {token}"}
    return _headers
