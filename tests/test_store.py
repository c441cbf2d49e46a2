import pytest

from account_server.core.errors import DuplicateUser
from account_server.core.store import UserStore
from account_server.models.user import User


def test_create_assigns_id_and_hashes_password(db):
    store = UserStore(db)
    user = store.create("alice", "p1")

    assert user.id and len(user.id) == 32
    assert user.password_hash != "p1"
    assert user.is_admin is False
    assert user.token is None
    assert user.match_password("p1")
    assert not user.match_password("p2")


def test_duplicate_username_is_rejected(db):
    store = UserStore(db)
    store.create("alice", "p1")
    with pytest.raises(DuplicateUser):
        store.create("alice", "other", is_admin=True)


def test_unique_index_backs_up_the_existence_check(db, monkeypatch):
    store = UserStore(db)
    store.create("alice", "p1")

    # Simulate a concurrent registration that passed the lookup.
    monkeypatch.setattr(store, "find_by_username", lambda username: None)
    with pytest.raises(DuplicateUser):
        store.create("alice", "p2")

    assert db.query(User).filter(User.username == "alice").count() == 1


def test_lookups(db):
    store = UserStore(db)
    user = store.create("bob", "pw", is_admin=True)

    assert store.find_by_username("bob").id == user.id
    assert store.find_by_id(user.id).is_admin is True
    assert store.find_by_username("nobody") is None
    assert store.find_by_id("missing") is None


def test_save_persists_token(db, app):
    store = UserStore(db)
    user = store.create("carol", "pw")
    user.token = "tok"
    store.save(user)

    other = app.state.session_factory()
    try:
        assert UserStore(other).find_by_id(user.id).token == "tok"
    finally:
        other.close()
