"""Tests for the user store adapter."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from errors import StoreUnavailable
from models import User
from services import book_service, user_service
from services.user_service import Profile


def test_find_by_external_id(db_session, test_user):
    user = user_service.find_by_external_id(db_session, "43214")

    assert user is not None
    assert user.id == test_user["id"]
    assert user_service.find_by_external_id(db_session, "nope") is None


def test_find_by_id(db_session, test_user):
    assert user_service.find_by_id(db_session, test_user["id"]).first_name == "Jimmy"
    assert user_service.find_by_id(db_session, test_user["id"] + 1) is None


def test_upsert_inserts_unseen_user(db_session):
    user = user_service.upsert_user(db_session, Profile(user_id="555", first_name="Grace", last_name="Hopper"))
    db_session.commit()

    assert isinstance(user.id, int)
    assert user.access_token is None
    assert db_session.scalars(select(User)).one().user_id == "555"


def test_upsert_updates_names_and_keeps_id(db_session, test_user):
    user = user_service.upsert_user(db_session, Profile(user_id="43214", first_name="James", last_name="Jeans"))
    db_session.commit()

    assert user.id == test_user["id"]
    assert user.first_name == "James"
    assert user.last_name == "Jeans"
    assert len(db_session.scalars(select(User)).all()) == 1


def test_set_and_clear_access_token(db_session, test_user):
    user = db_session.get(User, test_user["id"])

    user_service.set_access_token(db_session, user, "fresh-token")
    db_session.expire_all()
    assert db_session.get(User, test_user["id"]).access_token == "fresh-token"

    user_service.clear_access_token(db_session, db_session.get(User, test_user["id"]))
    db_session.expire_all()
    assert db_session.get(User, test_user["id"]).access_token is None


def test_store_failure_becomes_store_unavailable(db_session, monkeypatch):
    def broken_get(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    monkeypatch.setattr(db_session, "get", broken_get)

    with pytest.raises(StoreUnavailable):
        user_service.find_by_id(db_session, 1)


def test_book_listing_failure_is_not_an_empty_result(db_session, monkeypatch):
    def broken_scalars(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    monkeypatch.setattr(db_session, "scalars", broken_scalars)

    with pytest.raises(StoreUnavailable):
        book_service.list_books(db_session)


def test_library_store_failure_is_503(client, auth_headers, monkeypatch):
    import library

    def broken_list_books(db):
        raise StoreUnavailable("listing books")

    monkeypatch.setattr(library, "list_books", broken_list_books)

    response = client.get("/api/library", headers=auth_headers)

    assert response.status_code == 503
    assert response.json() == {"detail": "Service unavailable"}
