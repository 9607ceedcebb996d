"""Credential store behaviour: hashing, lookups and lockout counters."""

from datetime import timedelta

import pytest

from sitecms.errors import DuplicateEmail
from sitecms.models.user import User
from sitecms.utils.helpers import utcnow
from sitecms.utils.permissions import Role
from tests.conftest import PASSWORD


def test_create_normalizes_email_and_rejects_duplicates(db, store):
    user = store.create(db, name=" Alice ", email="  Alice@Example.org ", password=PASSWORD)
    assert user.email == "alice@example.org"
    assert user.name == "Alice"
    assert user.role == Role.USER.value

    with pytest.raises(DuplicateEmail):
        store.create(db, name="Other", email="ALICE@example.org", password=PASSWORD)


def test_verify_reports_match_without_revealing_cause(db, store):
    store.create(db, name="Alice", email="alice@example.org", password=PASSWORD)

    user, matched = store.verify(db, "alice@example.org", PASSWORD)
    assert user is not None and matched is True

    user, matched = store.verify(db, "alice@example.org", "Wrong1pass")
    assert user is not None and matched is False

    user, matched = store.verify(db, "nobody@example.org", PASSWORD)
    assert user is None and matched is False


def test_hash_only_changes_when_password_is_set(db, store):
    user = store.create(db, name="Alice", email="alice@example.org", password=PASSWORD)
    original_hash = user.password_hash

    user.name = "Alice B"
    user.bio = "updated"
    db.commit()
    db.refresh(user)
    assert user.password_hash == original_hash

    store.set_password(db, user, "Another1pass")
    assert user.password_hash != original_hash
    assert store.check_password("Another1pass", user.password_hash)


def test_fifth_failure_sets_lock(db, store):
    user = store.create(db, name="Alice", email="alice@example.org", password=PASSWORD)
    for _ in range(4):
        store.increment_failed_attempts(db, user)
    assert user.failed_login_attempts == 4
    assert not store.is_locked(user)

    store.increment_failed_attempts(db, user)
    assert user.failed_login_attempts == 5
    assert store.is_locked(user)
    assert user.lock_until > utcnow() + timedelta(minutes=119)


def test_expired_lock_restarts_counter_at_one(db, store):
    user = store.create(db, name="Alice", email="alice@example.org", password=PASSWORD)
    user.failed_login_attempts = 5
    user.lock_until = utcnow() - timedelta(minutes=1)
    db.commit()

    assert not store.is_locked(user)
    store.increment_failed_attempts(db, user)
    assert user.failed_login_attempts == 1
    assert user.lock_until is None


def test_reset_clears_counter_and_stamps_last_login(db, store):
    user = store.create(db, name="Alice", email="alice@example.org", password=PASSWORD)
    for _ in range(5):
        store.increment_failed_attempts(db, user)
    assert store.is_locked(user)

    store.reset_failed_attempts(db, user)
    assert user.failed_login_attempts == 0
    assert user.lock_until is None
    assert user.last_login is not None
    assert not store.is_locked(user)


def test_check_password_tolerates_garbage_hash(store):
    assert store.check_password(PASSWORD, "not-a-bcrypt-hash") is False


def test_create_maps_unique_index_violation_to_duplicate(db, store, monkeypatch):
    store.create(db, name="Alice", email="alice@example.org", password=PASSWORD)
    # a concurrent registration passed the lookup before the first insert landed
    monkeypatch.setattr(store, "find_by_email", lambda db, email: None)

    with pytest.raises(DuplicateEmail):
        store.create(db, name="Alice Again", email="alice@example.org", password=PASSWORD)

    assert db.query(User).filter(User.email == "alice@example.org").count() == 1
