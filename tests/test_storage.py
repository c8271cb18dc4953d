"""Tests for PyDAL URL and token storage."""

from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import NOW
from shortener.storage import PyDALStorage, StorageError, TokenStatus, URLExistsError, URLNotFoundError


def test_save_and_get_url(storage):
    url_id = storage.save_url("https://example.com/a", "ex")

    assert url_id > 0
    assert storage.get_url("ex") == "https://example.com/a"


def test_save_duplicate_alias(storage):
    storage.save_url("https://example.com/a", "ex")

    with pytest.raises(URLExistsError):
        storage.save_url("https://example.com/b", "ex")

    # Original mapping is untouched
    assert storage.get_url("ex") == "https://example.com/a"


def test_url_exists_is_storage_error():
    assert issubclass(URLExistsError, StorageError)
    assert issubclass(URLNotFoundError, StorageError)


def test_get_missing_url(storage):
    with pytest.raises(URLNotFoundError):
        storage.get_url("missing")


def test_delete_url(storage):
    storage.save_url("https://example.com/a", "ex")

    storage.delete_url("ex")

    with pytest.raises(URLNotFoundError):
        storage.get_url("ex")


def test_delete_missing_url(storage):
    with pytest.raises(URLNotFoundError):
        storage.delete_url("missing")


def test_token_not_found(storage):
    check = storage.is_token_valid("unknown")

    assert check.status is TokenStatus.NOT_FOUND
    assert not check.valid


def test_token_valid(storage):
    storage.save_token("tok", user_id=10, app_id=2, expires_at=NOW + timedelta(minutes=5))

    check = storage.is_token_valid("tok")

    assert check.status is TokenStatus.VALID
    assert check.valid
    assert check.error is None


def test_token_expired(storage):
    storage.save_token("tok", user_id=10, app_id=2, expires_at=NOW - timedelta(seconds=1))

    assert storage.is_token_valid("tok").status is TokenStatus.EXPIRED


def test_token_lookup_is_exact_match(storage):
    storage.save_token("tok", user_id=10, app_id=2, expires_at=NOW + timedelta(minutes=5))

    assert storage.is_token_valid("to").status is TokenStatus.NOT_FOUND
    assert storage.is_token_valid("tok ").status is TokenStatus.NOT_FOUND
    assert storage.is_token_valid("TOK").status is TokenStatus.NOT_FOUND


def test_token_check_does_not_mutate_record(storage, db):
    expires_at = NOW + timedelta(minutes=5)
    storage.save_token("tok", user_id=10, app_id=2, expires_at=expires_at)

    for _ in range(3):
        assert storage.is_token_valid("tok").valid

    rows = db(db.user_tokens.token == "tok").select()
    assert len(rows) == 1
    assert rows[0].expires_at == expires_at
    assert rows[0].user_id == 10
    assert rows[0].app_id == 2


class UnavailableDB:
    """Connection double that fails every query."""

    def __getattr__(self, name):
        raise RuntimeError("database unavailable")


def test_token_lookup_failure_is_tagged_error():
    check = PyDALStorage(UnavailableDB()).is_token_valid("tok")

    assert check.status is TokenStatus.ERROR
    assert check.error is not None


class FailingQuery:
    def count(self):
        raise RuntimeError("connection reset")


class BrokenInsertDB:
    """Connection double whose insert and follow-up lookup both fail."""

    def __init__(self):
        self.short_urls = self
        self.alias = "alias"
        self.rolled_back = False

    def insert(self, **fields):
        raise RuntimeError("connection reset")

    def rollback(self):
        self.rolled_back = True

    def __call__(self, query):
        return FailingQuery()


def test_save_url_lookup_failure_is_storage_error():
    db = BrokenInsertDB()

    with pytest.raises(StorageError) as exc_info:
        PyDALStorage(db).save_url("https://example.com/a", "ex")

    assert not isinstance(exc_info.value, URLExistsError)
    assert db.rolled_back
