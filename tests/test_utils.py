"""Tests for alias generation and configuration helpers."""

from __future__ import annotations

import pytest

from shortener.config import Config, ProductionConfig, TestingConfig
from shortener.utils import URL_ALPHABET, generate_alias, generate_unique_alias


def test_alphabet_has_no_ambiguous_chars():
    for c in "0O1lI":
        assert c not in URL_ALPHABET


def test_generate_alias_length():
    assert len(generate_alias()) == 7
    assert len(generate_alias(12)) == 12


def test_generate_unique_alias_skips_taken():
    taken = []

    def is_taken(alias):
        taken.append(alias)
        return len(taken) < 3

    alias = generate_unique_alias(is_taken)

    assert alias == taken[-1]
    assert len(taken) == 3


def test_generate_unique_alias_gives_up():
    assert generate_unique_alias(lambda a: True, attempts=4) is None


def test_testing_db_uri():
    assert TestingConfig.get_db_uri() == "sqlite:memory"


def test_postgres_db_uri():
    class PgConfig(Config):
        DB_TYPE = "postgresql"
        DB_USER = "u"
        DB_PASS = "p"
        DB_HOST = "db"
        DB_PORT = "5432"
        DB_NAME = "urls"

    assert PgConfig.get_db_uri() == "postgres://u:p@db:5432/urls"


def test_production_requires_secret(monkeypatch):
    monkeypatch.setattr(ProductionConfig, "SECRET_KEY", None)
    with pytest.raises(ValueError):
        ProductionConfig.validate()
