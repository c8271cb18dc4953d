"""Tests for request payload validation.

The ``short_urls`` table carries no field validators, so these models are the
only gate between request bodies and storage.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from shortener.schemas import DeleteURLRequest, SaveURLRequest


def test_save_request_accepts_alias():
    data = SaveURLRequest(url=" https://example.com/a ", alias="my_alias-1")

    assert data.url == "https://example.com/a"
    assert data.alias == "my_alias-1"


def test_save_request_blank_alias_is_none():
    assert SaveURLRequest(url="https://example.com", alias="  ").alias is None


@pytest.mark.parametrize("alias", ["../etc", "a b", "a/b", "é", "x" * 256])
def test_save_request_rejects_bad_alias(alias):
    with pytest.raises(ValidationError):
        SaveURLRequest(url="https://example.com", alias=alias)


@pytest.mark.parametrize("url", ["", "example.com", "ftp://example.com", "javascript:alert(1)"])
def test_save_request_rejects_bad_url(url):
    with pytest.raises(ValidationError):
        SaveURLRequest(url=url)


def test_delete_request_requires_alias():
    with pytest.raises(ValidationError):
        DeleteURLRequest(alias="   ")
