"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from theaters.stores import DjangoTheaterStore, InMemoryTheaterStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def memory_store() -> InMemoryTheaterStore:
    return InMemoryTheaterStore()


@pytest.fixture
def django_store() -> DjangoTheaterStore:
    return DjangoTheaterStore()


@pytest.fixture
def write_csv(tmp_path):
    """Write ``content`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def orchestra_balcony_csv() -> str:
    """Three seat ranges: 28 seats across two sections."""
    return (
        "section,row,seat_start,seat_end\n"
        "Orchestra,1,1,10\n"
        "Orchestra,2,1,10\n"
        "Balcony,1,1,8\n"
    )
