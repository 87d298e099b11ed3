# tests/conftest.py
import logging

import pytest

from qbuilder.base.schema import _SCHEMA_CACHE

# Silence verbose loggers
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def clear_schema_cache():
    _SCHEMA_CACHE.clear()
    yield
    _SCHEMA_CACHE.clear()
