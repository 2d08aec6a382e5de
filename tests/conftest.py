"""Pytest configuration and fixtures for jsonblade tests."""

import pytest

from jsonblade import JSONBlade, clear_template_cache, reset_filters, reset_template_config


@pytest.fixture(autouse=True)
def _isolate_globals():
    """Every test starts from default config, empty registries and a cold parse cache."""
    reset_template_config()
    reset_filters()
    clear_template_cache()
    yield
    reset_template_config()
    reset_filters()
    clear_template_cache()


@pytest.fixture
def blade():
    """A JSONBlade seeded with every built-in filter group."""
    return JSONBlade(use_builtins=True)


@pytest.fixture
def strict_blade():
    """A JSONBlade whose private config raises on the first structured error."""
    return JSONBlade(use_builtins=True, config={"strict_mode": True, "throw_on_error": True})


@pytest.fixture
def users():
    return [
        {"name": "Alice", "age": 25, "active": True},
        {"name": "Bob", "age": 30, "active": False},
        {"name": "Carol", "age": 20, "active": True},
    ]
