"""Shared fixtures: a temporary DuckDB-backed blog and a switchable current user."""

import pytest

from inkwell.blog import Blog
from inkwell.core.config import BlogConfig
from inkwell.services import StaticAuth


@pytest.fixture
def config(tmp_path) -> BlogConfig:
    return BlogConfig(database_url=f"duckdb:///{tmp_path / 'blog.duckdb'}")


@pytest.fixture
def auth() -> StaticAuth:
    return StaticAuth()


@pytest.fixture
def blog(config, auth):
    instance = Blog(config, auth=auth)
    yield instance
    instance.db.close_sync()


@pytest.fixture
async def alice(blog, auth):
    """A signed-in user named Alice."""
    user = await blog.users.create_user(name="Alice Smith", email="alice@example.com")
    auth.sign_in(user.id)
    return user


@pytest.fixture
async def bob(blog):
    return await blog.users.create_user(name="Bob Jones", email="bob@example.com")
