"""Tests for the command line interface."""

import asyncio

import pytest
import yaml
from typer.testing import CliRunner

from inkwell import __version__
from inkwell.blog import Blog
from inkwell.cli import app
from inkwell.core.config import DATABASE_URL_ENV, load_config
from inkwell.models import Post
from inkwell.services import StaticAuth

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    monkeypatch.delenv(DATABASE_URL_ENV, raising=False)
    path = tmp_path / "inkwell.yaml"
    path.write_text(yaml.dump({"database_url": f"duckdb:///{tmp_path / 'cli.duckdb'}"}))
    return path


def _seed(config_path) -> None:
    async def _go() -> None:
        auth = StaticAuth()
        blog = Blog(load_config(config_path), auth=auth)
        try:
            user = await blog.users.create_user(name="Jane Doe")
            auth.sign_in(user.id)
            await blog.posts.create("Learning Python", "<p>typed code</p>")
            await blog.db.posts.insert(Post(title="Legacy Post", content="old", author_id=user.id))
        finally:
            await blog.close()

    asyncio.run(_go())


class TestCli:
    """Tests for CLI commands."""

    def test_version(self):
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_slugify(self):
        """Test slugify prints the normalized token."""
        result = runner.invoke(app, ["slugify", "  ¡Hola, Mundo!  "])
        assert result.exit_code == 0
        assert result.output.strip() == "hola-mundo"

    def test_slugify_user_fallback(self):
        """Test the user kind uses its own fallback."""
        result = runner.invoke(app, ["slugify", "???", "--kind", "user"])
        assert result.output.strip() == "user"

    def test_info(self):
        """Test info lists example commands."""
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "inkwell backfill" in result.output

    def test_missing_config(self, tmp_path):
        """Test a missing config file exits with an error."""
        result = runner.invoke(app, ["init-db", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_init_db(self, config_path):
        """Test init-db creates the database."""
        result = runner.invoke(app, ["init-db", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "Database ready" in result.output

    def test_posts_search_and_backfill(self, config_path):
        """Test listing, searching and backfilling against a seeded database."""
        _seed(config_path)

        listed = runner.invoke(app, ["posts", "--config", str(config_path)])
        assert listed.exit_code == 0
        assert "learning-python" in listed.output
        assert "unassigned" in listed.output

        by_author = runner.invoke(app, ["posts", "--config", str(config_path), "--author", "jane-doe"])
        assert by_author.exit_code == 0
        assert "Learning Python" in by_author.output

        found = runner.invoke(app, ["search", "typed", "--config", str(config_path)])
        assert found.exit_code == 0
        assert "learning-python" in found.output

        missing = runner.invoke(app, ["search", "zebra", "--config", str(config_path)])
        assert "No posts match" in missing.output

        backfilled = runner.invoke(app, ["backfill", "--config", str(config_path)])
        assert backfilled.exit_code == 0
        assert "Post slugs assigned: 1" in backfilled.output

        relisted = runner.invoke(app, ["posts", "--config", str(config_path)])
        assert "legacy-post" in relisted.output

    def test_posts_unknown_author(self, config_path):
        """Test listing by an unknown username fails."""
        result = runner.invoke(app, ["posts", "--config", str(config_path), "--author", "ghost"])
        assert result.exit_code == 1
        assert "User not found" in result.output

    def test_invalid_config(self, tmp_path, monkeypatch):
        """Test an invalid config file exits with a configuration error."""
        monkeypatch.delenv(DATABASE_URL_ENV, raising=False)
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"excerpt_length": 0}))
        result = runner.invoke(app, ["init-db", "--config", str(path)])
        assert result.exit_code == 1
        assert "Configuration Error" in result.output
