"""CLI for inkwell."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from pathlib import Path
from typing import Annotated, TypeVar

import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from inkwell import __version__
from inkwell.blog import Blog
from inkwell.core.config import BlogConfig, load_config
from inkwell.core.errors import BlogError, ConfigurationError
from inkwell.core.messages import friendly_message
from inkwell.core.progress import BatchProgress
from inkwell.core.slug import POST_FALLBACK, USER_FALLBACK, normalize
from inkwell.models import Post

T = TypeVar("T")

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="inkwell",
    help="inkwell - blog backend maintenance tools",
    add_completion=False,
)
console = Console()

ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")]


class TokenKind(str, Enum):
    POST = "post"
    USER = "user"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"inkwell v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """inkwell CLI."""


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load(config_path: Path | None) -> BlogConfig:
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{escape(str(e))}")
        raise typer.Exit(1) from e


def _run(config: BlogConfig, verbose: bool, fn: Callable[[Blog], Awaitable[T]]) -> T:
    """Run one async operation against a Blog and close it afterwards."""

    async def _go() -> T:
        blog = Blog(config)
        try:
            return await fn(blog)
        finally:
            await blog.close()

    try:
        return asyncio.run(_go())
    except BlogError as e:
        console.print(f"[red]{friendly_message(e)}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1) from e


def _post_table(title: str, posts: list[Post]) -> Table:
    table = Table(title=title)
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Claps", justify="right")
    table.add_column("Created")
    for post in posts:
        table.add_row(
            post.slug or "[yellow](unassigned)[/yellow]",
            post.title,
            str(post.claps),
            post.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


@app.command("init-db")
def init_db(config_path: ConfigOption = None, verbose: VerboseOption = False) -> None:
    """Create the database tables if they do not exist."""
    _configure_logging(verbose)
    config = _load(config_path)

    async def _noop(_blog: Blog) -> None:
        return None

    _run(config, verbose, _noop)
    console.print(f"[green]Database ready:[/green] {config.database_url}")


@app.command()
def slugify(
    text: Annotated[str, typer.Argument(help="Title or display name")],
    kind: Annotated[
        TokenKind, typer.Option("--kind", "-k", help="Entity kind (post/user)")
    ] = TokenKind.POST,
) -> None:
    """Print the normalized token for TEXT."""
    fallback = POST_FALLBACK if kind is TokenKind.POST else USER_FALLBACK
    console.print(normalize(text, fallback), markup=False, highlight=False)


@app.command()
def backfill(config_path: ConfigOption = None, verbose: VerboseOption = False) -> None:
    """Assign slugs and usernames to every legacy post and user."""
    _configure_logging(verbose)
    config = _load(config_path)
    progress = BatchProgress(console)

    report = _run(config, verbose, lambda blog: blog.backfill_job(progress).run())

    console.print("[bold green]Backfill complete![/bold green]")
    console.print(f"  Post slugs assigned: {len(report.post_slugs)}")
    console.print(f"  Usernames assigned: {len(report.usernames)}")


@app.command()
def posts(
    config_path: ConfigOption = None,
    author: Annotated[
        str | None, typer.Option("--author", "-a", help="Only posts by this username")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """List posts, newest first."""
    _configure_logging(verbose)
    config = _load(config_path)

    async def _list(blog: Blog) -> list[Post] | None:
        if author is None:
            return await blog.posts.list_posts()
        profile = await blog.users.get_by_username(author)
        return profile.posts if profile else None

    result = _run(config, verbose, _list)
    if result is None:
        console.print(f"[red]User not found:[/red] {author}")
        raise typer.Exit(1)
    console.print(_post_table("Posts", result[: config.list_page_size]))


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Text to look for")],
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Find posts whose title, excerpt or text contains QUERY."""
    _configure_logging(verbose)
    config = _load(config_path)

    result = _run(config, verbose, lambda blog: blog.posts.search(query))
    if not result:
        console.print(f"No posts match '{query}'.", markup=False)
        return
    console.print(_post_table(f"Results for '{query}'", result[: config.list_page_size]))


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]inkwell[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Create tables")
    console.print("  inkwell init-db --config inkwell.yaml\n")

    console.print("  # Preview a slug")
    console.print('  inkwell slugify "My First Post"\n')

    console.print("  # Assign slugs/usernames to legacy rows")
    console.print("  inkwell backfill --config inkwell.yaml\n")

    console.print("  # List and search posts")
    console.print("  inkwell posts --author jane-doe")
    console.print("  inkwell search tiptap")


if __name__ == "__main__":
    app()
