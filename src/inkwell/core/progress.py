"""Progress tracking utilities for batch operations."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, TypeVar

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

T = TypeVar("T")


class BatchProgress:
    """Progress tracking for long-running batch jobs such as backfills."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize progress tracker.

        Args:
            console: Optional console instance. If None, creates a new one.
        """
        self.console = console or Console()

    async def track(
        self,
        items: list[T],
        func: Callable[[T], Awaitable[Any]],
        description: str = "Processing",
        label: Callable[[T], str] = str,
    ) -> AsyncIterator[tuple[T, Any]]:
        """Track progress while awaiting ``func`` for each item in order.

        Args:
            items: Items to process.
            func: Async function to call for each item.
            description: Description of the operation.
            label: Renders an item for the progress description.

        Yields:
            Tuples of (item, result) as each completes.
        """
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=self.console,
        ) as progress:
            task = progress.add_task(f"[cyan]{description}...", total=len(items))

            for item in items:
                result = await func(item)
                progress.update(task, advance=1, description=f"[cyan]{description}: {label(item)}")
                yield item, result
