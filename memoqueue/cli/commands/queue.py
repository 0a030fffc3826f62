"""Queue command - fill a bidirectional priority queue and drain it.

Items are given as ``NAME:PRIORITY``. Each ``--take`` performs one dequeue
with the given selector, in order.
"""

from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console

from ...config import ConfigLoader
from ...domain.entities.queue_entry import QueueEntry, Selector, SortKey
from ...domain.exceptions import QueueError
from ...domain.services.priority_queue import (
    BiDirectionalPriorityQueue,
    IndexedPriorityQueue,
)
from ...infrastructure.logging import ConsoleLogger
from ..presenters.stats import QueuePresenter

console = Console()


@dataclass(frozen=True)
class QueueCommandOptions:
    items: tuple[str, ...]
    config_file: Path | None
    selectors: tuple[str, ...]
    sort_key: str | None
    indexed: bool
    verbose: int


def parse_item(spec: str) -> tuple[str, float]:
    name, sep, raw_priority = spec.rpartition(":")
    if not sep or not name:
        raise click.BadParameter(
            f"{spec!r} is not in NAME:PRIORITY form", param_hint="ITEMS"
        )
    try:
        priority = float(raw_priority)
    except ValueError as exc:
        raise click.BadParameter(
            f"{raw_priority!r} is not a number", param_hint="ITEMS"
        ) from exc
    return name, priority


@click.command()
@click.argument("items", nargs=-1, required=True)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a memoqueue.toml config file (default: ./memoqueue.toml)",
)
@click.option(
    "--take",
    "selectors",
    multiple=True,
    type=click.Choice([s.value for s in Selector], case_sensitive=False),
    help="Dequeue one item with this selector (repeatable)",
)
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice([k.value for k in SortKey], case_sensitive=False),
    help="Order of the remaining-items table (default: from config, priority-desc)",
)
@click.option(
    "--indexed",
    is_flag=True,
    help="Use the queue variant that caches the highest-priority index",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity")
def queue_command(**kwargs: object) -> None:
    """Enqueue ITEMS (NAME:PRIORITY) and dequeue with the given selectors."""
    options = QueueCommandOptions(**kwargs)  # type: ignore[arg-type]
    try:
        config = ConfigLoader.load(options.config_file)
    except ValueError as exc:
        raise click.UsageError(f"Invalid configuration: {exc}") from exc
    logger = ConsoleLogger(console, verbosity=max(options.verbose, config.verbosity))
    sort_key = options.sort_key or config.queue_sort

    queue: BiDirectionalPriorityQueue[str] = (
        IndexedPriorityQueue() if options.indexed else BiDirectionalPriorityQueue()
    )
    for spec in options.items:
        name, priority = parse_item(spec)
        try:
            queue.enqueue(name, priority)
        except QueueError as exc:
            logger.error(f"Enqueue error: {exc}")
            raise click.BadParameter(str(exc), param_hint="ITEMS") from exc
        logger.debug(f"Enqueued {name!r} with priority {priority:g}")

    taken: list[tuple[str, QueueEntry[str] | None]] = []
    for selector in options.selectors:
        entry = queue.dequeue_entry(selector)
        taken.append((selector, entry))
        if entry is not None:
            logger.verbose(f"Dequeued {entry.item!r} by {selector}")

    QueuePresenter(console).present(
        taken, queue.to_entries(sort_key), queue.get_stats(), sort_key=sort_key
    )
    logger.log_queue_stats(queue.get_stats())
    logger.log_final_stats()
