"""Memo command - run a demo function through the memoizing cache.

Parses CLI options on top of the loaded configuration, wraps the chosen
function with ``memoize`` and prints per-call timings and cache statistics.
"""

from dataclasses import dataclass, replace
from pathlib import Path
import time

import click
from rich.console import Console

from ...config import ConfigLoader
from ...domain.entities.eviction_policy import PolicyName
from ...domain.exceptions import MemoQueueError
from ...infrastructure.logging import ConsoleLogger
from ...memoize import MemoizedFunction, MemoizeOptions
from ..demo_functions import DEMO_FUNCTIONS, evict_first_even
from ..presenters.stats import CacheStatsPresenter, CallRow

console = Console()


@dataclass(frozen=True)
class MemoCommandOptions:
    function_name: str
    inputs: tuple[int, ...]
    config_file: Path | None
    policy: str | None
    max_size: int | None
    max_age_ms: int | None
    repeat: int
    verbose: int


@click.command()
@click.argument("function_name", type=click.Choice(sorted(DEMO_FUNCTIONS)))
@click.argument("inputs", nargs=-1, type=int, required=True)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a memoqueue.toml config file (default: ./memoqueue.toml)",
)
@click.option(
    "--policy",
    type=click.Choice([p.value for p in PolicyName], case_sensitive=False),
    help="Eviction policy (default: from config, LRU)",
)
@click.option(
    "--max-size",
    type=click.IntRange(min=1),
    help="Maximum number of cached results (default: unbounded)",
)
@click.option(
    "--max-age-ms",
    type=click.IntRange(min=1),
    help="Entry lifetime in milliseconds for the TIME policy",
)
@click.option(
    "--repeat",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of passes over the inputs",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for evictions, -vv for hit/miss traces)",
)
def memo_command(**kwargs: object) -> None:
    """Run FUNCTION_NAME over INPUTS with a memoizing cache."""
    options = MemoCommandOptions(**kwargs)  # type: ignore[arg-type]
    try:
        config = ConfigLoader.load(options.config_file)
    except ValueError as exc:
        raise click.UsageError(f"Invalid configuration: {exc}") from exc
    config = replace(
        config,
        eviction_policy=options.policy or config.eviction_policy,
        cache_max_size=options.max_size or config.cache_max_size,
        max_age_ms=options.max_age_ms or config.max_age_ms,
        verbosity=max(options.verbose, config.verbosity),
    )
    logger = ConsoleLogger(console, verbosity=config.verbosity)
    logger.set_context(function_name=options.function_name)

    custom_evict = None
    if config.eviction_policy.upper() == PolicyName.CUSTOM:
        custom_evict = evict_first_even
    try:
        memo_options = MemoizeOptions.from_config(config, custom_evict=custom_evict)
    except MemoQueueError as exc:
        raise click.UsageError(str(exc)) from exc

    wrapped = MemoizedFunction(
        DEMO_FUNCTIONS[options.function_name], memo_options, logger=logger
    )
    rows: list[CallRow] = []
    for _ in range(options.repeat):
        for argument in options.inputs:
            hits_before = wrapped.cache_info().hits
            start = time.perf_counter()
            try:
                result = wrapped(argument)
            except MemoQueueError as exc:
                logger.error(str(exc))
                raise click.ClickException(str(exc)) from exc
            elapsed_ms = (time.perf_counter() - start) * 1000
            cached = wrapped.cache_info().hits > hits_before
            rows.append(CallRow(argument, result, elapsed_ms, cached))

    stats = wrapped.cache_info()
    CacheStatsPresenter(console).present(options.function_name, rows, stats)
    logger.log_cache_stats(options.function_name, stats)
    logger.log_final_stats()
