"""The ``janusspec run`` command."""

from pathlib import Path

import click

from janusspec.adapters.reporters import ConsoleReporter
from janusspec.config import ASYNC_TIMEOUT_ENV, DEFAULT_ASYNC_TIMEOUT_MS, validate_timeout_ms
from janusspec.errors import InvalidTimeoutError, SpecFileLoadError
from janusspec.loader import load_spec_files
from janusspec.registry import Registry
from janusspec.scheduler import RunScheduler

from .helpers import error, success, warn

EXIT_FAILED = 1
EXIT_LOAD_ERROR = 2


def _timeout_callback(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter,  # pylint: disable=unused-argument
    value: object,
) -> int:
    try:
        return validate_timeout_ms(value)
    except InvalidTimeoutError as e:
        raise click.BadParameter(str(e)) from e


@click.command("run")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--timeout",
    "timeout_ms",
    default=DEFAULT_ASYNC_TIMEOUT_MS,
    callback=_timeout_callback,
    envvar=ASYNC_TIMEOUT_ENV,
    show_default=True,
    show_envvar=True,
    help="Milliseconds each spec may wait for its async continuation.",
)
@click.pass_context
def run(ctx: click.Context, files: tuple[Path, ...], timeout_ms: int) -> None:
    """Load the given spec FILES and run every registered spec in order.

    Exits with status 1 when any spec failed or no spec ran, and 2 when a
    file could not be loaded.
    """
    registry = Registry()
    try:
        load_spec_files(list(files), registry)
    except SpecFileLoadError as e:
        error(str(e))
        ctx.exit(EXIT_LOAD_ERROR)

    if len(registry) == 0:
        warn("No specs were registered.")
        ctx.exit(EXIT_FAILED)

    reporter = ConsoleReporter(color=ctx.color)
    summary = RunScheduler(registry, reporter, timeout_ms=timeout_ms).run()

    if not summary.ok:
        ctx.exit(EXIT_FAILED)
    success(f"All {summary.total} spec(s) passed.")
