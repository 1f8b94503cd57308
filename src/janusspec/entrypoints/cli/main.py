"""The ``janusspec`` command group.

The group owns logging for every subcommand: console verbosity, the crash
log (flight recorder) and per-logger overrides. Spec execution lives in the
``run`` subcommand.

Examples
    $ janusspec run specs/math_specs.py
    $ janusspec -v run --timeout 200 specs/async_specs.py
    $ janusspec -L janusspec.observation=DEBUG --force-flush run specs/io_specs.py
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from janusspec import __version__
from janusspec.logging import LoggingSettings, configure_logging, log_startup

from .helpers.log_level_parser import parse_log_level
from .run import run as run_command

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = (
    Path(user_log_dir("janusspec", appauthor=False, ensure_exists=True)) / "last-run.log"
)

HELP = """Run janusspec spec files.

    Specs registered with janusspec.test(...) run one at a time in the order
    they were registered. Each gets a pass/fail verdict, and the process exits
    non-zero when any of them failed.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Log more on stderr: -v adds engine INFO lines, -vv adds spec lifecycle DEBUG lines.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Log less on stderr: -q hides timeout and late-assertion warnings, -qq hides errors.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Log everything, tagged with logger name, running spec and source location.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_PATH,
    envvar="JANUS_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to when a run goes wrong.",
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="JANUS_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    show_envvar=True,
    help=(
        "Buffer the most recent DEBUG records in memory, whatever -v/-q say, and write "
        "them to --log-path as soon as a spec times out, raises, or asserts after it "
        "finished. Each line names the spec that was running."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush",
    default=False,
    show_default=True,
    show_envvar=True,
    help="Write the flight recorder to --log-path at exit even if every spec behaved.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    default=("asyncio=WARNING",),
    envvar="JANUS_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
    help=(
        "Minimum level for one logger, as NAME=LEVEL; applies to console and flight "
        "recorder alike. Repeat it (-L janusspec.scheduler=DEBUG -L asyncio=INFO) or "
        "list pairs in JANUS_LOGGER_LEVELS."
    ),
)
@clickx.pass_context
def janusspec(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """janusspec command group."""
    settings = LoggingSettings(
        verbose_count=verbose_count,
        quiet_count=quiet_count,
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_recorder_capacity=flight_recorder_capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, settings, handlers, __version__)

    # flush the flight recorder once the subcommand is done
    ctx.call_on_close(logging.shutdown)


janusspec.add_command(run_command)
