"""PATHKIT CLI entry point.

Defines the top-level ``pathkit`` command (via Click-Extra) and registers the
path commands.

Available commands
- ``pathkit normalize`` / ``pathkit relative``: pure path arithmetic.
- ``pathkit hash``: MD5 digest of a file or a directory tree.
- ``pathkit clean``: empty a directory.
- ``pathkit copy`` / ``pathkit move``: files or whole trees, with a conflict policy.

Notes
- The CLI version is sourced from `pathkit.__version__` and displayed
  automatically by Click-Extra (``--version``).
- ``PATHKIT_ENCODING``, ``PATHKIT_EOF_LINE_BREAK`` and ``PATHKIT_LINE_BREAK``
  are applied to the process-wide defaults before any command runs.

Examples
    $ pathkit normalize '/srv/app/../www/./index.html'
    $ pathkit hash --exclude '*.pyc' src
    $ pathkit copy --policy merge-and-overwrite-if-newer build dist/build
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from pathkit import __version__
from pathkit.config import InvalidSettingError, apply_env_defaults
from pathkit.logging import config_console_handler, config_flight_recorder, log_startup

from .commands import clean, copy, hash_, move, normalize, relative
from .helpers.log_level_parser import parse_log_level

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """PATHKIT command-line interface.

    Normalize and relate paths, hash files and directory trees for change
    detection, and copy or move trees with explicit conflict policies.
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
    help="Show one more log level per repetition (WARNING, INFO, DEBUG).",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Show one less log level per repetition (ERROR, CRITICAL).",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Log everything to the console, with timestamps and source locations.",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File the flight recorder writes to.",
    default=Path(user_log_dir("pathkit", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="PATHKIT_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="PATHKIT_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep recent DEBUG records in memory and write them to --log-path "
        "once a WARNING is logged."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Also write the flight recorder to --log-path on a clean exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the level of one logger as NAME=LEVEL, for example "
        "-L pathkit.adapters=DEBUG. Repeatable."
    ),
    default=("click_extra=WARNING",),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def pathkit(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """PATHKIT command-line interface."""

    level = logging.WARNING - 10 * (verbose_count - quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = [
        config_console_handler(level=level, debug_mode=debug, color=ctx.color is not False)
    ]
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # -L overrides apply to the console and the flight recorder alike
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    try:
        defaults = apply_env_defaults()
    except InvalidSettingError as e:
        raise click.ClickException(str(e)) from e

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
        defaults=defaults,
    )

    ctx.call_on_close(logging.shutdown)


for _command in (normalize, relative, hash_, clean, copy, move):
    pathkit.add_command(_command)
