"""PATHKIT path commands.

Thin wrappers over the library: each command parses its arguments into
`AbsolutePath` values, calls one operation and prints the result.

Behavior
- Results (normalized paths, relative paths, digests, final targets) go to
  **stdout**; status lines go to **stderr** so output stays pipeable.
- Relative path arguments are resolved against the current directory.

Failure modes
- Any `PathError` (missing source, conflicting target, malformed path,
  invalid policy) becomes a ``ClickException``: message on stderr, exit code 1.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click

from pathkit.domain import syntax
from pathkit.domain.absolute_path import AbsolutePath
from pathkit.domain.errors import FileNotFound, PathError
from pathkit.domain.policy import ExistsPolicy

from .helpers import success, warn

logger = logging.getLogger(__name__)

POLICIES = {
    "fail": ExistsPolicy.FAIL,
    "merge-and-skip": ExistsPolicy.MERGE_AND_SKIP,
    "merge-and-overwrite": ExistsPolicy.MERGE_AND_OVERWRITE,
    "merge-and-overwrite-if-newer": ExistsPolicy.MERGE_AND_OVERWRITE_IF_NEWER,
}

policy_option = click.option(
    "--policy",
    "-p",
    type=click.Choice(list(POLICIES), case_sensitive=False),
    default="fail",
    show_default=True,
    help="What to do when the target directory or a target file already exists.",
)


@contextmanager
def _path_errors() -> Iterator[None]:
    try:
        yield
    except PathError as e:
        logger.debug("Operation failed", exc_info=True)
        raise click.ClickException(str(e)) from e


def _resolve(raw: str) -> AbsolutePath:
    with _path_errors():
        return AbsolutePath.resolve(raw)


@click.command()
@click.argument("path")
@click.option(
    "--separator",
    "-s",
    type=click.Choice(["/", "\\"]),
    default=None,
    help="Separator to emit. Defaults to the one implied by the root.",
)
def normalize(path: str, separator: str | None) -> None:
    """Print PATH with `.` and `..` segments resolved."""
    with _path_errors():
        click.echo(syntax.normalize(path, separator))


@click.command()
@click.argument("base")
@click.argument("dest")
def relative(base: str, dest: str) -> None:
    """Print the relative path leading from BASE to DEST."""
    with _path_errors():
        click.echo(syntax.relative_to(base, dest))


@click.command(name="hash")
@click.argument("path")
@click.option(
    "--exclude",
    "-x",
    "excludes",
    multiple=True,
    help="Wildcard on file names to leave out of a directory digest. Repeatable.",
)
def hash_(path: str, excludes: tuple[str, ...]) -> None:
    """Print the MD5 digest of a file or a directory tree."""
    target = _resolve(path)

    def include(candidate: AbsolutePath) -> bool:
        return not any(fnmatch.fnmatch(candidate.name, pattern) for pattern in excludes)

    with _path_errors():
        if target.file.exists():
            digest = target.file.get_hash()
        elif target.directory.exists():
            digest = target.directory.get_directory_hash(include)
        else:
            raise FileNotFound(str(target))
    click.echo(digest)


@click.command()
@click.argument("directory")
def clean(directory: str) -> None:
    """Delete everything in DIRECTORY and recreate it empty."""
    target = _resolve(directory)
    with _path_errors():
        target.directory.clean_and_recreate()
    success(f"Cleaned '{target}'.")


def _transfer(verb: str, source: str, target: str, policy: str) -> None:
    src, dst = _resolve(source), _resolve(target)
    exists_policy = POLICIES[policy.lower()]
    logger.info("%s '%s' -> '%s' (policy=%s)", verb, src, dst, policy)

    with _path_errors():
        if src.file.exists():
            operation = src.file.move if verb == "move" else src.file.copy
        elif src.directory.exists():
            operation = src.directory.move if verb == "move" else src.directory.copy
        else:
            raise FileNotFound(str(src))
        result = operation(dst, exists_policy)

    if result == src:
        warn(f"Skipped '{src}': target exists.")
    else:
        success(f"{verb.capitalize()} of '{src}' to '{result}' done.")
    click.echo(str(result))


@click.command()
@click.argument("source")
@click.argument("target")
@policy_option
def copy(source: str, target: str, policy: str) -> None:
    """Copy the file or directory SOURCE to TARGET."""
    _transfer("copy", source, target, policy)


@click.command()
@click.argument("source")
@click.argument("target")
@policy_option
def move(source: str, target: str, policy: str) -> None:
    """Move the file or directory SOURCE to TARGET."""
    _transfer("move", source, target, policy)
