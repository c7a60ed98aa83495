"""Conflict policies for move/copy operations.

An `ExistsPolicy` carries one bit on each of two independent axes:

- **directory axis**: what to do when a target directory already exists
  (`DIRECTORY_FAIL` or `DIRECTORY_MERGE`);
- **file axis**: what to do when a target file already exists (`FILE_FAIL`,
  `FILE_SKIP`, `FILE_OVERWRITE` or `FILE_OVERWRITE_IF_NEWER`).

Operations only consult the axis they need, and exactly one bit must be set on
that axis. The decision functions below are pure; timestamps are supplied by
the caller.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum, Flag

from .errors import AlreadyExists, InvalidConfigurationError


class ExistsPolicy(Flag):
    """Flags for handling existing files and directories."""

    DIRECTORY_FAIL = 1
    DIRECTORY_MERGE = 2
    FILE_FAIL = 4
    FILE_SKIP = 8
    FILE_OVERWRITE = 16
    FILE_OVERWRITE_IF_NEWER = 32

    FAIL = DIRECTORY_FAIL | FILE_FAIL
    MERGE_AND_SKIP = DIRECTORY_MERGE | FILE_SKIP
    MERGE_AND_OVERWRITE = DIRECTORY_MERGE | FILE_OVERWRITE
    MERGE_AND_OVERWRITE_IF_NEWER = DIRECTORY_MERGE | FILE_OVERWRITE_IF_NEWER


DIRECTORY_POLICIES = ExistsPolicy.DIRECTORY_FAIL | ExistsPolicy.DIRECTORY_MERGE
FILE_POLICIES = (
    ExistsPolicy.FILE_FAIL
    | ExistsPolicy.FILE_SKIP
    | ExistsPolicy.FILE_OVERWRITE
    | ExistsPolicy.FILE_OVERWRITE_IF_NEWER
)


class Resolution(Enum):
    """Outcome of evaluating a file conflict."""

    PROCEED = "proceed"
    SKIP = "skip"
    UP_TO_DATE = "up-to-date"


def _single_bit(
    policy: ExistsPolicy, axis: ExistsPolicy, axis_name: str
) -> ExistsPolicy:
    selected = policy & axis
    if selected.value.bit_count() != 1:
        raise InvalidConfigurationError(
            f"Exactly one {axis_name} policy must be set, got {policy!r}"
        )
    return selected


def file_policy(policy: ExistsPolicy) -> ExistsPolicy:
    """Return the single file-axis bit of `policy`.

    Raises:
        InvalidConfigurationError: If zero or several file bits are set.
    """
    return _single_bit(policy, FILE_POLICIES, "file")


def directory_policy(policy: ExistsPolicy) -> ExistsPolicy:
    """Return the single directory-axis bit of `policy`.

    Raises:
        InvalidConfigurationError: If zero or several directory bits are set.
    """
    return _single_bit(policy, DIRECTORY_POLICIES, "directory")


def allows_directory_merge(policy: ExistsPolicy) -> bool:
    """Return True if an existing target directory may be merged into."""
    return directory_policy(policy) == ExistsPolicy.DIRECTORY_MERGE


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        moment = moment.astimezone()  # naive values are local time
    return moment.astimezone(timezone.utc)


def resolve_file_conflict(
    policy: ExistsPolicy,
    target: object,
    *,
    source_modified: datetime,
    target_modified: datetime,
) -> Resolution:
    """Decide what to do with a file operation whose target already exists.

    Args:
        policy: The policy to evaluate; only its file axis is consulted.
        target: The conflicting target, used in the error message.
        source_modified: Last-write time of the source.
        target_modified: Last-write time of the existing target.

    Returns:
        Resolution: `PROCEED` to overwrite, `SKIP` to leave everything as is
        and report the source, `UP_TO_DATE` when the target is at least as new
        as the source and should be reported instead.

    Raises:
        AlreadyExists: If the file policy is `FILE_FAIL`.
        InvalidConfigurationError: If zero or several file bits are set.
    """
    match file_policy(policy):
        case ExistsPolicy.FILE_FAIL:
            raise AlreadyExists(str(target))
        case ExistsPolicy.FILE_SKIP:
            return Resolution.SKIP
        case ExistsPolicy.FILE_OVERWRITE:
            return Resolution.PROCEED
        case _:
            if _as_utc(target_modified) < _as_utc(source_modified):
                return Resolution.PROCEED
            return Resolution.UP_TO_DATE
