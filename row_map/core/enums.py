"""Row state and row version enumerations."""

from __future__ import annotations

from enum import Enum


class RowState(Enum):
    """Change-tracking state of a row in a row-set."""

    DETACHED = "detached"
    ADDED = "added"
    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    DELETED = "deleted"


class RowVersion(Enum):
    """Which copy of a change-tracked row to read.

    DEFAULT resolves to PROPOSED while a row is being edited, to ORIGINAL for
    deleted rows and to CURRENT otherwise.
    """

    DEFAULT = "default"
    CURRENT = "current"
    ORIGINAL = "original"
    PROPOSED = "proposed"


class Construction(Enum):
    """How a descriptor produces new instances of its type."""

    DEFAULT = "default"
    INJECT = "inject"
    KWARGS = "kwargs"
