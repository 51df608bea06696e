"""Schema directory discovery.

Matches what ``<root>/@(contracts|packages)/**/schema`` selects: any directory
named ``schema`` at any depth below one of the subtrees, skipping dot-directories
and never following symlinks.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import DiscoveryError
from .logging import log_event
from .naming import SCHEMA_DIR_NAME

if TYPE_CHECKING:
    from .context import RunContext

DEFAULT_SUBTREES = ("contracts", "packages")


class OnDiscoveryError(str, Enum):
    FAIL = "fail"
    CONTINUE = "continue"


def _walk_subtree(top: Path, dir_name: str, errors: list[OSError]) -> list[Path]:
    matches: list[Path] = []
    for current, dirnames, _files in os.walk(top, onerror=errors.append, followlinks=False):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        base = Path(current)
        matches.extend(base / d for d in dirnames if d == dir_name)
    return matches


def discover_schema_dirs(
    root: Path,
    subtrees: Sequence[str] = DEFAULT_SUBTREES,
    dir_name: str = SCHEMA_DIR_NAME,
    on_error: OnDiscoveryError = OnDiscoveryError.FAIL,
    ctx: RunContext | None = None,
) -> list[Path]:
    if not root.is_dir():
        raise DiscoveryError(f"discovery root is not a directory: {root}")
    found: list[Path] = []
    for subtree in subtrees:
        top = root / subtree
        if not top.is_dir():
            if ctx is not None:
                log_event(ctx, "debug", "discovery", "skip-subtree", subtree=subtree, path=str(top))
            continue
        errors: list[OSError] = []
        matches = _walk_subtree(top, dir_name, errors)
        for exc in errors:
            if on_error is OnDiscoveryError.FAIL:
                raise DiscoveryError(f"failed to enumerate {exc.filename or top}: {exc.strerror or exc}") from exc
            if ctx is not None:
                log_event(ctx, "warning", "discovery", "walk-error", path=str(exc.filename or top), error=str(exc))
        found.extend(matches)
    if ctx is not None:
        log_event(ctx, "debug", "discovery", "done", root=str(root), matches=len(found))
    return found
