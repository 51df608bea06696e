"""Contract name and schema directory derivation.

A matched path looks like ``../contracts/cw20/schema``. The contract name is the
segment right before the schema directory; the directory itself is rewritten to an
absolute, forward-slash path the generator can consume on any host.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable
from pathlib import Path

from .errors import DerivationError
from .model import ContractEntry

SCHEMA_DIR_NAME = "schema"

_SEPARATORS = re.compile(r"[\\/]+")
_DRIVE = re.compile(r"^[A-Za-z]:/")


def split_segments(path: str) -> list[str]:
    return [part for part in _SEPARATORS.split(path) if part]


def derive_contract_name(path: str | Path, dir_name: str = SCHEMA_DIR_NAME) -> str:
    raw = str(path)
    segments = split_segments(raw)
    if len(segments) < 2:
        raise DerivationError(f"cannot derive contract name from `{raw}`: expected <name>/{dir_name}")
    if segments[-1] != dir_name:
        raise DerivationError(f"cannot derive contract name from `{raw}`: last segment is not `{dir_name}`")
    name = segments[-2]
    if name in {".", ".."}:
        raise DerivationError(f"cannot derive contract name from `{raw}`: `{name}` is not a directory name")
    return name


def normalize_schema_dir(path: str | Path, base_dir: Path) -> str:
    raw = str(path).replace("\\", "/")
    if _DRIVE.match(raw):
        drive, rest = raw[:2], raw[2:]
        return drive + posixpath.normpath(rest)
    if not raw.startswith("/"):
        raw = posixpath.join(base_dir.resolve().as_posix(), raw)
    unc = raw.startswith("//") and not raw.startswith("///")
    normalized = posixpath.normpath(raw)
    # a leading `//` only survives for UNC (`\\server\share`) input
    if normalized.startswith("//") and not unc:
        normalized = "/" + normalized.lstrip("/")
    return normalized


def build_entries(
    paths: Iterable[str | Path],
    base_dir: Path,
    dir_name: str = SCHEMA_DIR_NAME,
) -> list[ContractEntry]:
    return [
        ContractEntry(name=derive_contract_name(p, dir_name), dir=normalize_schema_dir(p, base_dir))
        for p in paths
    ]
