from __future__ import annotations

from collections import Counter
from dataclasses import dataclass


@dataclass(frozen=True)
class ContractEntry:
    """One discovered contract as handed to the code generator."""

    name: str
    dir: str

    def to_payload(self) -> dict[str, str]:
        return {"name": self.name, "dir": self.dir}


def duplicate_names(entries: list[ContractEntry]) -> list[str]:
    counts = Counter(entry.name for entry in entries)
    return sorted(name for name, count in counts.items() if count > 1)
