"""Discovery -> derivation -> one generator call."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from .config import CodegenConfig
from .context import RunContext
from .discovery import discover_schema_dirs
from .generator import CodegenBackend
from .logging import log_event
from .model import ContractEntry, duplicate_names
from .naming import build_entries
from .options import GenerationJob

DONE_MARKER = "✨ all done!"

EntryBuilder = Callable[[Iterable[Path], Path, str], list[ContractEntry]]


@dataclass(frozen=True)
class PipelineResult:
    job: GenerationJob

    @property
    def contracts(self) -> tuple[ContractEntry, ...]:
        return self.job.contracts


def collect_entries(
    config: CodegenConfig,
    ctx: RunContext,
    build: EntryBuilder = build_entries,
) -> list[ContractEntry]:
    root = config.root_path(ctx.base_dir)
    paths = discover_schema_dirs(
        root,
        subtrees=config.subtrees,
        dir_name=config.schema_dir_name,
        on_error=config.on_discovery_error,
        ctx=ctx,
    )
    entries = build(paths, ctx.base_dir, config.schema_dir_name)
    for name in duplicate_names(entries):
        log_event(ctx, "warning", "pipeline", "duplicate-name", name=name)
    return entries


def run_pipeline(
    config: CodegenConfig,
    backend: CodegenBackend,
    ctx: RunContext,
    build: EntryBuilder = build_entries,
    echo: Callable[[str], None] = print,
) -> PipelineResult:
    entries = collect_entries(config, ctx, build)
    for entry in entries:
        echo(entry.name)
    job = GenerationJob(contracts=tuple(entries), out_path=config.out_path, options=config.options)
    backend.generate(job)
    log_event(ctx, "info", "pipeline", "generated", contracts=len(entries), out_path=config.out_path)
    echo(DONE_MARKER)
    return PipelineResult(job=job)
