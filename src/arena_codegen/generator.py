"""Code generator backends.

The generator itself is ``@cosmwasm/ts-codegen``; it is driven through Node.js with
one job document holding every contract, the output path and the option tree.
"""

from __future__ import annotations

import json
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .errors import GenerationError, PrereqError
from .logging import log_event
from .options import GenerationJob
from .process import run_command

if TYPE_CHECKING:
    from .context import RunContext

CODEGEN_PACKAGE = "@cosmwasm/ts-codegen"

_DRIVER_JS = """
const fs = require("fs");
const mod = require("@cosmwasm/ts-codegen");
const codegen = mod.default || mod;
const job = JSON.parse(fs.readFileSync(process.argv[1], "utf8"));
codegen({ contracts: job.contracts, outPath: job.outPath, options: job.options }).then(
  () => process.exit(0),
  (err) => {
    process.stderr.write(String((err && err.stack) || err) + "\\n");
    process.exit(1);
  },
);
"""


class CodegenBackend(Protocol):
    def generate(self, job: GenerationJob) -> None: ...


@dataclass
class RecordingBackend:
    jobs: list[GenerationJob] = field(default_factory=list)

    def generate(self, job: GenerationJob) -> None:
        self.jobs.append(job)


@dataclass
class NodeCodegenBackend:
    ctx: RunContext
    node: str = "node"
    timeout_seconds: int = 0

    def _resolve_node(self) -> str:
        resolved = shutil.which(self.node)
        if resolved is None:
            raise PrereqError(f"node executable not found: {self.node} (install Node.js or pass --node)")
        return resolved

    def generate(self, job: GenerationJob) -> None:
        node = self._resolve_node()
        with tempfile.TemporaryDirectory(prefix="arena-codegen-") as tmp:
            job_file = Path(tmp) / "job.json"
            job_file.write_text(json.dumps(job.to_payload(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
            log_event(
                self.ctx,
                "info",
                "generator",
                "invoke",
                package=CODEGEN_PACKAGE,
                contracts=len(job.contracts),
                out_path=job.out_path,
            )
            result = run_command(
                [node, "-e", _DRIVER_JS, str(job_file)],
                self.ctx.base_dir,
                timeout_seconds=self.timeout_seconds,
                ctx=self.ctx,
            )
        if result.timed_out:
            raise GenerationError(f"{CODEGEN_PACKAGE} timed out after {self.timeout_seconds}s", result.combined_output)
        if result.code != 0:
            detail = result.stderr.strip().splitlines()
            summary = detail[0] if detail else f"exit code {result.code}"
            raise GenerationError(f"{CODEGEN_PACKAGE} failed: {summary}", result.combined_output)
