from __future__ import annotations

import argparse
import dataclasses
import os
import sys

from . import __version__
from .config import CodegenConfig, load_config
from .context import RunContext
from .discovery import OnDiscoveryError
from .errors import ScriptError
from .exit_codes import ERR_INTERNAL, ERR_USAGE, OK
from .generator import CodegenBackend, NodeCodegenBackend, RecordingBackend
from .logging import log_event
from .output import emit, render_error, resolve_output_format
from .pipeline import DONE_MARKER, collect_entries, run_pipeline


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="arena-codegen")
    p.add_argument("--version", action="version", version=f"arena-codegen {__version__}")
    p.add_argument("--run-id", help="run identifier used in log events")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines on stderr")
    p.add_argument("--config", help="config file (default: codegen.toml/.json/.yaml in the base dir)")
    p.add_argument("--base-dir", help="directory relative paths resolve against (default: cwd)")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    gen_p = sub.add_parser("generate", help="discover schema dirs and run the code generator once")
    _add_discovery_args(gen_p)
    gen_p.add_argument("--out", help="generator output path (default: ./output)")
    gen_p.add_argument("--bundle-file", help="name of the aggregated bundle module")
    gen_p.add_argument("--react-query", action="store_true", help="emit react-query hook bindings")
    gen_p.add_argument("--no-types", action="store_true", help="skip type declaration artifacts")
    gen_p.add_argument("--no-client", action="store_true", help="skip the query/execute client")
    gen_p.add_argument("--node", help="node executable")
    gen_p.add_argument("--timeout-seconds", type=int, help="generator timeout, 0 disables it")
    gen_p.add_argument("--dry-run", action="store_true", help="print the generator job and skip the generator")
    gen_p.add_argument("--json", action="store_true", help="emit JSON output")

    list_p = sub.add_parser("list", help="print discovered contracts")
    _add_discovery_args(list_p)
    list_p.add_argument("--json", action="store_true", help="emit JSON output")

    config_p = sub.add_parser("config", help="print the effective configuration")
    config_p.add_argument("--json", action="store_true", help="emit JSON output")
    return p


def _add_discovery_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--root", help="glob root holding the contract subtrees (default: ..)")
    p.add_argument("--subtree", action="append", dest="subtrees", help="subtree to search; repeatable")
    p.add_argument(
        "--on-discovery-error",
        choices=[policy.value for policy in OnDiscoveryError],
        help="fail (default) or continue with partial results when a directory cannot be read",
    )


def apply_cli_overrides(config: CodegenConfig, ns: argparse.Namespace) -> CodegenConfig:
    changes: dict[str, object] = {}
    if getattr(ns, "root", None):
        changes["root"] = ns.root
    if getattr(ns, "subtrees", None):
        changes["subtrees"] = tuple(ns.subtrees)
    if getattr(ns, "on_discovery_error", None):
        changes["on_discovery_error"] = OnDiscoveryError(ns.on_discovery_error)
    if getattr(ns, "out", None):
        changes["out_path"] = ns.out
    if getattr(ns, "node", None):
        changes["node"] = ns.node
    if getattr(ns, "timeout_seconds", None) is not None:
        changes["timeout_seconds"] = ns.timeout_seconds
    options = config.options
    if getattr(ns, "bundle_file", None):
        options = dataclasses.replace(options, bundle=dataclasses.replace(options.bundle, bundle_file=ns.bundle_file))
    if getattr(ns, "react_query", False):
        options = dataclasses.replace(options, react_query=dataclasses.replace(options.react_query, enabled=True))
    if getattr(ns, "no_types", False):
        options = dataclasses.replace(options, types=dataclasses.replace(options.types, enabled=False))
    if getattr(ns, "no_client", False):
        options = dataclasses.replace(options, client=dataclasses.replace(options.client, enabled=False))
    if options is not config.options:
        changes["options"] = options
    return dataclasses.replace(config, **changes) if changes else config


def _quiet_echo(_line: str) -> None:
    return None


def _run_generate(ctx: RunContext, config: CodegenConfig, ns: argparse.Namespace, as_json: bool) -> int:
    backend: CodegenBackend
    if ns.dry_run:
        backend = RecordingBackend()
    else:
        backend = NodeCodegenBackend(ctx, node=config.node, timeout_seconds=config.timeout_seconds)
    echo = _quiet_echo if (as_json or ns.dry_run) else print
    result = run_pipeline(config, backend, ctx, echo=echo)
    if as_json or ns.dry_run:
        payload: dict[str, object] = {
            "schema_version": 1,
            "tool": "arena-codegen",
            "status": "ok",
            "run_id": ctx.run_id,
            "dry_run": bool(ns.dry_run),
            "job": result.job.to_payload(),
        }
        if not ns.dry_run:
            payload["message"] = DONE_MARKER
        emit(payload, as_json)
    return OK


def _run_list(ctx: RunContext, config: CodegenConfig, as_json: bool) -> int:
    entries = collect_entries(config, ctx)
    if as_json:
        emit(
            {
                "schema_version": 1,
                "tool": "arena-codegen",
                "status": "ok",
                "run_id": ctx.run_id,
                "contracts": [entry.to_payload() for entry in entries],
            },
            True,
        )
        return OK
    for entry in entries:
        print(f"{entry.name}\t{entry.dir}")
    return OK


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    ns = parser.parse_args(argv)
    fmt = resolve_output_format(cli_json=("--json" in raw_argv), cli_format=ns.format, ci_present=bool(os.environ.get("CI")))
    ctx = RunContext.from_args(ns.run_id, ns.base_dir, fmt, ns.verbose, ns.quiet, ns.log_json)  # type: ignore[arg-type]
    as_json = ctx.output_format == "json"
    try:
        log_event(ctx, "info", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format, base_dir=str(ctx.base_dir))
        config = apply_cli_overrides(load_config(ctx.base_dir, ns.config), ns)
        if ns.cmd == "config":
            emit({"schema_version": 1, "tool": "arena-codegen", "status": "ok", "config": config.to_payload()}, as_json)
            return OK
        if ns.cmd == "list":
            return _run_list(ctx, config, as_json)
        if ns.cmd == "generate":
            return _run_generate(ctx, config, ns, as_json)
        return ERR_USAGE
    except ScriptError as exc:
        log_event(ctx, "error", "cli", "failed", cmd=ns.cmd, kind=exc.kind, code=exc.code)
        detail = getattr(exc, "output", "")
        if detail and not as_json:
            print(detail, file=sys.stderr)
        print(
            render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind, run_id=ctx.run_id),
            file=sys.stderr,
        )
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(
            render_error(
                as_json=as_json,
                message=f"internal error: {exc}",
                code=ERR_INTERNAL,
                kind="internal_error",
                run_id=ctx.run_id,
            ),
            file=sys.stderr,
        )
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
