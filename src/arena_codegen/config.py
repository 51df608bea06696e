"""Layered configuration: defaults < config file < environment < CLI flags."""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

from .discovery import DEFAULT_SUBTREES, OnDiscoveryError
from .errors import ConfigError
from .naming import SCHEMA_DIR_NAME
from .options import (
    DEFAULT_OUT_PATH,
    BundleOptions,
    ClientOptions,
    GeneratorOptions,
    ReactQueryOptions,
    TypesOptions,
)

CONFIG_CANDIDATES = ("codegen.toml", "codegen.json", "codegen.yaml", "codegen.yml")

ENV_ROOT = "ARENA_CODEGEN_ROOT"
ENV_OUT_PATH = "ARENA_CODEGEN_OUT_PATH"
ENV_NODE = "ARENA_CODEGEN_NODE"


@dataclass(frozen=True)
class CodegenConfig:
    root: str = ".."
    subtrees: tuple[str, ...] = DEFAULT_SUBTREES
    schema_dir_name: str = SCHEMA_DIR_NAME
    out_path: str = DEFAULT_OUT_PATH
    on_discovery_error: OnDiscoveryError = OnDiscoveryError.FAIL
    node: str = "node"
    timeout_seconds: int = 0
    options: GeneratorOptions = field(default_factory=GeneratorOptions)
    source: str | None = None

    def root_path(self, base_dir: Path) -> Path:
        root = Path(self.root)
        return root if root.is_absolute() else base_dir / root

    def to_payload(self) -> dict[str, object]:
        return {
            "root": self.root,
            "subtrees": list(self.subtrees),
            "schema_dir_name": self.schema_dir_name,
            "out_path": self.out_path,
            "on_discovery_error": self.on_discovery_error.value,
            "node": self.node,
            "timeout_seconds": self.timeout_seconds,
            "options": self.options.to_payload(),
            "source": self.source,
        }


def _load_schema() -> dict[str, Any]:
    text = resources.files("arena_codegen").joinpath("schemas/config.schema.json").read_text(encoding="utf-8")
    return json.loads(text)


def _load_yaml(path: Path, text: str) -> Any:
    import yaml

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    return {} if data is None else data


def _parse_file(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return _load_yaml(path, text)
    try:
        if suffix == ".toml":
            return tomllib.loads(text)
        if suffix == ".json":
            return json.loads(text)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    raise ConfigError(f"{path}: unsupported config format `{suffix}` (use .toml, .json, .yaml)")


def validate_config_mapping(data: Any, source: str) -> dict[str, Any]:
    import jsonschema

    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ConfigError(f"{source}: config validation failed at {loc}: {exc.message}") from exc
    return data


def find_config_file(base_dir: Path, explicit: str | None = None) -> Path | None:
    if explicit:
        path = Path(explicit)
        path = path if path.is_absolute() else base_dir / path
        if not path.is_file():
            raise ConfigError(f"config file not found: {path}")
        return path
    for name in CONFIG_CANDIDATES:
        candidate = base_dir / name
        if candidate.is_file():
            return candidate
    return None


def _options_from(data: Mapping[str, Any]) -> GeneratorOptions:
    return GeneratorOptions(
        bundle=BundleOptions(**data.get("bundle", {})),
        types=TypesOptions(**data.get("types", {})),
        client=ClientOptions(**data.get("client", {})),
        react_query=ReactQueryOptions(**data.get("react_query", {})),
    )


def config_from_mapping(data: Mapping[str, Any], source: str | None = None) -> CodegenConfig:
    defaults = CodegenConfig()
    return CodegenConfig(
        root=data.get("root", defaults.root),
        subtrees=tuple(data.get("subtrees", defaults.subtrees)),
        schema_dir_name=data.get("schema_dir_name", defaults.schema_dir_name),
        out_path=data.get("out_path", defaults.out_path),
        on_discovery_error=OnDiscoveryError(data.get("on_discovery_error", defaults.on_discovery_error.value)),
        node=data.get("node", defaults.node),
        timeout_seconds=int(data.get("timeout_seconds", defaults.timeout_seconds)),
        options=_options_from(data.get("options", {})),
        source=source,
    )


def _apply_env(data: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    merged = dict(data)
    for key, name in (("root", ENV_ROOT), ("out_path", ENV_OUT_PATH), ("node", ENV_NODE)):
        value = env.get(name)
        if value:
            merged[key] = value
    return merged


def load_config(
    base_dir: Path,
    explicit: str | None = None,
    env: Mapping[str, str] | None = None,
) -> CodegenConfig:
    path = find_config_file(base_dir, explicit)
    data: dict[str, Any] = {}
    source = None
    if path is not None:
        source = str(path)
        parsed = _parse_file(path)
        data = validate_config_mapping(parsed, source)
    data = _apply_env(data, os.environ if env is None else env)
    return config_from_mapping(data, source)
