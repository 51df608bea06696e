from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_CONFIG, ERR_DERIVATION, ERR_DISCOVERY, ERR_GENERATION, ERR_PREREQ


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class ConfigError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_CONFIG, "config_error")


class PrereqError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_PREREQ, "missing_prereq")


class DiscoveryError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_DISCOVERY, "discovery_error")


class DerivationError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_DERIVATION, "derivation_error")


class GenerationError(ScriptError):
    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message, ERR_GENERATION, "generation_error")
        self.output = output
