from __future__ import annotations

from dataclasses import dataclass, field

from .model import ContractEntry

DEFAULT_OUT_PATH = "./output"


@dataclass(frozen=True)
class BundleOptions:
    enabled: bool = True
    bundle_file: str = "index.ts"
    scope: str = "contracts"

    def to_payload(self) -> dict[str, object]:
        return {"enabled": self.enabled, "bundleFile": self.bundle_file, "scope": self.scope}


@dataclass(frozen=True)
class TypesOptions:
    enabled: bool = True

    def to_payload(self) -> dict[str, object]:
        return {"enabled": self.enabled}


@dataclass(frozen=True)
class ClientOptions:
    enabled: bool = True
    exec_extends_query: bool = True

    def to_payload(self) -> dict[str, object]:
        return {"enabled": self.enabled, "execExtendsQuery": self.exec_extends_query}


@dataclass(frozen=True)
class ReactQueryOptions:
    enabled: bool = False
    optional_client: bool = False
    version: str = "v4"
    mutations: bool = True
    query_keys: bool = True
    query_factory: bool = True

    def to_payload(self) -> dict[str, object]:
        return {
            "enabled": self.enabled,
            "optionalClient": self.optional_client,
            "version": self.version,
            "mutations": self.mutations,
            "queryKeys": self.query_keys,
            "queryFactory": self.query_factory,
        }


@dataclass(frozen=True)
class GeneratorOptions:
    bundle: BundleOptions = field(default_factory=BundleOptions)
    types: TypesOptions = field(default_factory=TypesOptions)
    client: ClientOptions = field(default_factory=ClientOptions)
    react_query: ReactQueryOptions = field(default_factory=ReactQueryOptions)

    def to_payload(self) -> dict[str, object]:
        return {
            "bundle": self.bundle.to_payload(),
            "types": self.types.to_payload(),
            "client": self.client.to_payload(),
            "reactQuery": self.react_query.to_payload(),
        }


@dataclass(frozen=True)
class GenerationJob:
    contracts: tuple[ContractEntry, ...]
    out_path: str = DEFAULT_OUT_PATH
    options: GeneratorOptions = field(default_factory=GeneratorOptions)

    def to_payload(self) -> dict[str, object]:
        return {
            "contracts": [entry.to_payload() for entry in self.contracts],
            "outPath": self.out_path,
            "options": self.options.to_payload(),
        }
