from __future__ import annotations

import socket
from pathlib import Path

import pytest
from hypothesis import settings

from arena_codegen.context import RunContext

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("codegen", deadline=None)
settings.load_profile("codegen")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CI", "RUN_ID", "ARENA_CODEGEN_ROOT", "ARENA_CODEGEN_OUT_PATH", "ARENA_CODEGEN_NODE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A contracts checkout with the codegen project one level below the root."""
    repo = tmp_path / "repo"
    for rel in ("contracts/cw20/schema", "contracts/cw721/schema", "ts-codegen"):
        (repo / rel).mkdir(parents=True)
    return repo


@pytest.fixture
def base_dir(workspace: Path) -> Path:
    return workspace / "ts-codegen"


@pytest.fixture
def ctx(base_dir: Path) -> RunContext:
    return RunContext.from_args("pytest-run", str(base_dir), "text")
