from __future__ import annotations

from pathlib import Path

import pytest

from arena_codegen.errors import DerivationError
from arena_codegen.exit_codes import ERR_DERIVATION
from arena_codegen.naming import build_entries, derive_contract_name, normalize_schema_dir, split_segments


def test_split_segments_accepts_both_separators() -> None:
    assert split_segments("../contracts\\cw20/schema") == ["..", "contracts", "cw20", "schema"]
    assert split_segments("//a//b/") == ["a", "b"]


@pytest.mark.parametrize(
    "raw",
    [
        "../contracts/foo/schema",
        "..\\contracts\\foo\\schema",
        "/abs/contracts/foo/schema",
        "foo/schema",
    ],
)
def test_name_is_segment_before_schema(raw: str) -> None:
    assert derive_contract_name(raw) == "foo"


def test_name_honours_custom_dir_name() -> None:
    assert derive_contract_name("../packages/cw-balance/json", dir_name="json") == "cw-balance"


@pytest.mark.parametrize("raw", ["schema", "", "/", "contracts/foo/src", "./schema", "../schema"])
def test_underivable_paths_are_rejected(raw: str) -> None:
    with pytest.raises(DerivationError) as exc:
        derive_contract_name(raw)
    assert exc.value.code == ERR_DERIVATION
    assert exc.value.kind == "derivation_error"


def test_relative_dir_resolves_against_base() -> None:
    out = normalize_schema_dir("../contracts/cw20/schema", Path("/work/ts-codegen"))
    assert out == "/work/contracts/cw20/schema"


def test_backslash_dir_is_rewritten_with_forward_slashes() -> None:
    out = normalize_schema_dir("..\\contracts\\cw20\\schema", Path("/work/ts-codegen"))
    assert out == "/work/contracts/cw20/schema"
    assert "\\" not in out


def test_absolute_dir_is_kept() -> None:
    assert normalize_schema_dir("/repo/contracts/./cw20/schema", Path("/elsewhere")) == "/repo/contracts/cw20/schema"


def test_windows_drive_dir_is_absolute() -> None:
    out = normalize_schema_dir("C:\\repo\\contracts\\cw20\\schema", Path("/elsewhere"))
    assert out == "C:/repo/contracts/cw20/schema"


def test_build_entries_keeps_order_and_count() -> None:
    paths = ["../contracts/cw721/schema", "../contracts/cw20/schema", "../packages/cw-balance/schema"]
    entries = build_entries(paths, Path("/work/ts-codegen"))
    assert [e.name for e in entries] == ["cw721", "cw20", "cw-balance"]
    assert entries[2].dir == "/work/packages/cw-balance/schema"
    assert entries[0].to_payload() == {"name": "cw721", "dir": "/work/contracts/cw721/schema"}


def test_unc_dir_keeps_its_double_slash_prefix() -> None:
    out = normalize_schema_dir("\\\\server\\share\\contracts\\cw20\\schema", Path("/elsewhere"))
    assert out == "//server/share/contracts/cw20/schema"


def test_extra_leading_slashes_collapse() -> None:
    assert normalize_schema_dir("///repo/contracts/cw20/schema", Path("/elsewhere")) == "/repo/contracts/cw20/schema"
