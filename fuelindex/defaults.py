"""Default names, constants and file templates for indexer projects."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

CARGO_MANIFEST_FILE_NAME = "Cargo.toml"

INDEXER_LIB_FILENAME = "lib.rs"
INDEXER_BINARY_FILENAME = "main.rs"
CARGO_CONFIG_DIR_NAME = ".cargo"
CARGO_CONFIG_FILENAME = "config"
INDEXER_SERVICE_HOST = "http://127.0.0.1:29987"
WEB_API_PORT = "29987"
WASM_TARGET = "wasm32-unknown-unknown"
MESSAGE_PADDING = 55
SUCCESS_EMOJI_PADDING = 3
FAIL_EMOJI_PADDING = 6
HEADER_PADDING = 20

StrPath = str | os.PathLike

_INDENT = "    "


class _Literal(str):
    """A TOML value written out verbatim."""


def _toml_value(value: Any) -> str:
    if isinstance(value, _Literal):
        return str(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list):
        return "[" + ", ".join(_toml_value(item) for item in value) + "]"
    if isinstance(value, Mapping):
        pairs = ", ".join(f"{key} = {_toml_value(item)}" for key, item in value.items())
        return "{ " + pairs + " }"
    raise TypeError(f"unsupported TOML value: {value!r}")


def _toml_section(header: str, table: Mapping[str, Any]) -> str:
    lines = [header, *(f"{key} = {_toml_value(value)}" for key, value in table.items())]
    return "\n".join(lines)


def _toml_document(sections: Iterable[tuple[str, Mapping[str, Any]]]) -> str:
    return "\n\n".join(_toml_section(header, table) for header, table in sections) + "\n"


def _package_table(indexer_name: str) -> dict[str, Any]:
    return {
        "name": indexer_name,
        "version": "0.0.0",
        "edition": "2021",
        "publish": False,
        "rust-version": "1.73.0",
    }


_COMMON_DEPENDENCIES: dict[str, Any] = {
    "getrandom": {"version": "0.2", "features": ["js"]},
    "serde": {"version": "1.0", "default-features": False, "features": ["derive"]},
}


def default_native_indexer_cargo_toml(indexer_name: str) -> str:
    """Cargo manifest for a natively executed indexer."""
    dependencies = {
        "async-trait": {"version": "0.1"},
        "fuel-indexer": {"version": "0.21", "default-features": False},
        "fuel-indexer-utils": {"version": "0.21", "features": ["native-execution"]},
        "fuels": {"version": "0.46", "default-features": False, "features": ["std"]},
        **_COMMON_DEPENDENCIES,
    }
    return _toml_document(
        [
            ("[package]", _package_table(indexer_name)),
            ("[[bin]]", {"name": indexer_name, "path": "src/main.rs"}),
            ("[dependencies]", dependencies),
        ]
    )


def default_indexer_cargo_toml(indexer_name: str) -> str:
    """Cargo manifest for a WASM indexer."""
    dependencies = {
        "fuel-indexer-utils": {"version": "0.21"},
        "fuels": {"version": "0.46", "default-features": False},
        **_COMMON_DEPENDENCIES,
    }
    return _toml_document(
        [
            ("[package]", _package_table(indexer_name)),
            ("[lib]", {"crate-type": _Literal("['cdylib']")}),
            ("[dependencies]", dependencies),
        ]
    )


_MANIFEST_COMMENTS: dict[str, tuple[str, ...]] = {
    "namespace": (
        "A namespace is a logical grouping of declared names. Think of the namespace",
        "as an organization identifier",
    ),
    "identifier": ("The identifier field is used to identify the given index.",),
    "abi": (
        "The abi option is used to provide a link to the Sway JSON ABI that is "
        "generated when you",
        "build your project.",
    ),
    "start_block": (
        "The particular start block after which you'd like your indexer to start "
        "indexing events.",
    ),
    "end_block": (
        "The particular end block after which you'd like your indexer to stop "
        "indexing events.",
    ),
    "fuel_client": (
        "The `fuel_client` denotes the address (host, port combination) of the "
        "running Fuel client",
        "that you would like your indexer to index events from. In order to use "
        "this per-indexer",
        "`fuel_client` option, the indexer service at which your indexer is "
        "deployed will have to run",
        "with the `--indexer_net_config` option.",
    ),
    "contract_id": (
        "The contract_id specifies which particular contract you would like your "
        "index to subscribe to.",
    ),
    "graphql_schema": (
        "The graphql_schema field contains the file path that points to the "
        "GraphQL schema for the",
        "given index.",
    ),
    "module": (
        "The module field contains a file path that points to code that will be "
        "run as an executor inside",
        "of the indexer.",
        "Important: At this time, wasm is the preferred method of execution.",
    ),
    "resumable": (
        "The resumable field contains a boolean that specifies whether or not the "
        "indexer should, synchronise",
        "with the latest block if it has fallen out of sync.",
    ),
}


def default_indexer_manifest(
    namespace: str,
    schema_filename: str,
    indexer_name: str,
    project_path: StrPath | None,
    is_native: bool,
) -> str:
    """Indexer manifest (YAML) for a freshly created project."""
    if project_path is not None:
        schema_path = str(Path(project_path) / "schema" / schema_filename)
    else:
        schema_path = f"schema/{schema_filename}"

    kind = "native" if is_native else "wasm"
    values = {
        "namespace": namespace,
        "identifier": indexer_name,
        "abi": "~",
        "start_block": "~",
        "end_block": "~",
        "fuel_client": "~",
        "contract_id": "~",
        "graphql_schema": schema_path,
        "module": f"\n{_INDENT}{kind}: ~",
        "resumable": "true",
    }

    entries = []
    for key, value in values.items():
        comments = [f"# {line}" for line in _MANIFEST_COMMENTS[key]]
        entries.append("\n".join([*comments, f"{key}: {value}"]))
    return "\n\n".join(entries) + "\n"


def _manifest_path(manifest_filename: str, project_path: StrPath | None) -> str:
    if project_path is not None:
        return str(Path(project_path) / manifest_filename)
    return manifest_filename


def _indexer_source(indexer_name: str, manifest_path: str, native: bool) -> str:
    fn_kw = "async fn" if native else "fn"
    save = ".save().await;" if native else ".save();"
    tx_id = "Bytes32::from(<[u8; 32]>::from(transaction.id))"
    lines: list[tuple[int, str]] = [
        (0, "extern crate alloc;"),
        (0, "use fuel_indexer_utils::prelude::*;"),
        (0, ""),
        (0, f'#[indexer(manifest = "{manifest_path}")]'),
        (0, f"pub mod {indexer_name}_index_mod {{"),
        (0, ""),
        (1, f"{fn_kw} {indexer_name}_handler(block_data: BlockData) {{"),
        (2, "if block_data.header.height % 1000 == 0 {"),
        (3, "info!(\"Processing Block#{}. (>'.')>\", block_data.header.height);"),
        (2, "}"),
        (2, ""),
        (2, "let block = Block::new(block_data.header.height.into(), block_data.id);"),
        (2, f"block{save}"),
        (0, ""),
        (2, "for transaction in block_data.transactions.iter() {"),
        (3, f"let tx = Transaction::new(block_data.id, {tx_id});"),
        (3, f"tx{save}"),
        (2, "}"),
        (1, "}"),
        (0, "}"),
    ]
    return "\n".join(_INDENT * depth + text for depth, text in lines) + "\n"


def default_indexer_lib(
    indexer_name: str, manifest_filename: str, project_path: StrPath | None
) -> str:
    """Library module of a WASM indexer."""
    return _indexer_source(
        indexer_name, _manifest_path(manifest_filename, project_path), native=False
    )


def default_indexer_binary(
    indexer_name: str, manifest_filename: str, project_path: StrPath | None
) -> str:
    """Binary module of a native indexer."""
    return _indexer_source(
        indexer_name, _manifest_path(manifest_filename, project_path), native=True
    )


_SCHEMA_ENTITIES: dict[str, tuple[tuple[str, str], ...]] = {
    "Block": (("id", "ID!"), ("height", "U64!"), ("hash", "Bytes32! @unique")),
    "Transaction": (
        ("id", "ID!"),
        ("block", "Block! @join(on:hash)"),
        ("hash", "Bytes32! @unique"),
    ),
}


def default_indexer_schema() -> str:
    """GraphQL schema for a freshly created indexer."""
    blocks = []
    for entity, fields in _SCHEMA_ENTITIES.items():
        body = "\n".join(f"{_INDENT}{field}: {kind}" for field, kind in fields)
        blocks.append(f"type {entity} @entity {{\n{body}\n}}\n")
    return "\n".join(blocks) + "\n"


def default_cargo_config() -> str:
    """Cargo config selecting the WASM build target."""
    return _toml_document([("[build]", {"target": WASM_TARGET})])


def manifest_name(indexer_name: str) -> str:
    """File name of the manifest for the named indexer."""
    return f"{indexer_name}.manifest.yaml"