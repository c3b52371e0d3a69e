"""Helpers shared by the indexer commands."""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path
from typing import Any

from . import defaults
from .defaults import manifest_name
from .manifest import ExecutionSource


def dasherize_to_underscore(s: str) -> str:
    return s.replace("-", "_")


def project_dir_info(
    path: str | os.PathLike | None, manifest: str | None
) -> tuple[Path, Path, str]:
    """Return the project root, its manifest path and the project name."""
    root = Path(path if path is not None else Path.cwd()).resolve(strict=True)
    name = root.name
    mani_name = dasherize_to_underscore(manifest_name(name))
    return root, root / (manifest if manifest is not None else mani_name), name


def default_manifest_filename(name: str) -> str:
    return f"{name}.manifest.yaml"


def default_schema_filename(name: str) -> str:
    return f"{name}.schema.graphql"


def center_align(s: str, n: int) -> str:
    return f"{s:^{n}}"


def rightpad_whitespace(s: str, n: int) -> str:
    return f"{s:<{n}}"


def format_exec_msg(exec_name: str, path: str | None) -> str:
    if path is not None:
        return rightpad_whitespace(path, defaults.MESSAGE_PADDING)
    return rightpad_whitespace(f"Can't locate {exec_name}.", defaults.MESSAGE_PADDING)


def find_executable(exec_name: str) -> tuple[str, str | None]:
    """Locate an executable with ``which``; return a status emoji and its path."""
    try:
        result = subprocess.run(["which", exec_name], capture_output=True)
    except OSError:
        return center_align("⛔️", defaults.FAIL_EMOJI_PADDING), None
    out = result.stdout.decode("utf-8", errors="replace")
    path = out[:-1] if out.endswith("\n") else ""
    if path:
        return center_align("✅", defaults.SUCCESS_EMOJI_PADDING), path
    return center_align("⛔️", defaults.FAIL_EMOJI_PADDING - 2), None


def find_executable_with_msg(exec_name: str) -> tuple[str, str | None, str]:
    emoji, path = find_executable(exec_name)
    return emoji, path, format_exec_msg(exec_name, path)


def file_part(path: str | os.PathLike) -> tuple[str | None, bytes]:
    """Return a ``(filename, content)`` pair suitable for a multipart upload."""
    path = Path(path)
    content = path.read_bytes()
    return (path.name or None), content


def cargo_metadata(cargo_manifest_dir: str | os.PathLike) -> dict[str, Any]:
    """Run ``cargo metadata`` for the crate in the given directory."""
    manifest_path = Path(cargo_manifest_dir) / "Cargo.toml"
    result = subprocess.run(
        ["cargo", "metadata", "--manifest-path", str(manifest_path)],
        capture_output=True,
    )
    if result.returncode != 0:
        raise RuntimeError("cargo metadata execution failed")
    return json.loads(result.stdout.decode("utf-8", errors="replace"))


def _metadata_path(cargo_manifest_dir: str | os.PathLike, key: str) -> Path:
    value = cargo_metadata(cargo_manifest_dir).get(key)
    if not isinstance(value, str):
        raise ValueError(f"{key} not found or invalid")
    return Path(value)


def cargo_target_dir(cargo_manifest_dir: str | os.PathLike) -> Path:
    return _metadata_path(cargo_manifest_dir, "target_directory")


def cargo_workspace_root_dir(cargo_manifest_dir: str | os.PathLike) -> Path:
    return _metadata_path(cargo_manifest_dir, "workspace_root")


def touch_file(path: str | os.PathLike) -> None:
    """Set the file's access and modification times to now."""
    os.utime(path, None)


def ensure_rebuild_if_schema_or_manifest_changed(
    project_dir: str | os.PathLike,
    schema: str | os.PathLike,
    manifest: str | os.PathLike,
    exec_source: ExecutionSource,
) -> None:
    """Touch the entry point source if the schema or manifest is newer than it."""
    try:
        schema_mtime = os.stat(schema).st_mtime_ns
    except OSError as e:
        raise FileNotFoundError(
            f"Failed to get metadata for schema file `{schema}`: {e}"
        ) from e
    manifest_mtime = os.stat(manifest).st_mtime_ns

    sourcefile = "main.rs" if exec_source is ExecutionSource.NATIVE else "lib.rs"
    entrypoint = Path(project_dir) / "src" / sourcefile
    entrypoint_mtime = entrypoint.stat().st_mtime_ns

    if schema_mtime > entrypoint_mtime or manifest_mtime > entrypoint_mtime:
        touch_file(entrypoint)