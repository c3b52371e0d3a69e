"""Running a natively executed indexer."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

from . import build, defaults
from .build import BuildError
from .manifest import Manifest
from .utils import (
    cargo_workspace_root_dir,
    dasherize_to_underscore,
    ensure_rebuild_if_schema_or_manifest_changed,
    project_dir_info,
)

logger = logging.getLogger(__name__)


def native_command(
    binpath: str | os.PathLike,
    manifest_path: str | os.PathLike,
    args: Iterable[str] = (),
) -> list[str]:
    """The command line that starts the native indexer binary."""
    return [str(binpath), "--manifest", str(manifest_path), *args]


def init(
    manifest: str | None = None,
    path: str | os.PathLike | None = None,
    debug: bool = False,
    locked: bool = False,
    skip_build: bool = False,
    verbose: bool = False,
    bin: str | os.PathLike | None = None,
    args: Sequence[str] = (),
) -> int:
    """Build (unless skipped) and start the native indexer; return its PID."""
    if not skip_build:
        build.init(manifest, path, debug, locked, True, verbose)

    release = not debug
    root_dir, manifest_file, indexer_name = project_dir_info(path, manifest)

    cargo_manifest_path = root_dir / defaults.CARGO_MANIFEST_FILE_NAME
    if not cargo_manifest_path.exists():
        raise BuildError(f"could not find `Cargo.toml` in `{root_dir}`")

    project_path = Path(path) if path is not None else Path.cwd()

    indexer_manifest_path = root_dir / manifest_file
    mani = Manifest.from_file(indexer_manifest_path)

    workspace_root = cargo_workspace_root_dir(project_path)
    schema_file = workspace_root / mani.graphql_schema

    if bin is not None:
        binpath = Path(bin)
    else:
        profile = "release" if release else "debug"
        binpath = workspace_root / "target" / profile / dasherize_to_underscore(indexer_name)

    ensure_rebuild_if_schema_or_manifest_changed(
        root_dir, schema_file, indexer_manifest_path, mani.execution_source()
    )

    cmd = native_command(binpath, indexer_manifest_path, args)
    if verbose:
        logger.info("%s", cmd)

    try:
        child = subprocess.Popen(cmd)
    except OSError as e:
        raise RuntimeError(f"❌ Failed to spawn fuel-indexer child process: {e!r}.") from e

    logger.info("✅ Successfully started the indexer service at PID %s", child.pid)
    return child.pid