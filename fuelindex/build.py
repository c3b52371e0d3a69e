"""Building an indexer project with cargo."""

from __future__ import annotations

import logging
import os
import platform
import subprocess
import sys
import tomllib
from pathlib import Path

from . import defaults
from .manifest import ExecutionSource, Manifest
from .utils import (
    cargo_target_dir,
    cargo_workspace_root_dir,
    ensure_rebuild_if_schema_or_manifest_changed,
    project_dir_info,
)

logger = logging.getLogger(__name__)

_APPLE_SILICON_NOTE = """
For Apple Silicon macOS users, the preinstalled llvm has limited WASM targets.
Please install a binary with better support from Homebrew (brew install llvm)
and configure rustc with the necessary environment variables:
            """

_LLVM_EXPORTS = (
    ("LIBCLANG_PATH", "\nexport LIBCLANG_PATH='/opt/homebrew/opt/llvm/lib'"),
    ("LDFLAGS", "\nexport LDFLAGS='-L/opt/homebrew/opt/llvm/lib'"),
    ("CPPFLAGS", "\nexport CPPFLAGS='-I/opt/homebrew/opt/llvm/include'"),
)


class BuildError(RuntimeError):
    """Raised when an indexer cannot be built."""


def cargo_build_command(
    cargo_manifest_path: str | os.PathLike,
    native: bool = False,
    release: bool = True,
    verbose: bool = False,
    locked: bool = False,
) -> list[str]:
    """The ``cargo build`` invocation for the given options."""
    cmd = ["cargo", "build", "--manifest-path", str(cargo_manifest_path)]
    if not native:
        cmd += ["--target", defaults.WASM_TARGET]
    for enabled, flag in ((release, "--release"), (verbose, "--verbose"), (locked, "--locked")):
        if enabled:
            cmd.append(flag)
    return cmd


def verbose_error_message() -> str:
    """Failure message, with LLVM hints on 64-bit ARM machines."""
    error = "❌ Build failed."
    if platform.machine().lower() in ("aarch64", "arm64"):
        extra = "".join(line for var, line in _LLVM_EXPORTS if var not in os.environ)
        if extra:
            error += _APPLE_SILICON_NOTE + extra
    return error


def _run_cargo_build(cmd: list[str], verbose: bool) -> None:
    if verbose:
        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise BuildError(f"❌ Build failed: {e}") from e
        if result.returncode != 0:
            raise BuildError(verbose_error_message())
        logger.info("✅ Build succeeded.")
        return

    logger.info("⏰ Building indexer...")
    try:
        result = subprocess.run(cmd, capture_output=True)
    except OSError as e:
        logger.info("❌ Build failed.")
        raise BuildError(f"❌ Error: {e}") from e
    sys.stdout.write(result.stdout.decode("utf-8", errors="replace"))
    if result.returncode != 0:
        logger.info("❌ Build failed.")
        raise BuildError("❌ Failed to build index.")
    logger.info("✅ Build succeeded.")


def _snip_wasm(wasm: Path) -> None:
    try:
        result = subprocess.run(["wasm-snip", str(wasm), "-o", str(wasm), "-p", "__wbindgen"])
    except OSError as e:
        raise BuildError(f"❌ Failed to spawn wasm-snip process: {e}") from e
    if result.returncode != 0:
        raise BuildError(f"❌ Failed to execute wasm-snip: (Code: {result.returncode})")


def init(
    manifest: str | None = None,
    path: str | os.PathLike | None = None,
    debug: bool = False,
    locked: bool = False,
    native: bool = False,
    verbose: bool = False,
) -> Manifest:
    """Build the indexer project and return its (possibly updated) manifest."""
    release = not debug
    root_dir, manifest_file, _name = project_dir_info(path, manifest)

    cargo_manifest_path = root_dir / defaults.CARGO_MANIFEST_FILE_NAME
    if not cargo_manifest_path.exists():
        raise BuildError(f"could not find `Cargo.toml` in `{root_dir}`")

    project_path = Path(path) if path is not None else Path.cwd()

    with cargo_manifest_path.open("rb") as f:
        config = tomllib.load(f)
    try:
        package_name = config["package"]["name"]
    except (KeyError, TypeError):
        raise BuildError(f"`{cargo_manifest_path}` has no package name") from None

    indexer_manifest_path = root_dir / manifest_file
    mani = Manifest.from_file(indexer_manifest_path)

    workspace_root = cargo_workspace_root_dir(project_path)
    ensure_rebuild_if_schema_or_manifest_changed(
        root_dir,
        workspace_root / mani.graphql_schema,
        indexer_manifest_path,
        mani.execution_source(),
    )

    cmd = cargo_build_command(cargo_manifest_path, native, release, verbose, locked)
    _run_cargo_build(cmd, verbose)

    if not native:
        binary = f"{package_name}.wasm"
        profile = "release" if release else "debug"
        abs_wasm = cargo_target_dir(project_path) / defaults.WASM_TARGET / profile / binary
        rel_wasm = Path("target") / defaults.WASM_TARGET / profile / binary

        mani.set_module(ExecutionSource.WASM, str(rel_wasm))
        _snip_wasm(abs_wasm)
        mani.write(indexer_manifest_path)

    return mani