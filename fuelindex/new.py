"""Creating a new indexer project on disk."""

from __future__ import annotations

import getpass
import logging
import os
import re
from pathlib import Path

from . import defaults
from .utils import default_manifest_filename, default_schema_filename

logger = logging.getLogger(__name__)

_RESERVED = frozenset(
    {
        "abstract", "as", "async", "await", "become", "box", "break", "const",
        "continue", "crate", "do", "dyn", "else", "enum", "extern", "false",
        "final", "fn", "for", "if", "impl", "in", "let", "loop", "macro",
        "match", "mod", "move", "mut", "override", "priv", "pub", "ref",
        "return", "self", "Self", "static", "struct", "super", "trait", "true",
        "try", "type", "typeof", "unsafe", "unsized", "use", "virtual", "where",
        "while", "yield",
    }
)

_VALID_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")

_BANNER = """
FUEL INDEXER

An easy-to-use, flexible indexing service built to go fast. 🚗💨
"""

_PLUGIN_TOUR = """Take a quick tour.

`forc index auth`
    Authenticate against an indexer service.
`forc index build`
    Build an indexer.
`forc index check`
    List indexer components.
`forc index deploy`
    Deploy an indexer.
`forc index kill`
    Kill a running Fuel indexer process on a given port.
`forc index new`
    Create a new indexer.
`forc index remove`
    Stop a running indexer.
`forc index start`
    Start a local indexer service.
`forc index status`
    Check the status of an indexer.
`forc index run-native`
    Run a native indexer."""


def kebab_to_snake_case(s: str) -> str:
    return s.replace("-", "_")


def validate_name(name: str, use_case: str) -> None:
    """Raise ValueError if ``name`` cannot be used as a crate name."""
    if not name:
        raise ValueError(f"the name cannot be empty when used as a {use_case}")
    if not _VALID_NAME.fullmatch(name):
        raise ValueError(
            f"invalid character in {use_case} `{name}`: use only letters, "
            "digits, `-` or `_`, and do not start with a digit"
        )
    if name in _RESERVED:
        raise ValueError(
            f"the name `{name}` cannot be used as a {use_case}, it is a reserved keyword"
        )


def welcome_message() -> str:
    """The message shown after a project was created."""
    return f"\n{_BANNER}\n\n----\n\n{_PLUGIN_TOUR}\n"


def create_indexer(
    path: str | os.PathLike,
    name: str | None = None,
    namespace: str | None = None,
    native: bool = False,
    absolute_paths: bool = False,
    verbose: bool = False,
) -> str:
    """Lay out a new indexer project in ``path`` and return its name."""
    project_dir = Path(path)
    project_dir.mkdir(parents=True, exist_ok=True)

    if (project_dir / defaults.CARGO_MANIFEST_FILE_NAME).exists():
        raise FileExistsError(f"❌ '{project_dir}' already includes a Cargo.toml file.")

    if verbose:
        logger.info("\nUsing project directory at %s", project_dir.resolve())

    if name is None:
        name = project_dir.stem
        if not name:
            raise ValueError("❌ Failed to infer project name from directory name.")

    project_name = kebab_to_snake_case(name)
    validate_name(project_name, "project name")

    (project_dir / "src").mkdir(parents=True, exist_ok=True)

    cargo_toml = (
        defaults.default_native_indexer_cargo_toml(project_name)
        if native
        else defaults.default_indexer_cargo_toml(project_name)
    )
    (project_dir / defaults.CARGO_MANIFEST_FILE_NAME).write_text(cargo_toml, encoding="utf-8")

    proj_abspath = project_dir.resolve() if absolute_paths else None

    if namespace is None:
        namespace = getpass.getuser()

    manifest_filename = default_manifest_filename(project_name)
    schema_filename = default_schema_filename(project_name)

    (project_dir / manifest_filename).write_text(
        defaults.default_indexer_manifest(
            namespace, schema_filename, project_name, proj_abspath, native
        ),
        encoding="utf-8",
    )

    schema_dir = project_dir / "schema"
    schema_dir.mkdir(parents=True, exist_ok=True)
    (schema_dir / schema_filename).write_text(
        defaults.default_indexer_schema(), encoding="utf-8"
    )

    if native:
        filename = defaults.INDEXER_BINARY_FILENAME
        content = defaults.default_indexer_binary(project_name, manifest_filename, proj_abspath)
    else:
        filename = defaults.INDEXER_LIB_FILENAME
        content = defaults.default_indexer_lib(project_name, manifest_filename, proj_abspath)
    (project_dir / "src" / filename).write_text(content, encoding="utf-8")

    if not native:
        config_dir = project_dir / defaults.CARGO_CONFIG_DIR_NAME
        config_dir.mkdir(parents=True, exist_ok=True)
        try:
            (config_dir / defaults.CARGO_CONFIG_FILENAME).write_text(
                defaults.default_cargo_config(), encoding="utf-8"
            )
        except OSError:
            pass

    if verbose:
        logger.info("\n✅ Successfully created indexer %s", project_name)
    else:
        logger.info("\n✅ Successfully created indexer")
    return project_name


def init(
    path: str | os.PathLike,
    name: str | None = None,
    namespace: str | None = None,
    native: bool = False,
    absolute_paths: bool = False,
    verbose: bool = False,
) -> str:
    """Create the project, then show the welcome message."""
    project_name = create_indexer(path, name, namespace, native, absolute_paths, verbose)
    logger.info(welcome_message())
    return project_name