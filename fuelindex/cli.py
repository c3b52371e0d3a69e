"""Command line interface of the indexer orchestrator."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version
from typing import Any

from . import auth, build, check, defaults, deploy, kill, new, remove, run_native, status

logger = logging.getLogger(__name__)


def _version() -> str:
    try:
        return version("fuelindex")
    except PackageNotFoundError:
        return "unknown"


def _add_verbose(p: argparse.ArgumentParser, help_text: str) -> None:
    p.add_argument("-v", "--verbose", action="store_true", help=help_text)


def _add_project(p: argparse.ArgumentParser, manifest_help: str) -> None:
    p.add_argument("-m", "--manifest", help=manifest_help)
    p.add_argument("-p", "--path", help="Path to the indexer project.")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser with all subcommands."""
    parser = argparse.ArgumentParser(prog="forc index", description="Fuel Indexer Orchestrator")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    sub = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    p = sub.add_parser("auth", help="Authenticate against an indexer service.")
    p.add_argument("--url", default=defaults.INDEXER_SERVICE_HOST,
                   help="URL at which to deploy indexer assets.")
    p.add_argument("--account", default=auth.ACCOUNT_INDEX,
                   help="Index of account to use for signing.")
    _add_verbose(p, "Verbose output.")
    p.set_defaults(handler=_auth)

    p = sub.add_parser("build", help="Build an indexer.")
    _add_project(p, "Manifest file name of indexer being built.")
    p.add_argument("-d", "--debug", action="store_true",
                   help="Build artifacts with the debug profile.")
    p.add_argument("--locked", action="store_true",
                   help="Ensure that the Cargo.lock file is up-to-date.")
    p.add_argument("--native", action="store_true", help="Building for native execution.")
    _add_verbose(p, "Enable verbose output.")
    p.set_defaults(handler=_build)

    p = sub.add_parser("check", help="Check for Fuel indexer components.")
    p.set_defaults(handler=_check)

    p = sub.add_parser("deploy", help="Deploy an indexer to an indexer service.")
    p.add_argument("--url", default=defaults.INDEXER_SERVICE_HOST,
                   help="URL at which to deploy indexer assets.")
    _add_project(p, "Path to the manifest of indexer project being deployed.")
    p.add_argument("--auth", help="Authentication header value.")
    p.add_argument("-d", "--debug", action="store_true",
                   help="Build optimized artifacts with the debug profile.")
    p.add_argument("--locked", action="store_true",
                   help="Ensure that the Cargo.lock file is up-to-date.")
    p.add_argument("--native", action="store_true", help="Building for native execution.")
    _add_verbose(p, "Enable verbose logging.")
    p.add_argument("--skip-build", action="store_true", help="Do not build before deploying.")
    p.add_argument("--replace-indexer", action="store_true",
                   help="If an indexer with the same UID exists, remove it.")
    p.add_argument("--remove-data", action="store_true",
                   help="Remove all indexed data when replacing an existing indexer.")
    p.set_defaults(handler=_deploy)

    p = sub.add_parser("kill", help="Kill the indexer process listening on a port.")
    p.add_argument("--port", default=defaults.WEB_API_PORT,
                   help="Port at which to detect indexer service API is running.")
    p.add_argument("-9", dest="kill", action="store_true", help="Kill instead of terminate.")
    p.set_defaults(handler=_kill)

    p = sub.add_parser("new", help="Create a new indexer project in a new directory.")
    p.add_argument("path", help="Path at which to create indexer.")
    p.add_argument("--name", help="Name of indexer.")
    p.add_argument("--namespace", help="Namespace to which indexer belongs.")
    p.add_argument("--native", action="store_true",
                   help="Initialize an indexer with native execution enabled.")
    p.add_argument("--absolute-paths", action="store_true",
                   help="Resolve indexer asset filepaths using absolute paths.")
    _add_verbose(p, "Enable verbose output.")
    p.set_defaults(handler=_new)

    p = sub.add_parser("remove", help="Stop and remove a running indexer.")
    p.add_argument("--url", default=defaults.INDEXER_SERVICE_HOST,
                   help="URL at which indexer is deployed.")
    _add_project(p, "Path to the manifest of the indexer project being removed.")
    p.add_argument("--auth", help="Authentication header value.")
    _add_verbose(p, "Enable verbose output.")
    p.set_defaults(handler=_remove)

    p = sub.add_parser("run-native", help="Run a native indexer.")
    _add_project(p, "Manifest file name of indexer being built.")
    p.add_argument("-d", "--debug", action="store_true",
                   help="Build artifacts with the debug profile.")
    p.add_argument("--locked", action="store_true",
                   help="Ensure that the Cargo.lock file is up-to-date.")
    p.add_argument("--skip-build", action="store_true", help="Do not build before deploying.")
    _add_verbose(p, "Enable verbose output.")
    p.add_argument("--bin", help="Path to native indexer binary (if not using default location).")
    p.set_defaults(handler=_run_native, args=[])

    p = sub.add_parser("status", help="Check the status of a registered indexer.")
    p.add_argument("--auth", help="Authentication header value.")
    p.add_argument("--url", default=defaults.INDEXER_SERVICE_HOST,
                   help="URL at which to find indexer service.")
    _add_verbose(p, "Enable verbose logging.")
    p.set_defaults(handler=_status)

    return parser


def _auth(a: argparse.Namespace) -> Any:
    return auth.init(a.url, a.account, a.verbose)


def _build(a: argparse.Namespace) -> Any:
    return build.init(a.manifest, a.path, a.debug, a.locked, a.native, a.verbose)


def _check(a: argparse.Namespace) -> Any:
    return check.init()


def _deploy(a: argparse.Namespace) -> Any:
    return deploy.init(
        a.url, a.manifest, a.path, a.auth, a.debug, a.locked, a.native,
        a.verbose, a.skip_build, a.replace_indexer, a.remove_data,
    )


def _kill(a: argparse.Namespace) -> Any:
    return kill.kill(a.port, a.kill)


def _new(a: argparse.Namespace) -> Any:
    return new.init(a.path, a.name, a.namespace, a.native, a.absolute_paths, a.verbose)


def _remove(a: argparse.Namespace) -> Any:
    return remove.init(a.url, a.manifest, a.path, a.auth, a.verbose)


def _run_native(a: argparse.Namespace) -> Any:
    return run_native.init(
        a.manifest, a.path, a.debug, a.locked, a.skip_build, a.verbose, a.bin, a.args
    )


def _status(a: argparse.Namespace) -> Any:
    return status.status(a.url, a.auth, a.verbose)


def run_cli(argv: Sequence[str] | None = None) -> Any:
    """Parse ``argv`` and run the chosen command; return what it returned."""
    import sys

    argv = list(sys.argv[1:] if argv is None else argv)
    extra: list[str] = []
    if "--" in argv:
        cut = argv.index("--")
        argv, extra = argv[:cut], argv[cut + 1:]

    parser = build_parser()
    namespace = parser.parse_args(argv)
    if extra:
        if namespace.command != "run-native":
            parser.error(f"unexpected arguments after '--': {' '.join(extra)}")
        namespace.args = extra
    return namespace.handler(namespace)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: run the command and report errors; return the exit status."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        run_cli(argv)
    except Exception as err:
        logger.error("Error: %s", err)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())