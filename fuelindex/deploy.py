"""Deploying an indexer to an indexer service."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import requests

from . import build, defaults, remove
from .manifest import Manifest
from .utils import cargo_workspace_root_dir, file_part, project_dir_info

logger = logging.getLogger(__name__)


def deploy_target(url: str, manifest: Manifest) -> str:
    """The service endpoint for the manifest's indexer."""
    return f"{url}/api/index/{manifest.namespace}/{manifest.identifier}"


def init(
    url: str = defaults.INDEXER_SERVICE_HOST,
    manifest: str | None = None,
    path: str | os.PathLike | None = None,
    auth: str | None = None,
    debug: bool = False,
    locked: bool = False,
    native: bool = False,
    verbose: bool = False,
    skip_build: bool = False,
    replace_indexer: bool = False,
    remove_data: bool = False,
) -> dict[str, Any] | None:
    """Build (unless skipped) and upload the indexer; return the reply on success."""
    if not skip_build:
        build.init(manifest, path, debug, locked, native, verbose)

    # Replacing without removing data is handled by an ordinary reload.
    if replace_indexer and remove_data:
        remove.init(url, manifest, path, auth, verbose)

    _root_dir, manifest_path, _name = project_dir_info(path, manifest)
    mani = Manifest.from_file(manifest_path)

    project_path = Path(path) if path is not None else Path.cwd()
    workspace_root = cargo_workspace_root_dir(project_path)

    files = {
        "manifest": file_part(manifest_path),
        "schema": file_part(workspace_root / mani.graphql_schema),
        "wasm": file_part(workspace_root / mani.module),
    }
    data = {"replace_indexer": "true" if replace_indexer else "false"}

    target = deploy_target(url, mani)
    if verbose:
        logger.info("Deploying indexer at %s to %s.", manifest_path, target)
    else:
        logger.info("Deploying indexer...")

    headers = {"Connection": "keep-alive"}
    if auth is not None:
        headers["Authorization"] = auth

    logger.info("🚀 Deploying...")
    try:
        res = requests.post(target, data=data, files=files, headers=headers)
    except requests.RequestException as e:
        logger.error("❌ Failed to deploy indexer: %s", e)
        raise RuntimeError(f"❌ Failed to deploy indexer: {e}") from e

    status = res.status_code
    try:
        res_json = res.json()
    except ValueError as e:
        logger.error("❌ Failed to read indexer's response as JSON: %s", e)
        raise RuntimeError(f"❌ Failed to read indexer's response as JSON: {e}") from e

    pretty = json.dumps(res_json, indent=2)
    if status != 200:
        if verbose:
            logger.error("\n❌ %s returned a non-200 response code: %s", target, status)
        logger.info("\n%s", pretty)
        return None

    if verbose:
        logger.info("\n%s", pretty)
    logger.info("✅ Successfully deployed indexer.")
    return res_json