"""Stopping and removing an indexer deployed at a service."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

import requests

from . import defaults
from .manifest import Manifest
from .utils import project_dir_info

logger = logging.getLogger(__name__)


def init(
    url: str = defaults.INDEXER_SERVICE_HOST,
    manifest: str | None = None,
    path: str | os.PathLike | None = None,
    auth: str | None = None,
    verbose: bool = False,
) -> dict[str, Any] | None:
    """Remove the project's indexer; return the service's reply on success."""
    _root_dir, manifest_path, _name = project_dir_info(path, manifest)
    mani = Manifest.from_file(manifest_path)

    target = f"{url}/api/index/{mani.namespace}/{mani.identifier}"

    headers = {}
    if auth is not None:
        headers["Authorization"] = auth

    if verbose:
        logger.info(
            "\n🛑 Removing indexer '%s.%s' at %s", mani.namespace, mani.identifier, target
        )
    else:
        logger.info("\n🛑 Removing indexer.")

    res = requests.delete(target, headers=headers)
    status = res.status_code
    res_json = res.json()
    pretty = json.dumps(res_json, indent=2)

    if status != 200:
        if verbose:
            logger.error("\n❌ %s returned a non-200 response code: %s", target, status)
        logger.info("\n%s", pretty)
        return None

    if verbose:
        logger.info(
            "\n%s\n✅ Successfully removed indexer '%s.%s' at %s \n",
            pretty,
            mani.namespace,
            mani.identifier,
            target,
        )
    else:
        logger.info("\n✅ Successfully removed indexer\n")
    return res_json