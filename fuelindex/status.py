"""Querying the health and registered indexers of an indexer service."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

import requests

from . import defaults

logger = logging.getLogger(__name__)

_DURATION_UNITS = (
    ("year", 31_557_600, True),
    ("month", 2_630_016, True),
    ("day", 86_400, True),
    ("h", 3_600, False),
    ("m", 60, False),
    ("s", 1, False),
)


@dataclass(frozen=True)
class RegisteredIndexer:
    """An indexer registered at the service."""

    id: int
    namespace: str
    identifier: str
    pubkey: str | None
    created_at: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegisteredIndexer:
        try:
            return cls(
                id=data["id"],
                namespace=str(data["namespace"]),
                identifier=str(data["identifier"]),
                pubkey=data.get("pubkey"),
                created_at=str(data["created_at"]),
            )
        except KeyError as e:
            raise ValueError(f"missing field {e.args[0]!r} in indexer record") from None


def _pubkey_repr(pubkey: str | None) -> str:
    return "None" if pubkey is None else f"Some({json.dumps(pubkey)})"


def format_indexers(indexers: list[RegisteredIndexer]) -> str:
    """Render indexers as a tree grouped by namespace, namespaces sorted."""
    groups: dict[str, list[RegisteredIndexer]] = defaultdict(list)
    for indexer in indexers:
        groups[indexer.namespace].append(indexer)

    lines: list[str] = []
    namespaces = sorted(groups)
    last = len(namespaces) - 1
    for index, namespace in enumerate(namespaces):
        is_last = index == last
        if index == 0:
            ng1, ng2 = ("─", " ") if is_last else ("┌─", "|")
        elif not is_last:
            ng1, ng2 = "├─", "|"
        else:
            ng1, ng2 = "└─", " "
        lines.append(f"{ng1} {namespace}")
        group = groups[namespace]
        for i, indexer in enumerate(group):
            ig1, ig2 = ("├─", "|") if i != len(group) - 1 else ("└─", " ")
            lines.append(f"{ng2}  {ig1} {indexer.identifier}")
            lines.append(f"{ng2}  {ig2}  • id: {indexer.id}")
            lines.append(f"{ng2}  {ig2}  • created at: {indexer.created_at}")
            lines.append(f"{ng2}  {ig2}  • pubkey: {_pubkey_repr(indexer.pubkey)}")
        if not is_last:
            lines.append(ng2)
    return "\n".join(lines)


def format_uptime(seconds: int) -> str:
    """Render a number of seconds as e.g. ``1day 2h 3m 4s``."""
    if seconds < 0:
        raise ValueError("uptime cannot be negative")
    if seconds == 0:
        return "0s"
    parts = []
    remaining = seconds
    for unit, size, plural in _DURATION_UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            suffix = "s" if plural and count > 1 else ""
            parts.append(f"{count}{unit}{suffix}")
    return " ".join(parts)


def _parse_uptime(value: Any) -> str:
    if not isinstance(value, str):
        return "missing"
    try:
        seconds = int(value)
    except ValueError:
        return "missing"
    if seconds < 0:
        return "missing"
    return format_uptime(seconds)


def status(
    url: str = defaults.INDEXER_SERVICE_HOST,
    auth: str | None = None,
    verbose: bool = False,
) -> list[RegisteredIndexer] | None:
    """Report service health and list registered indexers; return them on success."""
    health_target = f"{url}/api/health"
    status_target = f"{url}/api/status"

    headers = {"Connection": "keep-alive"}
    if auth is not None:
        headers["Authorization"] = auth

    with requests.Session() as session:
        try:
            res = session.get(health_target)
        except requests.RequestException as e:
            logger.error("\n❌ Could not connect to indexer service:\n'%s'", e)
        else:
            if res.status_code != 200:
                logger.error(
                    "\n❌ %s returned a non-200 response code: %s",
                    health_target,
                    res.status_code,
                )
                return None
            result = res.json()
            logger.info("\n✅ Successfully fetched service health:\n")
            client_status = result.get("client_status")
            database_status = result.get("database_status")
            logger.info(
                "client status: %s",
                client_status if isinstance(client_status, str) else "missing",
            )
            logger.info(
                "database status: %s",
                database_status if isinstance(database_status, str) else "missing",
            )
            logger.info("uptime: %s\n", _parse_uptime(result.get("uptime")))

        try:
            res = session.get(status_target, headers=headers)
        except requests.RequestException as e:
            if verbose:
                logger.error(
                    "\n❌ Status check failed. Could not connect to indexer service:\n'%s'",
                    e,
                )
            else:
                logger.error("\n❌ Status check failed.")
            return None

        if res.status_code != 200:
            if verbose:
                logger.error(
                    "\n❌ Status check failed. %s returned a non-200 response code: %s",
                    status_target,
                    res.status_code,
                )
            logger.info("\n%s", json.dumps(res.json(), indent=2))
            return None

        indexers = [RegisteredIndexer.from_dict(item) for item in res.json()]

    logger.info("indexers:")
    print(format_indexers(indexers))
    return indexers