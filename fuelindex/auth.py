"""Authenticating against an indexer service with a wallet signature."""

from __future__ import annotations

import logging
import subprocess

import requests

from . import defaults

logger = logging.getLogger(__name__)

ACCOUNT_INDEX = "0"


def derive_signature_from_output(o: str) -> str:
    """Extract the signature from the wallet's ``label: signature`` output."""
    return o.split(":")[-1].strip()


def sign_nonce(account: str, nonce: str) -> str:
    """Sign ``nonce`` with the wallet account and return the signature."""
    try:
        result = subprocess.run(
            ["forc-wallet", "sign", "--account", account, "string", nonce],
            capture_output=True,
        )
    except OSError as e:
        raise RuntimeError(f"❌ Failed to sign nonce: {e}") from e
    stdout = result.stdout.decode("utf-8", errors="replace")
    if not stdout.endswith("\n"):
        raise RuntimeError("Failed to capture signature output.")
    return derive_signature_from_output(stdout[:-1])


def _report_failure(target: str, status_code: int, verbose: bool, brief: str) -> None:
    if verbose:
        logger.error("\n❌ %s returned a non-200 response code: %s", target, status_code)
    else:
        logger.error(brief)


def init(
    url: str = defaults.INDEXER_SERVICE_HOST,
    account: str = ACCOUNT_INDEX,
    verbose: bool = False,
) -> str | None:
    """Obtain a token from the service; return it, or None if none was issued."""
    target = f"{url}/api/auth/nonce"
    res = requests.get(target)
    if res.status_code != 200:
        _report_failure(
            target, res.status_code, verbose, f"\n❌ Action failed (Status({res.status_code}))"
        )
        return None

    uid = str(res.json()["uid"])
    signature = sign_nonce(account, uid)

    target = f"{url}/api/auth/signature"
    res = requests.post(target, json={"signature": signature, "message": uid})
    if res.status_code != 200:
        _report_failure(target, res.status_code, verbose, "\n❌ Authentication failed.")
        return None

    token = res.json().get("token")
    if token is None:
        logger.error("\n❌ Failed to produce a token.")
        return None

    if verbose:
        logger.info("\n✅ Successfully authenticated at %s.\n\nToken: %s", target, token)
    else:
        logger.info("\n✅ Authenticated successfully.\n\nToken: %s", token)
    return token