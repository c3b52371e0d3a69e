"""Stopping the process that listens on the indexer port."""

from __future__ import annotations

import logging
import subprocess

from . import defaults

logger = logging.getLogger(__name__)


def kill(port: str | int = defaults.WEB_API_PORT, force: bool = False) -> int:
    """Terminate (or, with ``force``, kill) the process on ``port``; return its PID."""
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"invalid port: {port!r}") from None
    if not 0 <= port_number <= 65535:
        raise ValueError(f"invalid port: {port!r}")
    return kill_process_by_port(port_number, force)


def kill_process_by_port(port: int, force: bool = False) -> int:
    """Send a signal to the process listening on ``port``; return its PID."""
    output = subprocess.run(["lsof", "-ti", f":{port}"], capture_output=True)
    pid_str = output.stdout.decode("utf-8", errors="replace").strip()

    if not pid_str:
        raise ProcessLookupError(f"❌ No process is listening on port {port}")

    try:
        pid = int(pid_str)
    except ValueError as e:
        raise ValueError(f"❌ Failed to parse PID: {e}") from None

    cmd = ["kill", "-9", str(pid)] if force else ["kill", str(pid)]
    action = "kill" if force else "terminate"
    try:
        subprocess.run(cmd)
    except OSError as e:
        raise RuntimeError(f"❌ Failed to {action} process: {e}") from e

    done = "killed" if force else "terminated"
    logger.info("✅ Sucessfully %s process %s listening on port %s", done, pid, port)
    return pid