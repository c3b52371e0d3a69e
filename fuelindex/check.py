"""Report on which indexer components are installed."""

from __future__ import annotations

from . import defaults
from .utils import center_align, find_executable_with_msg, rightpad_whitespace

_SEPARATOR = (
    "+--------+------------------------+"
    "---------------------------------------------------------+"
)

_STATUS_PADDING = 5

# (executable, label shown in the component column)
_COMPONENTS = (
    ("fuel-indexer", "fuel-indexer binary"),
    ("psql", "psql"),
    ("fuel-core", "fuel-core"),
    ("docker", "docker"),
    ("fuelup", "fuelup"),
    ("wasm-snip", "wasm-snip"),
    ("rustc", "rustc"),
    ("forc-wallet", "forc-wallet"),
)


def render_report() -> str:
    """Build the component table."""
    details_header = center_align("Details", defaults.MESSAGE_PADDING + 2)
    check_header = center_align("Component", defaults.HEADER_PADDING)
    status_header = center_align("Status", _STATUS_PADDING)

    lines = [
        "",
        _SEPARATOR,
        f"| {status_header} |  {check_header}  |{details_header}|",
        _SEPARATOR,
    ]
    for exec_name, label in _COMPONENTS:
        emoji, _path, msg = find_executable_with_msg(exec_name)
        header = rightpad_whitespace(label, defaults.HEADER_PADDING)
        lines.append(f"|  {emoji}  | {header}   |  {msg}|")
        lines.append(_SEPARATOR)
    return "\n".join(lines) + "\n"


def init() -> None:
    """Print the component table."""
    print(render_report())