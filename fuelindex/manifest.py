"""Reading and writing indexer manifests."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


class ExecutionSource(enum.Enum):
    """How an indexer's module is executed."""

    NATIVE = "native"
    WASM = "wasm"


class ManifestError(ValueError):
    """Raised when a manifest cannot be read or is malformed."""


_REQUIRED = ("namespace", "identifier", "graphql_schema", "module")
_KEY_ORDER = (
    "namespace",
    "identifier",
    "abi",
    "start_block",
    "end_block",
    "fuel_client",
    "contract_id",
    "graphql_schema",
    "module",
    "resumable",
)


@dataclass
class Manifest:
    """An indexer manifest; keys other than the required ones live in ``options``."""

    namespace: str
    identifier: str
    graphql_schema: str
    module_source: ExecutionSource
    module_path: str | None = None
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def module(self) -> str:
        """Path of the module artifact, or an empty string if unset."""
        return self.module_path or ""

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> Manifest:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ManifestError(f"could not read manifest `{path}`: {e}") from e
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ManifestError(f"invalid YAML in manifest `{path}`: {e}") from e
        return cls._from_mapping(data, path)

    @classmethod
    def _from_mapping(cls, data: Any, origin: Path) -> Manifest:
        if not isinstance(data, dict):
            raise ManifestError(f"manifest `{origin}` is not a mapping")
        missing = [key for key in _REQUIRED if data.get(key) is None]
        if missing:
            raise ManifestError(
                f"manifest `{origin}` is missing: {', '.join(missing)}"
            )
        module = data["module"]
        if not isinstance(module, dict) or len(module) != 1:
            raise ManifestError(
                f"manifest `{origin}`: module must name exactly one of wasm or native"
            )
        ((kind, value),) = module.items()
        try:
            source = ExecutionSource(kind)
        except ValueError:
            raise ManifestError(
                f"manifest `{origin}`: unknown module kind {kind!r}"
            ) from None
        if value is not None and not isinstance(value, str):
            raise ManifestError(f"manifest `{origin}`: module path must be a string")
        options = {k: v for k, v in data.items() if k not in _REQUIRED}
        return cls(
            namespace=str(data["namespace"]),
            identifier=str(data["identifier"]),
            graphql_schema=str(data["graphql_schema"]),
            module_source=source,
            module_path=value,
            options=options,
        )

    def execution_source(self) -> ExecutionSource:
        return self.module_source

    def set_module(self, source: ExecutionSource, path: str | None = None) -> None:
        self.module_source = ExecutionSource(source)
        self.module_path = path

    def _as_mapping(self) -> dict[str, Any]:
        values: dict[str, Any] = dict(self.options)
        values.update(
            namespace=self.namespace,
            identifier=self.identifier,
            graphql_schema=self.graphql_schema,
            module={self.module_source.value: self.module_path},
        )
        ordered = {k: values.pop(k) for k in _KEY_ORDER if k in values}
        ordered.update(values)
        return ordered

    def write(self, path: str | os.PathLike) -> None:
        text = yaml.safe_dump(
            self._as_mapping(), sort_keys=False, allow_unicode=True, default_flow_style=False
        )
        Path(path).write_text(text, encoding="utf-8")