import pytest
import yaml

from fuelindex import defaults
from fuelindex.manifest import ExecutionSource, Manifest, ManifestError


def _write_default(tmp_path, native=False):
    path = tmp_path / "demo.manifest.yaml"
    path.write_text(
        defaults.default_indexer_manifest(
            "ns", "demo.schema.graphql", "demo", None, native
        )
    )
    return path


def test_from_default_template(tmp_path):
    manifest = Manifest.from_file(_write_default(tmp_path))
    assert manifest.namespace == "ns"
    assert manifest.identifier == "demo"
    assert manifest.graphql_schema == "schema/demo.schema.graphql"
    assert manifest.execution_source() is ExecutionSource.WASM
    assert manifest.module == ""
    assert manifest.options["resumable"] is True


def test_native_template(tmp_path):
    manifest = Manifest.from_file(_write_default(tmp_path, native=True))
    assert manifest.execution_source() is ExecutionSource.NATIVE


def test_set_module_and_write_round_trip(tmp_path):
    path = _write_default(tmp_path)
    manifest = Manifest.from_file(path)
    manifest.set_module(ExecutionSource.WASM, "target/x/release/demo.wasm")
    manifest.write(path)

    reloaded = Manifest.from_file(path)
    assert reloaded == manifest
    assert reloaded.module == "target/x/release/demo.wasm"
    raw = yaml.safe_load(path.read_text())
    assert list(raw)[:2] == ["namespace", "identifier"]
    assert raw["module"] == {"wasm": "target/x/release/demo.wasm"}


def test_missing_file(tmp_path):
    with pytest.raises(ManifestError):
        Manifest.from_file(tmp_path / "nope.yaml")


def test_unknown_module_kind(tmp_path):
    path = tmp_path / "m.yaml"
    path.write_text(
        "namespace: a\nidentifier: b\ngraphql_schema: s\nmodule:\n  jvm: x\n"
    )
    with pytest.raises(ManifestError):
        Manifest.from_file(path)


def test_missing_required_key(tmp_path):
    path = tmp_path / "m.yaml"
    path.write_text("namespace: a\nidentifier: b\nmodule:\n  wasm: x\n")
    with pytest.raises(ManifestError, match="graphql_schema"):
        Manifest.from_file(path)