from pathlib import Path

import pytest

from fuelindex import defaults
from fuelindex.manifest import ExecutionSource, Manifest
from fuelindex.new import (
    create_indexer,
    init,
    kebab_to_snake_case,
    validate_name,
    welcome_message,
)


def test_kebab_to_snake_case():
    assert kebab_to_snake_case("my-cool-indexer") == "my_cool_indexer"
    assert kebab_to_snake_case("plain") == "plain"


@pytest.mark.parametrize("bad", ["", "1abc", "has space", "fn", "struct"])
def test_validate_name_rejects(bad):
    with pytest.raises(ValueError):
        validate_name(bad, "project name")


def test_validate_name_error_mentions_use_case():
    with pytest.raises(ValueError, match="project name"):
        validate_name("mod", "project name")


def test_validate_name_accepts_valid():
    assert validate_name("hello_world", "project name") is None


def test_welcome_message_lists_commands():
    msg = welcome_message()
    assert "`forc index new`" in msg
    assert "`forc index run-native`" in msg


def test_create_wasm_indexer(tmp_path):
    project = tmp_path / "my-indexer"
    name = create_indexer(project, namespace="ns")
    assert name == "my_indexer"
    assert (project / "Cargo.toml").read_text() == defaults.default_indexer_cargo_toml(
        "my_indexer"
    )
    assert (project / "schema" / "my_indexer.schema.graphql").read_text() == (
        defaults.default_indexer_schema()
    )
    assert (project / "src" / "lib.rs").read_text() == defaults.default_indexer_lib(
        "my_indexer", "my_indexer.manifest.yaml", None
    )
    assert (project / ".cargo" / "config").read_text() == defaults.default_cargo_config()
    assert not (project / "src" / "main.rs").exists()


def test_created_manifest_parses(tmp_path):
    project = tmp_path / "hello"
    create_indexer(project, namespace="ns")
    manifest = Manifest.from_file(project / "hello.manifest.yaml")
    assert manifest.namespace == "ns"
    assert manifest.identifier == "hello"
    assert manifest.graphql_schema == "schema/hello.schema.graphql"
    assert manifest.execution_source() is ExecutionSource.WASM


def test_create_native_indexer(tmp_path):
    project = tmp_path / "native"
    create_indexer(project, namespace="ns", native=True)
    assert (project / "src" / "main.rs").exists()
    assert not (project / "src" / "lib.rs").exists()
    assert not (project / ".cargo").exists()
    manifest = Manifest.from_file(project / "native.manifest.yaml")
    assert manifest.execution_source() is ExecutionSource.NATIVE


def test_absolute_paths(tmp_path):
    project = tmp_path / "abs"
    create_indexer(project, namespace="ns", absolute_paths=True)
    manifest = Manifest.from_file(project / "abs.manifest.yaml")
    schema = Path(manifest.graphql_schema)
    assert schema.is_absolute()
    assert schema == project.resolve() / "schema" / "abs.schema.graphql"


def test_explicit_name(tmp_path):
    project = tmp_path / "dir"
    assert create_indexer(project, name="other-name", namespace="ns") == "other_name"
    assert (project / "other_name.manifest.yaml").exists()


def test_existing_cargo_toml_raises(tmp_path):
    (tmp_path / "Cargo.toml").write_text("")
    with pytest.raises(FileExistsError):
        create_indexer(tmp_path, name="x", namespace="ns")


def test_invalid_name_writes_nothing(tmp_path):
    project = tmp_path / "fn"
    with pytest.raises(ValueError):
        create_indexer(project, namespace="ns")
    assert not (project / "Cargo.toml").exists()


def test_namespace_defaults_to_user(tmp_path, monkeypatch):
    monkeypatch.setenv("LOGNAME", "alice")
    project = tmp_path / "usr"
    create_indexer(project)
    assert Manifest.from_file(project / "usr.manifest.yaml").namespace == "alice"


def test_init_returns_name(tmp_path):
    assert init(tmp_path / "proj", namespace="ns") == "proj"
    assert (tmp_path / "proj" / "Cargo.toml").exists()