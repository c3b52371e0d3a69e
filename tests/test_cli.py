import json
import subprocess
from unittest import mock

import pytest

from fuelindex import auth, cli, defaults


def _parse(argv):
    return cli.build_parser().parse_args(argv)


def test_auth_defaults():
    args = _parse(["auth"])
    assert args.url == defaults.INDEXER_SERVICE_HOST
    assert args.account == auth.ACCOUNT_INDEX
    assert args.verbose is False


def test_kill_defaults_and_force_flag():
    assert _parse(["kill"]).port == defaults.WEB_API_PORT
    args = _parse(["kill", "-9", "--port", "5000"])
    assert args.kill is True
    assert args.port == "5000"


def test_deploy_flags():
    args = _parse(["deploy", "--skip-build", "--replace-indexer", "--remove-data", "-d"])
    assert (args.skip_build, args.replace_indexer, args.remove_data, args.debug) == (
        True, True, True, True,
    )
    assert args.auth is None
    assert args.url == defaults.INDEXER_SERVICE_HOST


def test_build_short_options():
    args = _parse(["build", "-m", "x.yaml", "-p", "proj", "--native", "--locked"])
    assert (args.manifest, args.path, args.native, args.locked) == ("x.yaml", "proj", True, True)


def test_missing_command_exits():
    with pytest.raises(SystemExit) as exc:
        cli.run_cli([])
    assert exc.value.code == 2


def test_extra_args_rejected_outside_run_native():
    with pytest.raises(SystemExit) as exc:
        cli.run_cli(["build", "--", "--foo"])
    assert exc.value.code == 2


def test_new_creates_project(tmp_path):
    target = tmp_path / "fresh-indexer"
    name = cli.run_cli(["new", str(target), "--namespace", "ns"])
    assert name == "fresh_indexer"
    assert (target / "Cargo.toml").is_file()
    assert (target / "src" / defaults.INDEXER_LIB_FILENAME).is_file()


def test_kill_with_bad_port_raises():
    with pytest.raises(ValueError):
        cli.run_cli(["kill", "--port", "abc"])


def test_main_reports_failure_as_exit_status():
    assert cli.main(["kill", "--port", "abc"]) == 1


def test_main_success_exit_status(tmp_path):
    assert cli.main(["new", str(tmp_path / "idx"), "--namespace", "ns"]) == 0


def test_run_native_passes_extra_args(tmp_path):
    project = tmp_path.resolve() / "native_idx"
    cli.run_cli(["new", str(project), "--namespace", "ns", "--native"])
    metadata = subprocess.CompletedProcess(
        args=[], returncode=0,
        stdout=json.dumps({"workspace_root": str(project)}).encode(), stderr=b"",
    )
    with mock.patch("subprocess.run", return_value=metadata), mock.patch(
        "subprocess.Popen", return_value=mock.Mock(pid=77)
    ) as popen:
        pid = cli.run_cli(
            ["run-native", "-p", str(project), "--skip-build", "--", "--run-migrations", "--x"]
        )
    assert pid == 77
    assert popen.call_args.args[0][-2:] == ["--run-migrations", "--x"]
    assert popen.call_args.args[0][1] == "--manifest"