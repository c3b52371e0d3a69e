import pytest
import responses

from fuelindex import remove
from fuelindex.manifest import ManifestError
from fuelindex.new import create_indexer

URL = "http://indexer.example.com"


@pytest.fixture
def project(tmp_path):
    project_dir = tmp_path / "my-idx"
    create_indexer(project_dir, namespace="acme")
    return project_dir


def test_remove_sends_delete_with_auth(project):
    with responses.RequestsMock() as rsps:
        rsps.delete(f"{URL}/api/index/acme/my_idx", json={"success": "true"})
        result = remove.init(URL, None, project, "Bearer token", verbose=True)
        request = rsps.calls[0].request
    assert result == {"success": "true"}
    assert request.headers["Authorization"] == "Bearer token"


def test_remove_without_auth_sends_no_header(project):
    with responses.RequestsMock() as rsps:
        rsps.delete(f"{URL}/api/index/acme/my_idx", json={"success": "true"})
        remove.init(URL, None, project, None)
        request = rsps.calls[0].request
    assert "Authorization" not in request.headers


def test_remove_failure_returns_none(project):
    with responses.RequestsMock() as rsps:
        rsps.delete(f"{URL}/api/index/acme/my_idx", status=404, json={"details": "x"})
        assert remove.init(URL, None, project, None, verbose=True) is None


def test_remove_with_missing_manifest_raises(project):
    with pytest.raises(ManifestError):
        remove.init(URL, "absent.manifest.yaml", project, None)


def test_remove_with_missing_project_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        remove.init(URL, None, tmp_path / "nowhere", None)