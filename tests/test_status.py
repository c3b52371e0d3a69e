import pytest
import requests
import responses

from fuelindex.status import RegisteredIndexer, format_indexers, format_uptime, status

URL = "http://indexer.example.com"


def _record(i, namespace, identifier, pubkey=None):
    return {
        "id": i,
        "namespace": namespace,
        "identifier": identifier,
        "pubkey": pubkey,
        "created_at": "2023-01-01T00:00:00",
    }


def test_from_dict():
    ix = RegisteredIndexer.from_dict(_record(7, "ns", "ident", "0xabc"))
    assert ix == RegisteredIndexer(7, "ns", "ident", "0xabc", "2023-01-01T00:00:00")


def test_from_dict_missing_field():
    with pytest.raises(ValueError, match="namespace"):
        RegisteredIndexer.from_dict({"id": 1, "identifier": "x", "created_at": "t"})


def test_format_single():
    text = format_indexers([RegisteredIndexer.from_dict(_record(1, "ns", "ident"))])
    lines = text.splitlines()
    assert lines[0] == "─ ns"
    assert lines[1] == "   └─ ident"
    assert lines[4].endswith("• pubkey: None")


def test_format_groups_sorted():
    indexers = [
        RegisteredIndexer.from_dict(_record(1, "zeta", "a")),
        RegisteredIndexer.from_dict(_record(2, "alpha", "b")),
        RegisteredIndexer.from_dict(_record(3, "zeta", "c", "key")),
    ]
    lines = format_indexers(indexers).splitlines()
    headers = [line for line in lines if "─ " in line and not line.startswith(("|", " "))]
    assert headers == ["┌─ alpha", "└─ zeta"]
    assert any(line.endswith('• pubkey: Some("key")') for line in lines)
    assert lines.index("└─ zeta") < lines.index("   ├─ a") < lines.index("   └─ c")


def test_format_empty():
    assert format_indexers([]) == ""


def test_format_uptime():
    assert format_uptime(0) == "0s"
    assert format_uptime(3661) == "1h 1m 1s"
    assert format_uptime(86_400 * 2) == "2days"


def test_format_uptime_negative():
    with pytest.raises(ValueError):
        format_uptime(-1)


def test_status_success(capsys):
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            f"{URL}/api/health",
            json={"client_status": "OK", "database_status": "OK", "uptime": "10"},
        )
        rsps.add(
            responses.GET,
            f"{URL}/api/status",
            json=[_record(1, "ns", "first"), _record(2, "ns", "second")],
        )
        result = status(URL, auth="Bearer token")
        assert [ix.identifier for ix in result] == ["first", "second"]
        assert rsps.calls[1].request.headers["Authorization"] == "Bearer token"
    out = capsys.readouterr().out
    assert "first" in out and "second" in out


def test_status_health_failure_stops():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{URL}/api/health", status=500, json={})
        assert status(URL) is None
        assert len(rsps.calls) == 1


def test_status_non_200_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{URL}/api/health", json={"uptime": "x"})
        rsps.add(
            responses.GET,
            f"{URL}/api/status",
            status=401,
            json={"details": "Unauthorized"},
        )
        assert status(URL, verbose=True) is None
        assert len(rsps.calls) == 2


def test_status_connection_errors():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET, f"{URL}/api/health", body=requests.ConnectionError("down")
        )
        rsps.add(
            responses.GET, f"{URL}/api/status", body=requests.ConnectionError("down")
        )
        assert status(URL) is None
        assert len(rsps.calls) == 2