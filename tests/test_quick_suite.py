import requests
from sympy import isprime

import app as app_module
import quick_suite

BASE = "http://mrprime.test"


class Response:
    def __init__(self, resp):
        self.resp = resp
        self.status_code = resp.status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        return self.resp.get_json()


class ClientSession:
    """Routes requests-style calls to the Flask test client."""

    def __init__(self, client):
        self.client = client

    def post(self, url, json=None, timeout=None):
        return Response(self.client.post(url[len(BASE):], json=json))


class DownSession:
    def post(self, url, json=None, timeout=None):
        raise requests.ConnectionError("connection refused")


def test_suite_against_app() -> None:
    with app_module.app.test_client() as c:
        results = quick_suite.run(ClientSession(c), BASE, rounds=20)
    assert len(results) == 5 + 5 * 3 * 2
    assert all(r["ok"] for r in results), [r for r in results if not r["ok"]]


def test_suite_records_http_failures() -> None:
    results = quick_suite.run(DownSession(), BASE)
    assert results
    assert not any(r["ok"] for r in results)
    assert results[0]["reason"].startswith("HTTP:")


def test_main_writes_failures(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(quick_suite.requests, "Session", lambda: _Down())
    out = tmp_path / "fails.csv"
    assert quick_suite.main(["--base", BASE, "--out", str(out)]) == 1
    assert out.exists()
    assert "FAIL:" in capsys.readouterr().out


def test_cases_are_reproducible_from_seed() -> None:
    first = list(quick_suite.cases(7))
    assert first == list(quick_suite.cases(7))
    assert first != list(quick_suite.cases(8))
    for n, expect in first:
        assert bool(isprime(n)) == expect
    for k, i in zip([2, 4, 8, 16, 32], range(5, 35, 6)):
        assert len(str(first[i][0])) == k


class _Down(DownSession):
    headers = {}
