from __future__ import annotations

import json

from conftest import FakeHttp, envelope
from scripts.lookup_website import main

WEBSITE = {"_id": "w1", "name": "Seaside Hotel", "domain": "seaside.test", "uniqueId": "abc123", "isActive": True}
BASE = "http://backend.test/api"


def test_prints_summary(capsys):
    http = FakeHttp(BASE).add("GET", "/public/website/abc123", 200, envelope(website=WEBSITE))
    code = main(["abc123", "--api-url", BASE], http=http)
    out = capsys.readouterr().out
    assert code == 0
    assert "name: Seaside Hotel" in out
    assert "uniqueId: abc123" in out
    assert "Authorization" not in http.last("GET", "/public/website/abc123")["headers"]


def test_json_output(capsys):
    http = FakeHttp(BASE).add("GET", "/public/website/abc123", 200, envelope(website=WEBSITE))
    assert main(["abc123", "--api-url", BASE, "--json"], http=http) == 0
    assert json.loads(capsys.readouterr().out)["domain"] == "seaside.test"


def test_unknown_id_exits_nonzero(capsys):
    http = FakeHttp(BASE).add("GET", "/public/website/nope", 404, {"success": False, "message": "Website not found"})
    assert main(["nope", "--api-url", BASE], http=http) == 1
    assert "Website not found" in capsys.readouterr().err
