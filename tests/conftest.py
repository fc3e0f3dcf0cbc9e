import json
import os
import sys

import pytest
import requests

# Path setup before any project imports to satisfy E402
ROOT = os.path.dirname(__file__)
PARENT = os.path.abspath(os.path.join(ROOT, ".."))
if PARENT not in sys.path:  # pragma: no cover - environment dependent
    sys.path.insert(0, PARENT)

API = "http://api.test/api"


def make_response(status=200, payload=None, url=""):
    """A requests.Response as the backend would send it."""
    r = requests.Response()
    r.status_code = status
    r.url = url
    if payload is not None:
        r._content = json.dumps(payload).encode("utf-8")
        r.headers["Content-Type"] = "application/json"
    else:
        r._content = b""
    return r


def envelope(**data):
    return {"success": True, "data": data, "message": "ok"}


def _encode_files(files):
    """Read file parts the way requests does when it builds a multipart body."""
    if not files:
        return {}
    items = files.items() if isinstance(files, dict) else files
    out = {}
    for field, value in items:
        content = value[1] if isinstance(value, tuple) else value
        if hasattr(content, "read"):
            content = content.read()
        out[field] = content.encode() if isinstance(content, str) else content
    return out


class FakeHttp:
    """In-memory stand-in for the shared requests.Session.

    Responses are scripted per (METHOD, path). A list is served in order and its
    last entry repeats; a callable receives the recorded call and returns a
    response or raises. Unscripted calls get an empty success envelope.
    """

    def __init__(self, base=API):
        self.base = base.rstrip("/")
        self.routes = {}
        self.calls = []

    def add(self, method, path, status=200, payload=None):
        self.routes.setdefault((method.upper(), path), []).append((status, payload))
        return self

    def on(self, method, path, handler):
        self.routes[(method.upper(), path)] = handler
        return self

    def request(self, method, url, **kwargs):
        path = url[len(self.base):] if url.startswith(self.base) else url
        call = {"method": method.upper(), "url": url, "path": path, **kwargs}
        call["uploaded"] = _encode_files(kwargs.get("files"))
        self.calls.append(call)
        route = self.routes.get((method.upper(), path))
        if route is None:
            return make_response(200, envelope(), url)
        if callable(route):
            return route(call)
        status, payload = route.pop(0) if len(route) > 1 else route[0]
        return make_response(status, payload, url)

    def paths(self, method=None):
        return [c["path"] for c in self.calls if method is None or c["method"] == method.upper()]

    def last(self, method, path):
        matches = [c for c in self.calls if c["method"] == method.upper() and c["path"] == path]
        assert matches, f"no {method} {path} call recorded; saw {self.paths()}"
        return matches[-1]


def _lazy_imports():  # isolate app imports & satisfy lint ordering
    from hotelhub import create_app  # noqa: E402
    from hotelhub.context import HTTP_EXTENSION_KEY  # noqa: E402

    return create_app, HTTP_EXTENSION_KEY


@pytest.fixture
def app():
    create_app, key = _lazy_imports()
    app = create_app({"TESTING": True, "SECRET_KEY": "test", "API_BASE_URL": API})
    app.extensions[key] = FakeHttp()
    return app


@pytest.fixture
def http(app):
    _, key = _lazy_imports()
    return app.extensions[key]


@pytest.fixture
def client(app):
    return app.test_client()


SUPER_ADMIN = {"_id": "u-super", "name": "Sam Super", "email": "sam@hotelhub.test", "role": "super_admin"}
ADMIN = {
    "_id": "u-admin",
    "name": "Ada Admin",
    "email": "ada@seaside.test",
    "role": "admin",
    "websiteId": "w1",
    "websiteName": "Seaside Hotel",
}


def login_as(client, user, access="access-1", refresh="refresh-1"):
    """Seed the session exactly as a successful login leaves it."""
    with client.session_transaction() as sess:
        sess["accessToken"] = access
        if refresh:
            sess["refreshToken"] = refresh
        sess["auth-storage"] = json.dumps({"user": user, "isAuthenticated": True})
    return user


@pytest.fixture
def as_super_admin(client):
    login_as(client, dict(SUPER_ADMIN))
    return client


@pytest.fixture
def as_admin(client):
    login_as(client, dict(ADMIN))
    return client


def flashes(client):
    with client.session_transaction() as sess:
        return [m for _, m in sess.get("_flashes", [])]
