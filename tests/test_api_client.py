from __future__ import annotations

import io

import pytest
import requests

from conftest import API, FakeHttp, envelope, make_response
from hotelhub.api import AuthApi
from hotelhub.api_client import ApiClient, PendingRequest, RetryState
from hotelhub.errors import (
    ApiError,
    AuthenticationError,
    BadRequestError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    ServerError,
    SessionExpiredError,
)
from hotelhub.notifications import CollectingNotifier
from hotelhub.storage import SESSION_KEYS, Storage

TOKENS = {"accessToken": "access-2", "refreshToken": "refresh-2"}


def _seeded_storage(refresh="refresh-1"):
    data = {
        "accessToken": "access-1",
        "auth-storage": '{"user":{"_id":"u1"},"isAuthenticated":true}',
        "website-storage": '{"current":null}',
    }
    if refresh:
        data["refreshToken"] = refresh
    return Storage(data)


def _client(http, storage=None):
    notifier = CollectingNotifier()
    return ApiClient(API, storage or _seeded_storage(), http=http, notifier=notifier), notifier


def test_attaches_bearer_token_and_accept_header():
    http = FakeHttp().add("GET", "/websites", 200, envelope(websites=[]))
    client, _ = _client(http)
    client.get("/websites")
    headers = http.last("GET", "/websites")["headers"]
    assert headers["Authorization"] == "Bearer access-1"
    assert headers["Accept"] == "application/json"


def test_401_refreshes_once_and_replays_once():
    http = FakeHttp()
    http.add("GET", "/auth/me", 401, {"message": "jwt expired"})
    http.add("GET", "/auth/me", 200, envelope(user={"_id": "u1"}))
    http.add("POST", "/auth/refresh", 200, envelope(tokens=TOKENS))
    storage = _seeded_storage()
    client, notifier = _client(http, storage)

    body = client.get("/auth/me")

    assert body["data"]["user"]["_id"] == "u1"
    assert http.paths("POST").count("/auth/refresh") == 1
    assert http.paths("GET").count("/auth/me") == 2
    # The replay carries the fresh token; the refresh call itself carries none
    assert http.calls[-1]["headers"]["Authorization"] == "Bearer access-2"
    assert "Authorization" not in http.last("POST", "/auth/refresh")["headers"]
    assert http.last("POST", "/auth/refresh")["json"] == {"refreshToken": "refresh-1"}
    assert storage.get_item("accessToken") == "access-2"
    assert storage.get_item("refreshToken") == "refresh-2"
    assert notifier.toasts == []


def test_401_without_refresh_token_expires_session():
    http = FakeHttp().add("GET", "/websites", 401, {"message": "unauthorized"})
    storage = _seeded_storage(refresh=None)
    client, notifier = _client(http, storage)

    with pytest.raises(SessionExpiredError):
        client.get("/websites")

    assert "/auth/refresh" not in http.paths()
    assert all(storage.get_item(k) is None for k in SESSION_KEYS)
    assert notifier.titles() == ["Session Expired"]


def test_failing_refresh_clears_all_keys_once_and_never_refreshes_twice():
    http = FakeHttp()
    http.add("GET", "/websites", 401, {"message": "jwt expired"})
    http.add("POST", "/auth/refresh", 401, {"message": "refresh token revoked"})
    storage = _seeded_storage()
    client, notifier = _client(http, storage)

    with pytest.raises(SessionExpiredError):
        client.get("/websites")

    assert http.paths().count("/auth/refresh") == 1
    assert http.paths().count("/websites") == 1
    assert all(storage.get_item(k) is None for k in SESSION_KEYS)
    assert notifier.titles() == ["Session Expired"]


def test_malformed_refresh_response_expires_session():
    http = FakeHttp()
    http.add("GET", "/websites", 401, {"message": "jwt expired"})
    http.add("POST", "/auth/refresh", 200, envelope())
    storage = _seeded_storage()
    client, _ = _client(http, storage)

    with pytest.raises(SessionExpiredError):
        client.get("/websites")
    assert storage.get_item("accessToken") is None


def test_replayed_request_is_not_refreshed_again():
    http = FakeHttp()
    http.add("GET", "/websites", 401, {"message": "still unauthorized"})
    http.add("POST", "/auth/refresh", 200, envelope(tokens=TOKENS))
    client, notifier = _client(http)

    with pytest.raises(AuthenticationError) as exc:
        client.get("/websites")

    assert exc.value.status == 401
    assert http.paths().count("/auth/refresh") == 1
    assert http.paths().count("/websites") == 2
    assert notifier.toasts == []


def test_login_401_skips_refresh_and_toast():
    http = FakeHttp().add("POST", "/auth/login", 401, {"message": "Invalid credentials"})
    storage = _seeded_storage()
    client, notifier = _client(http, storage)

    with pytest.raises(AuthenticationError) as exc:
        AuthApi(client).login("ada@seaside.test", "wrong")

    assert exc.value.message == "Invalid credentials"
    assert "/auth/refresh" not in http.paths()
    assert notifier.toasts == []
    assert storage.get_item("refreshToken") == "refresh-1"


@pytest.mark.parametrize(
    "status,error_cls,title",
    [
        (400, BadRequestError, "Invalid Request"),
        (403, ForbiddenError, "Access Denied"),
        (404, NotFoundError, "Not Found"),
        (500, ServerError, "Server Error"),
        (503, ServerError, "Server Error"),
    ],
)
def test_classified_failures_raise_and_toast(status, error_cls, title):
    http = FakeHttp().add("GET", "/websites/w1", status, {"success": False, "message": "backend says no"})
    client, notifier = _client(http)

    with pytest.raises(error_cls) as exc:
        client.get("/websites/w1")

    assert exc.value.status == status
    assert notifier.titles() == [title]
    assert notifier.toasts[0].variant == "destructive"


def test_server_error_uses_generic_description():
    http = FakeHttp().add("GET", "/websites", 500, {"message": "stack trace details"})
    client, notifier = _client(http)
    with pytest.raises(ServerError):
        client.get("/websites")
    assert notifier.toasts[0].description == "Something went wrong. Please try again later."


def test_unclassified_status_raises_plain_api_error_without_toast():
    http = FakeHttp().add("POST", "/websites", 409, {"message": "Domain already taken"})
    client, notifier = _client(http)

    with pytest.raises(ApiError) as exc:
        client.post("/websites", json={"name": "X"})

    assert type(exc.value) is ApiError
    assert exc.value.message == "Domain already taken"
    assert notifier.toasts == []


def test_non_json_error_body_falls_back_to_default_message():
    http = FakeHttp().add("GET", "/websites", 404)
    client, _ = _client(http)
    with pytest.raises(NotFoundError) as exc:
        client.get("/websites")
    assert exc.value.message == "An unexpected error occurred"


def test_transport_failure_raises_network_error():
    def boom(call):
        raise requests.ConnectionError("connection refused")

    http = FakeHttp().on("GET", "/websites", boom)
    client, notifier = _client(http)

    with pytest.raises(NetworkError):
        client.get("/websites")
    assert notifier.toasts == []


def test_empty_success_body_decodes_to_empty_envelope():
    http = FakeHttp().on("DELETE", "/websites/w1/rooms/r1", lambda call: make_response(204))
    client, _ = _client(http)
    assert client.delete("/websites/w1/rooms/r1") == {}


def test_pending_request_allows_a_single_retry_cycle():
    pending = PendingRequest("GET", "/x")
    assert pending.can_refresh
    pending.begin_retry()
    assert pending.state is RetryState.RETRYING
    assert not pending.can_refresh
    pending.mark_retried()
    assert pending.state is RetryState.RETRIED
    with pytest.raises(RuntimeError):
        pending.begin_retry()


def test_pending_request_rejects_replay_outside_retry():
    pending = PendingRequest("GET", "/x")
    with pytest.raises(RuntimeError):
        pending.mark_retried()


def test_opted_out_request_cannot_refresh():
    assert not PendingRequest("POST", "/auth/login", refresh_on_401=False).can_refresh


# ---- uploads through refresh-and-replay ----


def _expiring_upload(http):
    http.add("POST", "/upload/image", 401, {"message": "jwt expired"})
    http.add("POST", "/upload/image", 200, envelope(url="https://cdn.test/img.png"))
    http.add("POST", "/auth/refresh", 200, envelope(tokens=TOKENS))


def test_image_upload_replay_resends_file_bytes():
    from werkzeug.datastructures import FileStorage

    from hotelhub.api import ImageApi

    http = FakeHttp()
    _expiring_upload(http)
    client, _ = _client(http)
    upload = FileStorage(io.BytesIO(b"PNGDATA-1234567890"), filename="lobby.png", content_type="image/png")

    url = ImageApi(client).upload(upload, "w1", folder="hero")

    assert url == "https://cdn.test/img.png"
    sends = [c for c in http.calls if c["path"] == "/upload/image"]
    assert len(sends) == 2
    assert [s["uploaded"]["image"] for s in sends] == [b"PNGDATA-1234567890"] * 2
    assert sends[1]["files"]["image"][0] == "lobby.png"
    assert sends[1]["headers"]["Authorization"] == "Bearer access-2"


def test_raw_file_parts_are_rewound_before_replay():
    from hotelhub.api import UploadApi

    http = FakeHttp()
    _expiring_upload(http)
    client, _ = _client(http)
    stream = io.BytesIO(b"gallery-bytes")

    UploadApi(client).upload_image(files=[("image", ("g.jpg", stream, "image/jpeg"))], data={"websiteId": "w1"})

    sends = [c for c in http.calls if c["path"] == "/upload/image"]
    assert [s["uploaded"]["image"] for s in sends] == [b"gallery-bytes", b"gallery-bytes"]
