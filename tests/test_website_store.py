from __future__ import annotations

import json

import pytest

from conftest import API, FakeHttp, envelope
from hotelhub.api_client import ApiClient
from hotelhub.errors import ApiError
from hotelhub.notifications import CollectingNotifier
from hotelhub.storage import Storage
from hotelhub.website_store import WebsiteStore, website_id

A = {"_id": "wa", "name": "Alpine Lodge"}
B = {"_id": "wb", "name": "Beach Resort"}
C = {"_id": "wc", "name": "City Inn"}


def _store(http, data=None):
    storage = Storage(data if data is not None else {})
    notifier = CollectingNotifier()
    client = ApiClient(API, storage, http=http, notifier=notifier)
    return WebsiteStore(client, storage, notifier), storage, notifier


def test_website_id_accepts_either_key():
    assert website_id({"_id": "x"}) == "x"
    assert website_id({"id": "y"}) == "y"
    assert website_id(None) is None


def test_first_fetch_selects_first_website():
    http = FakeHttp().add("GET", "/websites", 200, envelope(websites=[A, B]))
    store, storage, _ = _store(http)
    store.fetch_websites()
    assert store.current_id == "wa"
    assert json.loads(storage.get_item("website-storage")) == {"current": {"_id": "wa", "name": "Alpine Lodge"}}


def test_fetch_keeps_existing_selection_when_order_changes():
    http = FakeHttp()
    http.add("GET", "/websites", 200, envelope(websites=[A, B]))
    http.add("GET", "/websites", 200, envelope(websites=[B, A]))
    store, _, _ = _store(http)
    store.fetch_websites()
    assert store.current_id == "wa"
    store.fetch_websites()
    assert store.current_id == "wa"
    assert store.websites[0]["_id"] == "wb"


def test_fetch_restores_selection_from_snapshot():
    http = FakeHttp().add("GET", "/websites", 200, envelope(websites=[A, B, C]))
    data = {"website-storage": json.dumps({"current": {"_id": "wc", "name": "City Inn"}})}
    store, _, _ = _store(http, data)
    store.fetch_websites()
    assert store.current_id == "wc"
    assert store.current["name"] == "City Inn"


def test_fetch_failure_records_error_without_raising():
    http = FakeHttp().add("GET", "/websites", 500, {"message": "db down"})
    store, _, _ = _store(http)
    assert store.fetch_websites() == []
    assert store.error == "db down"


def test_switch_website_updates_current():
    http = FakeHttp().add("POST", "/websites/wb/switch", 200, envelope(website=B))
    store, storage, notifier = _store(http)
    store.switch_website("wb")
    assert store.current_id == "wb"
    assert "Website switched" in notifier.titles()
    assert json.loads(storage.get_item("website-storage"))["current"]["_id"] == "wb"


def test_create_appends_to_list():
    http = FakeHttp()
    http.add("GET", "/websites", 200, envelope(websites=[A]))
    http.add("POST", "/websites", 201, envelope(website=B))
    store, _, _ = _store(http)
    store.fetch_websites()
    store.create_website({"name": "Beach Resort", "domain": "beach.test"})
    assert [website_id(w) for w in store.websites] == ["wa", "wb"]


def test_create_failure_reraises_and_sets_error():
    http = FakeHttp().add("POST", "/websites", 409, {"message": "Domain already taken"})
    store, _, _ = _store(http)
    with pytest.raises(ApiError):
        store.create_website({"name": "X"})
    assert store.error == "Domain already taken"


def test_update_replaces_entry_and_current():
    renamed = {"_id": "wa", "name": "Alpine Chalet"}
    http = FakeHttp()
    http.add("GET", "/websites", 200, envelope(websites=[A, B]))
    http.add("PUT", "/websites/wa", 200, envelope(website=renamed))
    store, _, _ = _store(http)
    store.fetch_websites()
    store.update_website("wa", {"name": "Alpine Chalet"})
    assert store.websites[0]["name"] == "Alpine Chalet"
    assert store.current["name"] == "Alpine Chalet"


def test_delete_removes_only_match_and_reassigns_current():
    http = FakeHttp().add("GET", "/websites", 200, envelope(websites=[A, B, C]))
    store, _, _ = _store(http)
    store.fetch_websites()
    assert store.current_id == "wa"

    store.delete_website("wa")

    assert [website_id(w) for w in store.websites] == ["wb", "wc"]
    assert store.current_id == "wb"


def test_delete_of_other_website_keeps_current():
    http = FakeHttp().add("GET", "/websites", 200, envelope(websites=[A, B, C]))
    store, _, _ = _store(http)
    store.fetch_websites()
    store.delete_website("wc")
    assert [website_id(w) for w in store.websites] == ["wa", "wb"]
    assert store.current_id == "wa"


def test_deleting_last_website_clears_current():
    http = FakeHttp().add("GET", "/websites", 200, envelope(websites=[A]))
    store, storage, _ = _store(http)
    store.fetch_websites()
    store.delete_website("wa")
    assert store.websites == []
    assert store.current is None
    assert json.loads(storage.get_item("website-storage")) == {"current": None}
