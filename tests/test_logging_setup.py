import logging

from hotelhub.logging_setup import LOG_BUFFER, SupportLogHandler, install_support_log_handler, recent_records


def test_handler_installed_once():
    install_support_log_handler()
    install_support_log_handler()
    handlers = [h for h in logging.getLogger().handlers if isinstance(h, SupportLogHandler)]
    assert len(handlers) == 1


def test_warning_records_carry_request_id(app, client, as_admin, http):
    LOG_BUFFER.clear()
    http.add("GET", "/websites/w1/rooms", 500, {"message": "db down"})
    client.get("/dashboard/rooms", headers={"X-Request-Id": "rid-42"})
    rows = recent_records(request_id="rid-42")
    assert rows, "expected buffered warnings for the failing request"
    assert all(r["path"] == "/dashboard/rooms" for r in rows)
    assert any(r["logger"] == "hotelhub.content" for r in rows)


def test_info_records_are_not_buffered():
    LOG_BUFFER.clear()
    logging.getLogger("hotelhub.test").info("just chatter")
    assert recent_records() == []
