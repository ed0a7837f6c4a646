"""Tests for request ID resolution."""
from imagesearch.middleware.request_id import get_request_id, request_id_var, resolve_request_id


class TestResolveRequestID:
    def test_keeps_well_formed_id(self):
        assert resolve_request_id("req-1.a:b_c") == "req-1.a:b_c"

    def test_generates_when_missing(self):
        rid = resolve_request_id(None)
        assert len(rid) == 32
        assert rid != resolve_request_id("")

    def test_rejects_oversized_id(self):
        assert resolve_request_id("x" * 129) != "x" * 129

    def test_rejects_control_characters(self):
        assert resolve_request_id("abc\r\nX-Injected: 1") != "abc\r\nX-Injected: 1"

    def test_rejects_trailing_newline(self):
        assert resolve_request_id("abc\n") != "abc\n"


class TestGetRequestID:
    def test_follows_context(self):
        assert get_request_id() == ""
        token = request_id_var.set("req-9")
        try:
            assert get_request_id() == "req-9"
        finally:
            request_id_var.reset(token)
        assert get_request_id() == ""
