"""Unit tests for log redaction, JSON output and request id handling."""

import json
import logging

import pytest

from sidebar.api.middleware.request_id import resolve_request_id
from sidebar.logging_config import REDACTED, JsonFormatter, RequestIdFilter, request_id_var


def _record(**extra) -> logging.LogRecord:
    return logging.getLogger("sidebar.test").makeRecord(
        "sidebar.test", logging.INFO, __file__, 1, "Saved keys", (), None, extra=extra,
    )


class TestRedaction:
    def test_credential_extras_are_redacted(self):
        record = _record(
            email="nick@betterboss.ai",
            anthropic_api_key="sk-ant-secret",
            password="Shingles2026!",
            token="eyJ...",
        )

        RequestIdFilter().filter(record)

        assert record.email == "nick@betterboss.ai"
        assert record.anthropic_api_key == REDACTED
        assert record.password == REDACTED
        assert record.token == REDACTED

    def test_request_id_from_context(self):
        ctx = request_id_var.set("req-42")
        try:
            record = _record()
            RequestIdFilter().filter(record)
        finally:
            request_id_var.reset(ctx)

        assert record.request_id == "req-42"

    def test_request_id_placeholder_outside_requests(self):
        record = _record()
        RequestIdFilter().filter(record)

        assert record.request_id == "-"


class TestJsonFormatter:
    def test_extras_are_fields_and_secrets_never_appear(self):
        record = _record(email="nick@betterboss.ai", jobtread_api_key="jt-live-key")
        RequestIdFilter().filter(record)

        line = JsonFormatter().format(record)
        payload = json.loads(line)

        assert payload["message"] == "Saved keys"
        assert payload["email"] == "nick@betterboss.ai"
        assert payload["jobtread_api_key"] == REDACTED
        assert "request_id" not in payload
        assert "jt-live-key" not in line


class TestResolveRequestId:
    def test_well_formed_id_is_kept(self):
        assert resolve_request_id("sidebar-7f3e.chat_1") == "sidebar-7f3e.chat_1"

    @pytest.mark.parametrize("value", [None, "", "has space", "x" * 129, "id\ninjected"])
    def test_other_values_are_replaced(self, value):
        resolved = resolve_request_id(value)

        assert resolved != value
        assert len(resolved) == 36
