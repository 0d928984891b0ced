"""Unit tests for structured logging helpers."""

import json
import logging

from authorship_governance.engines.authorship import AuthorshipStatus, ReasonCode
from authorship_governance.kernel.events import CeEventType
from authorship_governance.logging_config import (
    GovernanceTextFormatter,
    JsonFormatter,
    RequestIdFilter,
    get_request_id,
    governance_fields,
    request_id_var,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "authorship_governance.test", logging.WARNING, __file__, 1, "Export blocked", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestIdFilter:
    def test_uses_context_request_id(self):
        token = request_id_var.set("req-9")
        try:
            record = _record()
            assert RequestIdFilter().filter(record) is True
            assert record.request_id == "req-9"
            assert get_request_id() == "req-9"
        finally:
            request_id_var.reset(token)

    def test_placeholder_outside_request(self):
        record = _record()
        RequestIdFilter().filter(record)
        assert record.request_id == "-"


class TestGovernanceFields:
    def test_fixed_order_and_enum_values(self):
        record = _record(
            reason_codes=[ReasonCode.LANGUAGE_VIOLATION],
            export_id="exp-1",
            image_id="img-1",
            event_type=CeEventType.EXPORT_BLOCKED,
        )
        assert governance_fields(record) == {
            "image_id": "img-1",
            "export_id": "exp-1",
            "event_type": "export_blocked",
            "reason_codes": ["LANGUAGE_VIOLATION"],
        }

    def test_none_values_skipped(self):
        assert governance_fields(_record(image_id=None)) == {}


class TestJsonFormatter:
    def test_governance_ids_are_top_level(self):
        record = _record(
            request_id="req-1",
            image_id="img-1",
            authorship_status=AuthorshipStatus.SYNTHETIC_AI,
            reason_codes=[ReasonCode.LANGUAGE_VIOLATION],
            export_id=None,
        )
        out = json.loads(JsonFormatter().format(record))
        assert out["message"] == "Export blocked"
        assert out["level"] == "WARNING"
        assert out["request_id"] == "req-1"
        assert out["image_id"] == "img-1"
        assert out["authorship_status"] == "SYNTHETIC_AI"
        assert out["reason_codes"] == ["LANGUAGE_VIOLATION"]
        assert "export_id" not in out
        assert "context" not in out

    def test_other_extras_nested_under_context(self):
        record = _record(path="/api/v1/authorship/classify", payload=object())
        out = json.loads(JsonFormatter().format(record))
        assert out["context"]["path"] == "/api/v1/authorship/classify"
        assert out["context"]["payload"].startswith("<object object")
        assert "path" not in out


class TestGovernanceTextFormatter:
    def test_appends_governance_pairs(self):
        record = _record(
            request_id="req-2",
            export_id="exp-7",
            reason_codes=[ReasonCode.CREATOR_FIELD_BLOCKED, ReasonCode.LANGUAGE_VIOLATION],
        )
        line = GovernanceTextFormatter().format(record)
        assert "req=req-2" in line
        assert line.endswith("| export_id=exp-7 reason_codes=CREATOR_FIELD_BLOCKED,LANGUAGE_VIOLATION")

    def test_plain_line_without_governance_fields(self):
        line = GovernanceTextFormatter().format(_record())
        assert line.endswith("Export blocked")
        assert "req=-" in line
