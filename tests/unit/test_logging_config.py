"""Unit tests for logging configuration."""

import structlog

from paybox_direct.logging_config import MASK, configure_logging, mask_sensitive_fields


def test_mask_top_level_fields():
    event = mask_sensitive_fields(
        None, "info", {"event": "paybox_request_sent", "CLE": "secret", "TYPE": "00001"}
    )

    assert event == {"event": "paybox_request_sent", "CLE": MASK, "TYPE": "00001"}


def test_mask_nested_field_sets():
    event = mask_sensitive_fields(
        None,
        "info",
        {
            "event": "debug_fields",
            "fields": {
                "PORTEUR": "1111222233334444",
                "CVV": "123",
                "DATEVAL": "1030",
                "MONTANT": "0000001429",
            },
        },
    )

    assert event["fields"] == {
        "PORTEUR": MASK,
        "CVV": MASK,
        "DATEVAL": MASK,
        "MONTANT": "0000001429",
    }


def test_configure_logging_json():
    configure_logging(log_level="DEBUG", format_as_json=True)
    try:
        processors = structlog.get_config()["processors"]

        assert mask_sensitive_fields in processors
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        # Masking runs before rendering
        assert processors.index(mask_sensitive_fields) < len(processors) - 1
    finally:
        structlog.reset_defaults()


def test_configure_logging_console():
    configure_logging(log_level="INFO", format_as_json=False)
    try:
        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
    finally:
        structlog.reset_defaults()


def test_masking_applies_to_client_logs():
    capture = structlog.testing.LogCapture()
    structlog.configure(processors=[mask_sensitive_fields, capture])
    try:
        structlog.get_logger("paybox_direct.test").info(
            "paybox_request_sent", fields={"CLE": "my_password", "TYPE": "00001"}
        )

        assert capture.entries == [
            {
                "event": "paybox_request_sent",
                "log_level": "info",
                "fields": {"CLE": MASK, "TYPE": "00001"},
            }
        ]
    finally:
        structlog.reset_defaults()
