"""Testes para config.logging.

Cobre: configure_logging, get_logger, CorrelationIdFilter,
SecretRedactionFilter, create_json_formatter, create_text_formatter.
"""

from __future__ import annotations

import json
import logging

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    SecretRedactionFilter,
    configure_logging,
    create_json_formatter,
    create_text_formatter,
    get_logger,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "message", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        """Configura logging com nível padrão INFO."""
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_is_case_insensitive(self) -> None:
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        """configure_logging substitui handlers existentes."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_handler_has_context_and_redaction_filters(self) -> None:
        configure_logging(correlation_id_getter=lambda: "custom-corr-id")
        filters = logging.getLogger().handlers[0].filters
        assert any(isinstance(f, CorrelationIdFilter) for f in filters)
        assert any(isinstance(f, SecretRedactionFilter) for f in filters)

    def test_text_output_for_development(self) -> None:
        configure_logging(json_output=False)
        formatter = logging.getLogger().handlers[0].formatter
        assert not isinstance(formatter, type(create_json_formatter()))

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "paykaduna-integration"


class TestGetLogger:
    def test_get_logger_same_name_returns_same_instance(self) -> None:
        logger = get_logger("same.module")
        assert logger is get_logger("same.module")
        assert logger.name == "same.module"


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("my_service", lambda: "corr-123")
        record = _record()
        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        """Filter preserva correlation_id passado via extra."""
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"
        filter_.filter(record)
        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        filter_ = CorrelationIdFilter("service_name", None)
        record = _record()
        filter_.filter(record)
        assert record.correlation_id == ""


class TestSecretRedactionFilter:
    def test_sensitive_fields_are_masked(self) -> None:
        record = _record()
        record.api_key = "super-secret"
        record.signature = "abc=="
        record.bill_reference = "B1"

        assert SecretRedactionFilter().filter(record) is True
        assert record.api_key == "***"
        assert record.signature == "***"
        assert record.bill_reference == "B1"

    def test_custom_fields(self) -> None:
        record = _record()
        record.token = "t"
        SecretRedactionFilter(fields={"token"}).filter(record)
        assert record.token == "***"


class TestFormatters:
    def test_required_log_fields_content(self) -> None:
        expected = {"asctime", "levelname", "name", "message", "correlation_id", "service"}
        assert expected == set(REQUIRED_LOG_FIELDS)
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_json_formatter_formats_record(self) -> None:
        record = _record("paykaduna_call_success")
        record.correlation_id = "abc-123"
        record.service = "paykaduna-integration"
        record.status_code = 200

        payload = json.loads(create_json_formatter().format(record))

        assert payload["message"] == "paykaduna_call_success"
        assert payload["logger"] == "test.logger"
        assert payload["level"] == "INFO"
        assert payload["correlation_id"] == "abc-123"
        assert payload["status_code"] == 200

    def test_text_formatter_includes_context(self) -> None:
        record = _record("bill_created")
        record.correlation_id = "cid-1"
        record.service = "svc"

        output = create_text_formatter().format(record)

        assert "bill_created" in output
        assert "[svc]" in output
        assert "cid=cid-1" in output


class TestLoggingIntegration:
    def test_full_logging_flow(self) -> None:
        configure_logging(
            level="DEBUG",
            service_name="integration_test",
            correlation_id_getter=lambda: "int-test-001",
        )
        logger = get_logger("integration.test")
        # Não deve levantar exceção
        logger.debug("paykaduna_retry_scheduled", extra={"backoff_ms": 1000})
        logger.info("bill_created", extra={"bill_reference": "B1", "api_key": "k"})
        logger.warning("webhook_signature_mismatch", extra={"received_prefix": "abcdef0123"})
