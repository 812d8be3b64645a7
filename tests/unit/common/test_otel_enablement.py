"""Tests for OTEL-aware tracing enablement defaults."""

from common.observability import is_otel_exporter_configured, is_tracing_enabled


def test_tracing_enabled_when_exporter_configured_without_explicit_flag(monkeypatch):
    """Exporter configuration should enable tracing by default."""
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", "http://otel-collector:4318")
    monkeypatch.delenv("SOME_TRACE_FLAG", raising=False)

    assert is_tracing_enabled("SOME_TRACE_FLAG") is True


def test_explicit_true_wins_without_exporter(monkeypatch):
    """Explicit true should enable tracing with no exporter configured."""
    monkeypatch.setenv("SOME_TRACE_FLAG", "true")

    assert is_tracing_enabled("SOME_TRACE_FLAG") is True


def test_exporter_disabled_flags(monkeypatch):
    """OTEL_DISABLE_EXPORTER and OTEL_TRACES_EXPORTER=none should both disable export."""
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://otel-collector:4317")
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "none")
    assert is_otel_exporter_configured() is False

    monkeypatch.delenv("OTEL_TRACES_EXPORTER")
    monkeypatch.setenv("OTEL_DISABLE_EXPORTER", "1")
    assert is_otel_exporter_configured() is False
