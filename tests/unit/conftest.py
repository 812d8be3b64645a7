"""Unit test environment helpers."""

import pytest

_ENV_VARS = (
    "BIGQUERY_PROJECT",
    "BIGQUERY_DATASET",
    "BIGQUERY_LOCATION",
    "BIGQUERY_POLL_INTERVAL_SECS",
    "BIGQ_TRACE_QUERIES",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "OTEL_DISABLE_EXPORTER",
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT",
    "OTEL_TRACES_EXPORTER",
)


@pytest.fixture(autouse=True)
def _minimal_env(monkeypatch):
    """Clear env vars that change client behavior so unit tests start from defaults."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
