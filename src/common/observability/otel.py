"""OTEL enablement checks shared by tracing helpers."""

from __future__ import annotations

import logging
import os

from common.config.env import get_env_bool

logger = logging.getLogger(__name__)


def is_otel_exporter_configured() -> bool:
    """Return True when OTEL exporter environment indicates external export is configured."""
    if get_env_bool("OTEL_DISABLE_EXPORTER", False):
        return False

    endpoint = (os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or "").strip()
    traces_endpoint = (os.getenv("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT") or "").strip()
    traces_exporter = (os.getenv("OTEL_TRACES_EXPORTER") or "").strip().lower()
    if traces_exporter == "none":
        return False

    return bool(endpoint or traces_endpoint)


def is_tracing_enabled(enabled_env_var: str) -> bool:
    """Resolve tracing enablement, letting an explicit env override win over exporter defaults."""
    raw = os.getenv(enabled_env_var)
    if raw is not None:
        try:
            return get_env_bool(enabled_env_var, False) is True
        except ValueError:
            logger.warning("Invalid %s value '%s'; tracing disabled.", enabled_env_var, raw)
            return False
    return is_otel_exporter_configured()
