import hashlib
from typing import Any, Awaitable, Optional

from common.observability import is_tracing_enabled

PROVIDER = "bigquery"


def trace_enabled() -> bool:
    """Return True when query tracing is enabled or OTEL exporter defaults apply."""
    return is_tracing_enabled("BIGQ_TRACE_QUERIES")


def _hash_sql(sql: str) -> str:
    return hashlib.sha256(sql.encode("utf-8")).hexdigest()


async def trace_backend_operation(
    name: str,
    operation: Awaitable,
    sql: Optional[str] = None,
    **attributes: Any,
):
    """Trace a backend round trip with OTEL when enabled."""
    if not trace_enabled():
        return await operation

    from opentelemetry import trace

    tracer = trace.get_tracer("bigq")
    with tracer.start_as_current_span(name) as span:
        span.set_attribute("db.provider", PROVIDER)
        if sql:
            span.set_attribute("db.statement_hash", _hash_sql(sql))
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(f"bigq.{key}", value)
        try:
            result = await operation
            span.set_attribute("db.status", "ok")
            return result
        except Exception:
            span.set_attribute("db.status", "error")
            raise
