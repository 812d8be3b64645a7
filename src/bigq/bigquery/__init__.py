"""BigQuery-backed query backend."""

from .backend import BigQueryBackend
from .client_options import ClientOptions

__all__ = [
    "BigQueryBackend",
    "ClientOptions",
]
