"""Minimal async client for running queries against BigQuery.

``Service.query`` submits a SQL statement, waits for the job to finish and
returns a ``Query`` cursor that pages through the results lazily.
"""

from bigq.backend import JobState, JobStatus, QueryBackend, RowPage, SubmitResult
from bigq.bigquery import BigQueryBackend, ClientOptions
from bigq.config import Config, QueryOptions
from bigq.errors import (
    ArgumentError,
    BackendError,
    BigQError,
    ClientInitError,
    ConfigError,
    JobExecutionError,
)
from bigq.query import Query
from bigq.service import POLL_INTERVAL_SECONDS, Service, new

__all__ = [
    "ArgumentError",
    "BackendError",
    "BigQError",
    "BigQueryBackend",
    "ClientInitError",
    "ClientOptions",
    "Config",
    "ConfigError",
    "JobExecutionError",
    "JobState",
    "JobStatus",
    "POLL_INTERVAL_SECONDS",
    "Query",
    "QueryBackend",
    "QueryOptions",
    "RowPage",
    "Service",
    "SubmitResult",
    "new",
]
