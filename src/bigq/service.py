import asyncio
import logging
from typing import Awaitable, Callable, Optional, Union

from bigq.backend import QueryBackend, SubmitResult, call_backend
from bigq.bigquery.client_options import ClientOptions
from bigq.config import Config, QueryOptions
from bigq.errors import ClientInitError, ConfigError, JobExecutionError
from bigq.query import Query
from common.config.env import get_env_float

logger = logging.getLogger(__name__)

# Fixed wait between job status checks.
POLL_INTERVAL_SECONDS = 0.3

BackendFactory = Callable[[], QueryBackend]
SleepFn = Callable[[float], Awaitable[None]]


class Service:
    """Submits queries for one project/dataset and builds result cursors.

    The backend is shared, not owned: the service never closes it.
    Concurrent ``query`` calls are independent of each other.
    """

    def __init__(
        self,
        backend: QueryBackend,
        config: Config,
        poll_interval_seconds: float = POLL_INTERVAL_SECONDS,
        sleep: Optional[SleepFn] = None,
    ) -> None:
        """Wrap an already-built backend with a validated config."""
        if not isinstance(config, Config):
            raise ConfigError(f"config must be a Config instance, got {type(config).__name__}")
        self._backend = backend
        self._config = config
        self._poll_interval_seconds = poll_interval_seconds
        self._sleep = sleep or asyncio.sleep

    @classmethod
    def from_env(
        cls, client_factory: Union[ClientOptions, BackendFactory, None] = None
    ) -> "Service":
        """Build a service from BIGQUERY_* environment variables."""
        config = Config.from_env()
        poll_interval = get_env_float("BIGQUERY_POLL_INTERVAL_SECS", POLL_INTERVAL_SECONDS)
        return new(
            client_factory or ClientOptions.from_env(),
            config,
            poll_interval_seconds=poll_interval,
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def poll_interval_seconds(self) -> float:
        return self._poll_interval_seconds

    async def query(self, sql: str, *args: int) -> Query:
        """Run ``sql`` and return a cursor over its results.

        ``args`` is positionally ``(offset[, page_size])``. ``offset`` is the
        first result row to return; ``page_size`` caps the rows fetched per
        page and is forwarded as a result-limit hint when greater than zero.
        """
        options = QueryOptions.from_args(args)
        submitted = await self._submit(sql, options)

        if not submitted.job_complete:
            await self._wait_for_job(submitted.job_id)

        # A submit-time page always starts at row 0.
        first_page = submitted.first_page if options.offset == 0 else None
        return Query(
            self._backend,
            self._config.project_id,
            submitted.job_id,
            offset=options.offset,
            page_size=options.page_size,
            first_page=first_page,
        )

    async def _submit(self, sql: str, options: QueryOptions) -> SubmitResult:
        project_id = self._config.project_id
        dataset_id = self._config.dataset_id
        max_results = options.max_results
        logger.debug(
            "Submitting query to %s.%s (max_results=%s).", project_id, dataset_id, max_results
        )
        result = await call_backend(
            "submit",
            lambda: self._backend.submit_query(project_id, dataset_id, sql, max_results),
            sql=sql,
        )
        logger.debug("Submitted job %s (complete=%s).", result.job_id, result.job_complete)
        return result

    async def _wait_for_job(self, job_id: str) -> None:
        """Poll job status until DONE; a failed status check is not retried."""
        project_id = self._config.project_id
        checks = 0
        while True:
            status = await call_backend(
                "poll",
                lambda: self._backend.get_job_status(project_id, job_id),
                job_id=job_id,
            )
            checks += 1
            if status.done:
                if status.error_message:
                    logger.warning("BigQuery job %s failed: %s", job_id, status.error_message)
                    raise JobExecutionError(job_id, status.error_message)
                logger.info("BigQuery job %s done after %d status checks.", job_id, checks)
                return
            await self._sleep(self._poll_interval_seconds)


def new(
    client_factory: Union[ClientOptions, BackendFactory],
    config: Config,
    poll_interval_seconds: float = POLL_INTERVAL_SECONDS,
    sleep: Optional[SleepFn] = None,
) -> Service:
    """Create a Service from a backend factory and a config.

    ``client_factory`` is either ``ClientOptions`` or a zero-argument callable
    returning a backend. The config is checked before the factory runs.
    """
    if not isinstance(config, Config):
        raise ConfigError(f"config must be a Config instance, got {type(config).__name__}")

    factory = client_factory
    if isinstance(client_factory, ClientOptions):
        factory = client_factory.backend
    try:
        backend = factory()
    except Exception as exc:
        raise ClientInitError(f"could not build query backend: {exc}") from exc

    return Service(backend, config, poll_interval_seconds=poll_interval_seconds, sleep=sleep)
