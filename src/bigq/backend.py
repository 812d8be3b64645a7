from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Optional,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from bigq.errors import BackendError, BigQError
from bigq.tracing import trace_backend_operation

T = TypeVar("T")
Row = Dict[str, Any]


class JobState(str, Enum):
    """Job lifecycle states reported by the backend."""

    RUNNING = "RUNNING"
    DONE = "DONE"


@dataclass(frozen=True)
class JobStatus:
    """Result of a single job status check."""

    state: JobState
    error_message: Optional[str] = None

    @property
    def done(self) -> bool:
        return self.state == JobState.DONE


@dataclass
class RowPage:
    """One page of query results plus whatever continuation info the backend sent."""

    rows: List[Row] = field(default_factory=list)
    total_rows: Optional[int] = None
    page_token: Optional[str] = None

    def has_more(self, start_index: int) -> bool:
        """Return True when rows remain beyond this page.

        ``start_index`` is the result index of the first row in this page.
        """
        if self.total_rows is not None:
            return start_index + len(self.rows) < self.total_rows
        return bool(self.page_token)


@dataclass(frozen=True)
class SubmitResult:
    """Response to a query submission."""

    job_id: str
    job_complete: bool = False
    first_page: Optional[RowPage] = None


@runtime_checkable
class QueryBackend(Protocol):
    """Capabilities the service needs from the remote query backend."""

    async def submit_query(
        self,
        project_id: str,
        dataset_id: str,
        sql: str,
        max_results: Optional[int] = None,
    ) -> SubmitResult:
        """Submit a query scoped to the given project and default dataset."""
        ...

    async def get_job_status(self, project_id: str, job_id: str) -> JobStatus:
        """Fetch the current status of a job."""
        ...

    async def fetch_results_page(
        self,
        project_id: str,
        job_id: str,
        start_index: int,
        max_results: Optional[int] = None,
    ) -> RowPage:
        """Fetch one page of results starting at ``start_index``."""
        ...


async def call_backend(
    operation: str,
    call: Callable[[], Awaitable[T]],
    sql: Optional[str] = None,
    **attributes: Any,
) -> T:
    """Run one backend round trip, raising transport failures as BackendError.

    Errors that are already part of the bigq taxonomy pass through unchanged.
    """

    async def _run() -> T:
        return await call()

    try:
        return await trace_backend_operation(
            f"bigq.query.{operation}", _run(), sql=sql, **attributes
        )
    except BigQError:
        raise
    except Exception as exc:
        raise BackendError(operation, exc) from exc
