"""Fakes shared by the bigq unit tests."""

from typing import List, Optional

import pytest

from bigq.backend import JobState, JobStatus, RowPage, SubmitResult


class FakeBackend:
    """In-memory QueryBackend that records every call.

    ``statuses`` are returned by successive status checks; an exception in
    the list is raised instead. Once exhausted, status checks report DONE.
    Pages are cut from ``rows``; without a ``max_results`` hint the page size
    is ``default_page_size``.
    """

    def __init__(self) -> None:
        self.submit_result = SubmitResult(job_id="job-1", job_complete=True)
        self.statuses: list = []
        self.rows: List[dict] = []
        self.default_page_size = 2
        self.submit_error: Optional[BaseException] = None
        self.fetch_error: Optional[BaseException] = None
        self.submit_calls: list = []
        self.status_calls: list = []
        self.fetch_calls: list = []

    async def submit_query(self, project_id, dataset_id, sql, max_results=None):
        self.submit_calls.append((project_id, dataset_id, sql, max_results))
        if self.submit_error is not None:
            raise self.submit_error
        return self.submit_result

    async def get_job_status(self, project_id, job_id):
        self.status_calls.append((project_id, job_id))
        if not self.statuses:
            return JobStatus(JobState.DONE)
        status = self.statuses.pop(0)
        if isinstance(status, BaseException):
            raise status
        return status

    async def fetch_results_page(self, project_id, job_id, start_index, max_results=None):
        self.fetch_calls.append((project_id, job_id, start_index, max_results))
        if self.fetch_error is not None:
            raise self.fetch_error
        size = max_results or self.default_page_size
        return RowPage(
            rows=self.rows[start_index : start_index + size],
            total_rows=len(self.rows),
        )


class RecordingSleep:
    """Async sleep replacement that records requested intervals."""

    def __init__(self) -> None:
        self.calls: list = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


def make_rows(count: int) -> List[dict]:
    return [{"n": i} for i in range(count)]


@pytest.fixture
def rows_factory():
    return make_rows
