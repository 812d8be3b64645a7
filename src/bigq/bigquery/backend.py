import asyncio
from typing import Optional

from bigq.backend import JobState, JobStatus, RowPage, SubmitResult

DONE_STATE = "DONE"


class BigQueryBackend:
    """QueryBackend backed by google-cloud-bigquery QueryJobs.

    The wrapped client is blocking; every call runs in a worker thread.
    """

    def __init__(self, client) -> None:
        """Wrap an existing ``google.cloud.bigquery.Client``."""
        self._client = client

    @property
    def client(self):
        return self._client

    async def submit_query(
        self,
        project_id: str,
        dataset_id: str,
        sql: str,
        max_results: Optional[int] = None,
    ) -> SubmitResult:
        """Insert a query job with the configured dataset as its default dataset.

        Job insertion carries no rows, so ``max_results`` is applied when pages
        are fetched rather than here.
        """
        from google.cloud import bigquery

        _ = max_results
        job_config = bigquery.QueryJobConfig()
        job_config.default_dataset = bigquery.DatasetReference(project_id, dataset_id)
        job = await asyncio.to_thread(_submit, self._client, sql, job_config, project_id)
        complete = job.state == DONE_STATE and not job.error_result
        return SubmitResult(job_id=job.job_id, job_complete=complete)

    async def get_job_status(self, project_id: str, job_id: str) -> JobStatus:
        """Reload the job and map its state onto RUNNING/DONE."""
        job = await asyncio.to_thread(_get_job, self._client, project_id, job_id)
        if job.state != DONE_STATE:
            return JobStatus(JobState.RUNNING)
        error_result = job.error_result
        if error_result:
            message = error_result.get("message") or f"BigQuery job {job_id} failed."
            return JobStatus(JobState.DONE, error_message=message)
        return JobStatus(JobState.DONE)

    async def fetch_results_page(
        self,
        project_id: str,
        job_id: str,
        start_index: int,
        max_results: Optional[int] = None,
    ) -> RowPage:
        """Read one API page of the job's destination table."""
        return await asyncio.to_thread(
            _fetch_page,
            self._client,
            project_id,
            job_id,
            start_index,
            max_results,
        )


def _submit(client, sql: str, job_config, project_id: str):
    return client.query(sql, job_config=job_config, project=project_id)


def _get_job(client, project_id: str, job_id: str):
    return client.get_job(job_id, project=project_id)


def _fetch_page(
    client,
    project_id: str,
    job_id: str,
    start_index: int,
    max_results: Optional[int],
) -> RowPage:
    job = _get_job(client, project_id, job_id)
    destination = getattr(job, "destination", None)
    if destination is None:
        # Statements without a result table (DDL, scripts) have nothing to page.
        return RowPage(rows=[], total_rows=0)
    iterator = client.list_rows(
        destination,
        start_index=start_index,
        max_results=max_results,
        page_size=max_results,
    )
    page = next(iter(iterator.pages), None)
    rows = [dict(row) for row in page] if page is not None else []
    return RowPage(
        rows=rows,
        total_rows=iterator.total_rows,
        page_token=iterator.next_page_token,
    )
