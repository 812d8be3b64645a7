import logging
from typing import Optional

from bigq.backend import QueryBackend, Row, RowPage, call_backend

logger = logging.getLogger(__name__)


class Query:
    """Forward-only async cursor over the rows of a finished query job.

    Rows are fetched from the backend one page at a time as the cursor is
    advanced. The cursor is single-use and must not be advanced from several
    tasks at once.
    """

    def __init__(
        self,
        backend: QueryBackend,
        project_id: str,
        job_id: str,
        offset: int = 0,
        page_size: int = 0,
        first_page: Optional[RowPage] = None,
    ) -> None:
        """Seed the cursor with the first page when the submission already returned one."""
        self._backend = backend
        self._project_id = project_id
        self._job_id = job_id
        self._offset = offset
        self._page_size = page_size
        self._rows: list = []
        self._index = 0
        # Start index of the next page to fetch; None once no continuation remains.
        self._next_start: Optional[int] = offset
        if first_page is not None:
            self._load(first_page, offset)

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def job_id(self) -> str:
        return self._job_id

    @property
    def offset(self) -> int:
        """Result index of the first row in the current page."""
        return self._offset

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def exhausted(self) -> bool:
        """Return True once every row has been yielded and no page remains."""
        return self._next_start is None and self._index >= len(self._rows)

    def __aiter__(self) -> "Query":
        return self

    async def __anext__(self) -> Row:
        row = await self.next()
        if row is None:
            raise StopAsyncIteration
        return row

    async def next(self) -> Optional[Row]:
        """Return the next row, or None at the end of the result set."""
        while self._index >= len(self._rows):
            if self._next_start is None:
                return None
            start = self._next_start
            page = await self._fetch_page(start)
            self._load(page, start)
        row = self._rows[self._index]
        self._index += 1
        return row

    async def _fetch_page(self, start_index: int) -> RowPage:
        max_results = self._page_size if self._page_size > 0 else None
        logger.debug(
            "Fetching page for job %s at index %s (max_results=%s).",
            self._job_id,
            start_index,
            max_results,
        )
        return await call_backend(
            "fetch",
            lambda: self._backend.fetch_results_page(
                self._project_id, self._job_id, start_index, max_results
            ),
            job_id=self._job_id,
            start_index=start_index,
        )

    def _load(self, page: RowPage, start_index: int) -> None:
        self._offset = start_index
        self._rows = list(page.rows or [])
        self._index = 0
        if not self._rows or not page.has_more(start_index):
            self._next_start = None
            return
        step = self._page_size if self._page_size > 0 else len(self._rows)
        self._next_start = start_index + step
