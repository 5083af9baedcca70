"""Paginated job list: fetch-and-append, de-duplication, end-of-data tracking."""

import logging
import threading
from enum import Enum
from typing import Optional

from job_board.jobs.api_client import JobFetchClient
from job_board.jobs.models import Job

logger = logging.getLogger("job_board.listing")

DEFAULT_PAGE_SIZE_THRESHOLD = 10

FIRST_LOAD_ERROR_MESSAGE = "Failed to load jobs. Please check your internet connection and try again."
LOAD_MORE_ERROR_MESSAGE = "Failed to load more jobs. Please try again."


class ListState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADING_MORE = "loading_more"
    REFRESHING = "refreshing"
    ERROR = "error"
    EXHAUSTED = "exhausted"


BUSY_STATES = {ListState.LOADING, ListState.LOADING_MORE, ListState.REFRESHING}


class _Mode(Enum):
    FIRST = "first"
    MORE = "more"
    REFRESH = "refresh"


class JobListCoordinator:
    """Drives one listing session (one screen activation).

    At most one fetch is in flight at a time; a load requested while busy is
    a no-op. Every load method returns True only when a fetch ran and its
    result was applied. Collaborator errors become ``ListState.ERROR`` with a
    message in ``error``; nothing is raised to the caller.
    """

    def __init__(self, client: JobFetchClient, page_size_threshold: int = DEFAULT_PAGE_SIZE_THRESHOLD):
        self.client = client
        self.page_size_threshold = page_size_threshold
        self._lock = threading.Lock()
        self._jobs: list[Job] = []
        self._seen_ids: set[str] = set()
        self._generation = 0
        self._closed = False
        self._failed_mode: Optional[_Mode] = None
        self.state = ListState.IDLE
        self.page = 1
        self.has_more = True
        self.error: Optional[str] = None

    @property
    def jobs(self) -> list[Job]:
        return list(self._jobs)

    @property
    def is_busy(self) -> bool:
        return self.state in BUSY_STATES

    @property
    def closed(self) -> bool:
        return self._closed

    def load_first_page(self) -> bool:
        return self._load(_Mode.FIRST, ListState.LOADING)

    def load_more(self) -> bool:
        """Fetch the next page; call when the list nears its end."""
        return self._load(_Mode.MORE, ListState.LOADING_MORE)

    def refresh(self) -> bool:
        """Reload from page 1 and replace the current list."""
        return self._load(_Mode.REFRESH, ListState.REFRESHING)

    def retry(self) -> bool:
        """Re-attempt the page that failed."""
        return self._load(None, ListState.LOADING)

    def close(self):
        """Stop this session. An in-flight fetch finishes but is discarded."""
        with self._lock:
            self._closed = True
            self._generation += 1
        logger.debug("Listing session closed")

    def _can_start(self, mode: _Mode) -> bool:
        # caller holds self._lock
        if mode is _Mode.FIRST:
            return self.state is ListState.IDLE and self.page == 1 and not self._jobs
        if mode is _Mode.MORE:
            return self.state is ListState.IDLE and self.has_more
        return True

    def _load(self, mode: Optional[_Mode], loading_state: ListState) -> bool:
        """Run one fetch. ``mode=None`` repeats the mode that last failed."""
        with self._lock:
            if self._closed or self.is_busy:
                return False
            if mode is None:
                if self.state is not ListState.ERROR or self._failed_mode is None:
                    return False
                mode = self._failed_mode
            elif not self._can_start(mode):
                return False
            page = 1 if mode is _Mode.REFRESH else self.page
            self.state = loading_state
            self.error = None
            generation = self._generation

        try:
            fetched = self.client.fetch_page(page)
        except Exception as e:
            with self._lock:
                if generation != self._generation:
                    return False
                self._fail(mode, page, e)
            return False

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding page %d fetched after close", page)
                return False
            self._apply(mode, page, fetched)
        return True

    def _fail(self, mode: _Mode, page: int, error: Exception):
        logger.error("Error loading jobs page %d: %s", page, error)
        self.state = ListState.ERROR
        self._failed_mode = mode
        self.error = LOAD_MORE_ERROR_MESSAGE if mode is _Mode.MORE else FIRST_LOAD_ERROR_MESSAGE

    def _apply(self, mode: _Mode, page: int, fetched: list[Job]):
        self._failed_mode = None
        if mode is _Mode.REFRESH:
            self._jobs = []
            self._seen_ids = set()
            self.page = 1

        new_jobs = []
        for job in fetched:
            if job.key in self._seen_ids:
                continue
            self._seen_ids.add(job.key)
            new_jobs.append(job)
        self._jobs.extend(new_jobs)

        if not fetched:
            self.has_more = False
            self.state = ListState.EXHAUSTED
            logger.info("No jobs on page %d; list exhausted", page)
            return

        self.page = page + 1
        self.has_more = len(fetched) >= self.page_size_threshold
        self.state = ListState.IDLE
        logger.info(
            "Page %d: %d fetched, %d new, %d total (has_more=%s)",
            page, len(fetched), len(new_jobs), len(self._jobs), self.has_more,
        )
