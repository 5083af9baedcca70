"""In-memory bookmark state kept in step with the BookmarkStore."""

import logging
import threading
from typing import Optional

from job_board.errors import StorageReadError, StorageWriteError
from job_board.jobs.models import Job, JobId, bookmark_key
from job_board.storage.bookmark_store import BookmarkStore

logger = logging.getLogger("job_board.bookmarks")

LOAD_ERROR_MESSAGE = "Failed to load bookmarks. Please try again."
TOGGLE_ERROR_MESSAGE = "Failed to update bookmark. Please try again."


class BookmarkStateCoordinator:
    """Shared bookmark state for presentation code.

    Create one per application and pass it to whatever needs it. It starts
    empty; call :meth:`reload` once the store is available. The in-memory
    list and id set only ever change to match what the store reported.
    """

    def __init__(self, store: BookmarkStore):
        self.store = store
        self._jobs: list[Job] = []
        self._ids: set[str] = set()
        self._lock = threading.Lock()
        self.is_loading = False
        self.error: Optional[str] = None

    @property
    def jobs(self) -> list[Job]:
        return list(self._jobs)

    @property
    def bookmarked_ids(self) -> frozenset[str]:
        return frozenset(self._ids)

    def is_bookmarked(self, job_id: JobId) -> bool:
        return bookmark_key(job_id) in self._ids

    def reload(self) -> bool:
        """Replace the in-memory state with the store's contents.

        On a read failure the previous state is kept and ``error`` is set.
        """
        with self._lock:
            self.is_loading = True
            try:
                jobs = self.store.list_all()
            except StorageReadError as e:
                logger.error("Error loading bookmarks: %s", e)
                self.error = LOAD_ERROR_MESSAGE
                return False
            except Exception as e:
                logger.error("Unexpected error loading bookmarks: %s", e, exc_info=True)
                self.error = LOAD_ERROR_MESSAGE
                return False
            finally:
                self.is_loading = False

            self._jobs = jobs
            self._ids = {job.key for job in jobs}
            self.error = None
            logger.info("Loaded %d bookmarks", len(jobs))
            return True

    def toggle(self, job: Job) -> bool:
        """Toggle ``job`` in the store, then mirror the outcome in memory.

        Returns whether the job is bookmarked afterwards. If the store write
        fails nothing changes and the current membership is returned.
        """
        with self._lock:
            try:
                bookmarked = self.store.toggle(job)
            except StorageWriteError as e:
                logger.error("Error toggling bookmark for job %s: %s", job.key, e)
                self.error = TOGGLE_ERROR_MESSAGE
                return job.key in self._ids
            except Exception as e:
                logger.error("Unexpected error toggling bookmark for job %s: %s", job.key, e, exc_info=True)
                self.error = TOGGLE_ERROR_MESSAGE
                return job.key in self._ids

            self.error = None
            if bookmarked:
                self._jobs = [j for j in self._jobs if j.key != job.key] + [job]
                self._ids = self._ids | {job.key}
            else:
                self._jobs = [j for j in self._jobs if j.key != job.key]
                self._ids = self._ids - {job.key}
            return bookmarked
