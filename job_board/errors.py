"""Error types raised by the fetch client and the bookmark store."""

from typing import Optional


class JobBoardError(Exception):
    """Base class for job board errors."""


class FetchError(JobBoardError):
    """A page fetch failed at the transport level or with a non-success status."""

    def __init__(self, page: int, cause: BaseException, status_code: Optional[int] = None):
        self.page = page
        self.cause = cause
        self.status_code = status_code
        detail = f"HTTP {status_code}" if status_code else f"{type(cause).__name__}: {cause}"
        super().__init__(f"Failed to fetch jobs page {page}: {detail}")


class MalformedResponseError(JobBoardError):
    """The upstream answered, but without the expected `results` collection."""

    def __init__(self, page: int, reason: str):
        self.page = page
        self.reason = reason
        super().__init__(f"Malformed response for jobs page {page}: {reason}")


class StorageError(JobBoardError):
    """Bookmark persistence failure."""


class StorageReadError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass
