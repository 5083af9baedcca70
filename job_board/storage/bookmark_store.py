"""SQLite-backed storage for bookmarked job snapshots."""

import json
import logging
import threading
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from job_board.errors import StorageReadError, StorageWriteError
from job_board.jobs.models import Job, JobId, bookmark_key
from job_board.models import Base, Bookmark, create_db_engine, create_session_factory

logger = logging.getLogger("job_board.storage")


class BookmarkStore:
    """Durable mapping of job id -> Job snapshot.

    Snapshots are serialized at bookmarking time, so later fetches of the
    same job never alter a saved bookmark. Toggles are serialized per store.
    """

    def __init__(self, db_path: str = "data/bookmarks.db"):
        self.db_path = db_path
        self.engine = create_db_engine(db_path)
        self.Session = create_session_factory(self.engine)
        self._lock = threading.RLock()
        self._schema_ready = False

    def _ensure_schema(self):
        if not self._schema_ready:
            Base.metadata.create_all(self.engine)
            self._schema_ready = True

    def list_all(self) -> list[Job]:
        """Return every bookmark in bookmarking order."""
        try:
            with self._lock:
                self._ensure_schema()
                with self.Session() as session:
                    rows = session.scalars(select(Bookmark).order_by(Bookmark.position)).all()
                    payloads = [(row.job_key, row.payload) for row in rows]
        except SQLAlchemyError as e:
            logger.error("Could not read bookmarks from %s: %s", self.db_path, e)
            raise StorageReadError(f"Could not read bookmarks: {e}") from e

        jobs = []
        for key, payload in payloads:
            try:
                jobs.append(Job.from_dict(json.loads(payload)))
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.error("Corrupt bookmark payload for job %s: %s", key, e)
                raise StorageReadError(f"Corrupt bookmark for job {key}") from e
        return jobs

    def is_bookmarked(self, job_id: JobId) -> bool:
        try:
            with self._lock:
                self._ensure_schema()
                with self.Session() as session:
                    return session.get(Bookmark, bookmark_key(job_id)) is not None
        except SQLAlchemyError as e:
            raise StorageReadError(f"Could not read bookmarks: {e}") from e

    def toggle(self, job: Job) -> bool:
        """Remove the bookmark if present, else save a snapshot.

        Returns True when the job is bookmarked afterwards, False otherwise.
        """
        key = job.key
        with self._lock:
            try:
                self._ensure_schema()
                with self.Session() as session, session.begin():
                    existing = session.get(Bookmark, key)
                    if existing is not None:
                        session.delete(existing)
                        bookmarked = False
                    else:
                        last: Optional[int] = session.scalar(select(func.max(Bookmark.position)))
                        session.add(Bookmark(
                            job_key=key,
                            position=(last or 0) + 1,
                            payload=json.dumps(job.to_dict(), ensure_ascii=False),
                        ))
                        bookmarked = True
            except (SQLAlchemyError, TypeError, ValueError) as e:
                # TypeError/ValueError: snapshot not JSON-serializable
                logger.error("Could not toggle bookmark for job %s: %s", key, e)
                raise StorageWriteError(f"Could not update bookmark for job {key}: {e}") from e

        logger.info("Job %s %s", key, "bookmarked" if bookmarked else "removed from bookmarks")
        return bookmarked

    def count(self) -> int:
        try:
            with self._lock:
                self._ensure_schema()
                with self.Session() as session:
                    return session.scalar(select(func.count()).select_from(Bookmark)) or 0
        except SQLAlchemyError as e:
            raise StorageReadError(f"Could not read bookmarks: {e}") from e

    def clear(self):
        """Delete every bookmark."""
        with self._lock:
            try:
                self._ensure_schema()
                with self.Session() as session, session.begin():
                    session.execute(delete(Bookmark))
            except SQLAlchemyError as e:
                raise StorageWriteError(f"Could not clear bookmarks: {e}") from e
        logger.info("Cleared all bookmarks")

    def close(self):
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
