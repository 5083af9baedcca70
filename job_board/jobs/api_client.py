"""Paged client for the upstream jobs endpoint."""

import logging
from typing import Optional

import requests

from job_board.errors import FetchError, MalformedResponseError
from job_board.jobs.models import Job
from job_board.jobs.normalizer import normalize_job
from job_board.utils.http_client import create_session

logger = logging.getLogger("job_board.jobs.api")

DEFAULT_BASE_URL = "https://testapi.getlokalapp.com"
JOBS_PATH = "/common/jobs"


class JobFetchClient:
    """Fetch one page of jobs at a time and normalize every result.

    A single request is issued per call; failures are never retried here.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else create_session()

    @property
    def jobs_url(self) -> str:
        return f"{self.base_url}{JOBS_PATH}"

    def fetch_page(self, page: int) -> list[Job]:
        """Return the normalized jobs of ``page`` in upstream order.

        Raises FetchError on transport failure or a non-success status. A
        response without a ``results`` list is logged and yields ``[]``.
        """
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValueError(f"page must be an integer >= 1, got {page!r}")

        logger.debug("Fetching jobs page %d", page)
        try:
            response = self.session.get(self.jobs_url, params={"page": page}, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("Jobs page %d failed with HTTP %s", page, status)
            raise FetchError(page, e, status_code=status) from e
        except requests.RequestException as e:
            logger.error("Jobs page %d request failed: %s", page, e)
            raise FetchError(page, e) from e

        try:
            results = self._extract_results(page, response)
        except MalformedResponseError as e:
            logger.warning("%s; treating as empty page", e)
            return []

        jobs = [normalize_job(item) for item in results]
        logger.info("Fetched %d jobs from page %d", len(jobs), page)
        return jobs

    @staticmethod
    def _extract_results(page: int, response: requests.Response) -> list:
        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(page, f"body is not JSON ({e})") from e

        if not isinstance(body, dict):
            raise MalformedResponseError(page, f"expected an object, got {type(body).__name__}")
        results = body.get("results")
        if not isinstance(results, list):
            raise MalformedResponseError(page, "missing 'results' list")
        return results

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
