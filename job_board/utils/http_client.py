"""HTTP session factory for the upstream jobs API."""

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger("job_board.http")

USER_AGENT = "job-board/0.1 (+https://testapi.getlokalapp.com)"


def create_session(max_retries: int = 0, backoff_factor: float = 0.0) -> requests.Session:
    """Create a requests session for JSON APIs.

    Retries default to zero: retry policy belongs to the caller.
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    })

    return session
