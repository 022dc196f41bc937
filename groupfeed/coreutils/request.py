from urllib3.util.retry import Retry
import requests
from requests.adapters import HTTPAdapter
from typing import Any, Dict, Optional

USER_AGENT = "pipe-fbgroup-to-duckdb/0.1"

DEFAULT_RETRY_STRATEGY = Retry(
    total=3,  # Total number of retries
    backoff_factor=1,  # The backoff factor (1 second, then 2, 4...)
    status_forcelist=[429, 500, 502, 503, 504],  # HTTP status codes to retry on
    allowed_methods=["GET"],
)

# Group pages are accepted whatever their status, so the final response is
# handed back instead of raising once retries run out.
PAGE_RETRY_STRATEGY = Retry(
    total=2,
    backoff_factor=0.5,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET"],
    raise_on_status=False,
)


def new_session(
    accept: str = "application/json",
    retry_strategy: Optional[Retry] = None,
) -> requests.Session:
    """Create a new requests session with retry strategy"""
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retry_strategy or DEFAULT_RETRY_STRATEGY)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    # Set default headers
    session.headers.update({"User-Agent": USER_AGENT, "Accept": accept})

    return session


def new_page_session() -> requests.Session:
    """Session used to download HTML group pages"""
    return new_session(
        accept="text/html,application/xhtml+xml",
        retry_strategy=PAGE_RETRY_STRATEGY,
    )


def get_response(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: int = 30,
) -> requests.Response:
    """Simple GET request - no retries beyond the session adapter.

    The body is not decoded here so that callers can inspect error payloads
    that come back with a non-2xx status.
    """
    return session.get(url, params=params, timeout=timeout)
