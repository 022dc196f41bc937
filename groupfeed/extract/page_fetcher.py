"""
Group Page Fetcher - Extract Layer

Downloads the HTML of a group page. No parsing happens here.
"""

import time
from typing import Optional

import requests
import logging

from ..coreutils.request import new_page_session

logger = logging.getLogger(__name__)


def fetch_group_html(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: int = 30,
    strict_status: bool = False,
) -> str:
    """
    Fetch a group page and return its body as text

    Any response with a body counts as fetched, whatever its status code,
    unless strict_status is set.

    Args:
        url: Group page URL
        session: HTTP session to use (a page session is created if omitted)
        timeout: Request timeout in seconds
        strict_status: Raise on 4xx/5xx responses

    Returns:
        str: Response body

    Raises:
        requests.RequestException: On transport errors, timeouts, invalid URLs
            and (in strict mode) HTTP error statuses
    """
    session = session or new_page_session()
    logger.info(f"Fetching group page {url}")
    start = time.time()

    response = session.get(url, timeout=timeout)
    if strict_status:
        response.raise_for_status()
    elif response.status_code >= 400:
        logger.warning(f"Group page {url} answered with status {response.status_code}")

    logger.info(f"Fetched from {url}: {time.time() - start:.2f} seconds")
    return response.text
