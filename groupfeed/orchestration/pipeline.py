"""
Group Loader - Load-Group-From-Facebook Workflow

Turns a request body into a stored group with its postings:

1. validate_request_shape: parse the body (BadRequest on malformed input)
2. validate_request_url: require a URL (Unprocessable when missing)
3. retrieve_group_html: download the page (BadRequest when unreachable)
4. parse_group_id: find the fb://group deep link (Unprocessable when absent)
5. check_conflicting_group: reject groups already stored
6. save_group_and_fetch_remote_data: Graph API lookup, then insert the group
7. add_postings: insert the group's feed postings

Each step returns Ok/Err; the executor stops at the first Err. Nothing is
written before step 6, and step 6 only writes once the Graph API lookup
succeeded.
"""

from typing import Any, Callable, Optional

import requests
from pydantic import ValidationError
import logging

from ..coreutils.config import Settings
from ..coreutils.request import new_page_session
from ..extract.exceptions import FacebookAPIError
from ..extract.facebook_api import FacebookGraphClient
from ..extract.page_fetcher import fetch_group_html
from ..load.exceptions import GroupAlreadyExistsError
from ..load.group_store import GroupStore
from ..load.models import Group
from ..transformation.parsers import extract_group_id
from ..transformation.transformers import postings_to_frame
from ..transformation.validators import UrlRequest, extract_url, parse_url_request
from .context import GroupContext
from .executor import Pipeline
from .results import (
    FACEBOOK_DETAILS_NOT_FOUND,
    GROUP_ALREADY_EXISTS,
    URL_NOT_GROUP_PAGE,
    URL_NOT_SUPPLIED,
    URL_UNRESOLVED,
    Ok,
    Outcome,
    bad_request,
    unprocessable,
)

logger = logging.getLogger(__name__)

STEP_NAMES = (
    "validate_request_shape",
    "validate_request_url",
    "retrieve_group_html",
    "parse_group_id",
    "check_conflicting_group",
    "save_group_and_fetch_remote_data",
    "add_postings",
)


class GroupLoader:
    """Loads a Facebook group and its postings from a group page URL"""

    def __init__(
        self,
        store: GroupStore,
        api_client: FacebookGraphClient,
        session: Optional[requests.Session] = None,
        request_timeout: int = 30,
        strict_http_status: bool = False,
        on_step: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the loader

        Args:
            store: Group storage
            api_client: Graph API client used to resolve group records
            session: HTTP session for group pages (a page session if omitted)
            request_timeout: Timeout for the page download, in seconds
            strict_http_status: Treat non-2xx group pages as unreachable
            on_step: Observer called with each step name before it runs
        """
        self.store = store
        self.api_client = api_client
        self._owns_api_client = False
        self._owns_session = session is None
        self.session = session or new_page_session()
        self.request_timeout = request_timeout
        self.strict_http_status = strict_http_status
        self.pipeline = Pipeline(
            [(name, getattr(self, name)) for name in STEP_NAMES],
            name="load_group",
            on_step=on_step,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, store: Optional[GroupStore] = None
    ) -> "GroupLoader":
        loader = cls(
            store=store or GroupStore.from_settings(settings),
            api_client=FacebookGraphClient.from_settings(settings),
            request_timeout=settings.request_timeout,
            strict_http_status=settings.strict_http_status,
        )
        loader._owns_api_client = True
        return loader

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the HTTP sessions this loader created; the store stays open"""
        if self._owns_session:
            self.session.close()
        if self._owns_api_client:
            self.api_client.close()

    def run(self, payload: Any) -> Outcome:
        """
        Run the whole workflow for one request body

        Args:
            payload: JSON request body ({"url": ...}) as str/bytes, or a dict

        Returns:
            Outcome: Ok(Group) or the Err of the first failing step
        """
        return self.pipeline.run(payload)

    def validate_request_shape(self, payload: Any) -> Outcome:
        try:
            return Ok(parse_url_request(payload))
        except (ValidationError, TypeError) as e:
            logger.info(f"Rejected malformed request body: {e}")
            return bad_request(URL_UNRESOLVED)

    def validate_request_url(self, request: UrlRequest) -> Outcome:
        url = extract_url(request)
        if url is None:
            return unprocessable(URL_NOT_SUPPLIED)
        return Ok(url)

    def retrieve_group_html(self, url: str) -> Outcome:
        try:
            html = fetch_group_html(
                url,
                session=self.session,
                timeout=self.request_timeout,
                strict_status=self.strict_http_status,
            )
        except requests.exceptions.RequestException as e:
            logger.info(f"Could not fetch group page {url}: {e}")
            return bad_request(URL_UNRESOLVED)
        return Ok(GroupContext(url=url, html=html))

    def parse_group_id(self, context: GroupContext) -> Outcome:
        context.fb_id = extract_group_id(context.html)
        if context.fb_id is None:
            return unprocessable(URL_NOT_GROUP_PAGE)
        return Ok(context)

    def check_conflicting_group(self, context: GroupContext) -> Outcome:
        if self.store.find_group(context.fb_id) is not None:
            return unprocessable(GROUP_ALREADY_EXISTS)
        return Ok(context)

    def save_group_and_fetch_remote_data(self, context: GroupContext) -> Outcome:
        try:
            context.api_data = self.api_client.get_group(context.fb_id)
        except (FacebookAPIError, requests.exceptions.RequestException, ValidationError) as e:
            logger.warning(f"Graph API lookup failed for group {context.fb_id}: {e}")
            return unprocessable(FACEBOOK_DETAILS_NOT_FOUND)

        try:
            context.group = self.store.create_group(
                fb_id=context.fb_id,
                name=context.api_data.name,
                fb_url=context.url,
            )
        except GroupAlreadyExistsError:
            logger.info(f"Group {context.fb_id} was stored by a concurrent load")
            return unprocessable(GROUP_ALREADY_EXISTS)
        return Ok(context)

    def add_postings(self, context: GroupContext) -> Outcome:
        postings_df = postings_to_frame(context.group.id, context.api_data.feed)
        self.store.add_postings(context.group, postings_df)
        return Ok(context.group)


def load_group(payload: Any, settings: Optional[Settings] = None) -> Outcome:
    """Convenience function: build a loader from settings and run it once"""
    settings = settings or Settings.from_env()
    with GroupStore.from_settings(settings) as store, \
            GroupLoader.from_settings(settings, store=store) as loader:
        outcome = loader.run(payload)
    if isinstance(outcome, Ok):
        group: Group = outcome.value
        logger.info(f"✅ Loaded group {group.fb_id} ({group.name})")
    return outcome
