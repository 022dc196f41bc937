"""
Facebook Graph API Client - Pure I/O Operations

This module handles all calls to the Graph API with no business logic.
Returns the group record and its feed as extract-layer models.
"""

import time
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError
import logging

from ..coreutils.config import Settings
from ..coreutils.request import get_response, new_session
from .exceptions import FacebookAPIError, FacebookAuthError, FacebookNotFoundError
from .schemas import GraphFeedPage, RemoteGroup, RemotePosting

logger = logging.getLogger(__name__)

# Graph API fields
GROUP_FIELDS = "id,name"
FEED_FIELDS = (
    "id,created_time,updated_time,message,name,"
    "attachments{title,description,url,media}"
)

# Graph error code for unknown or invisible objects
GRAPH_NOT_FOUND_CODES = {100, 803}


class FacebookGraphClient:
    """Pure API client for the Graph API group endpoints"""

    def __init__(
        self,
        access_token: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        api_url: str = "https://graph.facebook.com/v2.8",
        timeout: int = 30,
        max_feed_pages: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.max_feed_pages = max_feed_pages
        self.client_id = client_id
        self.client_secret = client_secret
        self._access_token = access_token
        self._owns_session = session is None
        self.session = session or new_session()

    def close(self):
        """Close the HTTP session if this client created it"""
        if self._owns_session:
            self.session.close()

    @classmethod
    def from_settings(
        cls, settings: Settings, session: Optional[requests.Session] = None
    ) -> "FacebookGraphClient":
        return cls(
            access_token=settings.fb_access_token,
            client_id=settings.fb_client_id,
            client_secret=settings.fb_client_secret,
            api_url=settings.fb_api_url,
            timeout=settings.request_timeout,
            max_feed_pages=settings.feed_max_pages,
            session=session,
        )

    @property
    def access_token(self) -> str:
        """Configured token, or an app token from the client-credentials grant"""
        if self._access_token:
            return self._access_token

        if not (self.client_id and self.client_secret):
            raise FacebookAuthError(
                "FB_ACCESS_TOKEN or FB_CLIENT_ID/FB_CLIENT_SECRET must be set"
            )

        logger.info("Requesting Graph API app access token")
        payload = self._request(
            f"{self.api_url}/oauth/access_token",
            {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "grant_type": "client_credentials",
            },
        )
        token = payload.get("access_token")
        if not token:
            raise FacebookAuthError("Graph API returned no access token")

        self._access_token = token
        return token

    def _request(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET a Graph URL and return its decoded JSON body"""
        try:
            response = get_response(self.session, url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error calling Graph API {url}: {e}")
            raise FacebookAPIError(f"Graph API request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise FacebookAPIError(
                f"Invalid JSON response from Graph API {url}",
                status_code=response.status_code,
            ) from e

        if isinstance(payload, dict) and "error" in payload:
            error = payload["error"] or {}
            message = error.get("message", "Unknown Graph API error")
            if error.get("code") in GRAPH_NOT_FOUND_CODES or response.status_code == 404:
                raise FacebookNotFoundError(message, status_code=response.status_code)
            if error.get("type") == "OAuthException" and error.get("code") == 190:
                raise FacebookAuthError(message, status_code=response.status_code)
            raise FacebookAPIError(message, status_code=response.status_code)

        if response.status_code >= 400:
            raise FacebookAPIError(
                f"status={response.status_code}, url={url!r}",
                status_code=response.status_code,
            )

        if not isinstance(payload, dict):
            raise FacebookAPIError(f"Unexpected Graph API payload from {url}")

        return payload

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        query = dict(params or {})
        query["access_token"] = self.access_token
        return self._request(f"{self.api_url}/{path.lstrip('/')}", query)

    def get_group_info(self, group_id: str) -> Dict[str, Any]:
        """
        Fetch the raw group record

        Args:
            group_id: Graph id of the group

        Returns:
            Dict: Raw group data (id, name)
        """
        logger.info(f"Fetching group {group_id} from Graph API")
        return self._get(group_id, {"fields": GROUP_FIELDS})

    def get_feed(self, group_id: str) -> List[RemotePosting]:
        """
        Fetch the group feed, following `paging.next` up to max_feed_pages

        Args:
            group_id: Graph id of the group

        Returns:
            List[RemotePosting]: Postings in feed order
        """
        start_time = time.time()
        postings: List[RemotePosting] = []

        payload = self._get(f"{group_id}/feed", {"fields": FEED_FIELDS})
        pages = 1
        while True:
            try:
                page = GraphFeedPage.model_validate(payload)
                postings.extend(RemotePosting.from_graph(item) for item in page.data or [])
            except (KeyError, ValidationError) as e:
                raise FacebookAPIError(f"Malformed feed page for {group_id}: {e}") from e

            next_url = page.paging.next if page.paging else None
            if not next_url or pages >= self.max_feed_pages:
                break

            # next links already carry the access token and fields
            payload = self._request(next_url)
            pages += 1

        elapsed = time.time() - start_time
        logger.info(
            f"Fetched {len(postings)} postings for group {group_id} "
            f"({pages} pages): {elapsed:.2f} seconds"
        )
        return postings

    def get_group(self, group_id: str) -> RemoteGroup:
        """
        Fetch the group record together with its feed

        Args:
            group_id: Graph id of the group

        Returns:
            RemoteGroup: Group with feed postings
        """
        info = self.get_group_info(group_id)
        try:
            return RemoteGroup(
                id=str(info["id"]),
                name=info["name"],
                feed=self.get_feed(group_id),
            )
        except (KeyError, ValidationError) as e:
            raise FacebookAPIError(f"Malformed group record for {group_id}: {e}") from e
