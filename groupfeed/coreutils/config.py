"""
Runtime Configuration

Settings resolved from the environment (and .env via python-dotenv).

Environment variables:
- GROUPFEED_DB_PATH: DuckDB database file (":memory:" for a throwaway store)
- FB_API_URL: Graph API base URL including version
- FB_ACCESS_TOKEN: Graph API access token
- FB_CLIENT_ID / FB_CLIENT_SECRET: app credentials used when no token is set
- GROUPFEED_REQUEST_TIMEOUT: HTTP timeout in seconds
- GROUPFEED_STRICT_HTTP_STATUS: reject non-2xx group pages when true
- GROUPFEED_FEED_MAX_PAGES: maximum feed pages followed per group
- GROUPFEED_LOG_DIR: directory for dated log files
"""

from dataclasses import dataclass
from typing import Optional

from .env import env_get, env_get_bool, env_get_int

DEFAULT_DB_PATH = "output/groupfeed.duckdb"
DEFAULT_FB_API_URL = "https://graph.facebook.com/v2.8"
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_FEED_MAX_PAGES = 10
DEFAULT_LOG_DIR = "logs"


@dataclass(frozen=True)
class Settings:
    """Immutable settings shared by the pipeline collaborators"""

    db_path: str = DEFAULT_DB_PATH
    fb_api_url: str = DEFAULT_FB_API_URL
    fb_access_token: Optional[str] = None
    fb_client_id: Optional[str] = None
    fb_client_secret: Optional[str] = None
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    strict_http_status: bool = False
    feed_max_pages: int = DEFAULT_FEED_MAX_PAGES
    log_dir: str = DEFAULT_LOG_DIR

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables"""
        return cls(
            db_path=env_get("GROUPFEED_DB_PATH", DEFAULT_DB_PATH),
            fb_api_url=env_get("FB_API_URL", DEFAULT_FB_API_URL).rstrip("/"),
            fb_access_token=env_get("FB_ACCESS_TOKEN"),
            fb_client_id=env_get("FB_CLIENT_ID"),
            fb_client_secret=env_get("FB_CLIENT_SECRET"),
            request_timeout=env_get_int(
                "GROUPFEED_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT
            ),
            strict_http_status=env_get_bool("GROUPFEED_STRICT_HTTP_STATUS", False),
            feed_max_pages=env_get_int(
                "GROUPFEED_FEED_MAX_PAGES", DEFAULT_FEED_MAX_PAGES
            ),
            log_dir=env_get("GROUPFEED_LOG_DIR", DEFAULT_LOG_DIR),
        )
