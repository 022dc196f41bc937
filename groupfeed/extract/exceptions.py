class FacebookAPIError(Exception):
    """Base exception for Facebook Graph API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class FacebookAuthError(FacebookAPIError):
    """No usable access token."""

    pass


class FacebookNotFoundError(FacebookAPIError):
    """Group or object does not exist (or is not visible to the token)."""

    pass
