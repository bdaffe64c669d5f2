# utils.py
import re
import logging
import uuid
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests

from errors import ApiError

logger = logging.getLogger(__name__)

def format_mac(mac: str) -> str:
    """Formats a MAC address to lowercase with colons.

    Accepts colon, hyphen or unseparated forms. Malformed input (odd length,
    non-hex characters) is still grouped in pairs instead of raising, so one
    bad record never aborts a run; it just won't match anything.
    """
    cleaned = re.sub(r"[:-]", "", mac).lower()
    return ":".join(cleaned[i:i + 2] for i in range(0, len(cleaned), 2))

def is_valid_url(url: str) -> bool:
    """Checks if a string is an absolute http(s) URL."""
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError):
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)

def is_valid_uuid(value: str) -> bool:
    """Checks if a string is a canonical 8-4-4-4-12 UUID."""
    pattern = r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"
    if not isinstance(value, str) or not re.match(pattern, value, re.IGNORECASE):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True

class ApiClient:
    """A utility class for authenticated JSON requests against a platform API."""

    def __init__(self, name: str, base_url: str, headers: Optional[Dict[str, str]] = None,
                 timeout: int = 30, session: Optional[requests.Session] = None):
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if headers:
            self.session.headers.update(headers)

    def request(self, path: str, method: str = "GET", params: Optional[Dict[str, Any]] = None,
                body: Optional[Dict[str, Any]] = None) -> Any:
        """Sends a request and returns the decoded JSON body.

        Raises:
            ApiError: on connection problems, non-2xx responses or bodies that
                are not valid JSON.
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{self.name} API request: {method} {url}")
        try:
            response = self.session.request(method, url, params=params, json=body,
                                            timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{self.name} API request failed: {e}")
            raise ApiError(f"{self.name} API request failed: {e}") from e

        if not response.ok:
            message = (f"{self.name} API error: {response.status_code} "
                       f"{response.reason} - {response.text}")
            logger.error(message)
            raise ApiError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"{self.name} API returned invalid JSON: {e}",
                           status_code=response.status_code) from e

    def close(self):
        """Closes the underlying HTTP session."""
        self.session.close()
