"""HTTP transport shared by the resolver and the downloader."""

import logging
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from .errors import NetworkRequestFailed

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


class HttpTransport:
    """Single-attempt GET requests over a shared requests session."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 headers: Optional[Dict[str, str]] = None):
        self.timeout = timeout

        self.session = requests.Session()
        # One attempt per request; failures go straight back to the caller.
        self.session.mount('https://', HTTPAdapter(max_retries=0))
        self.session.mount('http://', HTTPAdapter(max_retries=0))
        self.session.headers.update({'User-Agent': DEFAULT_USER_AGENT})
        if headers:
            self.session.headers.update(headers)

    def get(self, url: str, headers: Optional[Dict[str, str]] = None,
            stream: bool = False) -> requests.Response:
        """Issue a GET request, raising NetworkRequestFailed on any transport error
        or non-2xx status."""
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, headers=headers, stream=stream, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkRequestFailed(
                f"Network request failed: {e}",
                details={"url": url, "original_error": e},
            ) from e
        return response

    def get_text(self, url: str) -> str:
        """GET a url and return the decoded body."""
        return self.get(url).text

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
