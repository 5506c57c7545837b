"""
HTTP fetching for page and link checks.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from check_pages.config import DEFAULT_TIMEOUT_S, DEFAULT_USER_AGENT

GET = "GET"
HEAD = "HEAD"


@dataclass(slots=True)
class FetchResult:
    """Outcome of one HTTP request; error is set only for transport failures."""
    status: Optional[int] = None
    ok: bool = False
    body: Optional[str] = None
    error: Optional[str] = None


def is_ok_status(status: int, allow_redirects: bool = True) -> bool:
    """2xx is ok; 3xx is ok only when redirects were allowed."""
    if allow_redirects:
        return 200 <= status < 400
    return 200 <= status < 300


class Fetcher:
    """Issues GET/HEAD requests over a shared session with cache-busting headers."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        })

    def fetch(
        self,
        method: str,
        url: str,
        allow_redirects: bool = True,
        read_body: bool = True,
    ) -> FetchResult:
        """
        Perform a single request.

        Transport failures (DNS, connection, timeout, invalid URL) are
        returned as FetchResult.error rather than raised. With read_body
        off the response is streamed and closed without downloading it.
        """
        try:
            resp = self.session.request(
                method,
                url,
                timeout=self.timeout_s,
                allow_redirects=allow_redirects,
                stream=not read_body,
            )
        except requests.RequestException as e:
            return FetchResult(error=_describe_error(e))

        try:
            body = resp.text if read_body and method != HEAD else None
        except requests.RequestException as e:
            return FetchResult(status=resp.status_code, error=_describe_error(e))
        finally:
            resp.close()

        return FetchResult(
            status=resp.status_code,
            ok=is_ok_status(resp.status_code, allow_redirects),
            body=body,
        )

    def close(self) -> None:
        self.session.close()


def _describe_error(e: requests.RequestException) -> str:
    return f"{type(e).__name__}: {e}"
