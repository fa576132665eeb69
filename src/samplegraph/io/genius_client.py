# src/samplegraph/io/genius_client.py
from __future__ import annotations
from typing import Dict, Any, List, Optional
import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from ratelimit import limits, sleep_and_retry

from samplegraph.errors import SongNotFound, UpstreamError

DEFAULT_BASE = "https://api.genius.com"
RETRY_STATUSES = {429, 500, 502, 503, 504}


class _RetryableResponse(requests.RequestException):
    """A response worth retrying (rate limited or server error)."""


class GeniusClient:
    """
    Thin Genius API client.

    Network errors, 429 and 5xx responses are retried with exponential
    backoff; requests are rate limited client-side. Anything that still
    fails is raised as UpstreamError, and a 404 as SongNotFound.
    """

    def __init__(self, access_token: str, base_url: str = DEFAULT_BASE,
                 user_agent: str = "samplegraph/0.1", timeout: float = 20,
                 session: Optional[requests.Session] = None):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Authorization": f"Bearer {self.access_token}",
        })

    @sleep_and_retry
    @limits(calls=50, period=60)
    @retry(reraise=True, stop=stop_after_attempt(5),
           wait=wait_exponential(multiplier=2, min=2, max=60),
           retry=retry_if_exception_type((requests.RequestException,)))
    def _get_with_retry(self, path: str, params: Dict[str, Any]) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        r = self.session.get(url, params=params, timeout=self.timeout)
        if r.status_code in RETRY_STATUSES:
            raise _RetryableResponse(f"{r.status_code} from {url}")
        return r

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET a Genius endpoint and return the ``response`` object of the envelope."""
        try:
            r = self._get_with_retry(path, params)
        except requests.RequestException as e:
            raise UpstreamError(f"request to {path} failed", e) from e

        if r.status_code in (401, 403):
            raise UpstreamError(f"{r.status_code} Unauthorized/Forbidden for {path} - check GENIUS_KEY")
        if r.status_code == 404:
            return {}
        if r.status_code >= 400:
            raise UpstreamError(f"{r.status_code} from {path}: {r.text[:200]}")

        try:
            body = r.json()
        except ValueError as e:
            raise UpstreamError(f"non-JSON body from {path}", e) from e
        status = (body.get("meta") or {}).get("status", r.status_code)
        if status != 200:
            raise UpstreamError(f"Genius returned status {status} for {path}")
        return body.get("response") or {}

    def get_song(self, song_id: int) -> Dict[str, Any]:
        """Fetch the full song record, including ``song_relationships``."""
        response = self._get(f"/songs/{song_id}", {"text_format": "plain"})
        song = response.get("song")
        if not song:
            raise SongNotFound(song_id)
        return song

    def search(self, q: str) -> List[Dict[str, Any]]:
        """Search songs; returns the raw hit list."""
        response = self._get("/search", {"q": q})
        return [hit for hit in response.get("hits") or [] if hit.get("type", "song") == "song"]
