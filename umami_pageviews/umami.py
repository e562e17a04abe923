"""Umami share API client for umami-pageviews.

Exchanges a public share id for a website id and share token, then
queries per-path statistics with that token. Uses only stdlib urllib.
"""

import json
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass

from umami_pageviews.config import UmamiConfig

ROOT_PATH = "/"
SHARE_TOKEN_HEADER = "x-umami-share-token"


class AuthenticationError(Exception):
    """The share endpoint refused to hand out a token."""

    def __init__(self, status: int, reason: str):
        self.status = status
        self.reason = reason
        super().__init__(f"Failed to fetch auth token: {status} {reason}")


@dataclass(frozen=True)
class AuthToken:
    website_id: str
    token: str


def fetch_json(url: str, headers: dict | None = None, timeout: float = 30) -> dict:
    """Make a GET request and decode the JSON body."""
    req = urllib.request.Request(url)
    req.add_header("Accept", "application/json")
    for name, value in (headers or {}).items():
        req.add_header(name, value)

    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return json.loads(resp.read().decode("utf-8"))


def get_auth_token(config: UmamiConfig, timeout: float = 30) -> AuthToken:
    """Resolve the configured share id into a website id and token.

    Raises AuthenticationError on any non-2xx response.
    """
    url = f"{config.api_url}/api/share/{config.share_id}"
    print(f"Fetching auth token from: {url}")
    try:
        data = fetch_json(url, timeout=timeout)
    except urllib.error.HTTPError as e:
        raise AuthenticationError(e.code, str(e.reason)) from e
    return AuthToken(website_id=data["websiteId"], token=data["token"])


def build_stats_params(config: UmamiConfig, path: str, now_ms: int) -> dict:
    """Build the stats query covering everything from the epoch up to now_ms."""
    params = {
        "startAt": "0",
        "endAt": str(now_ms),
        "unit": "hour",
        "timezone": config.timezone,
        "compare": "false",
    }
    # The root is the site-wide total, which Umami returns when no path
    # filter is given at all.
    if path != ROOT_PATH:
        params["path"] = f"eq.{path}"
    return params


def get_page_stats(
    config: UmamiConfig,
    auth: AuthToken,
    path: str,
    timeout: float = 30,
    now_ms: int | None = None,
) -> dict | None:
    """Fetch the stats payload for one path.

    Returns None when the API answers with an error status. Network
    failures are left for the caller to handle.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    query = urllib.parse.urlencode(build_stats_params(config, path, now_ms))
    url = f"{config.api_url}/api/websites/{auth.website_id}/stats?{query}"

    try:
        return fetch_json(url, headers={SHARE_TOKEN_HEADER: auth.token}, timeout=timeout)
    except urllib.error.HTTPError as e:
        print(f"Failed to fetch stats for {path}: {e.code}", file=sys.stderr)
        return None


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def extract_pageviews(stats: dict | None) -> int:
    """Pull the pageview count out of a stats payload.

    Newer Umami versions wrap metrics as {"value": N}; older ones return
    the bare number. The wrapped form wins, then the bare form, else 0.
    Negative counts are clamped to 0.
    """
    if not isinstance(stats, dict):
        return 0
    pageviews = stats.get("pageviews")
    if isinstance(pageviews, dict):
        pageviews = pageviews.get("value")
    if _is_number(pageviews):
        return max(0, int(pageviews))
    return 0
