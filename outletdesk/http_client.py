"""Shared HTTP client for the backend and the asset host."""

import requests
from requests.adapters import HTTPAdapter

_session: requests.Session | None = None


def get_session() -> requests.Session:
    """Return a shared requests.Session with connection pooling.

    Requests are never retried: a failed read or write surfaces as a single
    error to the caller.
    """
    global _session
    if _session is None:
        _session = requests.Session()
        adapter = HTTPAdapter(max_retries=0)
        _session.mount("http://", adapter)
        _session.mount("https://", adapter)
    return _session
