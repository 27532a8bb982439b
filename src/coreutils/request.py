import requests
from typing import Any, Dict, Optional


def new_session(headers: Optional[Dict[str, str]] = None) -> requests.Session:
    """Create a new requests session with default headers"""
    session = requests.Session()

    # Set default headers
    session.headers.update(
        {"User-Agent": "airtable-menu-pipeline/1.0", "Accept": "application/json"}
    )
    if headers:
        session.headers.update(headers)

    return session


def get_json_simple(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: int = 30,
) -> Dict[str, Any]:
    """Simple GET request with JSON parsing - no retries or rate limiting"""
    response = session.get(url, params=params, timeout=timeout)
    response.raise_for_status()
    return response.json()
