"""HTTP client module with connection pooling"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

DEFAULT_TIMEOUT = 10  # seconds
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

# Global session for connection pooling
_session: Optional[requests.Session] = None


def get_session() -> requests.Session:
    """Get or create a shared session with connection pooling."""
    global _session

    if _session is None:
        _session = requests.Session()
        _session.headers.update({"User-Agent": USER_AGENT})

        adapter = HTTPAdapter(pool_connections=4, pool_maxsize=4)
        _session.mount("http://", adapter)
        _session.mount("https://", adapter)

    return _session


def close_session() -> None:
    """Close the shared session."""
    global _session

    if _session is not None:
        _session.close()
        _session = None


def fetch_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Optional[Any]:
    """Fetch JSON data using the shared session, None on any failure."""
    session = get_session()

    try:
        response = session.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.Timeout:
        logging.warning(f"Timeout fetching {url}")
    except requests.RequestException as e:
        logging.warning(f"Error fetching {url}: {e}")
    except ValueError as e:
        logging.warning(f"Invalid JSON from {url}: {e}")

    return None
