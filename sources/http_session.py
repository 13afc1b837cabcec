"""
Shared HTTP session handling for the job provider APIs
"""
import logging
import time
from typing import Any, Dict, Optional

import requests
from requests.exceptions import ConnectionError, Timeout
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

DEFAULT_HEADERS = {
    "User-Agent": "job-search-engine/1.0 (+https://github.com)",
    "Accept": "application/json",
    "Accept-Language": "en-US,en;q=0.9",
}


class ApiSession:
    """Session for one provider with polite request spacing and automatic retries"""

    def __init__(self, provider_name: str, min_request_interval: float = 0.5):
        self.provider_name = provider_name
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.last_request_time = 0.0
        self.min_request_interval = min_request_interval

        logging.info(f"Initialized API session for {provider_name}")

    @retry(
        stop=stop_after_attempt(3),  # 3 attempts total
        wait=wait_fixed(1),
        retry=retry_if_exception_type((ConnectionError, Timeout)),
        reraise=True,
    )
    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None,
                 headers: Optional[Dict[str, str]] = None, timeout: float = 10) -> Any:
        """GET a JSON document, retrying connection errors and timeouts"""
        return self.get_json_once(url, params=params, headers=headers, timeout=timeout)

    def get_json_once(self, url: str, params: Optional[Dict[str, Any]] = None,
                      headers: Optional[Dict[str, str]] = None, timeout: float = 10) -> Any:
        """GET a JSON document in a single attempt, raising for non-2xx responses"""
        time_since_last = time.time() - self.last_request_time
        if time_since_last < self.min_request_interval:
            time.sleep(self.min_request_interval - time_since_last)

        try:
            response = self.session.get(url, params=params, headers=headers, timeout=timeout)
            logging.info(f"Request to {url}: Status {response.status_code}")

            if response.status_code in (403, 429):
                logging.warning(f"{self.provider_name} is rate limiting us (status {response.status_code})")

            response.raise_for_status()
            return response.json()
        except Timeout:
            logging.error(f"Timeout requesting {url}")
            raise
        finally:
            self.last_request_time = time.time()


# Sessions are reused per provider
_sessions: Dict[str, ApiSession] = {}


def get_session(provider_name: str) -> ApiSession:
    """Get or create the ApiSession for a provider"""
    if provider_name not in _sessions:
        _sessions[provider_name] = ApiSession(provider_name)
    return _sessions[provider_name]


def clear_sessions() -> None:
    for session in _sessions.values():
        session.session.close()
    _sessions.clear()
