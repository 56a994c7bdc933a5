"""
DaData legal-entity suggestions
Best-effort: every failure except cancellation degrades to an empty list
"""

import logging
import threading
import time
from typing import Dict, List, Optional

import requests

from payplanner.config import config_manager
from payplanner.exceptions import DadataAPIError, OperationCancelledError

logger = logging.getLogger(__name__)

class LegalEntityEnrichmentService:
    """Client for the DaData suggest/party endpoint"""

    TRANSIENT_STATUS_CODES = (408, 429, 502, 503, 504)

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.api_key = api_key
        self.base_url = base_url or config_manager.get_app_config('DADATA_DEFAULT_BASE_URL')
        self.timeout = timeout or config_manager.get_app_config('DADATA_DEFAULT_TIMEOUT_SECONDS')
        self.max_attempts = config_manager.get_app_config('DADATA_MAX_ATTEMPTS')

        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @classmethod
    def from_config(cls, config) -> 'LegalEntityEnrichmentService':
        """Build from a Flask config mapping"""
        return cls(
            api_key=config.get('DADATA_API_KEY'),
            base_url=config.get('DADATA_BASE_URL'),
            timeout=config.get('DADATA_TIMEOUT_SECONDS'),
        )

    @staticmethod
    def effective_limit(limit) -> int:
        """Absent or non-positive limits use the default; the rest is clamped"""
        default = config_manager.get_app_config('DADATA_DEFAULT_LIMIT')
        high = config_manager.get_app_config('DADATA_MAX_LIMIT')
        try:
            limit = int(limit) if limit is not None else 0
        except (TypeError, ValueError):
            limit = 0
        if limit <= 0:
            limit = default
        return max(1, min(high, limit))

    def suggest(self, query: Optional[str] = None, inn: Optional[str] = None, limit=None,
                cancel_event: Optional[threading.Event] = None) -> List[Dict]:
        """Suggestions for a name or INN; INN wins when both are given"""
        if not self.api_key:
            logger.debug("DaData token not configured, skipping suggestions")
            return []

        search = _search_text(inn) or _search_text(query)
        if not search:
            return []

        count = self.effective_limit(limit)
        try:
            response = self._post('suggest/party', {'query': search, 'count': count}, cancel_event)
            if not response.ok:
                logger.warning("DaData suggest failed: %s %s", response.status_code, response.reason)
                return []

            payload = response.json()
            if not isinstance(payload, dict):
                raise DadataAPIError("Unexpected DaData response shape", response.status_code)
            suggestions = payload.get('suggestions') or []
            results = [self._map_suggestion(item) for item in suggestions]
            return [item for item in results if item['shortName'].strip()][:count]
        except OperationCancelledError:
            raise
        except Exception:
            logger.error("DaData suggest error for '%s'", search, exc_info=True)
            return []

    def _post(self, endpoint: str, body: Dict, cancel_event: Optional[threading.Event]):
        """POST with retries on transient status codes and quadratic back-off"""
        url = self._url(endpoint)
        headers = dict(self.headers, Authorization=f"Token {self.api_key}")

        attempt = 0
        while True:
            attempt += 1
            self._check_cancelled(cancel_event)
            response = requests.post(url, json=body, headers=headers, timeout=self.timeout)
            self._check_cancelled(cancel_event)

            if response.status_code in self.TRANSIENT_STATUS_CODES and attempt < self.max_attempts:
                delay = 0.2 * attempt * attempt
                logger.debug("Retry %s for %s, status %s", attempt, url, response.status_code)
                self._pause(delay, cancel_event)
                continue
            return response

    def _url(self, endpoint: str) -> str:
        base = (self.base_url or '').strip()
        if not base.endswith('/'):
            base += '/'
        return base + endpoint.lstrip('/')

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError()

    @staticmethod
    def _pause(delay: float, cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is None:
            time.sleep(delay)
        elif cancel_event.wait(delay):
            raise OperationCancelledError()

    @staticmethod
    def _map_suggestion(item: Dict) -> Dict:
        data = item.get('data') or {}
        name = data.get('name') or {}
        address = data.get('address') or {}
        management = data.get('management') or {}

        short_name = item.get('value') or name.get('short_with_opf') or ''
        return {
            'shortName': short_name,
            'fullName': name.get('full_with_opf') or item.get('value') or name.get('short_with_opf'),
            'inn': data.get('inn'),
            'kpp': data.get('kpp'),
            'ogrn': data.get('ogrn'),
            'address': address.get('value'),
            'phone': _first_value(data.get('phones')),
            'email': _first_value(data.get('emails')),
            'director': management.get('name'),
        }

def _first_value(values) -> Optional[str]:
    """First entry of a phones/emails list; entries are strings or {value: ...}"""
    if not values:
        return None
    first = values[0]
    if isinstance(first, dict):
        return first.get('value')
    return first

def _search_text(value) -> str:
    """Trimmed text of a query or INN; JSON numbers are accepted as text"""
    if value is None or isinstance(value, (dict, list, bool)):
        return ''
    return str(value).strip()
