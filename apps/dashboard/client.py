import logging
from concurrent.futures import ThreadPoolExecutor

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class DashboardClientError(Exception):
    """A dashboard API request failed."""


class DashboardClient:
    """HTTP client for the dashboard JSON API.

    Batch lookups (``all_districts``, ``fetch_many``) fan out on a thread
    pool of at most ``max_workers`` threads and return results in input
    order. The first failed request is raised; nothing is retried.
    """

    def __init__(self, base_url=None, timeout=30, max_workers=None, session=None):
        self.base_url = (base_url or settings.MGNREGA_API_URL).rstrip('/')
        self.timeout = timeout
        self.max_workers = max_workers or settings.MGNREGA_CLIENT_WORKERS
        self.session = session or requests.Session()

    def _get(self, path):
        url = f"{self.base_url}/{path}"
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise DashboardClientError(f"GET {url} failed: {e}") from e
        except ValueError as e:
            raise DashboardClientError(f"GET {url} returned invalid JSON") from e

    def _fan_out(self, func, items):
        items = list(items)
        if not items:
            return []
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as executor:
            # map() yields in input order and re-raises the first failure
            return list(executor.map(func, items))

    def states(self):
        return self._get('states')

    def districts(self, state_code):
        return self._get(f'districts/{state_code}')

    def performance(self, district_code):
        return self._get(f'performance/{district_code}')

    def history(self, district_code):
        return self._get(f'history/{district_code}')

    def all_districts(self):
        """Every district tagged with its state, for client-side search."""
        states = self.states()
        per_state = self._fan_out(lambda state: self.districts(state['state_code']), states)

        mirror = []
        for state, districts in zip(states, per_state):
            for district in districts:
                mirror.append({
                    **district,
                    'state_code': state['state_code'],
                    'state_name': state['state_name'],
                })
        logger.info(f"Loaded {len(mirror)} districts across {len(states)} states")
        return mirror

    def fetch_many(self, district_codes):
        return self._fan_out(self.performance, district_codes)
