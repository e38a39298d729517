import logging

from django.conf import settings
from django.db import DatabaseError

from apps.districts.models import DistrictRecord
from .aggregation import build_performance
from .cache import TimedCache
from .exceptions import NotFound, UpstreamFailure

logger = logging.getLogger(__name__)

HISTORY_FIELDS = (
    'month',
    'avg_days_per_household',
    'total_households',
    'total_expenditure',
    'works_completed',
)


def unique_by(rows, key):
    """Group ``rows`` by ``row[key]`` and keep the first row of each group."""
    seen = set()
    unique = []
    for row in rows:
        if row[key] in seen:
            continue
        seen.add(row[key])
        unique.append(row)
    return unique


class DistrictQueryService:
    """Read-only queries over the monthly district records table.

    Results are memoized in ``cache`` for the endpoints switched on in
    ``policy`` (``states``, ``districts``, ``performance``, ``history``).
    """

    def __init__(self, cache, policy=None):
        self.cache = cache
        self.policy = dict(settings.MGNREGA_CACHE_POLICY if policy is None else policy)

    def _cached(self, endpoint, key, fetch):
        if self.policy.get(endpoint):
            return self.cache.get_or_fetch(key, fetch)
        return fetch()

    @staticmethod
    def _query(description, fetch):
        try:
            return fetch()
        except DatabaseError as e:
            logger.error(f"Store query failed while {description}: {e}")
            raise UpstreamFailure(str(e)) from e

    def list_states(self):
        def fetch():
            logger.info("Fetching states from store")
            rows = self._query('fetching states', lambda: list(
                DistrictRecord.objects
                .order_by('state_name')
                .values('state_code', 'state_name')
            ))
            return unique_by(rows, 'state_code')

        return self._cached('states', 'states', fetch)

    def list_districts(self, state_code):
        def fetch():
            logger.info(f"Fetching districts for state {state_code}")
            rows = self._query(f'fetching districts of {state_code}', lambda: list(
                DistrictRecord.objects
                .filter(state_code=state_code)
                .order_by('district_name')
                .values('district_code', 'district_name')
            ))
            return unique_by(rows, 'district_code')

        return self._cached('districts', f'districts_{state_code}', fetch)

    def list_all_districts(self):
        """Every district tagged with its state, in one query, for search."""
        def fetch():
            logger.info("Fetching all districts from store")
            rows = self._query('fetching all districts', lambda: list(
                DistrictRecord.objects
                .order_by('district_name')
                .values('district_code', 'district_name', 'state_code', 'state_name')
            ))
            return unique_by(rows, 'district_code')

        return self._cached('districts', 'all_districts', fetch)

    def get_latest_two(self, district_code):
        """Return ``[current]`` or ``[current, previous]``, newest first."""
        def fetch():
            return self._query(f'fetching latest records of {district_code}', lambda: list(
                DistrictRecord.objects
                .filter(district_code=district_code)
                .order_by('-month')[:2]
            ))

        records = self._cached('performance', f'performance_{district_code}', fetch)
        if not records:
            logger.warning(f"District not found: {district_code}")
            raise NotFound(f"District not found: {district_code}")
        return records

    def state_peers(self, state_code, month):
        return self._query(f'fetching {state_code} peers for {month}', lambda: list(
            DistrictRecord.objects
            .filter(state_code=state_code, month=month)
            .only('avg_days_per_household')
        ))

    def get_performance(self, district_code):
        records = self.get_latest_two(district_code)
        current = records[0]
        previous = records[1] if len(records) > 1 else None

        try:
            peers = self.state_peers(current.state_code, current.month)
        except UpstreamFailure:
            # State average is secondary; report the district without it
            peers = []

        return build_performance(current, previous, peers)

    def get_history(self, district_code, months=None):
        """Last ``months`` monthly records, oldest first."""
        months = months or settings.MGNREGA_HISTORY_MONTHS

        def fetch():
            rows = self._query(f'fetching history of {district_code}', lambda: list(
                DistrictRecord.objects
                .filter(district_code=district_code)
                .order_by('-month')
                .values(*HISTORY_FIELDS)[:months]
            ))
            rows.reverse()
            return [_history_row(row) for row in rows]

        history = self._cached('history', f'history_{district_code}_{months}', fetch)
        if not history:
            logger.warning(f"No history for district {district_code}")
            raise NotFound(f"District not found: {district_code}")
        return history

    def health(self):
        return {'records': self._query('checking store health', DistrictRecord.objects.count)}

    def clear_cache(self):
        self.cache.clear()


def _history_row(row):
    avg_days = row['avg_days_per_household']
    return {
        'month': row['month'],
        'avg_days_per_household': float(avg_days) if avg_days is not None else None,
        'total_households': row['total_households'],
        'total_expenditure': float(row['total_expenditure'] or 0),
        'works_completed': row['works_completed'],
    }


def default_service():
    """Service wired to the configured cache alias, TTL and policy."""
    return DistrictQueryService(TimedCache())
