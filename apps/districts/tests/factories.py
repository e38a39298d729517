from datetime import datetime, timezone as dt_timezone

from apps.districts.models import DistrictRecord

UPDATED_AT = datetime(2024, 7, 1, 6, 30, tzinfo=dt_timezone.utc)


def record_fields(**overrides):
    fields = {
        'district_code': '3102',
        'district_name': 'Sitapur',
        'state_code': '31',
        'state_name': 'Uttar Pradesh',
        'total_households': 1000,
        'avg_days_per_household': '40.00',
        'total_expenditure': '2500000.00',
        'works_completed': 200,
        'month': '2024-06',
        'updated_at': UPDATED_AT,
    }
    fields.update(overrides)
    return fields


def build_record(**overrides):
    """Unsaved record."""
    return DistrictRecord(**record_fields(**overrides))


def create_record(**overrides):
    return DistrictRecord.objects.create(**record_fields(**overrides))
