from datetime import date
from decimal import Decimal
import random

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.districts.models import DistrictRecord

SAMPLE_DISTRICTS = {
    ('18', 'Maharashtra'): [
        ('1801', 'Ahmednagar'), ('1802', 'Nagpur'), ('1803', 'Nashik'), ('1804', 'Pune'),
    ],
    ('31', 'Uttar Pradesh'): [
        ('3101', 'Lucknow'), ('3102', 'Sitapur'), ('3103', 'Kanpur Nagar'),
    ],
    ('27', 'Rajasthan'): [
        ('2701', 'Ajmer'), ('2702', 'Jaipur'), ('2703', 'Udaipur'),
    ],
}


def recent_months(count, today=None):
    """Period ids for the last ``count`` months, oldest first."""
    today = today or date.today()
    year, month = today.year, today.month
    periods = []
    for _ in range(count):
        periods.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    periods.reverse()
    return periods


class Command(BaseCommand):
    help = 'Load sample monthly MGNREGA records for a few states'

    def add_arguments(self, parser):
        parser.add_argument(
            '--months',
            type=int,
            default=6,
            help='Number of months to generate per district (default: 6)',
        )
        parser.add_argument(
            '--seed',
            type=int,
            default=None,
            help='Random seed for reproducible data',
        )

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        months = recent_months(options['months'])
        now = timezone.now()
        created_count = 0

        for (state_code, state_name), districts in SAMPLE_DISTRICTS.items():
            for district_code, district_name in districts:
                if DistrictRecord.objects.filter(district_code=district_code).exists():
                    self.stdout.write(f'Skipping {district_name}: already has data')
                    continue

                DistrictRecord.objects.bulk_create([
                    DistrictRecord(
                        district_code=district_code,
                        district_name=district_name,
                        state_code=state_code,
                        state_name=state_name,
                        total_households=rng.randint(3000, 40000),
                        avg_days_per_household=Decimal(f"{rng.uniform(20, 80):.2f}"),
                        total_expenditure=Decimal(f"{rng.uniform(1e7, 1e8):.2f}"),
                        works_completed=rng.randint(100, 1000),
                        month=month,
                        updated_at=now,
                    )
                    for month in months
                ])
                created_count += len(months)
                self.stdout.write(self.style.SUCCESS(f'Created {len(months)} months for {district_name}'))

        self.stdout.write(self.style.SUCCESS(f'Successfully loaded {created_count} sample records'))
