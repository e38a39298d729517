from django.core.management.base import BaseCommand
from django.db.models import Count, Max

from apps.districts.models import DistrictRecord


class Command(BaseCommand):
    help = 'Check data health and coverage of the district records table'

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('\n=== MGNREGA Data Health Check ===\n'))

        total_records = DistrictRecord.objects.count()
        districts = DistrictRecord.objects.order_by().values('district_code').distinct().count()
        states = DistrictRecord.objects.order_by().values('state_code').distinct().count()
        latest_month = DistrictRecord.objects.aggregate(latest=Max('month'))['latest']

        self.stdout.write(f"Total records: {total_records}")
        self.stdout.write(f"Districts: {districts}")
        self.stdout.write(f"States: {states}")
        self.stdout.write(f"Latest month: {latest_month or 'N/A'}")

        self.stdout.write(self.style.WARNING('\n=== Coverage by State ==='))
        coverage = (
            DistrictRecord.objects
            .values('state_name')
            .annotate(
                districts=Count('district_code', distinct=True),
                months=Count('month', distinct=True),
            )
            .order_by('-districts')
        )
        for row in coverage:
            self.stdout.write(f"  {row['state_name']}: {row['districts']} districts, {row['months']} months")

        # A trend needs a previous month
        single_month = (
            DistrictRecord.objects
            .values('district_code', 'district_name', 'state_name')
            .annotate(months=Count('month', distinct=True))
            .filter(months__lt=2)
            .order_by('state_name', 'district_name')
        )
        if single_month.exists():
            self.stdout.write(self.style.WARNING('\n=== Districts Without Trend Data ==='))
            for row in single_month[:10]:
                self.stdout.write(f"  - {row['district_name']}, {row['state_name']} (Code: {row['district_code']})")

        duplicates = (
            DistrictRecord.objects
            .values('district_code', 'month')
            .annotate(rows=Count('id'))
            .filter(rows__gt=1)
            .count()
        )
        if duplicates:
            self.stdout.write(self.style.ERROR(f'\n{duplicates} district-months have duplicate rows'))

        self.stdout.write(self.style.SUCCESS('\n✓ Health check complete!'))
