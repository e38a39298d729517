from django.core.management.base import BaseCommand, CommandError

from apps.dashboard.client import DashboardClient, DashboardClientError
from apps.dashboard.presentation import filter_districts


class Command(BaseCommand):
    help = 'Search every district known to the dashboard API by district or state name'

    def add_arguments(self, parser):
        parser.add_argument('term', help='Part of a district or state name')
        parser.add_argument('--base-url', type=str, default=None)
        parser.add_argument('--workers', type=int, default=None)
        parser.add_argument('--limit', type=int, default=10)

    def handle(self, *args, **options):
        client = DashboardClient(base_url=options['base_url'], max_workers=options['workers'])

        try:
            districts = client.all_districts()
        except DashboardClientError as e:
            raise CommandError(str(e))

        matches = filter_districts(districts, options['term'], limit=options['limit'])
        if not matches:
            self.stdout.write(self.style.WARNING(f"No districts match '{options['term']}'"))
            return

        for d in matches:
            self.stdout.write(f"  {d['district_code']}  {d['district_name']}, {d['state_name']}")
