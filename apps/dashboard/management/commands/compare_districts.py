from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.dashboard.client import DashboardClient, DashboardClientError
from apps.dashboard.presentation import (
    ComparisonSet,
    MAX_COMPARE,
    language_or_default,
    metric_cards,
    translate,
)


class Command(BaseCommand):
    help = 'Fetch up to three districts from the dashboard API and print them side by side'

    def add_arguments(self, parser):
        parser.add_argument('district_codes', nargs='+', help='District codes to compare')
        parser.add_argument(
            '--base-url',
            type=str,
            default=None,
            help='Dashboard API base URL (default: MGNREGA_API_URL)',
        )
        parser.add_argument(
            '--lang',
            type=str,
            default=settings.MGNREGA_DEFAULT_LANGUAGE,
            help='Label language: hi or en',
        )
        parser.add_argument(
            '--workers',
            type=int,
            default=None,
            help='Maximum concurrent requests',
        )

    def handle(self, *args, **options):
        language = language_or_default(options['lang'])
        compare = ComparisonSet(options['district_codes'])
        if len(options['district_codes']) > MAX_COMPARE:
            self.stdout.write(self.style.WARNING(f'Only the first {MAX_COMPARE} districts are compared'))

        client = DashboardClient(base_url=options['base_url'], max_workers=options['workers'])
        self.stdout.write(f'Fetching {len(compare)} districts from {client.base_url}...')

        try:
            results = compare.refresh(client.fetch_many)
        except DashboardClientError as e:
            self.stdout.write(self.style.ERROR(f"✗ {translate('error', language)}"))
            raise CommandError(str(e))

        for performance in results:
            district = performance['district']
            self.stdout.write(self.style.SUCCESS(
                f"\n{district['district_name']}, {district['state_name']} ({district['month']})"
            ))
            for card in metric_cards(performance, language):
                arrow = '↑' if card['direction'] == 'up' else '↓'
                self.stdout.write(
                    f"  {card['title']}: {card['value']}  {arrow} {card['magnitude']}% "
                    f"{translate('vs_last_month', language)}"
                )
            self.stdout.write(f"  {translate('state_average', language)}: {performance['stateAverage']}")
