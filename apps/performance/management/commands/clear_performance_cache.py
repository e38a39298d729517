from django.core.management.base import BaseCommand

from apps.performance.cache import TimedCache


class Command(BaseCommand):
    help = 'Drop every cached query result (schedule periodically, e.g. every 6 hours)'

    def handle(self, *args, **options):
        cache = TimedCache()
        cache.clear()
        self.stdout.write(self.style.SUCCESS(f"✓ Cleared '{cache.alias}' cache"))
