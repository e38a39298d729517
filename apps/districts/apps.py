from django.apps import AppConfig


class DistrictsConfig(AppConfig):
    name = 'apps.districts'
    verbose_name = 'MGNREGA districts'
