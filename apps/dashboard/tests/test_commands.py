from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase
from unittest.mock import patch

from apps.dashboard.client import DashboardClientError

PERFORMANCE = {
    'district': {
        'district_code': '3102',
        'district_name': 'Sitapur',
        'state_name': 'Uttar Pradesh',
        'total_households': 1200,
        'avg_days_per_household': 42.3,
        'total_expenditure': 3000000.0,
        'works_completed': 250,
        'month': '2024-07',
    },
    'trends': {'households': '20.0', 'days': '5.8', 'expenditure': '-4.0', 'works': '0'},
    'stateAverage': 40.0,
    'lastUpdated': '2024-07-01T06:30:00+00:00',
}


class CompareDistrictsCommandTest(SimpleTestCase):

    @patch('apps.dashboard.management.commands.compare_districts.DashboardClient.fetch_many')
    def test_prints_each_district(self, mock_fetch_many):
        mock_fetch_many.return_value = [PERFORMANCE]
        out = StringIO()

        call_command('compare_districts', '3102', lang='en', stdout=out)

        mock_fetch_many.assert_called_once_with(['3102'])
        output = out.getvalue()
        self.assertIn('Sitapur, Uttar Pradesh (2024-07)', output)
        self.assertIn('Households employed: 1,200  ↑ 20.0% vs last month', output)
        self.assertIn('Expenditure: ₹30,00,000  ↓ 4.0% vs last month', output)
        self.assertIn('State average: 40.0', output)

    @patch('apps.dashboard.management.commands.compare_districts.DashboardClient.fetch_many')
    def test_only_three_are_fetched(self, mock_fetch_many):
        mock_fetch_many.return_value = []
        out = StringIO()

        call_command('compare_districts', 'a', 'b', 'c', 'd', stdout=out)

        mock_fetch_many.assert_called_once_with(['a', 'b', 'c'])
        self.assertIn('Only the first 3 districts are compared', out.getvalue())

    @patch('apps.dashboard.management.commands.compare_districts.DashboardClient.fetch_many')
    def test_client_error(self, mock_fetch_many):
        mock_fetch_many.side_effect = DashboardClientError('GET failed')

        with self.assertRaises(CommandError):
            call_command('compare_districts', '3102', stdout=StringIO())


class SearchDistrictsCommandTest(SimpleTestCase):

    @patch('apps.dashboard.management.commands.search_districts.DashboardClient.all_districts')
    def test_lists_matches(self, mock_all_districts):
        mock_all_districts.return_value = [
            {'district_code': '3102', 'district_name': 'Sitapur', 'state_code': '31', 'state_name': 'Uttar Pradesh'},
            {'district_code': '1804', 'district_name': 'Pune', 'state_code': '18', 'state_name': 'Maharashtra'},
        ]
        out = StringIO()

        call_command('search_districts', 'sita', stdout=out)

        self.assertIn('3102  Sitapur, Uttar Pradesh', out.getvalue())
        self.assertNotIn('Pune', out.getvalue())

    @patch('apps.dashboard.management.commands.search_districts.DashboardClient.all_districts')
    def test_no_match(self, mock_all_districts):
        mock_all_districts.return_value = []
        out = StringIO()

        call_command('search_districts', 'zzz', stdout=out)

        self.assertIn("No districts match 'zzz'", out.getvalue())
