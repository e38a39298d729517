import unittest
from unittest.mock import MagicMock
from urllib.parse import unquote

from apps.dashboard.presentation import (
    ComparisonSet,
    filter_districts,
    format_currency,
    format_number,
    language_or_default,
    metric_cards,
    share_text,
    translate,
    trend_direction,
    whatsapp_share_url,
)

DISTRICTS = [
    {'district_code': '3102', 'district_name': 'Sitapur', 'state_code': '31', 'state_name': 'Uttar Pradesh'},
    {'district_code': '3101', 'district_name': 'Lucknow', 'state_code': '31', 'state_name': 'Uttar Pradesh'},
    {'district_code': '1804', 'district_name': 'Pune', 'state_code': '18', 'state_name': 'Maharashtra'},
]

PERFORMANCE = {
    'district': {
        'district_code': '3102',
        'district_name': 'Sitapur',
        'state_name': 'Uttar Pradesh',
        'total_households': 1234567,
        'avg_days_per_household': 42.3,
        'total_expenditure': 25000000.75,
        'works_completed': 250,
        'month': '2024-07',
    },
    'trends': {'households': '20.0', 'days': '-5.8', 'expenditure': '0', 'works': '12.5'},
    'stateAverage': 40.0,
    'lastUpdated': '2024-07-01T06:30:00+00:00',
}


class TestFilterDistricts(unittest.TestCase):

    def test_needs_two_characters(self):
        self.assertEqual(filter_districts(DISTRICTS, ''), [])
        self.assertEqual(filter_districts(DISTRICTS, 's'), [])

    def test_matches_district_name_case_insensitive(self):
        self.assertEqual([d['district_code'] for d in filter_districts(DISTRICTS, 'SITA')], ['3102'])

    def test_matches_state_name(self):
        self.assertEqual([d['district_code'] for d in filter_districts(DISTRICTS, 'uttar')], ['3102', '3101'])

    def test_limit(self):
        many = [dict(DISTRICTS[0], district_code=str(i)) for i in range(25)]
        self.assertEqual(len(filter_districts(many, 'sitapur')), 10)


class TestComparisonSet(unittest.TestCase):

    def test_at_most_three_districts(self):
        compare = ComparisonSet()
        self.assertTrue(compare.add('3102'))
        self.assertTrue(compare.add('3101'))
        self.assertTrue(compare.add('1804'))
        self.assertFalse(compare.add('2702'))
        self.assertEqual(compare.codes, ['3102', '3101', '1804'])
        self.assertTrue(compare.is_full())

    def test_no_duplicates(self):
        compare = ComparisonSet(['3102'])
        self.assertFalse(compare.add('3102'))
        self.assertEqual(len(compare), 1)

    def test_constructor_truncates(self):
        self.assertEqual(ComparisonSet(['a', 'b', 'a', 'c', 'd']).codes, ['a', 'b', 'c'])

    def test_remove(self):
        compare = ComparisonSet(['3102', '3101'])
        self.assertTrue(compare.remove('3102'))
        self.assertFalse(compare.remove('3102'))
        self.assertNotIn('3102', compare)

    def test_refresh_refetches_whole_set(self):
        compare = ComparisonSet(['3102', '3101'])
        fetch_many = MagicMock(return_value=['a', 'b'])

        compare.remove('3102')
        result = compare.refresh(fetch_many)

        fetch_many.assert_called_once_with(['3101'])
        self.assertEqual(result, ['a', 'b'])


class TestFormatting(unittest.TestCase):

    def test_indian_grouping(self):
        self.assertEqual(format_number(999), '999')
        self.assertEqual(format_number(12345), '12,345')
        self.assertEqual(format_number(1234567), '12,34,567')
        self.assertEqual(format_number(123456789), '12,34,56,789')
        self.assertEqual(format_number(-1234567), '-12,34,567')

    def test_decimals(self):
        self.assertEqual(format_number(42.3, places=1), '42.3')
        self.assertEqual(format_number(40, places=1), '40.0')
        self.assertEqual(format_number('1234.5'), '1,234.5')

    def test_none(self):
        self.assertEqual(format_number(None), '0')
        self.assertEqual(format_currency(None), '₹0')

    def test_currency_rounds_to_rupees(self):
        self.assertEqual(format_currency(25000000.75), '₹2,50,00,001')


class TestTrendDirection(unittest.TestCase):

    def test_sign(self):
        self.assertEqual(trend_direction('20.0'), 'up')
        self.assertEqual(trend_direction('0'), 'up')
        self.assertEqual(trend_direction('-5.8'), 'down')


class TestLocalization(unittest.TestCase):

    def test_hindi_default(self):
        self.assertEqual(translate('works'), 'पूरे काम')

    def test_english(self):
        self.assertEqual(translate('works', 'en'), 'Works completed')

    def test_fallbacks(self):
        self.assertEqual(translate('works', 'ta'), 'Works completed')
        self.assertEqual(translate('no_such_label', 'hi'), 'no_such_label')
        self.assertEqual(language_or_default('ta'), 'hi')
        self.assertEqual(language_or_default('en'), 'en')


class TestShare(unittest.TestCase):

    def test_share_text_hindi(self):
        text = share_text(PERFORMANCE)

        self.assertEqual(text.splitlines(), [
            'मनरेगा प्रदर्शन - Sitapur',
            '',
            'परिवारों को रोजगार: 12,34,567',
            'औसत काम के दिन: 42.3',
            'खर्च: ₹2,50,00,001',
            'पूरे काम: 250',
            '',
            'महीना: 2024-07',
        ])

    def test_share_text_english(self):
        self.assertIn('Households employed: 12,34,567', share_text(PERFORMANCE, 'en'))

    def test_whatsapp_url(self):
        url = whatsapp_share_url('a b\nc')
        self.assertEqual(url, 'https://wa.me/?text=a%20b%0Ac')
        self.assertEqual(unquote(url.split('=', 1)[1]), 'a b\nc')


class TestMetricCards(unittest.TestCase):

    def test_cards_carry_value_and_direction(self):
        cards = metric_cards(PERFORMANCE, 'en')

        self.assertEqual([c['key'] for c in cards], ['households', 'avg_days', 'expenditure', 'works'])
        self.assertEqual(cards[0]['value'], '12,34,567')
        self.assertEqual(cards[1]['direction'], 'down')
        self.assertEqual(cards[1]['magnitude'], '5.8')
        self.assertEqual(cards[2]['title'], 'Expenditure')
