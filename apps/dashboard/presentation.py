"""
Presentation helpers for the dashboard: search, comparison, formatting,
localized labels and the share message.
"""
from decimal import Decimal, ROUND_HALF_UP
from urllib.parse import quote

from apps.performance.aggregation import to_decimal

DEFAULT_LANGUAGE = 'hi'
MAX_COMPARE = 3
SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 10

TRANSLATIONS = {
    'hi': {
        'title': 'मनरेगा प्रदर्शन डैशबोर्ड',
        'search_placeholder': 'जिला खोजें',
        'select_state': 'राज्य चुनें',
        'select_district': 'जिला चुनें',
        'state': 'राज्य',
        'district': 'जिला',
        'households': 'परिवारों को रोजगार',
        'avg_days': 'औसत काम के दिन',
        'expenditure': 'खर्च',
        'works': 'पूरे काम',
        'month': 'महीना',
        'state_average': 'राज्य औसत',
        'vs_last_month': 'पिछले महीने से',
        'compare': 'तुलना करें',
        'remove': 'हटाएं',
        'share': 'व्हाट्सएप पर साझा करें',
        'print': 'रिपोर्ट डाउनलोड करें',
        'last_updated': 'अंतिम अपडेट',
        'share_heading': 'मनरेगा प्रदर्शन',
        'error': 'डेटा लोड नहीं हो सका। कृपया फिर से प्रयास करें।',
    },
    'en': {
        'title': 'MGNREGA Performance Dashboard',
        'search_placeholder': 'Search district',
        'select_state': 'Select State',
        'select_district': 'Select District',
        'state': 'State',
        'district': 'District',
        'households': 'Households employed',
        'avg_days': 'Average workdays',
        'expenditure': 'Expenditure',
        'works': 'Works completed',
        'month': 'Month',
        'state_average': 'State average',
        'vs_last_month': 'vs last month',
        'compare': 'Compare',
        'remove': 'Remove',
        'share': 'Share on WhatsApp',
        'print': 'Download report',
        'last_updated': 'Last updated',
        'share_heading': 'MGNREGA Performance',
        'error': 'Could not load data. Please try again.',
    },
}


def language_or_default(language):
    return language if language in TRANSLATIONS else DEFAULT_LANGUAGE


def translate(key, language=DEFAULT_LANGUAGE):
    """Label for ``key``; falls back to English, then to the key itself."""
    labels = TRANSLATIONS.get(language, {})
    if key in labels:
        return labels[key]
    return TRANSLATIONS['en'].get(key, key)


def filter_districts(districts, term, limit=SEARCH_LIMIT):
    """Districts whose district or state name contains ``term``.

    Nothing is returned until the term has at least two characters.
    """
    term = (term or '').strip().lower()
    if len(term) < SEARCH_MIN_LENGTH:
        return []

    matches = [
        d for d in districts
        if term in d.get('district_name', '').lower() or term in d.get('state_name', '').lower()
    ]
    return matches[:limit]


class ComparisonSet:
    """Up to ``max_size`` district codes compared side by side."""

    def __init__(self, codes=(), max_size=MAX_COMPARE):
        self.max_size = max_size
        self._codes = []
        for code in codes:
            self.add(code)

    @property
    def codes(self):
        return list(self._codes)

    def __len__(self):
        return len(self._codes)

    def __contains__(self, code):
        return code in self._codes

    def is_full(self):
        return len(self._codes) >= self.max_size

    def add(self, code):
        if not code or code in self._codes or self.is_full():
            return False
        self._codes.append(code)
        return True

    def remove(self, code):
        if code not in self._codes:
            return False
        self._codes.remove(code)
        return True

    def refresh(self, fetch_many):
        """Refetch the whole set; there is no incremental update."""
        return fetch_many(self.codes)


def trend_direction(value):
    """``"up"`` for a non-negative percentage, ``"down"`` otherwise."""
    pct = to_decimal(value, Decimal('0'))
    return 'up' if pct >= 0 else 'down'


def trend_magnitude(value):
    return str(abs(to_decimal(value, Decimal('0'))))


def _group_indian(digits):
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ','.join(groups + [tail])


def format_number(value, places=None):
    """Indian digit grouping; ``places`` decimals are kept when given."""
    number = to_decimal(value)
    if number is None:
        return '0'

    sign = '-' if number < 0 else ''
    number = abs(number)
    if places is None:
        if number == number.to_integral_value():
            whole, frac = str(int(number)), ''
        else:
            whole, _, frac = format(number.normalize(), 'f').partition('.')
    else:
        quantum = Decimal(1).scaleb(-places)
        whole, _, frac = format(number.quantize(quantum, rounding=ROUND_HALF_UP), 'f').partition('.')

    grouped = _group_indian(whole)
    return f"{sign}{grouped}.{frac}" if frac else f"{sign}{grouped}"


def format_currency(value):
    if value is None:
        return '₹0'
    return '₹' + format_number(value, places=0)


def share_text(performance, language=DEFAULT_LANGUAGE):
    district = performance['district']
    avg_days = district.get('avg_days_per_household')

    lines = [
        f"{translate('share_heading', language)} - {district['district_name']}",
        '',
        f"{translate('households', language)}: {format_number(district.get('total_households'))}",
        f"{translate('avg_days', language)}: {format_number(avg_days, places=1) if avg_days is not None else '-'}",
        f"{translate('expenditure', language)}: {format_currency(district.get('total_expenditure'))}",
        f"{translate('works', language)}: {format_number(district.get('works_completed'))}",
        '',
        f"{translate('month', language)}: {district['month']}",
    ]
    return '\n'.join(lines)


def whatsapp_share_url(text):
    return f"https://wa.me/?text={quote(text, safe='')}"


def metric_cards(performance, language=DEFAULT_LANGUAGE):
    """Display rows for the four metrics of a performance result."""
    district = performance['district']
    trends = performance['trends']
    avg_days = district.get('avg_days_per_household')

    cards = [
        ('households', format_number(district.get('total_households')), trends['households']),
        ('avg_days', format_number(avg_days, places=1) if avg_days is not None else '-', trends['days']),
        ('expenditure', format_currency(district.get('total_expenditure')), trends['expenditure']),
        ('works', format_number(district.get('works_completed')), trends['works']),
    ]
    return [
        {
            'key': key,
            'title': translate(key, language),
            'value': value,
            'trend': trend,
            'direction': trend_direction(trend),
            'magnitude': trend_magnitude(trend),
        }
        for key, value, trend in cards
    ]
