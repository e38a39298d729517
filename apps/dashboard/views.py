import logging

from django.conf import settings
from django.http import QueryDict
from django.shortcuts import render
from django.views.decorators.http import require_GET

from apps.performance.exceptions import DashboardError
from apps.performance.services import default_service
from .presentation import (
    ComparisonSet,
    TRANSLATIONS,
    filter_districts,
    language_or_default,
    metric_cards,
    share_text,
    translate,
    whatsapp_share_url,
)

logger = logging.getLogger(__name__)


def _query_with_compare(request, codes):
    query = request.GET.copy()
    query.setlist('compare', codes)
    return query.urlencode()


def _district_query(language, district, codes):
    """Query string selecting ``district`` while keeping the comparison set."""
    query = QueryDict(mutable=True)
    query['lang'] = language
    query['state'] = district['state_code']
    query['district'] = district['district_code']
    query.setlist('compare', codes)
    return query.urlencode()


def _performance_view(performance, language):
    return {
        'data': performance,
        'cards': metric_cards(performance, language),
    }


@require_GET
def dashboard(request):
    """State/district picker, search, performance cards and comparison"""
    language = language_or_default(request.GET.get('lang', settings.MGNREGA_DEFAULT_LANGUAGE))
    selected_state = request.GET.get('state', '')
    selected_district = request.GET.get('district', '')
    search_term = request.GET.get('q', '')
    compare = ComparisonSet(request.GET.getlist('compare'))

    service = default_service()
    context = {
        'labels': TRANSLATIONS[language],
        'language': language,
        'selected_state': selected_state,
        'selected_district': selected_district,
        'search_term': search_term,
        'compare_codes': compare.codes,
        'compare_full': compare.is_full(),
        'states': [],
        'districts': [],
        'search_results': [],
        'performance': None,
        'compare_data': [],
        'share_url': None,
        'compare_add_query': None,
        'error': None,
    }

    try:
        context['states'] = service.list_states()

        if search_term:
            context['search_results'] = [
                {**district, 'query': _district_query(language, district, compare.codes)}
                for district in filter_districts(service.list_all_districts(), search_term)
            ]

        if selected_state:
            context['districts'] = service.list_districts(selected_state)

        # A district left over from a previous state is dropped with its results
        if selected_district not in {d['district_code'] for d in context['districts']}:
            selected_district = ''
            context['selected_district'] = ''

        if selected_district:
            performance = service.get_performance(selected_district)
            context['performance'] = _performance_view(performance, language)
            context['share_url'] = whatsapp_share_url(share_text(performance, language))
            if selected_district not in compare and not compare.is_full():
                context['compare_add_query'] = _query_with_compare(
                    request, compare.codes + [selected_district]
                )

        compare_data = compare.refresh(
            lambda codes: [service.get_performance(code) for code in codes]
        )
        for performance in compare_data:
            item = _performance_view(performance, language)
            code = performance['district']['district_code']
            item['remove_query'] = _query_with_compare(
                request, [c for c in compare.codes if c != code]
            )
            context['compare_data'].append(item)
    except DashboardError as e:
        logger.error(f"Dashboard query failed: {e}")
        context['error'] = translate('error', language)

    return render(request, 'dashboard/index.html', context)
