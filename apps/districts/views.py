import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from apps.performance.exceptions import UpstreamFailure
from apps.performance.services import default_service
from apps.performance.views import error_response

logger = logging.getLogger(__name__)


@require_GET
def state_list(request):
    """All states with data, ordered by name"""
    try:
        states = default_service().list_states()
    except UpstreamFailure as e:
        return error_response('Failed to fetch states', 500, e)

    logger.info(f"Returning {len(states)} states")
    return JsonResponse(states, safe=False)


@require_GET
def district_list(request, state_code):
    """Districts of one state, ordered by name"""
    try:
        districts = default_service().list_districts(state_code)
    except UpstreamFailure as e:
        return error_response('Failed to fetch districts', 500, e)

    logger.info(f"Returning {len(districts)} districts for {state_code}")
    return JsonResponse(districts, safe=False)
