import logging

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from .exceptions import NotFound, UpstreamFailure
from .services import default_service

logger = logging.getLogger(__name__)


def error_response(message, status, exc=None):
    body = {'error': message}
    if exc is not None:
        body['code'] = exc.code
        if isinstance(exc, UpstreamFailure):
            body['details'] = str(exc)
    return JsonResponse(body, status=status)


@require_GET
def district_performance(request, district_code):
    """Latest month for a district with trends and the state average"""
    logger.info(f"Fetching performance for district: {district_code}")
    try:
        data = default_service().get_performance(district_code)
    except NotFound as e:
        return error_response('District not found', 404, e)
    except UpstreamFailure as e:
        return error_response('Failed to fetch performance data', 500, e)
    return JsonResponse(data)


@require_GET
def district_history(request, district_code):
    """Last months of a district, oldest first"""
    try:
        data = default_service().get_history(district_code)
    except NotFound as e:
        return error_response('District not found', 404, e)
    except UpstreamFailure as e:
        return error_response('Failed to fetch history', 500, e)
    return JsonResponse(data, safe=False)


@require_GET
def health_check(request):
    try:
        stats = default_service().health()
    except UpstreamFailure as e:
        return JsonResponse({
            'status': 'unhealthy',
            'database': 'disconnected',
            'error': str(e),
        }, status=503)

    return JsonResponse({
        'status': 'healthy',
        'database': 'connected',
        'records': stats['records'],
        'timestamp': timezone.now().isoformat(),
    })
