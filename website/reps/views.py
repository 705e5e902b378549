import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils.crypto import constant_time_compare
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from .exceptions import RepresentativeLookupError
from .records import Locator
from .services import RepresentativeCache, RepresentativeQueryService, RepresentativeSyncService

logger = logging.getLogger('reps.services')


def _error_response(error: RepresentativeLookupError) -> JsonResponse:
    return JsonResponse(error.to_payload(), status=error.status_code)


@require_GET
def reps_lookup(request):
    """
    GET /reps?country=<CC>&postal=…[&street&city&state] or ?country=EU&memberState=XX

    Returns ``{"reps": [...]}`` or ``{"error": …}`` with the error's status.
    """
    locator = Locator.from_query(request.GET)
    try:
        reps = RepresentativeQueryService().find(request.GET.get('country'), locator)
    except RepresentativeLookupError as e:
        if e.status_code >= 500:
            logger.warning("Lookup for %s failed: %s", request.GET.get('country'), e.message)
        return _error_response(e)
    except Exception as e:
        logger.exception('Unexpected error during representative lookup')
        return JsonResponse({'error': str(e) or 'Could not find representative.'}, status=500)

    return JsonResponse({'reps': [rep.to_dict() for rep in reps]})


@csrf_exempt
@require_http_methods(["GET", "POST"])
def sync_reps(request):
    """
    GET reports what is cached; POST refreshes every cached dataset.
    """
    try:
        if request.method == 'GET':
            return JsonResponse(RepresentativeCache().summary())

        expected = getattr(settings, 'SYNC_SECRET', '')
        if expected and not constant_time_compare(request.GET.get('secret', ''), expected):
            return JsonResponse({'error': 'Unauthorized'}, status=403)

        return JsonResponse(RepresentativeSyncService.sync())
    except Exception as e:
        logger.exception('Unexpected error during representative sync')
        return JsonResponse({'error': str(e)}, status=500)
