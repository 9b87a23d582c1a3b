import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

from .context import inject_query_limits
from .services.query_limits import parse_query_limits_header

logger = logging.getLogger(__name__)


def _meta_key(header: str) -> str:
    # "X-Query-Limits" -> "HTTP_X_QUERY_LIMITS"
    return "HTTP_" + header.upper().replace("-", "_")


class QueryLimitsMiddleware(MiddlewareMixin):
    """
    Lit l'en-tête X-Query-Limits (JSON) et attache l'override à la requête.
    En-tête invalide => 400 INVALID_QUERY_LIMITS, la vue n'est pas appelée.
    """

    def process_request(self, request):
        header = settings.QUERY_LIMITS_HEADER
        raw = request.META.get(_meta_key(header))
        if not raw:
            return None
        try:
            limits = parse_query_limits_header(raw)
        except ValueError as e:
            logger.info("rejected %s header: %s", header, e)
            return JsonResponse(
                {"error": {"code": "INVALID_QUERY_LIMITS", "message": str(e)}},
                status=400,
            )
        inject_query_limits(request, limits)
        return None
