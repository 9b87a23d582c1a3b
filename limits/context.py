from django.conf import settings

from limits.services.query_limits import QueryLimits, format_query_limits_header

# Attribut posé sur la HttpRequest; la Request DRF le délègue à la requête Django.
_REQUEST_ATTR = "_query_limits"


def inject_query_limits(request, limits: QueryLimits) -> None:
    """
    Attache les limites préférées à la requête (une seule fois, à l'entrée).
    Seul moyen supporté de peupler les overrides.
    """
    if not isinstance(limits, QueryLimits):
        raise TypeError("limits must be a QueryLimits instance")
    target = getattr(request, "_request", request)  # Request DRF -> HttpRequest
    if getattr(target, _REQUEST_ATTR, None) is not None:
        raise RuntimeError("query limits are already attached to this request")
    setattr(target, _REQUEST_ATTR, limits)


def extract_query_limits(request) -> QueryLimits | None:
    """None => aucun override pour aucune dimension."""
    target = getattr(request, "_request", request)
    return getattr(target, _REQUEST_ATTR, None)


def propagate_query_limits(request, headers: dict) -> dict:
    """Recopie l'override de la requête dans les en-têtes d'un appel sortant."""
    limits = extract_query_limits(request)
    if limits is not None and limits.overridden():
        headers[settings.QUERY_LIMITS_HEADER] = format_query_limits_header(limits)
    return headers
