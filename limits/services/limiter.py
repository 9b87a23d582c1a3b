import logging
from datetime import timedelta

from limits.context import extract_query_limits
from limits.exceptions import LimitExceeded
from limits.services.ceilings import TenantLimitSource, get_tenant_limits
from limits.services.query_limits import (
    DIMENSIONS, MAX_ENTRIES_LIMIT_PER_QUERY, MAX_QUERY_LENGTH, MAX_QUERY_LOOKBACK,
    QUERY_TIMEOUT, QueryLimits, check_dimension,
)

logger = logging.getLogger(__name__)


class QueryLimiter:
    """
    Valeur effective d'une dimension pour (requête, tenant):
      - pas d'override          -> plafond du tenant
      - plafond nul (illimité)  -> override tel quel
      - override <= plafond     -> override
      - override >  plafond     -> LimitExceeded
    Sans état: le plafond est relu à chaque appel.
    """

    def __init__(self, source: TenantLimitSource | None = None) -> None:
        self.source = source or get_tenant_limits()

    def resolve(self, dimension: str, request, tenant_id: str):
        check_dimension(dimension)
        ceiling = self.source.get_ceiling(tenant_id).value(dimension)

        limits = extract_query_limits(request)
        if limits is None or not limits.is_set(dimension):
            return ceiling

        requested = limits.value(dimension)
        if not ceiling:
            return requested
        if requested > ceiling:
            logger.info("tenant %s: rejected %s override %s > %s",
                        tenant_id, dimension, requested, ceiling)
            raise LimitExceeded(dimension, requested, ceiling)

        logger.debug("tenant %s: %s override %s applied (limit %s)",
                     tenant_id, dimension, requested, ceiling)
        return requested

    def query_timeout(self, request, tenant_id: str) -> timedelta:
        return self.resolve(QUERY_TIMEOUT, request, tenant_id)

    def max_query_lookback(self, request, tenant_id: str) -> timedelta:
        return self.resolve(MAX_QUERY_LOOKBACK, request, tenant_id)

    def max_query_length(self, request, tenant_id: str) -> timedelta:
        return self.resolve(MAX_QUERY_LENGTH, request, tenant_id)

    def max_entries_limit_per_query(self, request, tenant_id: str) -> int:
        return self.resolve(MAX_ENTRIES_LIMIT_PER_QUERY, request, tenant_id)

    def effective_limits(self, request, tenant_id: str) -> QueryLimits:
        """Les quatre dimensions résolues; lève la première LimitExceeded."""
        return QueryLimits(**{d: self.resolve(d, request, tenant_id) for d in DIMENSIONS})
