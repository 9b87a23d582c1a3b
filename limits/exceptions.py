from limits.services.query_limits import format_value


class QueryLimitsError(Exception):
    """Base des erreurs de résolution des limites."""


class LimitExceeded(QueryLimitsError):
    """L'override demandé est plus permissif que le plafond du tenant."""

    def __init__(self, dimension: str, requested, limit):
        self.dimension = dimension
        self.requested = requested
        self.limit = limit
        super().__init__(
            f"{dimension}: requested {format_value(dimension, requested)} "
            f"exceeds tenant limit {format_value(dimension, limit)}"
        )

    def as_details(self) -> dict:
        return {
            "dimension": self.dimension,
            "requested": format_value(self.dimension, self.requested),
            "limit": format_value(self.dimension, self.limit),
        }


class TenantLookupFailed(QueryLimitsError):
    """La configuration du tenant ne peut pas être résolue."""

    def __init__(self, tenant_id: str, reason: str):
        self.tenant_id = tenant_id
        self.reason = reason
        super().__init__(f"cannot resolve limits for tenant {tenant_id!r}: {reason}")
