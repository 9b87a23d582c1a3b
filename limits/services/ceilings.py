"""
Sources des plafonds par tenant.

Résolution d'une dimension (premier non-None gagne):
  override tenant > plan > defaults globaux (settings.QUERY_LIMITS_DEFAULTS)
Une valeur nulle (0 / "0s") = pas de plafond sur la dimension.
"""
import logging
from dataclasses import dataclass, replace
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError

from limits.exceptions import TenantLookupFailed
from limits.services.query_limits import (
    DIMENSIONS, DURATION_DIMENSIONS, check_dimension, parse_duration,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantCeiling:
    query_timeout: timedelta = timedelta(0)
    max_query_lookback: timedelta = timedelta(0)
    max_query_length: timedelta = timedelta(0)
    max_entries_limit_per_query: int = 0

    def value(self, dimension: str):
        return getattr(self, check_dimension(dimension))

    def merged(self, **values) -> "TenantCeiling":
        """Copie où chaque valeur non-None remplace la valeur courante."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})


def ceiling_from_mapping(mapping: dict, base: TenantCeiling | None = None) -> TenantCeiling:
    """
    {"query_timeout": "30s", "max_entries_limit_per_query": 10} -> TenantCeiling
    Les clés absentes héritent de `base`. ValueError si le mapping est invalide.
    """
    if not isinstance(mapping, dict):
        raise ValueError("limits must be a mapping")
    unknown = set(mapping) - set(DIMENSIONS)
    if unknown:
        raise ValueError(f"unknown limits: {', '.join(sorted(unknown))}")

    values = {}
    for dimension, raw in mapping.items():
        if raw is None:
            continue
        if dimension in DURATION_DIMENSIONS:
            values[dimension] = raw if isinstance(raw, timedelta) else parse_duration(raw)
        else:
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise ValueError(f"{dimension} must be an integer")
            values[dimension] = raw
        _check_not_negative(dimension, values[dimension])
    return (base or TenantCeiling()).merged(**values)


def _check_not_negative(dimension: str, value):
    zero = timedelta(0) if dimension in DURATION_DIMENSIONS else 0
    if value < zero:
        raise ValueError(f"{dimension} must not be negative")


def default_ceiling() -> TenantCeiling:
    try:
        return ceiling_from_mapping(settings.QUERY_LIMITS_DEFAULTS)
    except ValueError as e:
        raise ImproperlyConfigured(f"QUERY_LIMITS_DEFAULTS: {e}") from e


class TenantLimitSource:
    def get_ceiling(self, tenant_id: str) -> TenantCeiling:
        raise NotImplementedError


class SettingsTenantLimits(TenantLimitSource):
    """
    Defaults + mapping en mémoire {tenant_id: {dimension: valeur}}.
    Les entrées sont validées à la lecture: une entrée invalide
    fait échouer la résolution de ce tenant seulement.
    """

    def __init__(self, defaults: TenantCeiling, tenant_overrides: dict | None = None) -> None:
        self.defaults = defaults
        self.tenant_overrides = tenant_overrides or {}

    def get_ceiling(self, tenant_id: str) -> TenantCeiling:
        entry = self.tenant_overrides.get(tenant_id)
        if entry is None:
            return self.defaults
        try:
            return ceiling_from_mapping(entry, base=self.defaults)
        except ValueError as e:
            logger.warning("invalid limits override for tenant %s: %s", tenant_id, e)
            raise TenantLookupFailed(tenant_id, str(e)) from e


class DatabaseTenantLimits(TenantLimitSource):
    """Plafonds stockés: Plan du tenant + TenantLimitOverride, sur les defaults."""

    def __init__(self, defaults: TenantCeiling) -> None:
        self.defaults = defaults

    def get_ceiling(self, tenant_id: str) -> TenantCeiling:
        from tenants.models import Tenant

        try:
            tenant = (Tenant.objects
                      .select_related("plan", "limits_override")
                      .filter(org_id=tenant_id)
                      .first())
        except DatabaseError as e:
            logger.warning("limits lookup failed for tenant %s: %s", tenant_id, e)
            raise TenantLookupFailed(tenant_id, "database error") from e

        if tenant is None:
            # Tenant inconnu => defaults globaux
            return self.defaults

        layers = [tenant.plan]
        if hasattr(tenant, "limits_override"):
            layers.append(tenant.limits_override)

        ceiling = self.defaults
        for layer in layers:
            values = {d: getattr(layer, d) for d in DIMENSIONS}
            try:
                for dimension, value in values.items():
                    if value is not None:
                        _check_not_negative(dimension, value)
            except ValueError as e:
                logger.warning("invalid stored limits for tenant %s: %s", tenant_id, e)
                raise TenantLookupFailed(tenant_id, str(e)) from e
            ceiling = ceiling.merged(**values)
        return ceiling


def get_tenant_limits() -> TenantLimitSource:
    source = getattr(settings, "QUERY_LIMITS_SOURCE", "database")
    defaults = default_ceiling()
    if source == "database":
        return DatabaseTenantLimits(defaults)
    if source == "settings":
        return SettingsTenantLimits(defaults, getattr(settings, "QUERY_LIMITS_TENANT_OVERRIDES", {}))
    raise ImproperlyConfigured(f"QUERY_LIMITS_SOURCE: unknown source {source!r}")
