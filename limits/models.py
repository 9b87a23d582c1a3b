from django.db import models

class TenantLimitOverride(models.Model):
    """
    Surcharges facultatives des plafonds de requête d'un tenant.
    - champ NULL => hérite du plan (puis des defaults globaux)
    - durée nulle / 0 => pas de plafond sur la dimension
    """
    tenant = models.OneToOneField("tenants.Tenant", on_delete=models.CASCADE, related_name="limits_override")
    query_timeout = models.DurationField(null=True, blank=True)
    max_query_lookback = models.DurationField(null=True, blank=True)
    max_query_length = models.DurationField(null=True, blank=True)
    max_entries_limit_per_query = models.PositiveIntegerField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tenant_limit_overrides"

    def __str__(self) -> str:
        return f"LimitsOverride(tenant={self.tenant_id})"
