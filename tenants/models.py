from django.db import models


class Plan(models.Model):
    """
    Plan (Free/Pro/Enterprise, etc.) portant les plafonds de requête par défaut.
    - slug: identifiant stable
    - query_timeout / max_query_lookback / max_query_length: durées
    - max_entries_limit_per_query: nombre de lignes max par requête
    Un champ NULL hérite des defaults globaux (settings.QUERY_LIMITS_DEFAULTS).
    """
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True, db_index=True)
    active = models.BooleanField(default=True)

    query_timeout = models.DurationField(null=True, blank=True)
    max_query_lookback = models.DurationField(null=True, blank=True)
    max_query_length = models.DurationField(null=True, blank=True)
    max_entries_limit_per_query = models.PositiveIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "plans"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.slug} ({'active' if self.active else 'inactive'})"


class Tenant(models.Model):
    """
    Client (tenant) multi-tenant logique.
    - org_id: identifiant transmis par les clients (en-tête X-Scope-OrgID)
    - plan: FK vers Plan
    - metadata: JSON libre (tags, groupe, référent, ...)
    """
    name = models.CharField(max_length=150, unique=True)
    org_id = models.CharField(max_length=150, unique=True, db_index=True)
    plan = models.ForeignKey(Plan, on_delete=models.PROTECT, related_name="tenants")
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tenants"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} [{self.plan.slug}]"
