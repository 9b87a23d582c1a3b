from django.contrib import admin
from .models import TenantLimitOverride


@admin.register(TenantLimitOverride)
class TenantLimitOverrideAdmin(admin.ModelAdmin):
    list_display = ("id", "tenant", "query_timeout", "max_query_lookback",
                    "max_query_length", "max_entries_limit_per_query", "updated_at")
    search_fields = ("tenant__name", "tenant__org_id")
    readonly_fields = ("updated_at",)
