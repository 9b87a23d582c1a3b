from django.contrib import admin
from .models import Tenant, Plan


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "slug", "active", "query_timeout", "max_query_lookback",
                    "max_query_length", "max_entries_limit_per_query", "created_at")
    list_filter = ("active",)
    search_fields = ("name", "slug")
    readonly_fields = ("created_at",)


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "org_id", "plan", "created_at", "updated_at")
    list_filter = ("plan",)
    search_fields = ("name", "org_id")
    readonly_fields = ("created_at", "updated_at")
