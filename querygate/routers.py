from rest_framework.routers import DefaultRouter

router = DefaultRouter()

# Admin Tenants & Plans
from tenants.views.tenant import TenantAdminViewSet, PlanAdminViewSet
router.register(r"admin/tenants", TenantAdminViewSet, basename="admin-tenants")
router.register(r"admin/plans", PlanAdminViewSet, basename="admin-plans")

# Admin Limits overrides
from limits.views import TenantLimitOverrideAdminViewSet
router.register(r"admin/limits/overrides", TenantLimitOverrideAdminViewSet, basename="admin-limits-overrides")
