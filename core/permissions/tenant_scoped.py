from rest_framework.permissions import BasePermission

class TenantScopedPermission(BasePermission):
    """
    Autorise l'accès si l'auth par en-tête a placé request.tenant_id.
    """
    message = "Tenant identification required"

    def has_permission(self, request, view):
        return bool(getattr(request, "tenant_id", None))
